from __future__ import annotations

from emoji_diff.shared.types import ChangeMetrics


def summarize_diff(diff_text: str) -> ChangeMetrics:
    """추가/삭제 줄 수를 센다. ``+++``/``---`` 파일 헤더는 세지 않는다."""
    added = 0
    removed = 0
    for line in diff_text.splitlines():
        if line.startswith("+") and not line.startswith("++"):
            added += 1
        elif line.startswith("-") and not line.startswith("--"):
            removed += 1
    return ChangeMetrics(added=added, removed=removed)
