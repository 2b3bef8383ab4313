from __future__ import annotations

import sys
from typing import List, TextIO

from emoji_diff.shared.types import ClassificationOutcome


REASONING_LABEL = "Reasoning:"


def render_lines(outcome: ClassificationOutcome, *, verbose: bool) -> List[str]:
    lines = [outcome.result.emoji]
    # 변경 없음 경로는 상세 모드에서도 이모지 한 줄만 출력한다.
    if verbose and not outcome.skipped:
        lines.append(f"{REASONING_LABEL} {outcome.result.reasoning}")
    return lines


def present(
    outcome: ClassificationOutcome,
    *,
    verbose: bool,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """stdout에는 이모지(와 이유)만, API 오류 메시지는 상세 모드일 때 stderr로 쓴다."""
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    if verbose and outcome.api_error:
        print(f"API Error: {outcome.api_error}", file=err)

    for line in render_lines(outcome, verbose=verbose):
        print(line, file=out)
