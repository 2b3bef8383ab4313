from __future__ import annotations

import logging
import re
from fnmatch import fnmatchcase
from typing import Iterable, List, Sequence, Tuple

from emoji_diff.infra.clients.git import GitClient


logger = logging.getLogger(__name__)


# 생성 파일(*.gen.*)과 점으로 시작하는 생성 파일(.*.gen.*)은 리뷰 대상에서 제외한다.
GENERATED_FILE_PATTERNS: Tuple[str, ...] = ("*.gen.*", ".*.gen.*")

_DIFF_HEADER_RE = re.compile(r'^diff --git "?a/(?P<old>.+?)"? "?b/(?P<new>.+?)"?$')


def build_exclude_patterns(extra_patterns: Iterable[str] = ()) -> Tuple[str, ...]:
    patterns: List[str] = list(GENERATED_FILE_PATTERNS)
    for pattern in extra_patterns:
        if pattern and pattern not in patterns:
            patterns.append(pattern)
    return tuple(patterns)


def is_excluded_path(path: str, patterns: Sequence[str]) -> bool:
    return any(fnmatchcase(path, pattern) for pattern in patterns)


def _split_file_sections(diff_text: str) -> List[str]:
    sections: List[str] = []
    current: List[str] = []
    for line in diff_text.splitlines(keepends=True):
        if line.startswith("diff --git ") and current:
            sections.append("".join(current))
            current = []
        current.append(line)
    if current:
        sections.append("".join(current))
    return sections


def _section_paths(section: str) -> Tuple[str, ...]:
    header = section.split("\n", 1)[0].rstrip("\r")
    match = _DIFF_HEADER_RE.match(header)
    if match is None:
        return ()
    return (match.group("old"), match.group("new"))


def drop_excluded_files(diff_text: str, patterns: Sequence[str]) -> str:
    """diff 텍스트에서 제외 패턴에 해당하는 파일 섹션을 제거한다."""
    kept: List[str] = []
    for section in _split_file_sections(diff_text):
        paths = _section_paths(section)
        if paths and any(is_excluded_path(path, patterns) for path in paths):
            logger.debug("Dropping generated file from diff: %s", paths[-1])
            continue
        kept.append(section)
    return "".join(kept)


def collect_diff(git_client: GitClient, ref: str, patterns: Sequence[str]) -> str:
    raw_diff = git_client.diff(ref, patterns)
    filtered = drop_excluded_files(raw_diff, patterns)
    logger.info(
        "Collected diff against %s: %d chars (%d after filtering)",
        ref,
        len(raw_diff),
        len(filtered),
    )
    return filtered
