from __future__ import annotations

import logging
from typing import Sequence

from emoji_diff.infra.clients.git import GitClient


logger = logging.getLogger(__name__)


TRUNK_CANDIDATES: Sequence[str] = ("master", "main", "develop")
DEFAULT_REMOTE = "origin"
FALLBACK_REF = "HEAD~1"


def resolve_base_ref(
    git_client: GitClient,
    candidates: Sequence[str] = TRUNK_CANDIDATES,
    *,
    remote: str = DEFAULT_REMOTE,
) -> str:
    """비교 대상 ref를 결정한다.

    후보 순서대로 로컬 브랜치, 원격 추적 브랜치 존재 여부를 확인해 첫 번째로
    찾은 것을 쓴다. 원격에만 있으면 git이 해석할 수 있도록 ``origin/<name>``을
    반환한다. 아무것도 없으면 직전 커밋(HEAD~1)과 비교한다.
    """
    for name in candidates:
        if git_client.ref_exists(f"refs/heads/{name}"):
            logger.info("Using local branch '%s' as diff base", name)
            return name
        if git_client.ref_exists(f"refs/remotes/{remote}/{name}"):
            remote_ref = f"{remote}/{name}"
            logger.info("Using remote-tracking branch '%s' as diff base", remote_ref)
            return remote_ref

    logger.info("No trunk branch found, falling back to %s", FALLBACK_REF)
    return FALLBACK_REF
