from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Sequence

from emoji_diff.shared.errors import GitCommandError, NotAGitRepositoryError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitCommandResult:
    returncode: int
    stdout: str
    stderr: str


GitRunner = Callable[[Sequence[str]], GitCommandResult]


def run_git_subprocess(args: Sequence[str]) -> GitCommandResult:
    """git 명령을 서브프로세스로 실행하고 종료 코드와 출력을 그대로 돌려준다."""
    completed = subprocess.run(
        list(args),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    return GitCommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


class GitClient:
    def __init__(self, runner: GitRunner | None = None) -> None:
        self._runner = runner or run_git_subprocess

    def _run(self, args: List[str]) -> GitCommandResult:
        command = ["git", *args]
        logger.debug("Running %s", " ".join(command))
        try:
            return self._runner(command)
        except OSError as exc:
            # git 실행 파일이 없거나 실행할 수 없는 경우
            raise GitCommandError(command, 1, str(exc)) from exc

    def _run_checked(self, args: List[str]) -> str:
        result = self._run(args)
        if result.returncode != 0:
            raise GitCommandError(["git", *args], result.returncode, result.stderr)
        return result.stdout

    def ensure_repository(self) -> None:
        result = self._run(["rev-parse", "--git-dir"])
        if result.returncode != 0:
            raise NotAGitRepositoryError("Not in a git repository")

    def ref_exists(self, full_ref: str) -> bool:
        # show-ref --verify --quiet 는 ref가 없을 때 1을 반환하므로 오류가 아니다.
        result = self._run(["show-ref", "--verify", "--quiet", full_ref])
        return result.returncode == 0

    def diff(self, ref: str, exclude_patterns: Sequence[str] = ()) -> str:
        """작업 트리와 ref 사이의 unified diff를 반환한다. 변경이 없으면 빈 문자열."""
        args = ["diff", "--no-color", "--no-ext-diff", ref, "--", "."]
        args.extend(f":(exclude){pattern}" for pattern in exclude_patterns)
        return self._run_checked(args)
