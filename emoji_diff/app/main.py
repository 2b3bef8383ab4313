"""현재 저장소의 변경 사항을 LLM으로 분류해 리뷰 난이도를 이모지 하나로 출력하는 CLI.

사용 예:

    emoji-diff          # 이모지만 출력
    emoji-diff -v       # 이모지와 판단 이유를 함께 출력

환경 변수 OPENAI_SECRET_KEY 가 반드시 필요하다. 현재 디렉터리의 .env 도 읽는다.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn

from dotenv import load_dotenv

from emoji_diff.app.config import PROMPT_MODE_METRICS, AppSettings
from emoji_diff.app.presenter import present
from emoji_diff.domains.classification.service import ClassificationOptions, EmojiDiffService
from emoji_diff.domains.diff.collector import build_exclude_patterns
from emoji_diff.infra.clients.classifier import ClassifierClient, ClassifierClientConfig
from emoji_diff.infra.clients.git import GitClient, GitRunner
from emoji_diff.shared.errors import ConfigurationError, GitCommandError, NotAGitRepositoryError


logger = logging.getLogger(__name__)

PROG_NAME = "emoji-diff"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG_NAME,
        description="Estimate review complexity of pending changes as a single emoji.",
        add_help=False,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Also print the reasoning behind the chosen emoji.",
    )
    return parser


def _setup_logging(log_level_name: str) -> None:
    level = getattr(logging, log_level_name.upper(), None)
    if not isinstance(level, int):
        logging.basicConfig(level=logging.WARNING)
        logger.warning("Invalid LOG_LEVEL '%s', defaulting to WARNING", log_level_name)
        return

    logging.basicConfig(level=level)


def _die(message: str, code: int = 1) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return code


def create_service(
    settings: AppSettings,
    *,
    git_runner: GitRunner | None = None,
) -> EmojiDiffService:
    git_client = GitClient(runner=git_runner)
    classifier = ClassifierClient(
        ClassifierClientConfig(
            api_url=settings.api_url,
            api_key=settings.openai_secret_key,
            timeout_seconds=settings.request_timeout_seconds,
        )
    )
    options = ClassificationOptions(
        model=settings.model,
        use_metrics_prompt=settings.prompt_mode == PROMPT_MODE_METRICS,
        max_diff_chars=settings.max_diff_chars,
        exclude_patterns=build_exclude_patterns(settings.extra_exclude_patterns),
    )
    return EmojiDiffService(git_client=git_client, classifier=classifier, options=options)


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AppSettings.from_env()
    except ConfigurationError as exc:
        return _die(str(exc))

    _setup_logging(settings.log_level)

    service = create_service(settings)
    try:
        outcome = service.run()
    except NotAGitRepositoryError as exc:
        return _die(str(exc))
    except GitCommandError as exc:
        logger.debug("git failed: %s", exc.command)
        return _die(str(exc), exc.returncode if exc.returncode > 0 else 1)

    present(outcome, verbose=bool(args.verbose))
    return 0


def run() -> None:
    """콘솔 스크립트 진입점. 현재 디렉터리의 .env 를 먼저 읽는다."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
    sys.exit(main())


if __name__ == "__main__":
    run()
