from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Tuple

from emoji_diff.domains.classification.interpreter import (
    FALLBACK_RESULT,
    NO_CHANGES_EMOJI,
    interpret_payload,
)
from emoji_diff.domains.classification.prompt import build_content_request, build_metrics_request
from emoji_diff.domains.diff.branch import resolve_base_ref
from emoji_diff.domains.diff.collector import collect_diff
from emoji_diff.domains.diff.summary import summarize_diff
from emoji_diff.infra.clients.git import GitClient
from emoji_diff.shared.errors import ClassifierRequestError
from emoji_diff.shared.types import (
    ClassificationOutcome,
    ClassificationRequest,
    ClassificationResult,
    ClassifierResponse,
)


logger = logging.getLogger(__name__)


class Classifier(Protocol):
    def classify(self, request: ClassificationRequest) -> ClassifierResponse: ...


@dataclass(frozen=True)
class ClassificationOptions:
    model: str
    use_metrics_prompt: bool
    max_diff_chars: int
    exclude_patterns: Tuple[str, ...]


NO_CHANGES_RESULT = ClassificationResult(emoji=NO_CHANGES_EMOJI, reasoning="")


class EmojiDiffService:
    def __init__(
        self,
        *,
        git_client: GitClient,
        classifier: Classifier,
        options: ClassificationOptions,
    ) -> None:
        self._git_client = git_client
        self._classifier = classifier
        self._options = options

    def run(self) -> ClassificationOutcome:
        self._git_client.ensure_repository()

        base_ref = resolve_base_ref(self._git_client)
        diff_text = collect_diff(self._git_client, base_ref, self._options.exclude_patterns)
        if not diff_text.strip():
            logger.info("No changes against %s", base_ref)
            return ClassificationOutcome(result=NO_CHANGES_RESULT, skipped=True)

        metrics = summarize_diff(diff_text)
        logger.info(
            "Change metrics: added=%s, removed=%s, total=%s",
            metrics.added,
            metrics.removed,
            metrics.total,
        )
        if metrics.total == 0:
            return ClassificationOutcome(result=NO_CHANGES_RESULT, metrics=metrics, skipped=True)

        if self._options.use_metrics_prompt:
            request = build_metrics_request(self._options.model, metrics)
        else:
            request = build_content_request(
                self._options.model,
                diff_text,
                self._options.max_diff_chars,
            )

        try:
            response = self._classifier.classify(request)
        except ClassifierRequestError as exc:
            # 분류 결과는 참고용이므로 전송 실패도 폴백으로 처리하고 종료 코드는 0을 유지한다.
            logger.info("Classifier request failed: %s", exc)
            return ClassificationOutcome(result=FALLBACK_RESULT, metrics=metrics, api_error=str(exc))

        if response.error_message:
            logger.info("Classifier reported an error: %s", response.error_message)

        result = interpret_payload(response.payload)
        return ClassificationOutcome(
            result=result,
            metrics=metrics,
            api_error=response.error_message,
        )
