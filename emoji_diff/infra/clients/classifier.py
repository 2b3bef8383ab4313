from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict

import requests

from emoji_diff.shared.errors import ClassifierRequestError
from emoji_diff.shared.types import ClassificationRequest, ClassifierResponse


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifierClientConfig:
    api_url: str
    api_key: str
    timeout_seconds: float | None = None


def _extract_error_message(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


class ClassifierClient:
    """Responses API 엔드포인트에 분류 요청을 한 번 보내는 얇은 HTTP 클라이언트."""

    def __init__(self, config: ClassifierClientConfig) -> None:
        self._api_url = config.api_url
        self._api_key = config.api_key
        self._timeout_seconds = config.timeout_seconds

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    def classify(self, request: ClassificationRequest) -> ClassifierResponse:
        """요청을 전송하고 응답 JSON을 그대로 돌려준다.

        2xx가 아니더라도 본문이 JSON이면 예외 대신 error_message를 채워 반환한다.
        본문이 JSON이 아니거나 연결 자체가 실패하면 ClassifierRequestError를 던진다.
        """
        logger.info("Requesting classification: model=%s, url=%s", request.model, self._api_url)

        try:
            started_at = perf_counter()
            # json= 으로 직렬화하므로 diff 안의 따옴표나 중괄호가 본문을 깨뜨리지 않는다.
            response = requests.post(
                self._api_url,
                headers=self._headers(),
                json=request.to_payload(),
                timeout=self._timeout_seconds,
            )
            elapsed = perf_counter() - started_at
        except requests.RequestException as exc:
            raise ClassifierRequestError(
                f"Classifier request failed: POST {self._api_url}"
            ) from exc

        logger.debug(
            "Classifier responded: status=%s, elapsed=%.2fs",
            response.status_code,
            elapsed,
        )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ClassifierRequestError(
                f"Classifier returned invalid JSON: POST {self._api_url} status={response.status_code}"
            ) from exc

        error_message = _extract_error_message(payload)
        if error_message is None and not response.ok:
            error_message = f"HTTP {response.status_code}"

        return ClassifierResponse(
            payload=payload if isinstance(payload, dict) else None,
            error_message=error_message,
            status_code=response.status_code,
        )
