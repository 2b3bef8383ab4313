from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, TypedDict


class ResponsesRequestPayload(TypedDict):
    """Request body accepted by the Responses endpoint."""

    model: str
    input: str


@dataclass(frozen=True)
class ChangeMetrics:
    added: int
    removed: int

    @property
    def total(self) -> int:
        return self.added + self.removed


@dataclass(frozen=True)
class ClassificationRequest:
    model: str
    prompt_text: str

    def to_payload(self) -> ResponsesRequestPayload:
        return {"model": self.model, "input": self.prompt_text}


@dataclass(frozen=True)
class ClassificationResult:
    emoji: str
    reasoning: str = ""


@dataclass(frozen=True)
class ClassifierResponse:
    """Decoded response body plus whatever error the endpoint or transport reported."""

    payload: Dict[str, Any] | None
    error_message: str | None = None
    status_code: int | None = None


@dataclass(frozen=True)
class ClassificationOutcome:
    result: ClassificationResult
    metrics: ChangeMetrics | None = None
    api_error: str | None = None
    skipped: bool = False
