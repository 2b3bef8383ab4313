from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional, Sequence

from emoji_diff.shared.types import ClassificationResult


logger = logging.getLogger(__name__)


NO_CHANGES_EMOJI = "🐌"
FALLBACK_EMOJI = "🦎"
FALLBACK_REASONING = "Fallback emoji used due to parsing error"

FALLBACK_RESULT = ClassificationResult(emoji=FALLBACK_EMOJI, reasoning=FALLBACK_REASONING)

_EMOJI_RE = re.compile(
    "["
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F300-\U0001F5FF"  # symbols & pictographs
    "\U0001F680-\U0001F6FF"  # transport & map
    "\U0001F1E0-\U0001F1FF"  # flags
    "\U0001F900-\U0001F9FF"  # supplemental symbols & pictographs
    "\U0001FA70-\U0001FAFF"  # symbols & pictographs extended-A
    "]"
)
_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n(?P<body>.*?)\n?```\s*$", re.DOTALL)

Extractor = Callable[[str], Optional[ClassificationResult]]


def extract_response_text(payload: Any) -> str:
    """Responses API 응답에서 ``output[1].content[0].text`` 값을 꺼낸다.

    구조가 다르면 예외 없이 빈 문자열을 돌려주고, 이후 추출 단계가 폴백을 처리한다.
    """
    try:
        text = payload["output"][1]["content"][0]["text"]
    except (KeyError, IndexError, TypeError):
        logger.debug("Classifier payload has no output[1].content[0].text")
        return ""
    return text if isinstance(text, str) else ""


def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    match = _CODE_FENCE_RE.match(stripped)
    if match:
        return match.group("body").strip()
    return stripped


def extract_structured(text: str) -> Optional[ClassificationResult]:
    try:
        data = json.loads(_strip_code_fence(text))
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    emoji = data.get("emoji")
    reasoning = data.get("reasoning")
    if not isinstance(emoji, str) or not emoji.strip():
        return None
    if not isinstance(reasoning, str) or not reasoning.strip():
        return None
    return ClassificationResult(emoji=emoji.strip(), reasoning=reasoning.strip())


def extract_first_emoji(text: str) -> Optional[ClassificationResult]:
    match = _EMOJI_RE.search(text)
    if match is None:
        return None
    return ClassificationResult(emoji=match.group(), reasoning="")


DEFAULT_EXTRACTORS: Sequence[Extractor] = (extract_structured, extract_first_emoji)


def interpret_text(
    text: str,
    extractors: Sequence[Extractor] = DEFAULT_EXTRACTORS,
) -> ClassificationResult:
    """추출기를 순서대로 시도해 처음 성공한 결과를 쓰고, 모두 실패하면 폴백을 반환한다."""
    for extractor in extractors:
        result = extractor(text)
        if result is not None:
            logger.debug("Classification extracted by %s", getattr(extractor, "__name__", extractor))
            return result

    logger.info("Could not extract an emoji from classifier response, using fallback")
    return FALLBACK_RESULT


def interpret_payload(payload: Any) -> ClassificationResult:
    return interpret_text(extract_response_text(payload))
