import pytest

from emoji_diff.domains.classification.interpreter import (
    FALLBACK_EMOJI,
    FALLBACK_REASONING,
    extract_first_emoji,
    extract_response_text,
    extract_structured,
    interpret_payload,
    interpret_text,
)
from emoji_diff.shared.types import ClassificationResult
from tests.fakes import responses_payload


def test_structured_response_is_used() -> None:
    result = interpret_payload(responses_payload('{"emoji": "🦊", "reasoning": "refactor"}'))

    assert result == ClassificationResult(emoji="🦊", reasoning="refactor")


def test_fenced_json_is_accepted() -> None:
    text = '```json\n{"emoji": "🐻", "reasoning": "state machine rewrite"}\n```'

    assert extract_structured(text) == ClassificationResult("🐻", "state machine rewrite")


def test_free_text_falls_back_to_emoji_scan() -> None:
    result = interpret_payload(responses_payload("Looks like 🐘 work"))

    assert result == ClassificationResult(emoji="🐘", reasoning="")


def test_structured_without_reasoning_uses_scan() -> None:
    result = interpret_text('{"emoji": "🐭", "reasoning": ""}')

    assert result == ClassificationResult(emoji="🐭", reasoning="")


def test_scan_returns_first_match() -> None:
    assert extract_first_emoji("either 🐰 or 🦖").emoji == "🐰"


def test_no_emoji_uses_fallback() -> None:
    result = interpret_payload(responses_payload("I cannot decide, sorry."))

    assert result.emoji == FALLBACK_EMOJI
    assert result.reasoning == FALLBACK_REASONING


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"output": []},
        {"output": [{"type": "message", "content": [{"text": '{"emoji": "🦊"}'}]}]},
        {"output": [{}, {"content": []}]},
        {"output": [{}, {"content": [{"text": None}]}]},
        {"error": {"message": "Incorrect API key provided"}},
    ],
)
def test_unexpected_shapes_fall_back(payload) -> None:
    assert extract_response_text(payload) == ""
    assert interpret_payload(payload).emoji == FALLBACK_EMOJI


def test_custom_extractor_chain_runs_in_order() -> None:
    calls = []

    def first(text: str):
        calls.append("first")
        return None

    def second(text: str):
        calls.append("second")
        return ClassificationResult("🐜", "typo")

    def third(text: str):
        calls.append("third")
        return ClassificationResult("🦖", "never")

    assert interpret_text("anything", [first, second, third]).emoji == "🐜"
    assert calls == ["first", "second"]
