from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

from emoji_diff.shared.errors import ConfigurationError


DEFAULT_API_URL = "https://api.openai.com/v1/responses"
DEFAULT_MODEL = "gpt-5-nano"
DEFAULT_MAX_DIFF_CHARS = 50000

PROMPT_MODE_CONTENT = "content"
PROMPT_MODE_METRICS = "metrics"
_PROMPT_MODES = {PROMPT_MODE_CONTENT, PROMPT_MODE_METRICS}


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _get_optional_str(name: str) -> str | None:
    return _clean_optional(os.environ.get(name))


def _get_required_str(name: str) -> str:
    value = _clean_optional(os.environ.get(name))
    if value is None:
        raise ConfigurationError(f"{name} environment variable is not set")
    return value


def _get_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = _clean_optional(os.environ.get(name))
    if raw is None:
        value = default
    else:
        try:
            value = int(raw)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid integer for {name}: {raw}") from exc

    if min_value is not None and value < min_value:
        raise ConfigurationError(f"{name} must be >= {min_value}")
    return value


def _get_optional_float(name: str, *, min_value: float | None = None) -> float | None:
    raw = _clean_optional(os.environ.get(name))
    if raw is None:
        return None

    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid float for {name}: {raw}") from exc

    if min_value is not None and value < min_value:
        raise ConfigurationError(f"{name} must be >= {min_value}")
    return value


def _get_csv(name: str) -> Tuple[str, ...]:
    raw = _clean_optional(os.environ.get(name))
    if raw is None:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class AppSettings:
    log_level: str

    openai_secret_key: str
    model: str
    api_url: str
    request_timeout_seconds: float | None

    prompt_mode: str
    max_diff_chars: int
    extra_exclude_patterns: Tuple[str, ...]

    @classmethod
    def from_env(cls) -> "AppSettings":
        # 자격 증명 검사는 다른 어떤 설정 검증보다 먼저 수행한다.
        openai_secret_key = _get_required_str("OPENAI_SECRET_KEY")

        prompt_mode = (_get_optional_str("EMOJI_DIFF_PROMPT_MODE") or PROMPT_MODE_CONTENT).lower()
        if prompt_mode not in _PROMPT_MODES:
            raise ConfigurationError(f"Unsupported EMOJI_DIFF_PROMPT_MODE: {prompt_mode}")

        return cls(
            log_level=(_get_optional_str("LOG_LEVEL") or "WARNING").upper(),
            openai_secret_key=openai_secret_key,
            model=_get_optional_str("EMOJI_DIFF_MODEL") or DEFAULT_MODEL,
            api_url=_get_optional_str("EMOJI_DIFF_API_URL") or DEFAULT_API_URL,
            request_timeout_seconds=_get_optional_float(
                "EMOJI_DIFF_TIMEOUT_SECONDS", min_value=0.001
            ),
            prompt_mode=prompt_mode,
            max_diff_chars=_get_int(
                "EMOJI_DIFF_MAX_DIFF_CHARS", DEFAULT_MAX_DIFF_CHARS, min_value=1
            ),
            extra_exclude_patterns=_get_csv("EMOJI_DIFF_EXTRA_EXCLUDES"),
        )
