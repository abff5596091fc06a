"""Tunables for the segmenter and the console renderer.

Every value has a default and can be overridden through a ``BASELINE_BUDDY_*``
environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_ENV_PREFIX = "BASELINE_BUDDY_"

DEFAULT_CODE_THEME = "github-dark"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{_ENV_PREFIX}{name} must be a number, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{_ENV_PREFIX}{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class SegmenterConfig:
    short_text_max_tokens: int = 5
    """Lines with at most this many tokens may be forced to prose by the short-text override."""

    natural_language_min_length: int = 20
    """A natural-language line must be longer than this to break a code run on its own."""

    prose_break_threshold: int = 2
    """Consecutive non-code lines that end a code run (1 or 2)."""

    confidence_threshold: float = 0.0
    """Heuristic code runs scoring below this (0..1) are demoted to prose; 0 keeps every run."""

    def __post_init__(self) -> None:
        if self.short_text_max_tokens < 1:
            raise ValueError("short_text_max_tokens must be at least 1")
        if self.natural_language_min_length < 0:
            raise ValueError("natural_language_min_length must not be negative")
        if self.prose_break_threshold not in (1, 2):
            raise ValueError("prose_break_threshold must be 1 or 2")
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError("confidence_threshold must be between 0 and 1")

    @classmethod
    def from_env(cls) -> SegmenterConfig:
        defaults = cls()
        return cls(
            short_text_max_tokens=_env_int("SHORT_TEXT_MAX_TOKENS", defaults.short_text_max_tokens),
            natural_language_min_length=_env_int(
                "NATURAL_LANGUAGE_MIN_LENGTH", defaults.natural_language_min_length
            ),
            prose_break_threshold=_env_int("PROSE_BREAK_THRESHOLD", defaults.prose_break_threshold),
            confidence_threshold=_env_float("CONFIDENCE_THRESHOLD", defaults.confidence_threshold),
        )


@dataclass(frozen=True)
class RenderConfig:
    code_theme: str = DEFAULT_CODE_THEME
    pretty_print: bool = True
    line_numbers: bool = True

    @classmethod
    def from_env(cls) -> RenderConfig:
        defaults = cls()
        return cls(
            code_theme=os.getenv(_ENV_PREFIX + "CODE_THEME", defaults.code_theme),
            pretty_print=_env_bool("PRETTY_PRINT", defaults.pretty_print),
            line_numbers=_env_bool("LINE_NUMBERS", defaults.line_numbers),
        )
