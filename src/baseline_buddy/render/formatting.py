"""Best-effort presentation cleanup for code segments.

Nothing here touches ``Segment.content``: callers get a new string for display
and fall back to the raw text whenever reformatting fails.
"""

from __future__ import annotations

import logging
import re

import jsbeautifier

from baseline_buddy.core.languages import is_beautifiable

logger = logging.getLogger(__name__)

_STRAY_FENCE_LINE = re.compile(r"^[ \t]*```[\w+#.-]*[ \t]*(?:\r?\n|$)", re.MULTILINE)


def strip_fence_markers(code: str) -> str:
    """Remove leftover fence lines, e.g. from an unterminated block."""
    return _STRAY_FENCE_LINE.sub("", code).strip("\n")


def _beautifier_options() -> jsbeautifier.BeautifierOptions:
    options = jsbeautifier.default_options()
    options.indent_size = 2
    options.space_in_empty_paren = True
    options.preserve_newlines = True
    return options


def prettify(code: str, language: str | None) -> str:
    """Pretty-print script-family code; anything else is returned unchanged."""
    if not is_beautifiable(language) or code.lstrip().startswith("<"):
        return code
    try:
        return jsbeautifier.beautify(code, _beautifier_options())
    except Exception:
        logger.debug("Pretty-printing failed for language %s; showing raw code", language, exc_info=True)
        return code


def format_for_display(code: str, language: str | None, pretty: bool = True) -> str:
    cleaned = strip_fence_markers(code)
    if not cleaned.strip():
        return code
    return prettify(cleaned, language) if pretty else cleaned
