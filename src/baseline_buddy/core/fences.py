"""Explicit code delimiters: triple-backtick fences first, then single-backtick spans.

Only delimiter syntax is inspected here. A blob with no delimiters at all is
reported as ``None`` so the caller can fall back to line classification.
"""

import re

from baseline_buddy.core.languages import DEFAULT_LANGUAGE
from baseline_buddy.models import Segment

FENCE = "```"

_INLINE_CODE = re.compile(r"`([^`]+)`")
_LANGUAGE_TAG = re.compile(r"[\w+#.-]+")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*(?:\r\n|\r|\n))+")


def trim_blank_lines(text: str) -> str:
    """Drop blank lines at both ends; indentation of the first non-blank line is kept."""
    return _LEADING_BLANK_LINES.sub("", text).rstrip()


def extract_delimited(text: str) -> list[Segment] | None:
    if FENCE in text:
        return extract_fenced(text)
    if _INLINE_CODE.search(text):
        return extract_inline(text)
    return None


def _split_info_string(text: str, body_start: int, close: int) -> tuple[str | None, int]:
    """Return (declared language, offset where the fence body begins)."""
    line_end = text.find("\n", body_start)
    if line_end == -1 or (close != -1 and close < line_end):
        # One-line fence: everything up to the closer is body.
        return None, body_start
    info = text[body_start:line_end].strip()
    if not info:
        return None, line_end + 1
    if _LANGUAGE_TAG.fullmatch(info):
        return info, line_end + 1
    return None, body_start


def _is_bare_opener(rest: str) -> bool:
    """An opener with at most a language tag after it and nothing else in the blob."""
    return "\n" not in rest and (not rest.strip() or _LANGUAGE_TAG.fullmatch(rest.strip()) is not None)


def extract_fenced(text: str) -> list[Segment]:
    segments: list[Segment] = []
    pos = 0
    while pos < len(text):
        opener = text.find(FENCE, pos)
        if opener == -1:
            _append_prose(segments, text[pos:])
            break
        _append_prose(segments, text[pos:opener])

        body_start = opener + len(FENCE)
        close = text.find(FENCE, body_start)
        language, body_offset = _split_info_string(text, body_start, close)
        if close == -1:
            # Unterminated: the rest of the blob is best-effort code.
            body = text[body_offset:]
            if _is_bare_opener(text[body_start:]) or not trim_blank_lines(body):
                _append_prose(segments, text[opener:])
            else:
                _append_code(segments, body, language)
            break
        _append_code(segments, text[body_offset:close], language)
        pos = close + len(FENCE)
    return segments


def extract_inline(text: str) -> list[Segment]:
    parts = _INLINE_CODE.split(text)
    last = len(parts) - 1
    segments: list[Segment] = []
    for i, part in enumerate(parts):
        if i % 2:
            segments.append(Segment.code(part, inline=True))
            continue
        if i == 0:
            part = part.lstrip()
        if i == last:
            part = part.rstrip()
        if part:
            segments.append(Segment.prose(part))
    return segments


def _append_prose(segments: list[Segment], text: str) -> None:
    content = text.strip()
    if content:
        segments.append(Segment.prose(content))


def _append_code(segments: list[Segment], body: str, language: str | None) -> None:
    content = trim_blank_lines(body)
    if content:
        segments.append(Segment.code(content, language=language or DEFAULT_LANGUAGE))
