"""Heuristic prose/code classification for blobs without explicit delimiters.

Each line is classified in isolation against the rule table, then a single bit
of run state (``in_code_run``) smooths the result so that one stray line does
not split a logical code block in three.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from baseline_buddy.config import SegmenterConfig
from baseline_buddy.core.fences import trim_blank_lines
from baseline_buddy.core.rules import DEFAULT_RULES, RuleSet, Signal
from baseline_buddy.models import Segment, SegmentKind

_CODE_BEFORE_OPENER = re.compile(r"[;{})\]]\s*$")

_DEFINITE_CODE = (Signal.COMMENT, Signal.CODE_START)
_SHORT_TEXT = (Signal.SHORT_TEXT, Signal.NATURAL_LANGUAGE)


class LineKind(str, Enum):
    BLANK = "blank"
    CODE = "code"
    PROSE = "prose"
    DEFINITE_PROSE = "definite-prose"
    """Short text (greeting, question, one-word command) that always ends a code run."""


@dataclass
class ScanState:
    in_code_run: bool = False
    block_closer: str | None = None
    pending_prose: int = 0

    @property
    def inside_block_comment(self) -> bool:
        return self.block_closer is not None


class LineClassifier:
    def __init__(self, rules: RuleSet = DEFAULT_RULES, config: SegmenterConfig | None = None) -> None:
        self.rules = rules
        self.config = config or SegmenterConfig()

    def classify(self, line: str, state: ScanState) -> LineKind:
        """Classify one line, updating the block-comment part of ``state``."""
        stripped = line.strip()
        if not stripped:
            return LineKind.BLANK

        if state.block_closer is not None:
            if state.block_closer in stripped:
                state.block_closer = None
            return LineKind.CODE
        if self._opens_block_comment(stripped, state):
            return LineKind.CODE

        definite = self.rules.first_match(stripped, _DEFINITE_CODE, state.in_code_run)
        if definite is None and self.is_short_text(stripped):
            return LineKind.DEFINITE_PROSE
        if definite is not None:
            return LineKind.CODE
        if self.rules.first_match(stripped, (Signal.CODE_CONTINUATION,)) is not None:
            return LineKind.CODE
        return LineKind.PROSE

    def is_short_text(self, stripped: str) -> bool:
        if len(stripped.split()) > self.config.short_text_max_tokens:
            return False
        return self.rules.first_match(stripped, _SHORT_TEXT) is not None

    def is_natural_language(self, stripped: str) -> bool:
        if len(stripped) <= self.config.natural_language_min_length:
            return False
        return self.rules.first_match(stripped, _SHORT_TEXT) is not None

    def _opens_block_comment(self, stripped: str, state: ScanState) -> bool:
        for marker in self.rules.block_comments:
            index = stripped.find(marker.opener)
            if index == -1:
                continue
            if index > 0 and not _CODE_BEFORE_OPENER.search(stripped[:index]):
                continue
            if stripped.find(marker.closer, index + len(marker.opener)) == -1:
                state.block_closer = marker.closer
                return True
            # Closed on the same line: a leading comment still makes the line code.
            return index == 0
        return False


@dataclass
class _OpenSegment:
    kind: SegmentKind
    lines: list[str] = field(default_factory=list)

    def to_segment(self) -> Segment | None:
        text = "".join(self.lines)
        if self.kind is SegmentKind.PROSE:
            content = text.strip()
            return Segment.prose(content) if content else None
        content = trim_blank_lines(text)
        return Segment.code(content) if content else None


def classify_text(text: str, classifier: LineClassifier | None = None) -> list[Segment]:
    """Split an undelimited blob into prose and code segments (not yet merged)."""
    classifier = classifier or LineClassifier()
    config = classifier.config
    state = ScanState()
    closed: list[_OpenSegment] = []
    current: _OpenSegment | None = None
    pending: list[str] = []

    def open_segment(kind: SegmentKind, lines: list[str]) -> _OpenSegment:
        if current is not None:
            closed.append(current)
        return _OpenSegment(kind, lines)

    for line in text.splitlines(keepends=True):
        kind = classifier.classify(line, state)

        if kind is LineKind.BLANK:
            if pending:
                pending.append(line)
            elif current is not None:
                current.lines.append(line)
            continue

        if kind is LineKind.CODE:
            if state.in_code_run and current is not None:
                current.lines.extend(pending)
                current.lines.append(line)
            else:
                current = open_segment(SegmentKind.CODE, [line])
                state.in_code_run = True
            pending = []
            state.pending_prose = 0
            continue

        if not state.in_code_run:
            if current is not None and current.kind is SegmentKind.PROSE:
                current.lines.append(line)
            else:
                current = open_segment(SegmentKind.PROSE, [line])
            continue

        state.pending_prose += 1
        breaks_run = (
            kind is LineKind.DEFINITE_PROSE
            or classifier.is_natural_language(line.strip())
            or state.pending_prose >= config.prose_break_threshold
        )
        if breaks_run:
            current = open_segment(SegmentKind.PROSE, [*pending, line])
            pending = []
            state.in_code_run = False
            state.pending_prose = 0
        else:
            pending.append(line)

    if current is not None:
        # Undecided lines at the end stay in the code run.
        current.lines.extend(pending)
        closed.append(current)

    return [segment for segment in (s.to_segment() for s in closed) if segment is not None]
