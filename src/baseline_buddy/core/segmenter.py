import logging
from collections.abc import Iterable

from baseline_buddy.config import SegmenterConfig
from baseline_buddy.core.classifier import LineClassifier, classify_text
from baseline_buddy.core.detection import code_confidence
from baseline_buddy.core.fences import extract_delimited
from baseline_buddy.core.rules import DEFAULT_RULES, RuleSet
from baseline_buddy.models import Segment

logger = logging.getLogger(__name__)


def merge_adjacent(segments: Iterable[Segment]) -> list[Segment]:
    """Join neighbouring segments of the same kind so kinds strictly alternate."""
    merged: list[Segment] = []
    for segment in segments:
        if merged and merged[-1].kind == segment.kind:
            previous = merged[-1]
            merged[-1] = previous.model_copy(
                update={
                    "content": f"{previous.content}\n{segment.content}",
                    "language": previous.language or segment.language,
                    "inline": previous.inline and segment.inline,
                }
            )
        else:
            merged.append(segment)
    return merged


class Segmenter:
    """Split a text blob into alternating prose and code segments.

    Explicit delimiters (fences, then inline backticks) take precedence; the
    line heuristics only run on blobs that contain none. Instances hold no
    per-call state and can be shared between threads.
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES, config: SegmenterConfig | None = None) -> None:
        self.rules = rules
        self.config = config or SegmenterConfig()
        self._classifier = LineClassifier(rules, self.config)

    def segment(self, text: str) -> list[Segment]:
        if not text.strip():
            return []

        delimited = extract_delimited(text)
        if delimited is not None:
            segments = merge_adjacent(delimited) or [Segment.prose(text.strip())]
            logger.debug("Delimited pass split %d chars into %d segment(s)", len(text), len(segments))
            return segments

        segments = merge_adjacent(self._demote_unlikely_code(classify_text(text, self._classifier)))
        logger.debug("Heuristic pass split %d chars into %d segment(s)", len(text), len(segments))
        return segments

    def _demote_unlikely_code(self, segments: list[Segment]) -> list[Segment]:
        threshold = self.config.confidence_threshold
        if not threshold:
            return segments
        out = []
        for seg in segments:
            if seg.is_code and code_confidence(seg.content) < threshold:
                logger.debug("Demoting %d-char code run below confidence %.2f", len(seg.content), threshold)
                out.append(Segment.prose(seg.content.strip()))
            else:
                out.append(seg)
        return out


_DEFAULT_SEGMENTER = Segmenter()


def segment(text: str) -> list[Segment]:
    """Segment ``text`` with the built-in rule table and default tunables."""
    return _DEFAULT_SEGMENTER.segment(text)
