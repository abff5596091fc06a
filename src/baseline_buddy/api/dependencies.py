from __future__ import annotations

from baseline_buddy.config import SegmenterConfig
from baseline_buddy.core.segmenter import Segmenter

_segmenter: Segmenter | None = None


def get_segmenter() -> Segmenter:
    """Return the shared ``Segmenter``, creating it from the environment on first call."""
    global _segmenter  # noqa: PLW0603
    if _segmenter is None:
        _segmenter = Segmenter(config=SegmenterConfig.from_env())
    return _segmenter


def reset_segmenter() -> None:
    global _segmenter  # noqa: PLW0603
    _segmenter = None
