"""Shared fixtures and helpers for tests."""

import os
from pathlib import Path

import pytest

from baseline_buddy.api.dependencies import reset_segmenter
from baseline_buddy.config import SegmenterConfig
from baseline_buddy.core.segmenter import Segmenter

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep BASELINE_BUDDY_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("BASELINE_BUDDY_"):
            monkeypatch.delenv(name)
    reset_segmenter()


@pytest.fixture
def segmenter() -> Segmenter:
    return Segmenter()


@pytest.fixture
def eager_segmenter() -> Segmenter:
    """A segmenter that ends a code run on the first non-code line."""
    return Segmenter(config=SegmenterConfig(prose_break_threshold=1))
