from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from baseline_buddy.api.dependencies import get_segmenter, reset_segmenter


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # Fail at startup, not on the first request, when the environment holds bad tunables.
    get_segmenter()
    yield
    reset_segmenter()
