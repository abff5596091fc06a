from __future__ import annotations

from fastapi import FastAPI

from baseline_buddy.api.lifespan import lifespan
from baseline_buddy.api.routes.health import router as health_router
from baseline_buddy.api.routes.root import router as root_router
from baseline_buddy.api.routes.rules import router as rules_router
from baseline_buddy.api.routes.segment import router as segment_router
from baseline_buddy.api.routes.suggestions import router as suggestions_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Baseline Buddy API",
        description="Split AI answers and chat messages into prose and code segments.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(segment_router)
    app.include_router(suggestions_router)
    app.include_router(rules_router)

    return app
