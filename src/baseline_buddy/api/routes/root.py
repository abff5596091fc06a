from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint: API directory for programmatic and human clients."""
    return {
        "meta": {
            "title": "Baseline Buddy API",
            "description": "Split AI answers and chat messages into prose and code segments.",
            "version": "0.1.0",
        },
        "links": {
            "self": "/",
            "segment": "/segment",
            "chat": "/chat/segment",
            "suggestions": "/suggestions/segment",
            "rules": "/rules",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
