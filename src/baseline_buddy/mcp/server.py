"""FastMCP server exposing the segmenter as tools."""

from __future__ import annotations

import asyncio
from typing import Any

from fastmcp import FastMCP

from baseline_buddy.core.segmenter import Segmenter
from baseline_buddy.models import ChatMessage


def create_mcp_server(segmenter: Segmenter) -> FastMCP:
    """Create a FastMCP server wired to the given segmenter."""

    mcp = FastMCP(
        "baseline-buddy",
        instructions="Split AI answers and chat messages into prose and code segments.",
    )

    def _segment_dumped(text: str) -> list[dict[str, Any]]:
        return [s.model_dump(mode="json") for s in segmenter.segment(text)]

    @mcp.tool()
    async def segment_text(text: str) -> list[dict[str, Any]]:
        """Split a text blob into ordered prose/code segments."""
        return await asyncio.to_thread(_segment_dumped, text)

    @mcp.tool()
    async def segment_chat(messages: list[dict[str, str]]) -> list[dict[str, Any]]:
        """Segment each chat message ({role, content}) independently, in order."""
        parsed = [ChatMessage.model_validate(m) for m in messages]
        return [{"role": m.role, "segments": await asyncio.to_thread(_segment_dumped, m.content)} for m in parsed]

    @mcp.tool()
    async def list_rules(dialect: str | None = None) -> list[dict[str, str]]:
        """List the line-classification rules, optionally for one dialect."""
        return [
            {"name": r.name, "dialect": r.dialect.value, "signal": r.signal.value, "pattern": r.pattern.pattern}
            for r in segmenter.rules
            if dialect is None or r.dialect.value == dialect
        ]

    return mcp
