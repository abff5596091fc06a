from __future__ import annotations

from pydantic import BaseModel, Field

from baseline_buddy.models import ChatMessage, Segment, Suggestion


class HealthResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    status: str = "ok"
    rules: int = 0


class SegmentRequest(BaseModel):
    text: str


class SegmentResponse(BaseModel):
    segments: list[Segment]


class ChatSegmentRequest(BaseModel):
    """POST /chat/segment: the caller owns the history and re-sends it every turn."""

    messages: list[ChatMessage] = Field(min_length=1)


class SegmentedMessage(BaseModel):
    role: str
    segments: list[Segment]


class ChatSegmentResponse(BaseModel):
    messages: list[SegmentedMessage]


class SuggestionsRequest(BaseModel):
    records: list[Suggestion]
    repo_url: str | None = None


class SegmentedRecord(BaseModel):
    file_path: str | None = None
    line_number: int | None = None
    link: str | None = None
    explanation: list[Segment]
    code: Segment
    original_code: Segment | None = None


class SuggestionsResponse(BaseModel):
    records: list[SegmentedRecord]


class RuleRow(BaseModel):
    name: str
    dialect: str
    signal: str
    pattern: str
    in_code_only: bool
