from fastapi import APIRouter, Depends

from baseline_buddy.api.dependencies import get_segmenter
from baseline_buddy.api.schemas import (
    ChatSegmentRequest,
    ChatSegmentResponse,
    SegmentedMessage,
    SegmentRequest,
    SegmentResponse,
)
from baseline_buddy.core.segmenter import Segmenter

router = APIRouter(tags=["segment"])


@router.post("/segment", response_model=SegmentResponse)
def segment(
    body: SegmentRequest,
    segmenter: Segmenter = Depends(get_segmenter),
) -> SegmentResponse:
    return SegmentResponse(segments=segmenter.segment(body.text))


@router.post("/chat/segment", response_model=ChatSegmentResponse)
def chat_segment(
    body: ChatSegmentRequest,
    segmenter: Segmenter = Depends(get_segmenter),
) -> ChatSegmentResponse:
    """Segment every message of a conversation, in order, independently of each other."""
    return ChatSegmentResponse(
        messages=[SegmentedMessage(role=m.role, segments=segmenter.segment(m.content)) for m in body.messages]
    )
