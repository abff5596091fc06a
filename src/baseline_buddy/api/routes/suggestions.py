from fastapi import APIRouter, Depends

from baseline_buddy.api.dependencies import get_segmenter
from baseline_buddy.api.schemas import SegmentedRecord, SuggestionsRequest, SuggestionsResponse
from baseline_buddy.core.segmenter import Segmenter
from baseline_buddy.models import Segment, source_link

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.post("/segment", response_model=SuggestionsResponse)
def segment_suggestions(
    body: SuggestionsRequest,
    segmenter: Segmenter = Depends(get_segmenter),
) -> SuggestionsResponse:
    """Segment suggestion/polyfill explanations; snippets pass through as code with their file annotation."""
    records = []
    for record in body.records:
        link = source_link(body.repo_url, record.annotation) if body.repo_url else None
        records.append(
            SegmentedRecord(
                file_path=record.file_path,
                line_number=record.line_number,
                link=link,
                explanation=segmenter.segment(record.explanation),
                code=Segment.code(record.code),
                original_code=Segment.code(record.original_code) if record.original_code else None,
            )
        )
    return SuggestionsResponse(records=records)
