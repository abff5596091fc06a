from fastapi import APIRouter, Depends, Response, status

from baseline_buddy.api.dependencies import get_segmenter
from baseline_buddy.api.schemas import HealthResponse, ReadinessResponse
from baseline_buddy.core.segmenter import Segmenter

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe: is the process alive?"""
    return HealthResponse()


@router.get("/healthz/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    segmenter: Segmenter = Depends(get_segmenter),
) -> ReadinessResponse:
    """Readiness probe: is a rule table loaded?"""
    if len(segmenter.rules):
        return ReadinessResponse(status="ok", rules=len(segmenter.rules))
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded", rules=0)
