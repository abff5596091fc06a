from fastapi import APIRouter, Depends, Query

from baseline_buddy.api.dependencies import get_segmenter
from baseline_buddy.api.schemas import RuleRow
from baseline_buddy.core.rules import Dialect
from baseline_buddy.core.segmenter import Segmenter

router = APIRouter(tags=["rules"])


@router.get("/rules", response_model=list[RuleRow])
async def rules(
    dialect: Dialect | None = Query(None),
    segmenter: Segmenter = Depends(get_segmenter),
) -> list[RuleRow]:
    selected = segmenter.rules.by_dialect(dialect) if dialect else segmenter.rules.rules
    return [
        RuleRow(
            name=r.name,
            dialect=r.dialect.value,
            signal=r.signal.value,
            pattern=r.pattern.pattern,
            in_code_only=r.in_code_only,
        )
        for r in selected
    ]
