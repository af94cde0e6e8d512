"""
Route handlers for rule metadata.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from api.schemas import RuleResponse
from api.services.scoring_service import ScoringService, get_scoring_service

router = APIRouter(prefix="/rules", tags=["rules"])


@router.get(
    "",
    response_model=list[RuleResponse],
    summary="List heuristic rules",
)
def list_rules(
    service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> list[RuleResponse]:
    """All registered rules in evaluation order, with their enabled flag."""
    return service.list_rules()
