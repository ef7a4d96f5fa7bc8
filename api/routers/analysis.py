"""
Analysis router for training-plan analysis.

Muscle balance ranks the muscle groups of the caller's active templates by
planned sets and flags the least trained group.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_current_user, get_muscle_balance_service
from backend.core.muscle_balance import MuscleBalanceService, MuscleGroupStats

router = APIRouter(
    prefix="/analysis",
    tags=["Analysis"],
)


class MuscleGroupStatsResponse(BaseModel):
    muscle_group: str
    total_sets: int
    percentage: float
    display_percentage: int


class MuscleBalanceResponse(BaseModel):
    """Muscle groups ranked by planned sets, most trained first."""
    stats: List[MuscleGroupStatsResponse]
    total_sets: int
    least_trained: Optional[MuscleGroupStatsResponse] = None


def _group_response(stats: MuscleGroupStats) -> MuscleGroupStatsResponse:
    return MuscleGroupStatsResponse(
        muscle_group=stats.muscle_group,
        total_sets=stats.total_sets,
        percentage=stats.percentage,
        display_percentage=stats.display_percentage,
    )


@router.get("/muscle-balance", response_model=MuscleBalanceResponse)
async def get_muscle_balance(
    user_id: str = Depends(get_current_user),
    service: MuscleBalanceService = Depends(get_muscle_balance_service),
) -> MuscleBalanceResponse:
    """
    Get the muscle balance of the caller's active templates.

    least_trained is only set when more than one muscle group is planned.
    """
    report = service.get_report(user_id)
    least = report.least_trained
    return MuscleBalanceResponse(
        stats=[_group_response(s) for s in report.stats],
        total_sets=report.total_sets,
        least_trained=_group_response(least) if least is not None else None,
    )
