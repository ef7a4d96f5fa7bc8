"""
Schedule router for the next template, today's progress and session start.

This router provides endpoints for:
- The template that is up next for the caller
- Progress of today's session against its template
- Starting a session from a template
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import (
    get_current_user,
    get_schedule_service,
    get_workout_progress_service,
)
from application.exceptions import (
    SessionAlreadyActiveError,
    SessionCreationError,
    TemplateNotFoundError,
)
from backend.core.schedule import ScheduleService
from backend.core.workout_progress import WorkoutProgress, WorkoutProgressService
from domain.models import ProgramTemplate, WorkoutSession

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/schedule",
    tags=["Schedule"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class TemplateExerciseResponse(BaseModel):
    """A planned exercise within a template."""
    exercise_key: str
    exercise_name: str
    target_sets: int
    target_reps: str
    target_weight: Optional[float] = None
    order_index: int


class TemplateResponse(BaseModel):
    """A program template."""
    id: str
    name: str
    gym_id: Optional[str] = None
    day_of_week: Optional[int] = None
    total_sets: int
    exercises: List[TemplateExerciseResponse] = Field(default_factory=list)


class NextTemplateResponse(BaseModel):
    """The template up next; null when the caller has no templates."""
    template: Optional[TemplateResponse] = None


class WorkoutProgressResponse(BaseModel):
    template_id: str
    template_name: str
    session_id: Optional[str] = None
    planned_reps: int
    completed_reps: int
    progress: Optional[float] = None
    is_over_target: bool = False


class TodayProgressResponse(BaseModel):
    """Today's progress; null when no template is scheduled today."""
    progress: Optional[WorkoutProgressResponse] = None


class StartSessionRequest(BaseModel):
    template_id: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    id: str
    template_id: Optional[str] = None
    session_name: Optional[str] = None
    status: str
    started_at: datetime
    completed_at: Optional[datetime] = None


def _template_response(template: ProgramTemplate) -> TemplateResponse:
    return TemplateResponse(
        id=template.id,
        name=template.name,
        gym_id=template.gym_id,
        day_of_week=template.day_of_week,
        total_sets=template.total_sets,
        exercises=[
            TemplateExerciseResponse(
                exercise_key=e.exercise_key,
                exercise_name=e.exercise_name,
                target_sets=e.target_sets,
                target_reps=e.target_reps,
                target_weight=e.target_weight,
                order_index=e.order_index,
            )
            for e in template.exercises
        ],
    )


def _progress_response(progress: WorkoutProgress) -> WorkoutProgressResponse:
    return WorkoutProgressResponse(
        template_id=progress.template_id,
        template_name=progress.template_name,
        session_id=progress.session_id,
        planned_reps=progress.planned_reps,
        completed_reps=progress.completed_reps,
        progress=progress.progress,
        is_over_target=progress.is_over_target,
    )


def _session_response(session: WorkoutSession) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        template_id=session.template_id,
        session_name=session.session_name,
        status=session.status.value,
        started_at=session.started_at,
        completed_at=session.completed_at,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/next", response_model=NextTemplateResponse)
async def get_next_template(
    user_id: str = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
) -> NextTemplateResponse:
    """
    Get the template that is up next.

    Today's template when one is scheduled, else the next scheduled day later
    this week, else the template at the caller's current pass.
    """
    template = service.get_next_template(user_id)
    if template is None:
        return NextTemplateResponse()
    return NextTemplateResponse(template=_template_response(template))


@router.get("/today/progress", response_model=TodayProgressResponse)
async def get_today_progress(
    template_id: Optional[str] = Query(
        None, description="Template to measure against (defaults to today's template)"
    ),
    user_id: str = Depends(get_current_user),
    schedule: ScheduleService = Depends(get_schedule_service),
    service: WorkoutProgressService = Depends(get_workout_progress_service),
) -> TodayProgressResponse:
    """
    Get progress of today's session.

    Progress is 0.0 until a session is started today, null when the template
    plans no reps, and may exceed 1.0 when more reps than planned were logged.
    """
    template = None
    if template_id is not None:
        try:
            template = schedule.get_template(user_id, template_id)
        except TemplateNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    progress = service.get_today_progress(user_id, template=template)
    if progress is None:
        return TodayProgressResponse()
    return TodayProgressResponse(progress=_progress_response(progress))


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def start_session(
    request: StartSessionRequest,
    user_id: str = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
) -> SessionResponse:
    """
    Start a session from a template.

    Fails with 409 while another session is still active.
    """
    try:
        session = service.start_session(user_id, request.template_id)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionAlreadyActiveError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SessionCreationError as e:
        logger.error(f"Failed to start session for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to start session")
    return _session_response(session)
