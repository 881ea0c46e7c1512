"""Progression endpoints - what to do next session, and why."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.db.session import get_db
from liftlog.schemas.progression import (
    ExposureRead,
    ProgressionStateRead,
    ProgressionSuggestionRead,
    RecomputeResult,
)
from liftlog.services import progression_store as store
from liftlog.services.progression_recompute import (
    exposure_history,
    get_suggestion,
    load_policy,
    read_progression_state,
    recompute_all_progression_states,
    recompute_progression_state,
)
from liftlog.services.progression_types import (
    ExerciseConfig,
    ProgressionPolicy,
    ProgressionState,
    ProgressionSuggestion,
)
from liftlog.services.suggestion_generator import describe_suggestion

router = APIRouter()


def _state_read(exercise_id: uuid.UUID, state: ProgressionState) -> ProgressionStateRead:
    return ProgressionStateRead(
        exercise_id=exercise_id,
        current_rep_ceiling=state.current_rep_ceiling,
        last_suggested_weight_lb=state.last_suggested_weight_lb,
        last_suggested_rep_ceiling=state.last_suggested_rep_ceiling,
        last_reason_code=state.last_reason_code,
        last_successful_weight_lb=state.last_successful_weight_lb,
        last_exposure_weight_lb=state.last_exposure_weight_lb,
        consecutive_non_success_exposures=state.consecutive_non_success_exposures,
        exposure_count=state.exposure_count,
    )


def _suggestion_read(
    exercise_id: uuid.UUID,
    suggestion: ProgressionSuggestion,
    policy: ProgressionPolicy,
    state: ProgressionState | None,
) -> ProgressionSuggestionRead:
    return ProgressionSuggestionRead(
        exercise_id=exercise_id,
        reason_code=suggestion.reason_code,
        target_weight_lb=suggestion.target_weight_lb,
        target_rep_ceiling=suggestion.target_rep_ceiling,
        message=describe_suggestion(suggestion, policy, state),
    )


async def _exercise_or_404(db: AsyncSession, exercise_id: uuid.UUID) -> ExerciseConfig:
    exercise = await store.read_exercise(db, exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.get("/exercises/{exercise_id}/suggestion", response_model=ProgressionSuggestionRead)
async def get_exercise_suggestion(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """
    Next-session suggestion: reason code, target weight (null before the first
    session) and the rep ceiling every set should reach.
    """
    suggestion = await get_suggestion(db, exercise_id)
    if suggestion is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    policy = await load_policy(db)
    state = await store.read_progression_state(db, exercise_id)
    return _suggestion_read(exercise_id, suggestion, policy, state)


@router.get("/exercises/{exercise_id}/state", response_model=ProgressionStateRead)
async def get_exercise_progression_state(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Cached progression state (initial state if nothing has been logged)."""
    exercise = await _exercise_or_404(db, exercise_id)
    state = await read_progression_state(db, exercise)
    return _state_read(exercise_id, state)


@router.get("/exercises/{exercise_id}/exposures", response_model=list[ExposureRead])
async def get_exercise_exposures(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Every session of the exercise, oldest first, with the ceiling it was judged against and its outcome."""
    steps = await exposure_history(db, exercise_id)
    if steps is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    policy = await load_policy(db)
    return [
        ExposureRead(
            workout_id=step.exposure.workout_id,
            timestamp=step.exposure.timestamp,
            weight_lb=step.exposure.weight_lb,
            reps=step.exposure.reps,
            rep_ceiling=step.rep_ceiling,
            outcome=step.outcome,
            suggestion=_suggestion_read(exercise_id, step.suggestion, policy, step.state),
        )
        for step in steps
    ]


@router.post("/exercises/{exercise_id}/recompute", response_model=ProgressionStateRead)
async def recompute_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Rebuild one exercise's progression state from its full set history."""
    state = await recompute_progression_state(db, exercise_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return _state_read(exercise_id, state)


@router.post("/recompute", response_model=RecomputeResult)
async def recompute_all(db: AsyncSession = Depends(get_db)):
    """Rebuild progression state for every exercise (e.g. after an import)."""
    return RecomputeResult(recomputed=await recompute_all_progression_states(db))
