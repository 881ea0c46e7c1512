"""Workout CRUD endpoints.

Every write that can change an exercise's set history (set add/edit/delete,
workout start-time change, workout delete) ends by recomputing the
progression state of the exercises it touched, inside the same transaction.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from liftlog.core.constants import (
    MAX_EXERCISES_PER_SESSION,
    MAX_SETS_PER_EXERCISE_PER_SESSION,
)
from liftlog.db.session import get_db
from liftlog.models.exercise import Exercise
from liftlog.models.workout import Workout, WorkoutSet
from liftlog.schemas.workout import (
    WorkoutCreate,
    WorkoutRead,
    WorkoutSetCreate,
    WorkoutSetRead,
    WorkoutSetUpdate,
    WorkoutUpdate,
)
from liftlog.services.progression_recompute import recompute_many, recompute_progression_state
from liftlog.services.progression_store import list_exercise_ids_for_workout

router = APIRouter()


def _workout_read(workout: Workout, sets: list[WorkoutSet] | None = None) -> WorkoutRead:
    # Built by hand so workout.sets is never lazy-loaded outside the async context
    return WorkoutRead(
        id=workout.id,
        started_at=workout.started_at,
        ended_at=workout.ended_at,
        duration_seconds=workout.duration_seconds,
        notes=workout.notes,
        sets=[WorkoutSetRead.model_validate(s) for s in sets or []],
    )


async def _get_workout_or_404(db: AsyncSession, workout_id: uuid.UUID) -> Workout:
    workout = await db.get(Workout, workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 50,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
):
    """List workouts (without sets), optionally filtered by date range."""
    stmt = select(Workout)
    if from_date:
        stmt = stmt.where(Workout.started_at >= from_date)
    if to_date:
        stmt = stmt.where(Workout.started_at <= to_date)
    stmt = stmt.order_by(Workout.started_at.desc()).offset(skip).limit(limit)
    result = await db.execute(stmt)
    return [_workout_read(w) for w in result.scalars().all()]


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    db: AsyncSession = Depends(get_db),
):
    """Start a new workout (started_at defaults to now)."""
    data = payload.model_dump(exclude_none=True)
    workout = Workout(**data)
    db.add(workout)
    await db.flush()
    await db.refresh(workout)
    return _workout_read(workout)


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a workout with all its sets."""
    result = await db.execute(
        select(Workout).where(Workout.id == workout_id).options(selectinload(Workout.sets))
    )
    workout = result.scalar_one_or_none()
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    # Order sets by set_order then id (stable order per exercise).
    sorted_sets = sorted(workout.sets, key=lambda s: (s.set_order, str(s.id)))
    return _workout_read(workout, sorted_sets)


@router.patch("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update workout (e.g. end time, notes). Sets duration_seconds from started_at/ended_at if not provided.
    Moving started_at reorders exposures, so the workout's exercises are recomputed."""
    workout = await _get_workout_or_404(db, workout_id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("ended_at") and workout.started_at and "duration_seconds" not in data:
        ended = data["ended_at"]
        started = data.get("started_at") or workout.started_at
        # Normalize both to tz-aware UTC for safe subtraction
        if ended.tzinfo is None:
            ended = ended.replace(tzinfo=timezone.utc)
        if started.tzinfo is None:
            started = started.replace(tzinfo=timezone.utc)
        data["duration_seconds"] = max(0, int((ended - started).total_seconds()))
    for k, v in data.items():
        setattr(workout, k, v)
    await db.flush()
    if "started_at" in data:
        await recompute_many(db, await list_exercise_ids_for_workout(db, workout_id))
    await db.refresh(workout)
    return _workout_read(workout)


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a workout and its sets, then replay every exercise it contained."""
    workout = await _get_workout_or_404(db, workout_id)
    exercise_ids = await list_exercise_ids_for_workout(db, workout_id)
    await db.delete(workout)
    await recompute_many(db, exercise_ids)
    return None


@router.post("/{workout_id}/sets", response_model=WorkoutSetRead, status_code=201)
async def add_set_to_workout(
    workout_id: uuid.UUID,
    payload: WorkoutSetCreate,
    db: AsyncSession = Depends(get_db),
):
    """Add a set (max 20 exercises per session, 10 sets per exercise)."""
    await _get_workout_or_404(db, workout_id)
    if not await db.get(Exercise, payload.exercise_id):
        raise HTTPException(status_code=404, detail="Exercise not found")

    # One query: distinct exercise count and sets count for this exercise
    counts_row = await db.execute(
        select(
            func.count(func.distinct(WorkoutSet.exercise_id)).label("n_exercises"),
            func.count(case((WorkoutSet.exercise_id == payload.exercise_id, 1))).label("n_sets_this_ex"),
        ).where(WorkoutSet.workout_id == workout_id)
    )
    row = counts_row.one_or_none()
    n_exercises = int(row.n_exercises or 0) if row else 0
    n_sets_this_ex = int(row.n_sets_this_ex or 0) if row else 0

    if n_sets_this_ex >= MAX_SETS_PER_EXERCISE_PER_SESSION:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {MAX_SETS_PER_EXERCISE_PER_SESSION} sets per exercise per session.",
        )
    if n_exercises >= MAX_EXERCISES_PER_SESSION and n_sets_this_ex == 0:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {MAX_EXERCISES_PER_SESSION} exercises per session.",
        )

    set_ = WorkoutSet(workout_id=workout_id, **payload.model_dump())
    db.add(set_)
    await db.flush()
    await recompute_progression_state(db, set_.exercise_id)
    await db.refresh(set_)
    return set_


@router.patch("/{workout_id}/sets/{set_id}", response_model=WorkoutSetRead)
async def update_set(
    workout_id: uuid.UUID,
    set_id: uuid.UUID,
    payload: WorkoutSetUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an existing set (weight, reps, rpe, notes, label)."""
    result = await db.execute(
        select(WorkoutSet).where(WorkoutSet.id == set_id, WorkoutSet.workout_id == workout_id)
    )
    set_ = result.scalar_one_or_none()
    if not set_:
        raise HTTPException(status_code=404, detail="Set not found")
    data = payload.model_dump(exclude_unset=True)
    for field in ("weight", "reps"):
        if field in data and data[field] is None:
            raise HTTPException(status_code=422, detail=f"{field} cannot be cleared")
    for k, v in data.items():
        setattr(set_, k, v)
    await db.flush()
    await recompute_progression_state(db, set_.exercise_id)
    await db.refresh(set_)
    return set_


@router.delete("/{workout_id}/sets/{set_id}", status_code=204)
async def delete_set(
    workout_id: uuid.UUID,
    set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a set from a workout."""
    result = await db.execute(
        select(WorkoutSet).where(WorkoutSet.id == set_id, WorkoutSet.workout_id == workout_id)
    )
    set_ = result.scalar_one_or_none()
    if not set_:
        raise HTTPException(status_code=404, detail="Set not found")
    exercise_id = set_.exercise_id
    await db.delete(set_)
    await recompute_progression_state(db, exercise_id)
    return None
