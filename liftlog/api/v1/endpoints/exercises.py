"""Exercise CRUD endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.db.session import get_db
from liftlog.models.exercise import Exercise
from liftlog.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate
from liftlog.services.progression_recompute import recompute_progression_state

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
):
    """List exercises with optional pagination."""
    result = await db.execute(select(Exercise).order_by(Exercise.name).offset(skip).limit(limit))
    return list(result.scalars().all())


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new exercise (rep range defaults to 8-12)."""
    exercise = Exercise(**payload.model_dump())
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a single exercise by id."""
    exercise = await db.get(Exercise, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.patch("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an exercise (partial). A rep range change replays its progression."""
    exercise = await db.get(Exercise, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    data = payload.model_dump(exclude_unset=True)
    rep_min = data.get("rep_range_min", exercise.rep_range_min)
    rep_max = data.get("rep_range_max", exercise.rep_range_max)
    if rep_min is None or rep_max is None or rep_min > rep_max:
        raise HTTPException(status_code=400, detail="rep_range_min must not exceed rep_range_max")
    rep_range_changed = (rep_min, rep_max) != (exercise.rep_range_min, exercise.rep_range_max)
    for k, v in data.items():
        setattr(exercise, k, v)
    await db.flush()
    if rep_range_changed:
        await recompute_progression_state(db, exercise_id)
    await db.refresh(exercise)
    return exercise


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete an exercise with its sets and cached progression state."""
    exercise = await db.get(Exercise, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    await db.delete(exercise)
    await recompute_progression_state(db, exercise_id)
    return None
