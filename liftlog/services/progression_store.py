"""Storage side of the progression engine: reads sets/exercises/settings, writes the cached state.

Every SQLAlchemy failure surfaces as ProgressionStorageError; the caller's
session is rolled back by get_db, so the previous state row survives intact.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from functools import wraps
from typing import ParamSpec, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.config import get_settings
from liftlog.core.constants import WEIGHT_JUMP_SETTING_KEY
from liftlog.models.app_setting import AppSetting
from liftlog.models.exercise import Exercise
from liftlog.models.progression_state import ProgressionStateRecord
from liftlog.models.workout import Workout, WorkoutSet
from liftlog.services.progression_types import ExerciseConfig, LoggedSet, ProgressionState

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


class ProgressionStorageError(Exception):
    """Reading history or writing progression state failed."""


def _storage_call(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.exception("%s failed", func.__name__)
            raise ProgressionStorageError(f"{func.__name__} failed: {e}") from e

    return wrapper


@_storage_call
async def read_exercise(db: AsyncSession, exercise_id: uuid.UUID) -> ExerciseConfig | None:
    result = await db.execute(
        select(Exercise.id, Exercise.rep_range_min, Exercise.rep_range_max).where(Exercise.id == exercise_id)
    )
    row = result.one_or_none()
    if row is None:
        return None
    return ExerciseConfig(id=row.id, rep_range_min=row.rep_range_min, rep_range_max=row.rep_range_max)


@_storage_call
async def read_sets_for_exercise(db: AsyncSession, exercise_id: uuid.UUID) -> list[LoggedSet]:
    """Every set logged for the exercise, with its workout's start time. Order is not guaranteed."""
    result = await db.execute(
        select(WorkoutSet, Workout.started_at)
        .join(Workout, Workout.id == WorkoutSet.workout_id)
        .where(WorkoutSet.exercise_id == exercise_id)
    )
    return [
        LoggedSet(
            id=s.id,
            workout_id=s.workout_id,
            exercise_id=s.exercise_id,
            workout_started_at=started_at,
            set_index=s.set_order or 0,
            weight_lb=float(s.weight),
            reps=int(s.reps),
            rpe=float(s.rpe) if s.rpe is not None else None,
            set_label=s.set_label,
            created_at=s.created_at,
        )
        for s, started_at in result.all()
    ]


@_storage_call
async def read_weight_jump_setting(db: AsyncSession) -> float:
    result = await db.execute(select(AppSetting.value).where(AppSetting.key == WEIGHT_JUMP_SETTING_KEY))
    value = result.scalar_one_or_none()
    if value is None:
        return get_settings().progression_default_weight_jump_lb
    return float(value)


@_storage_call
async def write_weight_jump_setting(db: AsyncSession, weight_jump_lb: float) -> None:
    setting = await db.get(AppSetting, WEIGHT_JUMP_SETTING_KEY)
    if setting is None:
        db.add(AppSetting(key=WEIGHT_JUMP_SETTING_KEY, value=str(weight_jump_lb)))
    else:
        setting.value = str(weight_jump_lb)
    await db.flush()


def _record_to_state(record: ProgressionStateRecord) -> ProgressionState:
    return ProgressionState(
        current_rep_ceiling=record.current_rep_ceiling,
        last_suggested_weight_lb=record.last_suggested_weight_lb,
        last_suggested_rep_ceiling=record.last_suggested_rep_ceiling,
        last_reason_code=record.last_reason_code,
        last_successful_weight_lb=record.last_successful_weight_lb,
        last_exposure_weight_lb=record.last_exposure_weight_lb,
        consecutive_non_success_exposures=record.consecutive_non_success_exposures,
        exposure_count=record.exposure_count,
    )


@_storage_call
async def read_progression_state(db: AsyncSession, exercise_id: uuid.UUID) -> ProgressionState | None:
    record = await db.get(ProgressionStateRecord, exercise_id, populate_existing=True)
    return _record_to_state(record) if record is not None else None


@_storage_call
async def write_progression_state(db: AsyncSession, exercise_id: uuid.UUID, state: ProgressionState) -> None:
    """Replace the exercise's state row with state (every column rewritten)."""
    record = await db.get(ProgressionStateRecord, exercise_id)
    if record is None:
        record = ProgressionStateRecord(exercise_id=exercise_id)
        db.add(record)
    record.current_rep_ceiling = state.current_rep_ceiling
    record.last_suggested_weight_lb = state.last_suggested_weight_lb
    record.last_suggested_rep_ceiling = state.last_suggested_rep_ceiling
    record.last_reason_code = state.last_reason_code
    record.last_successful_weight_lb = state.last_successful_weight_lb
    record.last_exposure_weight_lb = state.last_exposure_weight_lb
    record.consecutive_non_success_exposures = state.consecutive_non_success_exposures
    record.exposure_count = state.exposure_count
    record.updated_at = datetime.now(timezone.utc)
    await db.flush()


@_storage_call
async def delete_progression_state(db: AsyncSession, exercise_id: uuid.UUID) -> bool:
    result = await db.execute(
        delete(ProgressionStateRecord).where(ProgressionStateRecord.exercise_id == exercise_id)
    )
    return bool(result.rowcount)


@_storage_call
async def list_exercise_ids_with_sets(db: AsyncSession) -> list[uuid.UUID]:
    result = await db.execute(select(WorkoutSet.exercise_id).distinct())
    return sorted(result.scalars().all(), key=str)


@_storage_call
async def list_exercise_ids_for_workout(db: AsyncSession, workout_id: uuid.UUID) -> list[uuid.UUID]:
    result = await db.execute(
        select(WorkoutSet.exercise_id).where(WorkoutSet.workout_id == workout_id).distinct()
    )
    return sorted(result.scalars().all(), key=str)


@_storage_call
async def list_progression_state_exercise_ids(db: AsyncSession) -> list[uuid.UUID]:
    result = await db.execute(select(ProgressionStateRecord.exercise_id))
    return list(result.scalars().all())
