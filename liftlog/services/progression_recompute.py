"""Recompute orchestrator: the only code path that writes progression state.

recompute_progression_state(db, exercise_id) replays the exercise's entire
set history from the initial state and replaces the cached row. It depends
only on what is stored, so calling it twice, or in any order, is harmless.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.config import get_settings
from liftlog.services import progression_store as store
from liftlog.services.exposure_builder import build_exposures
from liftlog.services.progression_reducer import ReplayStep, replay_exposures, replay_steps
from liftlog.services.progression_types import (
    ExerciseConfig,
    ProgressionPolicy,
    ProgressionState,
    ProgressionSuggestion,
)
from liftlog.services.suggestion_generator import generate_suggestion

logger = logging.getLogger(__name__)


async def load_policy(db: AsyncSession) -> ProgressionPolicy:
    weight_jump_lb = await store.read_weight_jump_setting(db)
    return ProgressionPolicy.from_settings(get_settings(), weight_jump_lb=weight_jump_lb)


async def recompute_progression_state(
    db: AsyncSession,
    exercise_id: uuid.UUID,
    policy: ProgressionPolicy | None = None,
) -> ProgressionState | None:
    """
    Rebuild and persist the progression state for one exercise.

    Returns the new state, or None when the exercise no longer exists (any
    cached row is removed). An exercise without exposures ends at the initial
    state and keeps no row.
    """
    await db.flush()
    exercise = await store.read_exercise(db, exercise_id)
    if exercise is None:
        if await store.delete_progression_state(db, exercise_id):
            logger.info("Exercise %s is gone; dropped its progression state", exercise_id)
        return None

    if policy is None:
        policy = await load_policy(db)
    exposures = build_exposures(await store.read_sets_for_exercise(db, exercise_id))
    state = replay_exposures(exposures, exercise, policy)

    if state.has_exposures:
        await store.write_progression_state(db, exercise_id, state)
    else:
        await store.delete_progression_state(db, exercise_id)
    logger.debug(
        "Recomputed exercise %s: %d exposures, ceiling %d, %d non-success",
        exercise_id,
        len(exposures),
        state.current_rep_ceiling,
        state.consecutive_non_success_exposures,
    )
    return state


async def recompute_many(db: AsyncSession, exercise_ids: Iterable[uuid.UUID]) -> int:
    """Recompute several exercises with one policy read. Returns how many were processed."""
    policy = await load_policy(db)
    count = 0
    for exercise_id in dict.fromkeys(exercise_ids):
        await recompute_progression_state(db, exercise_id, policy=policy)
        count += 1
    return count


async def recompute_all_progression_states(db: AsyncSession) -> int:
    """Recompute every exercise that has sets, and clear rows for any that no longer do."""
    await db.flush()
    ids = await store.list_exercise_ids_with_sets(db)
    with_sets = set(ids)
    stale = [i for i in await store.list_progression_state_exercise_ids(db) if i not in with_sets]
    count = await recompute_many(db, [*ids, *stale])
    logger.info("Recomputed progression state for %d exercises", count)
    return count


async def read_progression_state(db: AsyncSession, exercise: ExerciseConfig) -> ProgressionState:
    """Cached state, or the initial state when the exercise has no exposures."""
    state = await store.read_progression_state(db, exercise.id)
    return state if state is not None else ProgressionState.initial(exercise)


async def get_suggestion(db: AsyncSession, exercise_id: uuid.UUID) -> ProgressionSuggestion | None:
    """Next-session suggestion; None only if the exercise does not exist."""
    exercise = await store.read_exercise(db, exercise_id)
    if exercise is None:
        return None
    policy = await load_policy(db)
    state = await read_progression_state(db, exercise)
    return generate_suggestion(state, exercise, policy)


async def exposure_history(db: AsyncSession, exercise_id: uuid.UUID) -> list[ReplayStep] | None:
    """Replay the exercise without persisting, keeping every intermediate step."""
    exercise = await store.read_exercise(db, exercise_id)
    if exercise is None:
        return None
    policy = await load_policy(db)
    exposures = build_exposures(await store.read_sets_for_exercise(db, exercise_id))
    return replay_steps(exposures, exercise, policy)
