"""Group raw logged sets into chronologically ordered exposures."""

from __future__ import annotations

import uuid
from collections import defaultdict
from collections.abc import Iterable

from liftlog.services.progression_types import Exposure, LoggedSet


def working_sets(sets: list[LoggedSet]) -> list[LoggedSet]:
    """Drop warm-up sets, unless the whole session was warm-ups (then keep them all)."""
    working = [s for s in sets if not s.is_warmup]
    return working or sets


def build_exposures(sets: Iterable[LoggedSet]) -> list[Exposure]:
    """
    Turn one exercise's sets (any order) into exposures, one per workout.

    Exposures are ordered by workout start time, ties broken by workout id;
    sets inside an exposure by set_index (then id, for a stable order).
    Workouts without sets never produce an exposure.
    """
    by_workout: dict[uuid.UUID, list[LoggedSet]] = defaultdict(list)
    for s in sets:
        by_workout[s.workout_id].append(s)

    exposures: list[Exposure] = []
    for workout_id, group in by_workout.items():
        group.sort(key=lambda s: (s.set_index, str(s.id)))
        chosen = working_sets(group)
        first = chosen[0]
        exposures.append(
            Exposure(
                exercise_id=first.exercise_id,
                workout_id=workout_id,
                timestamp=first.workout_started_at,
                sets=tuple(chosen),
            )
        )
    exposures.sort(key=lambda e: (e.timestamp, str(e.workout_id)))
    return exposures
