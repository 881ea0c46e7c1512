"""Builders for engine value objects used across tests."""

import uuid
from datetime import datetime, timedelta, timezone

from liftlog.services.progression_types import Exposure, LoggedSet

BASE_TIME = datetime(2026, 1, 5, 18, 0, tzinfo=timezone.utc)
EXERCISE_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")


def make_sets(
    reps: list[int],
    weight: float = 100.0,
    day: int = 0,
    workout_id: uuid.UUID | None = None,
    exercise_id: uuid.UUID = EXERCISE_ID,
) -> list[LoggedSet]:
    """Sets for one workout, day days after BASE_TIME."""
    workout_id = workout_id or uuid.uuid4()
    started_at = BASE_TIME + timedelta(days=day)
    return [
        LoggedSet(
            id=uuid.uuid4(),
            workout_id=workout_id,
            exercise_id=exercise_id,
            workout_started_at=started_at,
            set_index=i,
            weight_lb=weight,
            reps=r,
        )
        for i, r in enumerate(reps)
    ]


def make_exposure(reps: list[int], weight: float = 100.0, day: int = 0) -> Exposure:
    sets = make_sets(reps, weight=weight, day=day)
    return Exposure(
        exercise_id=EXERCISE_ID,
        workout_id=sets[0].workout_id,
        timestamp=sets[0].workout_started_at,
        sets=tuple(sets),
    )
