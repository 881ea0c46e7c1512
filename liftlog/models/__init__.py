"""ORM models - import all so Base.metadata is complete for migrations."""

from liftlog.models.app_setting import AppSetting
from liftlog.models.exercise import Exercise
from liftlog.models.progression_state import ProgressionStateRecord
from liftlog.models.workout import Workout, WorkoutSet

__all__ = [
    "AppSetting",
    "Exercise",
    "ProgressionStateRecord",
    "Workout",
    "WorkoutSet",
]
