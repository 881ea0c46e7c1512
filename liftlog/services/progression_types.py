"""Value types shared by the progression engine stages.

Plain frozen dataclasses so every stage stays a pure function of its inputs;
ORM rows are converted at the storage boundary (see progression_store).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from liftlog.core.config import Settings
from liftlog.core.constants import DEFAULT_REP_RANGE_MAX, DEFAULT_REP_RANGE_MIN
from liftlog.core.enums import ProgressionReasonCode, SetLabel


@dataclass(frozen=True)
class LoggedSet:
    """One logged set plus the start time of the workout that owns it."""

    id: uuid.UUID
    workout_id: uuid.UUID
    exercise_id: uuid.UUID
    workout_started_at: datetime
    set_index: int
    weight_lb: float
    reps: int
    rpe: float | None = None
    set_label: SetLabel | None = None
    created_at: datetime | None = None

    @property
    def is_warmup(self) -> bool:
        return self.set_label == SetLabel.WARMUP


@dataclass(frozen=True)
class Exposure:
    """All working sets for one exercise within one workout."""

    exercise_id: uuid.UUID
    workout_id: uuid.UUID
    timestamp: datetime
    sets: tuple[LoggedSet, ...]

    @property
    def weight_lb(self) -> float:
        """Top-set weight: the heaviest load logged in this exposure."""
        return max(s.weight_lb for s in self.sets)

    @property
    def reps(self) -> list[int]:
        return [s.reps for s in self.sets]


@dataclass(frozen=True)
class ExerciseConfig:
    """The slice of an exercise the engine reads."""

    id: uuid.UUID
    rep_range_min: int = DEFAULT_REP_RANGE_MIN
    rep_range_max: int = DEFAULT_REP_RANGE_MAX


@dataclass(frozen=True)
class ProgressionPolicy:
    """Numeric knobs of the triple-progression policy."""

    weight_jump_lb: float = 5.0
    jump_ratio_threshold: float = 0.10
    plateau_threshold: int = 4
    deload_fraction: float = 0.9
    deload_rounding_lb: float = 1.0

    @classmethod
    def from_settings(cls, settings: Settings, weight_jump_lb: float | None = None) -> "ProgressionPolicy":
        return cls(
            weight_jump_lb=(
                weight_jump_lb if weight_jump_lb is not None else settings.progression_default_weight_jump_lb
            ),
            jump_ratio_threshold=settings.progression_jump_ratio_threshold,
            plateau_threshold=settings.progression_plateau_threshold,
            deload_fraction=settings.progression_deload_fraction,
            deload_rounding_lb=settings.progression_deload_rounding_lb,
        )


@dataclass(frozen=True)
class ProgressionState:
    """Per-exercise summary produced by folding every exposure in order.

    last_suggested_* and last_reason_code cache the suggestion made after the
    latest exposure, so the next exposure can tell whether it was followed.
    """

    current_rep_ceiling: int
    last_suggested_weight_lb: float | None = None
    last_suggested_rep_ceiling: int | None = None
    last_reason_code: ProgressionReasonCode | None = None
    last_successful_weight_lb: float | None = None
    last_exposure_weight_lb: float | None = None
    consecutive_non_success_exposures: int = 0
    exposure_count: int = 0

    @classmethod
    def initial(cls, exercise: ExerciseConfig) -> "ProgressionState":
        return cls(current_rep_ceiling=exercise.rep_range_max)

    @property
    def has_exposures(self) -> bool:
        return self.exposure_count > 0

    @property
    def last_exposure_succeeded(self) -> bool:
        return self.has_exposures and self.consecutive_non_success_exposures == 0


@dataclass(frozen=True)
class ProgressionSuggestion:
    """What to do next session. Computed on read, never stored on its own."""

    reason_code: ProgressionReasonCode
    target_weight_lb: float | None
    target_rep_ceiling: int
