"""Progression schemas (state, suggestion, exposure history, settings)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.enums import ExposureOutcome, ProgressionReasonCode


class ProgressionStateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    exercise_id: UUID
    current_rep_ceiling: int
    last_suggested_weight_lb: float | None = None
    last_suggested_rep_ceiling: int | None = None
    last_reason_code: ProgressionReasonCode | None = None
    last_successful_weight_lb: float | None = None
    last_exposure_weight_lb: float | None = None
    consecutive_non_success_exposures: int = 0
    exposure_count: int = 0


class ProgressionSuggestionRead(BaseModel):
    exercise_id: UUID
    reason_code: ProgressionReasonCode
    target_weight_lb: float | None = None
    target_rep_ceiling: int
    message: str


class ExposureRead(BaseModel):
    """One session of an exercise as the engine judged it."""

    workout_id: UUID
    timestamp: datetime
    weight_lb: float
    reps: list[int]
    rep_ceiling: int
    outcome: ExposureOutcome
    suggestion: ProgressionSuggestionRead


class RecomputeResult(BaseModel):
    recomputed: int


class ProgressionSettingsRead(BaseModel):
    weight_jump_lb: float


class ProgressionSettingsUpdate(BaseModel):
    weight_jump_lb: float = Field(..., gt=0, le=100, allow_inf_nan=False)
