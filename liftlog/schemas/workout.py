"""Workout and WorkoutSet schemas.

Numeric validation lives here: the progression engine assumes weight > 0,
reps > 0 and rpe in [1, 10] and never re-checks.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from liftlog.core.enums import SetLabel


class WorkoutSetBase(BaseModel):
    exercise_id: UUID
    set_order: int = Field(default=0, ge=0)
    weight: float = Field(..., gt=0, allow_inf_nan=False)
    reps: int = Field(..., ge=1)
    rpe: float | None = Field(default=None, ge=1, le=10, allow_inf_nan=False)
    notes: str | None = Field(default=None, max_length=500)
    set_label: SetLabel | None = None


class WorkoutSetCreate(WorkoutSetBase):
    pass


class WorkoutSetUpdate(BaseModel):
    set_order: int | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    reps: int | None = Field(default=None, ge=1)
    rpe: float | None = Field(default=None, ge=1, le=10, allow_inf_nan=False)
    notes: str | None = Field(default=None, max_length=500)
    set_label: SetLabel | None = None


class WorkoutSetRead(WorkoutSetBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_id: UUID
    created_at: datetime | None = None


class WorkoutBase(BaseModel):
    notes: str | None = None


class WorkoutCreate(WorkoutBase):
    started_at: datetime | None = None


class WorkoutUpdate(BaseModel):
    started_at: datetime | None = None
    ended_at: datetime | None = None
    duration_seconds: int | None = None
    notes: str | None = None

    @field_validator("started_at")
    @classmethod
    def started_at_not_cleared(cls, v: datetime | None) -> datetime | None:
        # Omit the field to keep it; exposures are ordered by it
        if v is None:
            raise ValueError("started_at cannot be null")
        return v


class WorkoutRead(WorkoutBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    started_at: datetime
    ended_at: datetime | None = None
    duration_seconds: int | None = None
    sets: list[WorkoutSetRead] = []
