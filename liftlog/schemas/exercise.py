"""Exercise schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from liftlog.core.constants import DEFAULT_REP_RANGE_MAX, DEFAULT_REP_RANGE_MIN, TERMINAL_REP_CEILING


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    unit: str = Field(default="lb", max_length=20)
    rep_range_min: int = Field(default=DEFAULT_REP_RANGE_MIN, ge=1, le=TERMINAL_REP_CEILING)
    rep_range_max: int = Field(default=DEFAULT_REP_RANGE_MAX, ge=1, le=TERMINAL_REP_CEILING)
    rest_seconds_preset: int | None = None


class ExerciseCreate(ExerciseBase):
    @model_validator(mode="after")
    def check_rep_range(self) -> "ExerciseCreate":
        if self.rep_range_min > self.rep_range_max:
            raise ValueError("rep_range_min must not exceed rep_range_max")
        return self


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    unit: str | None = None
    rep_range_min: int | None = Field(None, ge=1, le=TERMINAL_REP_CEILING)
    rep_range_max: int | None = Field(None, ge=1, le=TERMINAL_REP_CEILING)
    rest_seconds_preset: int | None = None


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
