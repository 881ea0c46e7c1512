"""Exercise model - trackable lifts with the rep range the progression engine works within."""

from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liftlog.core.constants import DEFAULT_REP_RANGE_MAX, DEFAULT_REP_RANGE_MIN
from liftlog.db.base import Base


class Exercise(Base):
    """Exercise definition. rep_range_max is the first rep ceiling of every progression cycle."""

    __tablename__ = "exercises"
    __table_args__ = (
        CheckConstraint("rep_range_min >= 1 AND rep_range_min <= rep_range_max", name="rep_range_valid"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    unit: Mapped[str] = mapped_column(String(20), default="lb")
    rep_range_min: Mapped[int] = mapped_column(Integer, default=DEFAULT_REP_RANGE_MIN, nullable=False)
    rep_range_max: Mapped[int] = mapped_column(Integer, default=DEFAULT_REP_RANGE_MAX, nullable=False)
    rest_seconds_preset: Mapped[int | None] = mapped_column(nullable=True)  # Rest timer preset

    workout_sets: Mapped[list["WorkoutSet"]] = relationship(
        "WorkoutSet", back_populates="exercise", cascade="all, delete-orphan"
    )
    progression_state: Mapped["ProgressionStateRecord | None"] = relationship(
        "ProgressionStateRecord", cascade="all, delete-orphan", uselist=False
    )
