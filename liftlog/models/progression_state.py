"""Cached progression state per exercise.

Derived data: always the result of replaying every logged set for the exercise,
rewritten wholesale by the recompute path and never patched in place.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Float, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.core.enums import ProgressionReasonCode
from liftlog.db.base import Base


class ProgressionStateRecord(Base):
    __tablename__ = "progression_state"

    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), primary_key=True
    )
    last_suggested_weight_lb: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_suggested_rep_ceiling: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_reason_code: Mapped[ProgressionReasonCode | None] = mapped_column(
        Enum(ProgressionReasonCode), nullable=True
    )
    last_successful_weight_lb: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_exposure_weight_lb: Mapped[float | None] = mapped_column(Float, nullable=True)
    current_rep_ceiling: Mapped[int] = mapped_column(Integer, nullable=False)
    consecutive_non_success_exposures: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    exposure_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
