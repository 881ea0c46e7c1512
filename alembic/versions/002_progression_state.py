"""Add progression_state: cached per-exercise result of the progression replay.

Revision ID: 002
Revises: 001
Create Date: 2026-10-12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

reason_code = sa.Enum(
    "START", "INCREASE_REPS", "EXPAND_CEILING", "INCREASE_WEIGHT", "DELOAD",
    name="progressionreasoncode",
)


def upgrade() -> None:
    op.create_table(
        "progression_state",
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("last_suggested_weight_lb", sa.Float(), nullable=True),
        sa.Column("last_suggested_rep_ceiling", sa.Integer(), nullable=True),
        sa.Column("last_reason_code", reason_code, nullable=True),
        sa.Column("last_successful_weight_lb", sa.Float(), nullable=True),
        sa.Column("last_exposure_weight_lb", sa.Float(), nullable=True),
        sa.Column("current_rep_ceiling", sa.Integer(), nullable=False),
        sa.Column("consecutive_non_success_exposures", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("exposure_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["exercise_id"], ["exercises.id"], ondelete="CASCADE",
            name=op.f("fk_progression_state_exercise_id_exercises"),
        ),
        sa.PrimaryKeyConstraint("exercise_id", name=op.f("pk_progression_state")),
    )


def downgrade() -> None:
    op.drop_table("progression_state")
    reason_code.drop(op.get_bind(), checkfirst=True)
