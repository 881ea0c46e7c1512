"""Initial schema: exercises, workouts, workout_sets, app_settings.

Revision ID: 001
Revises:
Create Date: 2026-10-05

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

set_label = sa.Enum("WARMUP", "WORKING", "FAILURE", "DROP_SET", name="setlabel")


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.Column("unit", sa.String(length=20), nullable=True),
        sa.Column("rep_range_min", sa.Integer(), nullable=False, server_default="8"),
        sa.Column("rep_range_max", sa.Integer(), nullable=False, server_default="12"),
        sa.Column("rest_seconds_preset", sa.Integer(), nullable=True),
        sa.CheckConstraint(
            "rep_range_min >= 1 AND rep_range_min <= rep_range_max",
            name=op.f("ck_exercises_rep_range_valid"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_exercises")),
    )
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=False)

    op.create_table(
        "workouts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_workouts")),
    )
    op.create_index("ix_workouts_started_at", "workouts", ["started_at"], unique=False)

    op.create_table(
        "workout_sets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("workout_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("set_order", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("rpe", sa.Float(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("set_label", set_label, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ["exercise_id"], ["exercises.id"], ondelete="CASCADE",
            name=op.f("fk_workout_sets_exercise_id_exercises"),
        ),
        sa.ForeignKeyConstraint(
            ["workout_id"], ["workouts.id"], ondelete="CASCADE",
            name=op.f("fk_workout_sets_workout_id_workouts"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_workout_sets")),
    )
    op.create_index("ix_workout_sets_workout_id", "workout_sets", ["workout_id"], unique=False)
    op.create_index("ix_workout_sets_exercise_id", "workout_sets", ["exercise_id"], unique=False)
    op.create_index(
        "ix_workout_sets_exercise_workout", "workout_sets", ["exercise_id", "workout_id"], unique=False
    )

    op.create_table(
        "app_settings",
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.String(length=500), nullable=False),
        sa.PrimaryKeyConstraint("key", name=op.f("pk_app_settings")),
    )


def downgrade() -> None:
    op.drop_table("app_settings")
    op.drop_table("workout_sets")
    op.drop_table("workouts")
    op.drop_table("exercises")
    set_label.drop(op.get_bind(), checkfirst=True)
