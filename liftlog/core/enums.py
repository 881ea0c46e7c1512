"""Shared enums for models, engine and API."""

from enum import Enum


class SetLabel(str, Enum):
    """Smart set labeling."""

    WARMUP = "warmup"
    WORKING = "working"
    FAILURE = "failure"
    DROP_SET = "drop_set"


class ExposureOutcome(str, Enum):
    """How one session's sets measured up against the rep ceiling."""

    SUCCESS = "success"  # every set met the ceiling
    PARTIAL = "partial"  # some sets met it
    FAIL = "fail"  # none did


class ProgressionReasonCode(str, Enum):
    """Why the engine suggests what it suggests."""

    START = "start"
    INCREASE_REPS = "increase_reps"
    EXPAND_CEILING = "expand_ceiling"
    INCREASE_WEIGHT = "increase_weight"
    DELOAD = "deload"
