"""Next-session suggestion from the current progression state (triple progression).

Priority order:
1. no exposures yet                  -> start
2. plateau (too many non-successes)  -> deload ~10% off the working weight
3. last exposure not a success       -> increase_reps at the same weight and ceiling
4. success, below the terminal ceiling:
     jump small enough               -> increase_weight, ceiling back to rep_range_max
     jump too large                  -> expand_ceiling (rep_range_max -> 15 -> 20)
5. success at the terminal ceiling   -> increase_weight
"""

from __future__ import annotations

import math

from liftlog.core.constants import CEILING_STAGES, TERMINAL_REP_CEILING
from liftlog.core.enums import ProgressionReasonCode
from liftlog.services.progression_types import (
    ExerciseConfig,
    ProgressionPolicy,
    ProgressionState,
    ProgressionSuggestion,
)


def round_to_nearest(value: float, step: float) -> float:
    """Round half up to a multiple of step (90.5 -> 91 with step 1)."""
    return math.floor(value / step + 0.5) * step


def next_ceiling_stage(ceiling: int) -> int:
    """The next rep ceiling after ceiling; the terminal ceiling maps to itself."""
    for stage in CEILING_STAGES:
        if stage > ceiling:
            return stage
    return ceiling


def is_jump_too_large(weight_lb: float, policy: ProgressionPolicy) -> bool:
    return policy.weight_jump_lb > policy.jump_ratio_threshold * weight_lb


def deload_weight(weight_lb: float, policy: ProgressionPolicy) -> float:
    step = policy.deload_rounding_lb
    return max(step, round_to_nearest(weight_lb * policy.deload_fraction, step))


def generate_suggestion(
    state: ProgressionState,
    exercise: ExerciseConfig,
    policy: ProgressionPolicy,
) -> ProgressionSuggestion:
    base_ceiling = exercise.rep_range_max
    if not state.has_exposures:
        return ProgressionSuggestion(ProgressionReasonCode.START, None, base_ceiling)

    # Never succeeded yet: the last logged weight is the working weight
    working_weight = state.last_successful_weight_lb
    if working_weight is None:
        working_weight = state.last_exposure_weight_lb

    if state.consecutive_non_success_exposures >= policy.plateau_threshold:
        return ProgressionSuggestion(
            ProgressionReasonCode.DELOAD,
            deload_weight(working_weight, policy),
            base_ceiling,
        )

    ceiling = state.current_rep_ceiling
    if not state.last_exposure_succeeded:
        return ProgressionSuggestion(ProgressionReasonCode.INCREASE_REPS, working_weight, ceiling)

    if ceiling < TERMINAL_REP_CEILING and is_jump_too_large(working_weight, policy):
        return ProgressionSuggestion(
            ProgressionReasonCode.EXPAND_CEILING,
            working_weight,
            next_ceiling_stage(ceiling),
        )
    return ProgressionSuggestion(
        ProgressionReasonCode.INCREASE_WEIGHT,
        working_weight + policy.weight_jump_lb,
        base_ceiling,
    )


def _fmt_lb(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:g} lb"


def describe_suggestion(
    suggestion: ProgressionSuggestion,
    policy: ProgressionPolicy,
    state: ProgressionState | None = None,
) -> str:
    """Human-readable message for the UI."""
    code = suggestion.reason_code
    if code == ProgressionReasonCode.START:
        return f"First time? Start with a weight you can do for {suggestion.target_rep_ceiling} reps."
    if code == ProgressionReasonCode.INCREASE_REPS:
        return (
            f"Keep pushing! Hit {suggestion.target_rep_ceiling} reps on every set "
            f"at {_fmt_lb(suggestion.target_weight_lb)} to progress."
        )
    if code == ProgressionReasonCode.EXPAND_CEILING:
        return (
            f"Adding {policy.weight_jump_lb:g} lb is a big jump at this load. "
            f"Build to {suggestion.target_rep_ceiling} reps before adding weight."
        )
    if code == ProgressionReasonCode.INCREASE_WEIGHT:
        if state is not None and state.current_rep_ceiling >= TERMINAL_REP_CEILING:
            return (
                f"Excellent endurance! Add {policy.weight_jump_lb:g} lb and reset to "
                f"{suggestion.target_rep_ceiling} reps."
            )
        return f"Great work! Add {policy.weight_jump_lb:g} lb: {_fmt_lb(suggestion.target_weight_lb)}."
    stalls = state.consecutive_non_success_exposures if state is not None else policy.plateau_threshold
    return (
        f"Plateau detected ({stalls} sessions without a full success). "
        f"Drop to {_fmt_lb(suggestion.target_weight_lb)} to rebuild momentum."
    )
