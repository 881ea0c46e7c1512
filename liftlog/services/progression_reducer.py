"""Fold exposures into a ProgressionState.

reduce_exposure is pure: replaying the same ordered exposures from the
initial state always yields an identical state, which is what lets the
recompute path rebuild the cache from scratch after any historical edit.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, replace

from liftlog.core.enums import ExposureOutcome
from liftlog.services.exposure_classifier import classify_exposure
from liftlog.services.progression_types import (
    Exposure,
    ExerciseConfig,
    ProgressionPolicy,
    ProgressionState,
    ProgressionSuggestion,
)
from liftlog.services.suggestion_generator import generate_suggestion

# Weights are stored with two decimals; anything closer counts as "the same load"
WEIGHT_TOLERANCE_LB = 0.005


@dataclass(frozen=True)
class ReplayStep:
    """One exposure as the reducer saw it (for history views and debugging)."""

    exposure: Exposure
    rep_ceiling: int
    outcome: ExposureOutcome
    state: ProgressionState
    suggestion: ProgressionSuggestion


def followed_suggestion(state: ProgressionState, exposure: Exposure) -> bool:
    """True when the exposure was lifted at the weight the previous suggestion asked for."""
    if state.last_suggested_weight_lb is None:
        return False
    return math.isclose(exposure.weight_lb, state.last_suggested_weight_lb, abs_tol=WEIGHT_TOLERANCE_LB)


def raised_weight_unprompted(state: ProgressionState, exposure: Exposure) -> bool:
    """True when the exposure is heavier than the last success without a suggestion asking for it."""
    if state.last_successful_weight_lb is None or followed_suggestion(state, exposure):
        return False
    return exposure.weight_lb > state.last_successful_weight_lb + WEIGHT_TOLERANCE_LB


def ceiling_in_effect(state: ProgressionState, exposure: Exposure, exercise: ExerciseConfig) -> int:
    """
    Rep ceiling the exposure is judged against.

    Following a suggestion commits its target ceiling: an accepted weight
    increase or deload resets it to rep_range_max, an accepted expansion
    moves it to the next stage. Going heavier than the last success on
    one's own also resets it to rep_range_max. Otherwise the current
    ceiling holds.
    """
    if followed_suggestion(state, exposure) and state.last_suggested_rep_ceiling is not None:
        return state.last_suggested_rep_ceiling
    if raised_weight_unprompted(state, exposure):
        return exercise.rep_range_max
    return state.current_rep_ceiling


def _step(
    state: ProgressionState,
    exposure: Exposure,
    exercise: ExerciseConfig,
    policy: ProgressionPolicy,
) -> ReplayStep:
    ceiling = ceiling_in_effect(state, exposure, exercise)
    outcome = classify_exposure(exposure, ceiling)
    weight = exposure.weight_lb

    if outcome == ExposureOutcome.SUCCESS:
        updated = replace(
            state,
            current_rep_ceiling=ceiling,
            last_successful_weight_lb=weight,
            consecutive_non_success_exposures=0,
        )
    else:
        updated = replace(
            state,
            current_rep_ceiling=ceiling,
            consecutive_non_success_exposures=state.consecutive_non_success_exposures + 1,
        )
    updated = replace(
        updated,
        last_exposure_weight_lb=weight,
        exposure_count=state.exposure_count + 1,
    )

    suggestion = generate_suggestion(updated, exercise, policy)
    updated = replace(
        updated,
        last_suggested_weight_lb=suggestion.target_weight_lb,
        last_suggested_rep_ceiling=suggestion.target_rep_ceiling,
        last_reason_code=suggestion.reason_code,
    )
    return ReplayStep(exposure, ceiling, outcome, updated, suggestion)


def reduce_exposure(
    state: ProgressionState,
    exposure: Exposure,
    exercise: ExerciseConfig,
    policy: ProgressionPolicy,
) -> ProgressionState:
    return _step(state, exposure, exercise, policy).state


def replay_steps(
    exposures: Iterable[Exposure],
    exercise: ExerciseConfig,
    policy: ProgressionPolicy,
) -> list[ReplayStep]:
    steps: list[ReplayStep] = []
    state = ProgressionState.initial(exercise)
    for exposure in exposures:
        step = _step(state, exposure, exercise, policy)
        steps.append(step)
        state = step.state
    return steps


def replay_exposures(
    exposures: Iterable[Exposure],
    exercise: ExerciseConfig,
    policy: ProgressionPolicy,
) -> ProgressionState:
    """fold(reduce_exposure, InitialState, exposures)."""
    state = ProgressionState.initial(exercise)
    for exposure in exposures:
        state = reduce_exposure(state, exposure, exercise, policy)
    return state
