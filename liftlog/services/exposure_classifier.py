"""All-or-nothing classification of an exposure against the rep ceiling."""

from liftlog.core.enums import ExposureOutcome
from liftlog.services.progression_types import Exposure


def classify_exposure(exposure: Exposure, rep_ceiling: int) -> ExposureOutcome:
    """
    SUCCESS iff every set reaches rep_ceiling, FAIL iff none does, PARTIAL otherwise.
    A single short set is enough to block progression.
    """
    hits = sum(1 for s in exposure.sets if s.reps >= rep_ceiling)
    if hits == len(exposure.sets):
        return ExposureOutcome.SUCCESS
    if hits == 0:
        return ExposureOutcome.FAIL
    return ExposureOutcome.PARTIAL
