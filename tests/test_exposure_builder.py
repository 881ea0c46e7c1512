import uuid
from dataclasses import replace

from liftlog.core.enums import SetLabel
from liftlog.services.exposure_builder import build_exposures
from tests.factories import make_sets


def test_no_sets_means_no_exposures():
    assert build_exposures([]) == []


def test_groups_by_workout_and_orders_by_start_time():
    late = make_sets([10, 10], weight=105, day=7)
    early = make_sets([12, 12], weight=100, day=0)
    middle = make_sets([11, 11], weight=100, day=3)

    exposures = build_exposures([*late, *early, *middle])

    assert [e.workout_id for e in exposures] == [
        early[0].workout_id,
        middle[0].workout_id,
        late[0].workout_id,
    ]
    assert [e.reps for e in exposures] == [[12, 12], [11, 11], [10, 10]]


def test_same_start_time_breaks_ties_by_workout_id():
    a_id = uuid.UUID("00000000-0000-0000-0000-00000000000a")
    b_id = uuid.UUID("00000000-0000-0000-0000-00000000000b")
    b = make_sets([8], day=1, workout_id=b_id)
    a = make_sets([9], day=1, workout_id=a_id)

    assert [e.workout_id for e in build_exposures([*b, *a])] == [a_id, b_id]
    assert [e.workout_id for e in build_exposures([*a, *b])] == [a_id, b_id]


def test_sets_ordered_by_set_index_within_exposure():
    sets = make_sets([12, 11, 10])
    shuffled = [sets[2], sets[0], sets[1]]

    (exposure,) = build_exposures(shuffled)

    assert [s.set_index for s in exposure.sets] == [0, 1, 2]
    assert exposure.reps == [12, 11, 10]


def test_warmup_sets_are_not_working_sets():
    sets = make_sets([5, 12, 12], weight=100)
    sets[0] = replace(sets[0], set_label=SetLabel.WARMUP, weight_lb=45)

    (exposure,) = build_exposures(sets)

    assert exposure.reps == [12, 12]
    assert exposure.weight_lb == 100


def test_all_warmup_session_falls_back_to_every_set():
    sets = [replace(s, set_label=SetLabel.WARMUP) for s in make_sets([10, 10], weight=45)]

    (exposure,) = build_exposures(sets)

    assert len(exposure.sets) == 2


def test_exposure_weight_is_top_set():
    sets = make_sets([12, 12, 12], weight=100)
    sets[1] = replace(sets[1], weight_lb=110)

    (exposure,) = build_exposures(sets)

    assert exposure.weight_lb == 110
