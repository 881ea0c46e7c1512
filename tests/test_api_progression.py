"""End-to-end through the HTTP API: logging sets keeps suggestions current."""

import uuid

import pytest

from liftlog.services import progression_recompute
from liftlog.services.progression_store import ProgressionStorageError

API = "/api/v1"


async def _create_exercise(client, **payload) -> str:
    resp = await client.post(f"{API}/exercises", json={"name": "Bench Press", **payload})
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


async def _log_session(client, exercise_id: str, started_at: str, weight: float, reps: list[int]) -> str:
    resp = await client.post(f"{API}/workouts", json={"started_at": started_at})
    assert resp.status_code == 201, resp.text
    workout_id = resp.json()["id"]
    for i, r in enumerate(reps):
        resp = await client.post(
            f"{API}/workouts/{workout_id}/sets",
            json={"exercise_id": exercise_id, "set_order": i, "weight": weight, "reps": r},
        )
        assert resp.status_code == 201, resp.text
    return workout_id


async def _suggestion(client, exercise_id: str) -> dict:
    resp = await client.get(f"{API}/progression/exercises/{exercise_id}/suggestion")
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_brand_new_exercise_starts(client):
    exercise_id = await _create_exercise(client)

    body = await _suggestion(client, exercise_id)

    assert body["reason_code"] == "start"
    assert body["target_weight_lb"] is None
    assert body["target_rep_ceiling"] == 12


@pytest.mark.asyncio
async def test_unknown_exercise_is_404(client):
    resp = await client.get(f"{API}/progression/exercises/{uuid.uuid4()}/suggestion")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_logging_a_full_success_suggests_more_weight(client):
    exercise_id = await _create_exercise(client)
    await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 100, [12, 12, 12])

    body = await _suggestion(client, exercise_id)

    assert body["reason_code"] == "increase_weight"
    assert body["target_weight_lb"] == 105
    assert body["target_rep_ceiling"] == 12
    assert "105 lb" in body["message"]


@pytest.mark.asyncio
async def test_editing_a_set_updates_the_suggestion(client):
    exercise_id = await _create_exercise(client)
    workout_id = await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 100, [12, 12, 11])
    assert (await _suggestion(client, exercise_id))["reason_code"] == "increase_reps"

    workout = (await client.get(f"{API}/workouts/{workout_id}")).json()
    weak = next(s for s in workout["sets"] if s["reps"] == 11)
    resp = await client.patch(f"{API}/workouts/{workout_id}/sets/{weak['id']}", json={"reps": 12})
    assert resp.status_code == 200

    assert (await _suggestion(client, exercise_id))["reason_code"] == "increase_weight"


@pytest.mark.asyncio
async def test_deleting_a_workout_replays_history(client):
    exercise_id = await _create_exercise(client)
    await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 100, [12, 12])
    bad_day = await _log_session(client, exercise_id, "2026-01-07T18:00:00Z", 105, [9, 8])
    state = (await client.get(f"{API}/progression/exercises/{exercise_id}/state")).json()
    assert state["consecutive_non_success_exposures"] == 1

    resp = await client.delete(f"{API}/workouts/{bad_day}")
    assert resp.status_code == 204

    state = (await client.get(f"{API}/progression/exercises/{exercise_id}/state")).json()
    assert state["consecutive_non_success_exposures"] == 0
    assert state["exposure_count"] == 1
    assert (await _suggestion(client, exercise_id))["target_weight_lb"] == 105


@pytest.mark.asyncio
async def test_deleting_a_set_replays_history(client):
    exercise_id = await _create_exercise(client)
    workout_id = await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 100, [12, 12, 11])
    assert (await _suggestion(client, exercise_id))["reason_code"] == "increase_reps"

    workout = (await client.get(f"{API}/workouts/{workout_id}")).json()
    weak = next(s for s in workout["sets"] if s["reps"] == 11)
    resp = await client.delete(f"{API}/workouts/{workout_id}/sets/{weak['id']}")
    assert resp.status_code == 204

    body = await _suggestion(client, exercise_id)
    assert body["reason_code"] == "increase_weight"
    assert body["target_weight_lb"] == 105


@pytest.mark.asyncio
async def test_changing_the_rep_range_replays_history(client):
    exercise_id = await _create_exercise(client)
    await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 100, [12, 12])
    assert (await _suggestion(client, exercise_id))["reason_code"] == "increase_weight"

    resp = await client.patch(f"{API}/exercises/{exercise_id}", json={"rep_range_max": 15})
    assert resp.status_code == 200, resp.text

    body = await _suggestion(client, exercise_id)
    assert body["reason_code"] == "increase_reps"
    assert body["target_weight_lb"] == 100
    assert body["target_rep_ceiling"] == 15
    state = (await client.get(f"{API}/progression/exercises/{exercise_id}/state")).json()
    assert state["current_rep_ceiling"] == 15
    assert state["consecutive_non_success_exposures"] == 1


@pytest.mark.asyncio
async def test_workout_start_time_cannot_be_cleared(client):
    exercise_id = await _create_exercise(client)
    workout_id = await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 100, [12, 12])

    resp = await client.patch(f"{API}/workouts/{workout_id}", json={"started_at": None})
    assert resp.status_code == 422

    workout = (await client.get(f"{API}/workouts/{workout_id}")).json()
    assert workout["started_at"].startswith("2026-01-05")
    resp = await client.patch(f"{API}/workouts/{workout_id}", json={"notes": "felt strong"})
    assert resp.status_code == 200
    assert (await _suggestion(client, exercise_id))["reason_code"] == "increase_weight"


@pytest.mark.asyncio
async def test_moving_a_workout_reorders_exposures(client):
    exercise_id = await _create_exercise(client)
    await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 100, [12, 12])
    miss = await _log_session(client, exercise_id, "2026-01-07T18:00:00Z", 105, [9, 8])
    assert (await _suggestion(client, exercise_id))["reason_code"] == "increase_reps"

    resp = await client.patch(f"{API}/workouts/{miss}", json={"started_at": "2026-01-01T18:00:00Z"})
    assert resp.status_code == 200

    assert (await _suggestion(client, exercise_id))["reason_code"] == "increase_weight"


@pytest.mark.asyncio
async def test_light_exercise_expands_the_ceiling(client):
    exercise_id = await _create_exercise(client, name="Lateral Raise")
    await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 20, [12, 12, 12])

    body = await _suggestion(client, exercise_id)

    assert body["reason_code"] == "expand_ceiling"
    assert body["target_weight_lb"] == 20
    assert body["target_rep_ceiling"] == 15


@pytest.mark.asyncio
async def test_plateau_suggests_deload(client):
    exercise_id = await _create_exercise(client)
    await _log_session(client, exercise_id, "2026-01-01T18:00:00Z", 100, [12, 12, 12])
    for day in range(3, 11, 2):
        await _log_session(client, exercise_id, f"2026-01-{day:02d}T18:00:00Z", 100, [10, 10, 9])

    body = await _suggestion(client, exercise_id)

    assert body["reason_code"] == "deload"
    assert body["target_weight_lb"] == 90

    exposures = (await client.get(f"{API}/progression/exercises/{exercise_id}/exposures")).json()
    assert [e["outcome"] for e in exposures] == ["success", "fail", "fail", "fail", "fail"]
    assert exposures[-1]["suggestion"]["reason_code"] == "deload"


@pytest.mark.asyncio
async def test_invalid_sets_are_rejected(client):
    exercise_id = await _create_exercise(client)
    workout_id = (await client.post(f"{API}/workouts", json={})).json()["id"]

    for bad in ({"weight": -5, "reps": 10}, {"weight": 100, "reps": 0}, {"weight": 100, "reps": 8, "rpe": 11}):
        resp = await client.post(
            f"{API}/workouts/{workout_id}/sets", json={"exercise_id": exercise_id, **bad}
        )
        assert resp.status_code == 422


@pytest.mark.asyncio
async def test_weight_jump_setting_change_recomputes(client):
    exercise_id = await _create_exercise(client)
    await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 200, [12, 12])

    resp = await client.put(f"{API}/settings/progression", json={"weight_jump_lb": 10})
    assert resp.status_code == 200
    assert (await client.get(f"{API}/settings/progression")).json() == {"weight_jump_lb": 10}

    state = (await client.get(f"{API}/progression/exercises/{exercise_id}/state")).json()
    assert state["last_suggested_weight_lb"] == 210


@pytest.mark.asyncio
async def test_deleting_an_exercise_drops_its_state(client):
    exercise_id = await _create_exercise(client)
    await _log_session(client, exercise_id, "2026-01-05T18:00:00Z", 100, [12, 12])

    assert (await client.delete(f"{API}/exercises/{exercise_id}")).status_code == 204

    assert (await client.get(f"{API}/progression/exercises/{exercise_id}/state")).status_code == 404
    resp = await client.post(f"{API}/progression/recompute")
    assert resp.json() == {"recomputed": 0}


@pytest.mark.asyncio
async def test_storage_failure_rolls_back_the_set(client, monkeypatch):
    exercise_id = await _create_exercise(client)
    workout_id = (await client.post(f"{API}/workouts", json={})).json()["id"]

    async def unavailable(*args, **kwargs):
        raise ProgressionStorageError("read_sets_for_exercise failed: connection reset")

    monkeypatch.setattr(progression_recompute.store, "read_sets_for_exercise", unavailable)
    resp = await client.post(
        f"{API}/workouts/{workout_id}/sets",
        json={"exercise_id": exercise_id, "weight": 100, "reps": 12},
    )
    monkeypatch.undo()

    assert resp.status_code == 503
    workout = (await client.get(f"{API}/workouts/{workout_id}")).json()
    assert workout["sets"] == []
