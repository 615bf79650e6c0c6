from datetime import date, datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from fittrack.core.config import get_settings
from fittrack.core.exceptions import StoreError
from fittrack.services.workout_store import WorkoutStore

API = get_settings().api_v1_prefix


def _workout(day: str, sets: int = 3, reps: int = 10, minutes: int = 30) -> dict:
    return {
        "exercises": [{"name": "Squat", "sets": sets, "reps": [reps] * sets, "rest_time": "60s"}],
        "duration_minutes": minutes,
        "workout_date": day,
    }


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get(f"{API}/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"

    ready = await client.get(f"{API}/health/ready")
    assert ready.status_code == 200
    assert ready.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_owner_header_is_required(client: AsyncClient):
    assert (await client.get(f"{API}/workouts")).status_code == 401
    assert (await client.get(f"{API}/stats", headers={"X-User-Id": "  "})).status_code == 401


@pytest.mark.asyncio
async def test_exercise_library_crud(client: AsyncClient):
    for name, group in [("Squat", "legs"), ("Bench Press", "chest"), ("Lunge", "legs")]:
        resp = await client.post(f"{API}/exercises", json={"name": name, "muscle_group": group})
        assert resp.status_code == 201
        assert resp.json()["difficulty"] == "beginner"

    all_resp = await client.get(f"{API}/exercises")
    assert [e["name"] for e in all_resp.json()] == ["Bench Press", "Lunge", "Squat"]

    legs = await client.get(f"{API}/exercises", params={"muscle_group": "legs"})
    assert [e["name"] for e in legs.json()] == ["Lunge", "Squat"]

    ex_id = legs.json()[0]["id"]
    patched = await client.patch(f"{API}/exercises/{ex_id}", json={"difficulty": "advanced", "instructions": "Step forward"})
    assert patched.status_code == 200
    assert patched.json()["difficulty"] == "advanced"
    assert patched.json()["name"] == "Lunge"

    assert (await client.delete(f"{API}/exercises/{ex_id}")).status_code == 204
    assert (await client.get(f"{API}/exercises/{ex_id}")).status_code == 404


@pytest.mark.asyncio
async def test_exercise_search_and_clearing_instructions(client: AsyncClient):
    for name, group in [("Squat", "legs"), ("Bench Press", "chest"), ("Incline Press", "chest"), ("Leg Curl", "legs")]:
        await client.post(f"{API}/exercises", json={"name": name, "muscle_group": group, "instructions": "Go slow"})

    by_name = await client.get(f"{API}/exercises", params={"q": "PRESS"})
    assert [e["name"] for e in by_name.json()] == ["Bench Press", "Incline Press"]
    # "leg" hits the Leg Curl name and every exercise in the legs group
    by_either = await client.get(f"{API}/exercises", params={"q": "leg"})
    assert [e["name"] for e in by_either.json()] == ["Leg Curl", "Squat"]
    narrowed = await client.get(f"{API}/exercises", params={"q": "curl", "muscle_group": "legs"})
    assert [e["name"] for e in narrowed.json()] == ["Leg Curl"]

    ex_id = by_name.json()[0]["id"]
    cleared = await client.patch(f"{API}/exercises/{ex_id}", json={"instructions": None, "name": None})
    assert cleared.status_code == 200
    assert cleared.json()["instructions"] is None
    assert cleared.json()["name"] == "Bench Press"

    assert (await client.delete(f"{API}/exercises/{ex_id}")).status_code == 204
    remaining = await client.get(f"{API}/exercises", params={"muscle_group": "chest"})
    assert [e["name"] for e in remaining.json()] == ["Incline Press"]


@pytest.mark.asyncio
async def test_exercise_validation(client: AsyncClient):
    resp = await client.post(f"{API}/exercises", json={"name": "", "muscle_group": "legs"})
    assert resp.status_code == 422
    resp = await client.post(f"{API}/exercises", json={"name": "Row", "muscle_group": "back", "difficulty": "elite"})
    assert resp.status_code == 422
    resp = await client.post(f"{API}/exercises", json={"name": "Row", "muscle_group": "elbows"})
    assert resp.status_code == 422
    assert (await client.get(f"{API}/exercises", params={"muscle_group": "elbows"})).status_code == 422


@pytest.mark.asyncio
async def test_workout_lifecycle(client: AsyncClient, owner_headers):
    created = await client.post(f"{API}/workouts", json=_workout("2024-01-01", sets=4, reps=8), headers=owner_headers)
    assert created.status_code == 201
    body = created.json()
    assert body["owner_id"] == "user_alice"
    assert body["total_sets"] == 4
    assert body["total_reps"] == 32
    assert body["exercises"][0]["reps"] == [8, 8, 8, 8]
    workout_id = body["id"]

    fetched = await client.get(f"{API}/workouts/{workout_id}", headers=owner_headers)
    assert fetched.status_code == 200
    assert fetched.json()["workout_date"] == "2024-01-01"

    patched = await client.patch(
        f"{API}/workouts/{workout_id}",
        json={"exercises": [{"name": "Deadlift", "sets": 1, "reps": [5]}], "workout_date": "2024-01-02"},
        headers=owner_headers,
    )
    assert patched.status_code == 200
    assert patched.json()["total_sets"] == 1
    assert patched.json()["total_reps"] == 5
    assert patched.json()["workout_date"] == "2024-01-02"

    assert (await client.delete(f"{API}/workouts/{workout_id}", headers=owner_headers)).status_code == 204
    assert (await client.get(f"{API}/workouts/{workout_id}", headers=owner_headers)).status_code == 404
    assert (await client.delete(f"{API}/workouts/{workout_id}", headers=owner_headers)).status_code == 404


@pytest.mark.asyncio
async def test_workouts_are_private_to_their_owner(client: AsyncClient, owner_headers):
    created = await client.post(f"{API}/workouts", json=_workout("2024-01-01"), headers=owner_headers)
    workout_id = created.json()["id"]
    other = {"X-User-Id": "user_bob"}

    assert (await client.get(f"{API}/workouts", headers=other)).json() == []
    assert (await client.get(f"{API}/workouts/{workout_id}", headers=other)).status_code == 404
    assert (await client.patch(f"{API}/workouts/{workout_id}", json={"duration_minutes": 1}, headers=other)).status_code == 404
    assert (await client.delete(f"{API}/workouts/{workout_id}", headers=other)).status_code == 404


@pytest.mark.asyncio
async def test_workout_validation(client: AsyncClient, owner_headers):
    bad = _workout("2024-01-01")
    bad["duration_minutes"] = -5
    assert (await client.post(f"{API}/workouts", json=bad, headers=owner_headers)).status_code == 422
    no_date = _workout("2024-01-01")
    del no_date["workout_date"]
    assert (await client.post(f"{API}/workouts", json=no_date, headers=owner_headers)).status_code == 422
    negative = _workout("2024-01-01", sets=2)
    negative["exercises"][0]["reps"] = [10, -50]
    assert (await client.post(f"{API}/workouts", json=negative, headers=owner_headers)).status_code == 422
    uneven = _workout("2024-01-01", sets=3)
    uneven["exercises"][0]["reps"] = [10]
    assert (await client.post(f"{API}/workouts", json=uneven, headers=owner_headers)).status_code == 422


@pytest.mark.asyncio
async def test_totals_must_match_exercises(client: AsyncClient, owner_headers):
    mismatched = {**_workout("2024-01-01"), "total_sets": 99, "total_reps": 1}
    assert (await client.post(f"{API}/workouts", json=mismatched, headers=owner_headers)).status_code == 422

    matching = {**_workout("2024-01-01"), "total_sets": 3, "total_reps": 30}
    created = await client.post(f"{API}/workouts", json=matching, headers=owner_headers)
    assert created.status_code == 201
    workout_id = created.json()["id"]

    inflated = await client.patch(f"{API}/workouts/{workout_id}", json={"total_reps": 500}, headers=owner_headers)
    assert inflated.status_code == 422
    both = await client.patch(
        f"{API}/workouts/{workout_id}",
        json={"exercises": [{"name": "Deadlift", "sets": 1, "reps": [5]}], "total_sets": 4},
        headers=owner_headers,
    )
    assert both.status_code == 422

    stats = (await client.get(f"{API}/stats", headers=owner_headers)).json()
    assert (stats["total_sets"], stats["total_reps"]) == (3, 30)


@pytest.mark.asyncio
async def test_recent_and_range(client: AsyncClient, owner_headers):
    for day in range(1, 8):
        await client.post(f"{API}/workouts", json=_workout(f"2024-03-0{day}"), headers=owner_headers)

    recent = await client.get(f"{API}/workouts/recent", headers=owner_headers)
    assert len(recent.json()) == 5
    assert len((await client.get(f"{API}/workouts/recent", params={"limit": 2}, headers=owner_headers)).json()) == 2

    in_range = await client.get(
        f"{API}/workouts/range", params={"start": "2024-03-02", "end": "2024-03-04"}, headers=owner_headers
    )
    assert [w["workout_date"] for w in in_range.json()] == ["2024-03-04", "2024-03-03", "2024-03-02"]

    backwards = await client.get(
        f"{API}/workouts/range", params={"start": "2024-03-04", "end": "2024-03-02"}, headers=owner_headers
    )
    assert backwards.status_code == 400


@pytest.mark.asyncio
async def test_stats_empty(client: AsyncClient, owner_headers):
    resp = await client.get(f"{API}/stats", headers=owner_headers)
    assert resp.status_code == 200
    assert all(v == 0 for v in resp.json().values())

    ach = await client.get(f"{API}/stats/achievements", headers=owner_headers)
    assert ach.json() == {"current_streak": 0, "max_streak": 0, "total_workout_days": 0, "last_workout_date": None}


@pytest.mark.asyncio
async def test_stats_and_achievements(client: AsyncClient, owner_headers):
    today = datetime.now(timezone.utc).date()
    days = [today - timedelta(days=n) for n in (2, 1, 0)]
    for day, (sets, reps, minutes) in zip(days, [(3, 10, 30), (2, 5, 45), (4, 10, 40)]):
        await client.post(f"{API}/workouts", json=_workout(day.isoformat(), sets, reps, minutes), headers=owner_headers)
    # a second workout on the same day counts once toward the streak
    await client.post(f"{API}/workouts", json=_workout(today.isoformat(), 1, 1, 5), headers=owner_headers)
    # another user's history never leaks into these numbers
    await client.post(f"{API}/workouts", json=_workout(today.isoformat(), 9, 9, 99), headers={"X-User-Id": "user_bob"})

    stats = (await client.get(f"{API}/stats", headers=owner_headers)).json()
    assert stats["total_workouts"] == 4
    assert stats["total_sets"] == 10
    assert stats["total_reps"] == 81
    assert stats["total_minutes"] == 120
    assert stats["average_workout_duration"] == 30
    assert stats["average_sets_per_workout"] == 3
    assert stats["average_reps_per_workout"] == 20

    ach = (await client.get(f"{API}/stats/achievements", headers=owner_headers)).json()
    assert ach["current_streak"] == 3
    assert ach["max_streak"] == 3
    assert ach["total_workout_days"] == 3
    assert ach["last_workout_date"] == today.isoformat()


@pytest.mark.asyncio
async def test_stats_unavailable_when_store_fails(client: AsyncClient, owner_headers, monkeypatch):
    async def failing(self, owner_id):
        raise StoreError("list_by_owner")

    monkeypatch.setattr(WorkoutStore, "list_by_owner", failing)
    monkeypatch.setattr(WorkoutStore, "list_workout_dates", failing)

    for path in ("/stats", "/stats/achievements"):
        resp = await client.get(f"{API}{path}", headers=owner_headers)
        assert resp.status_code == 503
        assert resp.json() == {"status": "unavailable", "detail": "Stats unavailable"}

    history = await client.get(f"{API}/workouts", headers=owner_headers)
    assert history.status_code == 503
    assert history.json()["detail"] == "Workout store unavailable"
