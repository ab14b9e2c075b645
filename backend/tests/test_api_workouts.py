"""API tests for /api/workouts, including analytics and feature export."""

import pytest


async def _create_user(client, username: str = "runner") -> int:
    response = await client.post(
        "/api/users",
        json={"username": username, "email": f"{username}@example.com", "password": "pw"},
    )
    return response.json()["data"]["id"]


def _workout(user_id: int, **overrides) -> dict:
    payload = {
        "userId": user_id,
        "workoutType": "run",
        "timestamp": "2024-01-02T07:00:00",
        "durationMinutes": 30,
        "caloriesBurned": 300.0,
        "averageHeartRate": 140,
        "maxHeartRate": 180.0,
        "restingHeartRate": 60.0,
        "temperature": 15.0,
        "hoursSlept": 7,
        "stressLevel": 3,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_workout_crud(client) -> None:
    user_id = await _create_user(client)

    created = await client.post("/api/workouts", json=_workout(user_id))
    assert created.status_code == 200
    workout = created.json()
    assert workout["userId"] == user_id
    assert workout["caloriesBurned"] == 300.0

    fetched = await client.get(f"/api/workouts/{workout['id']}")
    assert fetched.json()["workoutType"] == "run"

    updated = await client.put(
        f"/api/workouts/{workout['id']}",
        json={"workoutType": "swim", "durationMinutes": 40, "caloriesBurned": 320.0},
    )
    assert updated.status_code == 200
    assert updated.json()["workoutType"] == "swim"
    assert updated.json()["temperature"] is None

    deleted = await client.delete(f"/api/workouts/{workout['id']}")
    assert deleted.status_code == 200
    assert (await client.get(f"/api/workouts/{workout['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_create_workout_defaults_timestamp_and_checks_user(client) -> None:
    user_id = await _create_user(client)

    created = await client.post("/api/workouts", json={"userId": user_id, "workoutType": "yoga"})
    assert created.json()["timestamp"] is not None

    missing = await client.post("/api/workouts", json={"userId": 999, "workoutType": "yoga"})
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_user_queries(client) -> None:
    user_id = await _create_user(client)
    for payload in (
        _workout(user_id, timestamp="2024-01-02T07:00:00", caloriesBurned=300.0),
        _workout(user_id, timestamp="2024-01-09T07:00:00", caloriesBurned=500.0),
        _workout(user_id, workoutType="swim", timestamp="2024-01-20T07:00:00",
                 caloriesBurned=250.0),
    ):
        await client.post("/api/workouts", json=payload)

    listed = (await client.get(f"/api/workouts/user/{user_id}")).json()
    assert [w["timestamp"] for w in listed] == [
        "2024-01-02T07:00:00", "2024-01-09T07:00:00", "2024-01-20T07:00:00",
    ]

    count = await client.get(f"/api/workouts/user/{user_id}/count")
    assert count.json() == 3

    average = await client.get(f"/api/workouts/user/{user_id}/average-calories")
    assert average.json() == pytest.approx(350.0)

    by_type = (await client.get(f"/api/workouts/user/{user_id}/calories-by-type")).json()
    assert by_type == {"run": pytest.approx(400.0), "swim": pytest.approx(250.0)}

    in_range = await client.get(
        f"/api/workouts/user/{user_id}/range",
        params={"start": "2024-01-05T00:00:00", "end": "2024-01-20T07:00:00"},
    )
    assert len(in_range.json()) == 2

    recent = await client.get(
        f"/api/workouts/user/{user_id}/recent", params={"since": "2024-01-09T00:00:00"}
    )
    assert [w["workoutType"] for w in recent.json()] == ["swim", "run"]

    swims = (await client.get("/api/workouts/type/swim")).json()
    assert len(swims) == 1


@pytest.mark.asyncio
async def test_offset_timestamps_stored_as_utc(client) -> None:
    user_id = await _create_user(client)

    created = await client.post(
        "/api/workouts", json=_workout(user_id, timestamp="2024-01-02T12:00:00+05:00")
    )
    assert created.status_code == 200
    assert created.json()["timestamp"] == "2024-01-02T07:00:00"

    in_range = await client.get(
        f"/api/workouts/user/{user_id}/range",
        params={"start": "2024-01-02T11:00:00+05:00", "end": "2024-01-02T13:00:00+05:00"},
    )
    assert len(in_range.json()) == 1

    recent = await client.get(
        f"/api/workouts/user/{user_id}/recent", params={"since": "2024-01-02T08:00:00+02:00"}
    )
    assert len(recent.json()) == 1

    later = await client.get(
        f"/api/workouts/user/{user_id}/recent", params={"since": "2024-01-02T08:00:00Z"}
    )
    assert later.json() == []


@pytest.mark.asyncio
async def test_average_calories_null_without_workouts(client) -> None:
    user_id = await _create_user(client)

    response = await client.get(f"/api/workouts/user/{user_id}/average-calories")

    assert response.status_code == 200
    assert response.json() is None


@pytest.mark.asyncio
async def test_user_queries_unknown_user(client) -> None:
    assert (await client.get("/api/workouts/user/999")).status_code == 404
    assert (await client.get("/api/workouts/user/999/count")).status_code == 404


@pytest.mark.asyncio
async def test_analytics_endpoint(client) -> None:
    user_id = await _create_user(client)
    await client.post("/api/workouts", json=_workout(user_id))
    await client.post(
        "/api/workouts",
        json=_workout(user_id, timestamp="2024-01-04T07:00:00", durationMinutes=40,
                      caloriesBurned=400.0),
    )

    response = await client.get(f"/api/workouts/analytics/{user_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["totalWorkouts"] == 2
    assert body["averageCaloriesBurned"] == 350.0
    assert body["workoutTypeDistribution"] == {"run": 2}
    trends = body["performanceTrends"]
    assert trends["progressionByType"] == {"run": [10.0, 10.0]}
    assert trends["weeklyAverages"]["2024-W01"]["avgCalories"] == 350.0


@pytest.mark.asyncio
async def test_analytics_empty_history(client) -> None:
    user_id = await _create_user(client)

    body = (await client.get(f"/api/workouts/analytics/{user_id}")).json()

    assert body["totalWorkouts"] == 0
    assert body["averageCaloriesBurned"] == 0.0
    assert body["workoutTypeDistribution"] == {}


@pytest.mark.asyncio
async def test_analytics_zero_duration_is_422(client) -> None:
    user_id = await _create_user(client)
    await client.post(
        "/api/workouts", json=_workout(user_id, durationMinutes=0, caloriesBurned=100.0)
    )

    response = await client.get(f"/api/workouts/analytics/{user_id}")

    assert response.status_code == 422
    assert "intensity" in response.json()["detail"]


@pytest.mark.asyncio
async def test_ml_data(client) -> None:
    user_id = await _create_user(client)
    await client.post("/api/workouts", json=_workout(user_id))

    response = await client.get(f"/api/workouts/ml-data/{user_id}")

    assert response.status_code == 200
    assert response.json() == [[30.0, 140.0, 180.0, 60.0, 15.0, 7.0, 3.0]]


@pytest.mark.asyncio
async def test_ml_data_missing_field_is_422(client) -> None:
    user_id = await _create_user(client)
    await client.post("/api/workouts", json=_workout(user_id))
    await client.post("/api/workouts", json=_workout(user_id, temperature=None))

    response = await client.get(f"/api/workouts/ml-data/{user_id}")

    assert response.status_code == 422
    assert "temperature" in response.json()["detail"]


@pytest.mark.asyncio
async def test_analytics_unknown_user_is_404(client) -> None:
    assert (await client.get("/api/workouts/analytics/999")).status_code == 404
    assert (await client.get("/api/workouts/ml-data/999")).status_code == 404


@pytest.mark.asyncio
async def test_health(client) -> None:
    response = await client.get("/health")

    assert response.json()["status"] == "healthy"
