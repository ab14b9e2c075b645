"""
Workouts API endpoints, including per-user analytics and feature export.
"""
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracking.core.database import get_db
from fitness_tracking.core.errors import IncompleteRecord, InvalidMetric, NotFound
from fitness_tracking.core.logging import get_logger
from fitness_tracking.models.user import User
from fitness_tracking.models.workout import Workout
from fitness_tracking.services.analytics import AnalyticsService, WorkoutStore

logger = get_logger(__name__)
router = APIRouter()


def _to_naive_utc(value: datetime | None) -> datetime | None:
    """Timestamps are stored as naive UTC; convert offset-aware input."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# ========================================
# Request/Response Schemas
# ========================================

class WorkoutFields(BaseModel):
    """Workout attributes shared by create and update."""
    timestamp: datetime | None = None
    workoutType: str | None = None
    durationMinutes: int | None = Field(None, ge=0)
    caloriesBurned: float | None = None
    averageHeartRate: int | None = None
    maxHeartRate: float | None = None
    restingHeartRate: float | None = None
    recoveryTime: float | None = None
    weatherConditions: str | None = None
    temperature: float | None = None
    hoursSlept: int | None = None
    stressLevel: int | None = None

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, value: datetime | None) -> datetime | None:
        return _to_naive_utc(value)


class CreateWorkoutRequest(WorkoutFields):
    """Request to log a workout."""
    userId: int | None = Field(None, description="Owning user ID")


class UpdateWorkoutRequest(WorkoutFields):
    """Request to replace a workout's fields."""
    pass


class WorkoutResponse(BaseModel):
    """Workout response."""
    id: int
    userId: int | None
    timestamp: str | None
    workoutType: str | None
    durationMinutes: int | None
    caloriesBurned: float | None
    averageHeartRate: int | None
    maxHeartRate: float | None
    restingHeartRate: float | None
    recoveryTime: float | None
    weatherConditions: str | None
    temperature: float | None
    hoursSlept: int | None
    stressLevel: int | None


# Request field -> model attribute
_WORKOUT_FIELDS = {
    "timestamp": "timestamp",
    "workoutType": "workout_type",
    "durationMinutes": "duration_minutes",
    "caloriesBurned": "calories_burned",
    "averageHeartRate": "average_heart_rate",
    "maxHeartRate": "max_heart_rate",
    "restingHeartRate": "resting_heart_rate",
    "recoveryTime": "recovery_time",
    "weatherConditions": "weather_conditions",
    "temperature": "temperature",
    "hoursSlept": "hours_slept",
    "stressLevel": "stress_level",
}


def _to_response(workout: Workout) -> WorkoutResponse:
    return WorkoutResponse(**workout.to_dict())


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return user


async def _get_workout_or_404(db: AsyncSession, workout_id: int) -> Workout:
    result = await db.execute(select(Workout).where(Workout.id == workout_id))
    workout = result.scalar_one_or_none()

    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")

    return workout


# ========================================
# CRUD Endpoints
# ========================================

@router.post("", response_model=WorkoutResponse)
async def create_workout(
    request: CreateWorkoutRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Log a workout. Timestamp defaults to now (UTC).
    """
    if request.userId is not None:
        await _get_user_or_404(db, request.userId)

    workout = Workout(user_id=request.userId)
    for request_field, attribute in _WORKOUT_FIELDS.items():
        setattr(workout, attribute, getattr(request, request_field))
    if workout.timestamp is None:
        workout.timestamp = _to_naive_utc(datetime.now(timezone.utc))

    db.add(workout)
    await db.flush()
    await db.refresh(workout)

    logger.info("Workout created", workout_id=workout.id, user_id=workout.user_id)

    return _to_response(workout)


@router.get("/type/{workout_type}", response_model=list[WorkoutResponse])
async def list_workouts_by_type(
    workout_type: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Get all workouts of a type, across users.
    """
    result = await db.execute(
        select(Workout).where(Workout.workout_type == workout_type).order_by(Workout.id)
    )
    return [_to_response(w) for w in result.scalars().all()]


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Get a specific workout by ID.
    """
    workout = await _get_workout_or_404(db, workout_id)
    return _to_response(workout)


@router.put("/{workout_id}", response_model=WorkoutResponse)
async def update_workout(
    workout_id: int,
    request: UpdateWorkoutRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Replace a workout's fields. Omitted fields are cleared.
    """
    workout = await _get_workout_or_404(db, workout_id)

    for request_field, attribute in _WORKOUT_FIELDS.items():
        setattr(workout, attribute, getattr(request, request_field))

    await db.flush()
    await db.refresh(workout)

    logger.info("Workout updated", workout_id=workout_id)

    return _to_response(workout)


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a workout.
    """
    workout = await _get_workout_or_404(db, workout_id)
    await db.delete(workout)

    logger.info("Workout deleted", workout_id=workout_id)

    return {"message": "Workout deleted"}


# ========================================
# Per-user Queries
# ========================================

@router.get("/user/{user_id}", response_model=list[WorkoutResponse])
async def list_user_workouts(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Get all workouts for a user, oldest first.
    """
    await _get_user_or_404(db, user_id)
    result = await db.execute(
        select(Workout)
        .where(Workout.user_id == user_id)
        .order_by(Workout.timestamp, Workout.id)
    )
    return [_to_response(w) for w in result.scalars().all()]


@router.get("/user/{user_id}/range", response_model=list[WorkoutResponse])
async def list_user_workouts_in_range(
    user_id: int,
    start: datetime,
    end: datetime,
    db: AsyncSession = Depends(get_db),
):
    """
    Get a user's workouts with start <= timestamp <= end.
    """
    start, end = _to_naive_utc(start), _to_naive_utc(end)
    await _get_user_or_404(db, user_id)
    result = await db.execute(
        select(Workout)
        .where(
            Workout.user_id == user_id,
            Workout.timestamp.between(start, end),
        )
        .order_by(Workout.timestamp, Workout.id)
    )
    return [_to_response(w) for w in result.scalars().all()]


@router.get("/user/{user_id}/recent", response_model=list[WorkoutResponse])
async def list_recent_workouts(
    user_id: int,
    since: datetime,
    db: AsyncSession = Depends(get_db),
):
    """
    Get a user's workouts at or after ``since``, newest first.
    """
    since = _to_naive_utc(since)
    await _get_user_or_404(db, user_id)
    result = await db.execute(
        select(Workout)
        .where(Workout.user_id == user_id, Workout.timestamp >= since)
        .order_by(Workout.timestamp.desc(), Workout.id.desc())
    )
    return [_to_response(w) for w in result.scalars().all()]


@router.get("/user/{user_id}/calories-by-type")
async def get_average_calories_by_type(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> dict[str, float | None]:
    """
    Mean calories burned per workout type for a user.
    """
    await _get_user_or_404(db, user_id)
    result = await db.execute(
        select(Workout.workout_type, func.avg(Workout.calories_burned))
        .where(Workout.user_id == user_id)
        .group_by(Workout.workout_type)
    )
    return {
        workout_type: (float(avg) if avg is not None else None)
        for workout_type, avg in result.all()
    }


@router.get("/user/{user_id}/count")
async def get_workout_count(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> int:
    """
    Number of workouts a user has logged.
    """
    await _get_user_or_404(db, user_id)
    result = await db.execute(
        select(func.count(Workout.id)).where(Workout.user_id == user_id)
    )
    return result.scalar_one()


@router.get("/user/{user_id}/average-calories")
async def get_average_calories(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> float | None:
    """
    Mean calories burned across a user's workouts; null when there are none.
    """
    await _get_user_or_404(db, user_id)
    result = await db.execute(
        select(func.avg(Workout.calories_burned)).where(Workout.user_id == user_id)
    )
    avg = result.scalar_one_or_none()
    return float(avg) if avg is not None else None


# ========================================
# Analytics Endpoints
# ========================================

@router.get("/analytics/{user_id}")
async def get_analytics(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """
    Workout analytics report for a user.
    """
    service = AnalyticsService(WorkoutStore(db))

    try:
        report = await service.generate_analytics(user_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidMetric, IncompleteRecord) as e:
        logger.warning("Analytics failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=422, detail=str(e))

    return report.to_dict()


@router.get("/ml-data/{user_id}")
async def get_ml_data(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[list[float]]:
    """
    Feature vectors for every workout of a user, for modeling pipelines.
    """
    service = AnalyticsService(WorkoutStore(db))

    try:
        vectors = await service.extract_features(user_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IncompleteRecord as e:
        logger.warning("Feature extraction failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=422, detail=str(e))

    return [list(vector) for vector in vectors]
