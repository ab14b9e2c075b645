"""
Users API endpoints.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracking.core.database import get_db
from fitness_tracking.core.logging import get_logger
from fitness_tracking.models.user import FitnessLevel, Gender, User
from fitness_tracking.services.validation import UserValidator, is_valid_email

logger = get_logger(__name__)
router = APIRouter()
validator = UserValidator()


# ========================================
# Request/Response Schemas
# ========================================

class CreateUserRequest(BaseModel):
    """Request to register a new user."""
    username: str | None = Field(None, description="Display name")
    email: str | None = Field(None, description="Unique email address")
    password: str = Field(..., min_length=1, description="Account password")
    age: int | None = None
    height: float | None = None
    weight: float | None = None
    gender: Gender | None = None
    fitnessLevel: FitnessLevel | None = None
    primaryGoal: str | None = None
    weeklyWorkoutTarget: int | None = None


class UpdateUserRequest(BaseModel):
    """Request to update a user. Unset fields are left unchanged."""
    username: str | None = None
    email: str | None = None
    age: int | None = None
    height: float | None = None
    weight: float | None = None
    gender: Gender | None = None
    fitnessLevel: FitnessLevel | None = None
    primaryGoal: str | None = None
    weeklyWorkoutTarget: int | None = None


class ApiResponse(BaseModel):
    """Envelope for user endpoints."""
    success: bool
    message: str
    data: Optional[Any] = None


# Request field -> model attribute
_PROFILE_FIELDS = {
    "username": "username",
    "email": "email",
    "age": "age",
    "height": "height",
    "weight": "weight",
    "gender": "gender",
    "fitnessLevel": "fitness_level",
    "primaryGoal": "primary_goal",
    "weeklyWorkoutTarget": "weekly_workout_target",
}


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return user


async def _ensure_unique(
    db: AsyncSession,
    email: str | None,
    username: str | None,
    exclude_user_id: int | None = None,
) -> None:
    """Reject an email or username that belongs to another user."""
    checks = (
        (User.email, email, "Email is already in use"),
        (User.username, username, "Username is already taken"),
    )
    for column, value, message in checks:
        if value is None:
            continue
        query = select(User.id).where(column == value)
        if exclude_user_id is not None:
            query = query.where(User.id != exclude_user_id)
        existing = await db.execute(query)
        if existing.first() is not None:
            raise HTTPException(status_code=400, detail=message)


# ========================================
# API Endpoints
# ========================================

@router.post("", response_model=ApiResponse)
async def create_user(
    request: CreateUserRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user.
    """
    validation = validator.validate_new_user(request.username, request.email, request.age)
    if not validation.is_valid:
        logger.info("User validation failed", errors=validation.errors)
        raise HTTPException(status_code=400, detail=validation.message)

    await _ensure_unique(db, email=request.email, username=request.username)

    user = User(password=request.password)
    for request_field, attribute in _PROFILE_FIELDS.items():
        setattr(user, attribute, getattr(request, request_field))

    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("User created", user_id=user.id)

    return ApiResponse(success=True, message="User created successfully", data=user.to_dict())


@router.get("/email/{email}", response_model=ApiResponse)
async def get_user_by_email(
    email: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Get a user by email address.
    """
    if not is_valid_email(email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return ApiResponse(success=True, message="User found", data=user.to_dict())


@router.get("/fitness-level/{level}", response_model=ApiResponse)
async def get_users_by_fitness_level(
    level: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Get all users at a fitness level (case-insensitive).
    """
    try:
        fitness_level = FitnessLevel(level.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid fitness level")

    result = await db.execute(
        select(User).where(User.fitness_level == fitness_level).order_by(User.id)
    )
    users = result.scalars().all()

    return ApiResponse(
        success=True,
        message="Users found",
        data=[user.to_dict() for user in users],
    )


@router.get("/{user_id}", response_model=ApiResponse)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Get a specific user by ID.
    """
    user = await _get_user_or_404(db, user_id)
    return ApiResponse(success=True, message="User found", data=user.to_dict())


@router.put("/{user_id}", response_model=ApiResponse)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a user's profile. Only fields present in the request change.
    """
    user = await _get_user_or_404(db, user_id)

    validation = validator.validate_update_user(request.email, request.age)
    if not validation.is_valid:
        raise HTTPException(status_code=400, detail=validation.message)

    await _ensure_unique(
        db,
        email=request.email,
        username=request.username,
        exclude_user_id=user_id,
    )

    for request_field, attribute in _PROFILE_FIELDS.items():
        value = getattr(request, request_field)
        if value is not None:
            setattr(user, attribute, value)

    await db.flush()
    await db.refresh(user)

    logger.info("User updated", user_id=user_id)

    return ApiResponse(success=True, message="User updated successfully", data=user.to_dict())


@router.delete("/{user_id}", response_model=ApiResponse)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a user and all of their workouts.
    """
    user = await _get_user_or_404(db, user_id)
    await db.delete(user)

    logger.info("User deleted", user_id=user_id)

    return ApiResponse(success=True, message="User deleted successfully")


@router.patch("/{user_id}/fitness-level", response_model=ApiResponse)
async def update_fitness_level(
    user_id: int,
    fitnessLevel: FitnessLevel,
    db: AsyncSession = Depends(get_db),
):
    """
    Change only the user's fitness level.
    """
    user = await _get_user_or_404(db, user_id)
    user.fitness_level = fitnessLevel

    await db.flush()
    await db.refresh(user)

    logger.info("Fitness level updated", user_id=user_id, fitness_level=fitnessLevel.value)

    return ApiResponse(
        success=True,
        message="Fitness level updated successfully",
        data=user.to_dict(),
    )
