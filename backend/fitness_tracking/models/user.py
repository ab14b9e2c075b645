"""
User database model.
"""
import enum
from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import String, DateTime, Float, Integer, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitness_tracking.core.database import Base

if TYPE_CHECKING:
    from fitness_tracking.models.workout import Workout


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class FitnessLevel(str, enum.Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class User(Base):
    """Registered user with the profile fields used for modeling."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile information
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    gender: Mapped[Gender | None] = mapped_column(SQLEnum(Gender), nullable=True)
    fitness_level: Mapped[FitnessLevel | None] = mapped_column(
        SQLEnum(FitnessLevel),
        nullable=True,
        index=True
    )
    primary_goal: Mapped[str | None] = mapped_column(String(255), nullable=True)
    weekly_workout_target: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow
    )

    workouts: Mapped[List["Workout"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for API response. Password is never included."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "age": self.age,
            "height": self.height,
            "weight": self.weight,
            "gender": self.gender.value if self.gender else None,
            "fitnessLevel": self.fitness_level.value if self.fitness_level else None,
            "primaryGoal": self.primary_goal,
            "weeklyWorkoutTarget": self.weekly_workout_target,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
