"""
Workout database model.
"""
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, DateTime, Float, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitness_tracking.core.database import Base

if TYPE_CHECKING:
    from fitness_tracking.models.user import User


class Workout(Base):
    """One logged exercise session."""

    __tablename__ = "workouts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    timestamp: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    workout_type: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    calories_burned: Mapped[float | None] = mapped_column(Float, nullable=True)
    average_heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Additional metrics used for modeling
    max_heart_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    resting_heart_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    recovery_time: Mapped[float | None] = mapped_column(Float, nullable=True)
    weather_conditions: Mapped[str | None] = mapped_column(String(100), nullable=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    hours_slept: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stress_level: Mapped[int | None] = mapped_column(Integer, nullable=True)

    user: Mapped[Optional["User"]] = relationship(back_populates="workouts")

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "workoutType": self.workout_type,
            "durationMinutes": self.duration_minutes,
            "caloriesBurned": self.calories_burned,
            "averageHeartRate": self.average_heart_rate,
            "maxHeartRate": self.max_heart_rate,
            "restingHeartRate": self.resting_heart_rate,
            "recoveryTime": self.recovery_time,
            "weatherConditions": self.weather_conditions,
            "temperature": self.temperature,
            "hoursSlept": self.hours_slept,
            "stressLevel": self.stress_level,
        }
