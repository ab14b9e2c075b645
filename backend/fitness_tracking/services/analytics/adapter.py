"""
Workout snapshot - the read-only representation the analytics core works with.

Persisted workouts mix integral and floating-point metric columns; the
snapshot normalizes every metric to float at the store boundary so all
aggregations round the same way.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from fitness_tracking.core.errors import IncompleteRecord


def _as_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


@dataclass(frozen=True)
class WorkoutSnapshot:
    """
    Immutable view of one workout.

    Metric fields are None when the underlying record leaves them unset.
    """
    workout_id: Optional[int]
    workout_type: Optional[str]
    timestamp: Optional[datetime]
    duration_minutes: Optional[float]
    calories_burned: Optional[float]
    average_heart_rate: Optional[float] = None
    max_heart_rate: Optional[float] = None
    resting_heart_rate: Optional[float] = None
    temperature: Optional[float] = None
    hours_slept: Optional[float] = None
    stress_level: Optional[float] = None

    @classmethod
    def from_model(cls, workout: Any) -> "WorkoutSnapshot":
        """Build a snapshot from an ORM Workout (or anything with the same attributes)."""
        return cls(
            workout_id=workout.id,
            workout_type=workout.workout_type,
            timestamp=workout.timestamp,
            duration_minutes=_as_float(workout.duration_minutes),
            calories_burned=_as_float(workout.calories_burned),
            average_heart_rate=_as_float(workout.average_heart_rate),
            max_heart_rate=_as_float(workout.max_heart_rate),
            resting_heart_rate=_as_float(workout.resting_heart_rate),
            temperature=_as_float(workout.temperature),
            hours_slept=_as_float(workout.hours_slept),
            stress_level=_as_float(workout.stress_level),
        )

    def require(self, field_name: str) -> Any:
        """Return a field value, raising IncompleteRecord if it is unset."""
        value = getattr(self, field_name)
        if value is None:
            raise IncompleteRecord(self.workout_id, field_name)
        return value
