"""
Domain errors raised by the analytics core and the store it reads from.

Routers map these to HTTP status codes; the core itself never catches them.
"""
from typing import Any, Optional


class FitnessTrackingError(Exception):
    """Base class for domain errors."""


class NotFound(FitnessTrackingError):
    """Requested entity does not exist."""

    def __init__(self, entity: str, identifier: Any):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class InvalidMetric(FitnessTrackingError):
    """A derived metric hit an undefined arithmetic case."""

    def __init__(self, workout_id: Optional[int], metric: str, reason: str):
        self.workout_id = workout_id
        self.metric = metric
        self.reason = reason
        super().__init__(f"Cannot compute {metric} for workout {workout_id}: {reason}")


class IncompleteRecord(FitnessTrackingError):
    """A workout is missing a field the computation requires."""

    def __init__(self, workout_id: Optional[int], field: str):
        self.workout_id = workout_id
        self.field = field
        super().__init__(f"Workout {workout_id} is missing required field '{field}'")
