"""
Services module - Application business logic layer.

Modules:
- analytics: Workout statistics, trends and feature extraction
- validation: User field validation
"""
from fitness_tracking.services.analytics import AnalyticsService, WorkoutStore
from fitness_tracking.services.validation import UserValidator, ValidationResult

__all__ = [
    "AnalyticsService",
    "WorkoutStore",
    "UserValidator",
    "ValidationResult",
]
