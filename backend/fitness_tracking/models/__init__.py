from fitness_tracking.models.user import User, Gender, FitnessLevel
from fitness_tracking.models.workout import Workout

__all__ = [
    "User",
    "Gender",
    "FitnessLevel",
    "Workout",
]
