"""
Feature Extractor - fixed-order numeric feature vectors for modeling.
"""
from typing import List, Sequence, Tuple

from fitness_tracking.services.analytics.adapter import WorkoutSnapshot

FeatureVector = Tuple[float, ...]

# Vector positions, in order
FEATURE_FIELDS: Tuple[str, ...] = (
    "duration_minutes",
    "average_heart_rate",
    "max_heart_rate",
    "resting_heart_rate",
    "temperature",
    "hours_slept",
    "stress_level",
)


class FeatureExtractor:
    """
    Maps each workout to a feature vector in FEATURE_FIELDS order.

    A missing field aborts the whole batch with IncompleteRecord; no default
    is substituted, so callers never receive misaligned vectors.
    """

    fields: Tuple[str, ...] = FEATURE_FIELDS

    def vector(self, workout: WorkoutSnapshot) -> FeatureVector:
        """Feature vector for a single workout."""
        return tuple(float(workout.require(name)) for name in self.fields)

    def extract(self, workouts: Sequence[WorkoutSnapshot]) -> List[FeatureVector]:
        """Feature vectors in input order."""
        return [self.vector(workout) for workout in workouts]
