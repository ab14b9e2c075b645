"""
Aggregator - scalar summaries and categorical distributions over a workout
collection.
"""
from typing import Callable, Dict, Hashable, Iterable, List, Sequence, TypeVar

from fitness_tracking.services.analytics.adapter import WorkoutSnapshot

K = TypeVar("K", bound=Hashable)


def mean_or_zero(values: Iterable[float]) -> float:
    """Arithmetic mean, or 0.0 when there are no values."""
    total = 0.0
    count = 0
    for value in values:
        total += value
        count += 1
    if count == 0:
        return 0.0
    return total / count


def partition(
    workouts: Iterable[WorkoutSnapshot],
    key: Callable[[WorkoutSnapshot], K]
) -> Dict[K, List[WorkoutSnapshot]]:
    """
    Build a keyed partition of workouts.

    Keys appear in first-seen order and each partition keeps the input's
    relative order, so later reductions are deterministic.
    """
    groups: Dict[K, List[WorkoutSnapshot]] = {}
    for workout in workouts:
        groups.setdefault(key(workout), []).append(workout)
    return groups


class WorkoutAggregator:
    """
    Computes summary statistics for a snapshot of workouts.

    Usage:
        aggregator = WorkoutAggregator()
        avg = aggregator.average_calories(workouts)
        counts = aggregator.type_distribution(workouts)
    """

    def average_calories(self, workouts: Sequence[WorkoutSnapshot]) -> float:
        """
        Mean calories burned across all workouts.

        Returns 0.0 for an empty collection.

        Raises:
            IncompleteRecord: a workout has no calories value
        """
        return mean_or_zero(w.require("calories_burned") for w in workouts)

    def type_distribution(self, workouts: Sequence[WorkoutSnapshot]) -> Dict[str, int]:
        """
        Count workouts per workout type.

        Only types present in the input appear as keys.
        """
        groups = partition(workouts, lambda w: w.require("workout_type"))
        return {workout_type: len(group) for workout_type, group in groups.items()}
