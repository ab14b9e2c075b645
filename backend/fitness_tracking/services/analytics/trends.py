"""
Trend Analyzer - time-windowed and per-type trend data.

Computes:
- Weekly averages: calories, duration and heart rate per ISO week bucket
- Progression by type: chronological intensity sequence per workout type
- Intensity trends: global mean intensity and heart-rate spread

Intensity is calories burned per minute. A zero duration makes it undefined
and raises InvalidMetric; callers get no partial trend data in that case.
"""
from datetime import datetime
from typing import Dict, List, Sequence

from fitness_tracking.core.config import WEEK_KEY_MODES
from fitness_tracking.core.errors import InvalidMetric
from fitness_tracking.core.logging import get_logger
from fitness_tracking.services.analytics.adapter import WorkoutSnapshot
from fitness_tracking.services.analytics.aggregator import mean_or_zero, partition
from fitness_tracking.services.analytics.report import (
    IntensityTrends,
    PerformanceTrends,
    WeekKey,
    WeeklyAverage,
)

logger = get_logger(__name__)


def week_key(timestamp: datetime, mode: str = "year_week") -> WeekKey:
    """
    Bucket key for the ISO week a timestamp falls in.

    ``year_week`` returns (ISO year, ISO week). ``week`` returns only the
    week number, so the same week of different years shares a bucket.
    """
    iso_year, iso_week, _ = timestamp.isocalendar()
    if mode == "week":
        return iso_week
    return (iso_year, iso_week)


def intensity(workout: WorkoutSnapshot) -> float:
    """
    Calories burned per minute for one workout.

    Raises:
        IncompleteRecord: calories or duration unset
        InvalidMetric: duration is zero
    """
    calories = workout.require("calories_burned")
    duration = workout.require("duration_minutes")
    if duration == 0:
        raise InvalidMetric(workout.workout_id, "intensity", "duration is zero")
    return calories / duration


def heart_rate_spread(workout: WorkoutSnapshot) -> float:
    """Difference between max and resting heart rate."""
    return workout.require("max_heart_rate") - workout.require("resting_heart_rate")


class TrendAnalyzer:
    """
    Builds performance trends from a snapshot of workouts.

    Usage:
        analyzer = TrendAnalyzer(week_key_mode="year_week")
        trends = analyzer.analyze(workouts)
    """

    def __init__(self, week_key_mode: str = "year_week"):
        if week_key_mode not in WEEK_KEY_MODES:
            raise ValueError(f"Unknown week key mode: {week_key_mode}")
        self.week_key_mode = week_key_mode

    def analyze(self, workouts: Sequence[WorkoutSnapshot]) -> PerformanceTrends:
        """Compute all trend sections over the same snapshot."""
        trends = PerformanceTrends(
            weekly_averages=self.weekly_averages(workouts),
            progression_by_type=self.progression_by_type(workouts),
            intensity_trends=self.intensity_trends(workouts),
        )

        logger.debug(
            "Computed performance trends",
            workout_count=len(workouts),
            week_count=len(trends.weekly_averages),
            type_count=len(trends.progression_by_type),
        )

        return trends

    def group_by_week(
        self,
        workouts: Sequence[WorkoutSnapshot]
    ) -> Dict[WeekKey, List[WorkoutSnapshot]]:
        """Partition workouts by week key."""
        return partition(
            workouts,
            lambda w: week_key(w.require("timestamp"), self.week_key_mode)
        )

    def weekly_averages(
        self,
        workouts: Sequence[WorkoutSnapshot]
    ) -> Dict[WeekKey, WeeklyAverage]:
        """
        Mean calories, duration and average heart rate per week bucket.

        Each mean is 0.0 for an empty bucket.
        """
        averages: Dict[WeekKey, WeeklyAverage] = {}
        for key, week_workouts in self.group_by_week(workouts).items():
            averages[key] = WeeklyAverage(
                avg_calories=mean_or_zero(
                    w.require("calories_burned") for w in week_workouts
                ),
                avg_duration=mean_or_zero(
                    w.require("duration_minutes") for w in week_workouts
                ),
                avg_heart_rate=mean_or_zero(
                    w.require("average_heart_rate") for w in week_workouts
                ),
            )
        return averages

    def progression_by_type(
        self,
        workouts: Sequence[WorkoutSnapshot]
    ) -> Dict[str, List[float]]:
        """
        Chronological intensity sequence for each workout type.

        Workouts sharing a timestamp keep their input order.
        """
        progression: Dict[str, List[float]] = {}
        by_type = partition(workouts, lambda w: w.require("workout_type"))

        for workout_type, type_workouts in by_type.items():
            ordered = sorted(type_workouts, key=lambda w: w.require("timestamp"))
            progression[workout_type] = [intensity(w) for w in ordered]

        return progression

    def intensity_trends(self, workouts: Sequence[WorkoutSnapshot]) -> IntensityTrends:
        """Mean intensity and mean heart-rate spread; both 0.0 when empty."""
        return IntensityTrends(
            average_intensity=mean_or_zero(intensity(w) for w in workouts),
            average_heart_rate_variability=mean_or_zero(
                heart_rate_spread(w) for w in workouts
            ),
        )
