"""
Analytics report structures.

Built fresh per request and never persisted; ``to_dict`` gives the
camelCase shape the API returns.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

# (ISO year, ISO week) by default, or the bare ISO week number
WeekKey = Union[Tuple[int, int], int]


def format_week_key(key: WeekKey) -> str:
    """Render a week key as a JSON object key."""
    if isinstance(key, tuple):
        year, week = key
        return f"{year}-W{week:02d}"
    return str(key)


@dataclass(frozen=True)
class WeeklyAverage:
    """Mean metrics for one week bucket."""
    avg_calories: float = 0.0
    avg_duration: float = 0.0
    avg_heart_rate: float = 0.0

    def to_dict(self) -> dict:
        return {
            "avgCalories": self.avg_calories,
            "avgDuration": self.avg_duration,
            "avgHeartRate": self.avg_heart_rate,
        }


@dataclass(frozen=True)
class IntensityTrends:
    average_intensity: float = 0.0
    average_heart_rate_variability: float = 0.0

    def to_dict(self) -> dict:
        return {
            "averageIntensity": self.average_intensity,
            "averageHeartRateVariability": self.average_heart_rate_variability,
        }


@dataclass
class PerformanceTrends:
    """Weekly averages, per-type progression and global intensity metrics."""
    weekly_averages: Dict[WeekKey, WeeklyAverage] = field(default_factory=dict)
    progression_by_type: Dict[str, List[float]] = field(default_factory=dict)
    intensity_trends: IntensityTrends = field(default_factory=IntensityTrends)

    def to_dict(self) -> dict:
        return {
            "weeklyAverages": {
                format_week_key(key): averages.to_dict()
                for key, averages in self.weekly_averages.items()
            },
            "progressionByType": {
                workout_type: list(intensities)
                for workout_type, intensities in self.progression_by_type.items()
            },
            "intensityTrends": self.intensity_trends.to_dict(),
        }


@dataclass
class AnalyticsReport:
    """Full analytics for one user's workout history."""
    total_workouts: int
    average_calories_burned: float
    workout_type_distribution: Dict[str, int]
    performance_trends: PerformanceTrends

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "totalWorkouts": self.total_workouts,
            "averageCaloriesBurned": self.average_calories_burned,
            "workoutTypeDistribution": dict(self.workout_type_distribution),
            "performanceTrends": self.performance_trends.to_dict(),
        }
