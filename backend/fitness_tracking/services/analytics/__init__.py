"""
Analytics module - workout statistics, trends and feature extraction.

This module provides:
- Workout snapshots normalized at the store boundary
- Aggregator for summary statistics and type distributions
- Trend analyzer for weekly averages, per-type progression and intensity
- Feature extractor for modeling pipelines
- Analytics service composing the above over one user's workouts
"""
from fitness_tracking.services.analytics.adapter import WorkoutSnapshot
from fitness_tracking.services.analytics.aggregator import WorkoutAggregator
from fitness_tracking.services.analytics.features import (
    FEATURE_FIELDS,
    FeatureExtractor,
    FeatureVector,
)
from fitness_tracking.services.analytics.report import (
    AnalyticsReport,
    IntensityTrends,
    PerformanceTrends,
    WeeklyAverage,
)
from fitness_tracking.services.analytics.service import AnalyticsService, WorkoutSource
from fitness_tracking.services.analytics.store import WorkoutStore
from fitness_tracking.services.analytics.trends import TrendAnalyzer, intensity, week_key

__all__ = [
    # Data structures
    "WorkoutSnapshot",
    "AnalyticsReport",
    "PerformanceTrends",
    "WeeklyAverage",
    "IntensityTrends",
    "FeatureVector",
    "FEATURE_FIELDS",
    # Engines
    "WorkoutAggregator",
    "TrendAnalyzer",
    "FeatureExtractor",
    "intensity",
    "week_key",
    # Service
    "AnalyticsService",
    "WorkoutSource",
    # Store
    "WorkoutStore",
]
