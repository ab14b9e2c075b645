"""
Analytics Service - composes the aggregator, trend analyzer and feature
extractor over one snapshot of a user's workouts.
"""
from typing import List, Optional, Protocol

from fitness_tracking.core.config import settings
from fitness_tracking.core.logging import get_logger
from fitness_tracking.services.analytics.adapter import WorkoutSnapshot
from fitness_tracking.services.analytics.aggregator import WorkoutAggregator
from fitness_tracking.services.analytics.features import FeatureExtractor, FeatureVector
from fitness_tracking.services.analytics.report import AnalyticsReport
from fitness_tracking.services.analytics.trends import TrendAnalyzer

logger = get_logger(__name__)


class WorkoutSource(Protocol):
    """What the service needs from a workout store."""

    async def user_exists(self, user_id: int) -> bool: ...

    async def list_workouts_for_user(self, user_id: int) -> List[WorkoutSnapshot]: ...


class AnalyticsService:
    """
    Main analytics entry point.

    Usage:
        service = AnalyticsService(WorkoutStore(db))
        report = await service.generate_analytics(user_id=1)
        vectors = await service.extract_features(user_id=1)

    Holds no state between calls; every request reads a fresh snapshot.
    """

    def __init__(
        self,
        store: WorkoutSource,
        week_key_mode: Optional[str] = None,
    ):
        self.store = store
        self.aggregator = WorkoutAggregator()
        self.trend_analyzer = TrendAnalyzer(week_key_mode or settings.ANALYTICS_WEEK_KEY)
        self.feature_extractor = FeatureExtractor()

    async def generate_analytics(self, user_id: int) -> AnalyticsReport:
        """
        Build the analytics report for a user.

        Args:
            user_id: User ID

        Returns:
            AnalyticsReport over all of the user's workouts

        Raises:
            NotFound: the user does not exist
            InvalidMetric: a workout has zero duration
            IncompleteRecord: a workout lacks a field the report needs
        """
        workouts = await self.store.list_workouts_for_user(user_id)
        report = self.build_report(workouts)

        logger.info(
            "Generated workout analytics",
            user_id=user_id,
            workout_count=report.total_workouts,
            type_count=len(report.workout_type_distribution),
        )

        return report

    def build_report(self, workouts: List[WorkoutSnapshot]) -> AnalyticsReport:
        """Compute a report from an already-resolved snapshot."""
        return AnalyticsReport(
            total_workouts=len(workouts),
            average_calories_burned=self.aggregator.average_calories(workouts),
            workout_type_distribution=self.aggregator.type_distribution(workouts),
            performance_trends=self.trend_analyzer.analyze(workouts),
        )

    async def extract_features(self, user_id: int) -> List[FeatureVector]:
        """
        Feature vectors for every workout of a user, in store order.

        Raises:
            NotFound: the user does not exist
            IncompleteRecord: a workout lacks one of the feature fields
        """
        workouts = await self.store.list_workouts_for_user(user_id)
        vectors = self.feature_extractor.extract(workouts)

        logger.info(
            "Extracted workout features",
            user_id=user_id,
            vector_count=len(vectors),
        )

        return vectors
