"""
Workout Store - database reads the analytics core depends on.
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracking.core.errors import NotFound
from fitness_tracking.core.logging import get_logger
from fitness_tracking.models.user import User
from fitness_tracking.models.workout import Workout
from fitness_tracking.services.analytics.adapter import WorkoutSnapshot

logger = get_logger(__name__)


class WorkoutStore:
    """
    Read-only database access for analytics.

    Returns snapshots rather than ORM objects so the core never touches
    session state.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def user_exists(self, user_id: int) -> bool:
        """
        Check if a user exists.

        Args:
            user_id: User ID

        Returns:
            True if the user exists
        """
        result = await self.db.execute(
            select(User.id).where(User.id == user_id)
        )
        return result.scalar_one_or_none() is not None

    async def list_workouts_for_user(self, user_id: int) -> List[WorkoutSnapshot]:
        """
        Get all workouts for a user, oldest first.

        Args:
            user_id: User ID

        Returns:
            Workout snapshots ordered by timestamp then ID; empty if the
            user has no workouts

        Raises:
            NotFound: the user does not exist
        """
        if not await self.user_exists(user_id):
            logger.warning("Workouts requested for unknown user", user_id=user_id)
            raise NotFound("User", user_id)

        result = await self.db.execute(
            select(Workout)
            .where(Workout.user_id == user_id)
            .order_by(Workout.timestamp, Workout.id)
        )
        workouts = result.scalars().all()

        logger.debug("Loaded workouts", user_id=user_id, workout_count=len(workouts))

        return [WorkoutSnapshot.from_model(workout) for workout in workouts]
