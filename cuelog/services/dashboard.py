"""Dashboard Service - Loads a user's games and shots and aggregates them."""

import logging
import sqlite3
from typing import List, Optional, Tuple

from .base import BaseService, Result
from ..analytics.aggregator import compute_dashboard
from ..db.game import GameRepository
from ..db.shot import ShotRepository
from ..db.retry import RetryStrategy
from ..models.analytics import DashboardReport
from ..models.game import Game
from ..models.shot import Shot
from ..monitoring.decorators import capture_errors, track_performance, with_user_context

logger = logging.getLogger(__name__)


class DashboardService(BaseService):
    """Builds the analytics dashboard for one user."""

    def __init__(
        self,
        game_repository: GameRepository,
        shot_repository: ShotRepository,
        retry_strategy: Optional[RetryStrategy] = None,
    ):
        super().__init__(retry_strategy)
        self.games = game_repository
        self.shots = shot_repository

    @capture_errors(operation="fetch_dashboard_data")
    def _fetch(self, user_id: str) -> Tuple[List[Game], List[Shot]]:
        games = self._with_retry(lambda: self.games.get_by_user(user_id))
        game_ids = [game.game_id for game in games]
        shots = self._with_retry(lambda: self.shots.get_by_game_ids(game_ids))
        return games, shots

    @track_performance(operation_name="load_dashboard", warn_threshold_seconds=2.0)
    @with_user_context
    def load(self, user_id: str) -> Result[DashboardReport]:
        """
        Fetch everything the user has logged and compute the dashboard.

        A failed fetch is returned as an error result; the aggregation only
        runs once both games and shots are available.
        """
        if not user_id:
            return Result.error(self.NOT_SIGNED_IN)

        try:
            games, shots = self._fetch(user_id)
        except sqlite3.Error as e:
            logger.warning("Error loading analytics: %s", e)
            return Result.error(f"Error loading analytics: {e}")

        report = compute_dashboard(games, shots)
        logger.debug("Dashboard for %s: %d games, %d shots", user_id, len(games), len(shots))

        if not games:
            return Result.success(report, "No games logged yet")
        return Result.success(report)
