"""
Practice Tracker

Thin orchestration layer that wires repositories into the services.
"""

import logging
from typing import Optional

from .config import Config
from .db.game import SQLiteGameRepository
from .db.player import SQLitePlayerRepository
from .db.retry import RetryStrategy, is_transient
from .db.shot import SQLiteShotRepository
from .services import GameService, ShotLogger, DashboardService

logger = logging.getLogger(__name__)


class PracticeTracker:
    """
    Facade over the game, shot and dashboard services for one database.

    Services are created lazily and share the same repositories and retry
    strategy.
    """

    def __init__(self, db_path: str = None, config: Config = None):
        """
        Initialize the tracker.

        Args:
            db_path: Path to database (overrides config.db_path)
            config: Configuration object
        """
        if config is None:
            config = Config()

        self.config = config
        self.db_path = db_path or config.db_path

        storage = config.storage
        self._retry_strategy = RetryStrategy(
            max_retries=storage.max_retries,
            base_delay=storage.retry_delay,
            exponential_backoff=True,
            should_retry=is_transient,
        )

        # Initialize repositories
        self._player_repo = SQLitePlayerRepository(self.db_path, timeout=storage.timeout)
        self._game_repo = SQLiteGameRepository(self.db_path, timeout=storage.timeout)
        self._shot_repo = SQLiteShotRepository(self.db_path, timeout=storage.timeout)

        self._game_service: Optional[GameService] = None
        self._shot_logger: Optional[ShotLogger] = None
        self._dashboard_service: Optional[DashboardService] = None

        # Initialize database
        self._init_database()

    def _init_database(self):
        """Initialize the database schema."""
        from .db.init_db import init_database
        init_database(self.db_path)

    ### getters

    @property
    def user_id(self) -> Optional[str]:
        """User every service call acts for."""
        return self.config.user_id

    @property
    def games(self) -> GameService:
        if self._game_service is None:
            self._game_service = GameService(
                game_repository=self._game_repo,
                player_repository=self._player_repo,
                shot_repository=self._shot_repo,
                retry_strategy=self._retry_strategy,
            )
        return self._game_service

    @property
    def shots(self) -> ShotLogger:
        if self._shot_logger is None:
            self._shot_logger = ShotLogger(
                game_repository=self._game_repo,
                shot_repository=self._shot_repo,
                retry_strategy=self._retry_strategy,
            )
        return self._shot_logger

    @property
    def dashboard(self) -> DashboardService:
        if self._dashboard_service is None:
            self._dashboard_service = DashboardService(
                game_repository=self._game_repo,
                shot_repository=self._shot_repo,
                retry_strategy=self._retry_strategy,
            )
        return self._dashboard_service
