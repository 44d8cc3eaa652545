"""Database layer - Repository pattern implementations."""

from .base import BaseRepository
from .player import PlayerRepository, SQLitePlayerRepository, MockPlayerRepository
from .game import GameRepository, SQLiteGameRepository, MockGameRepository
from .shot import ShotRepository, SQLiteShotRepository, MockShotRepository
from .retry import RetryStrategy

__all__ = [
    # Base
    'BaseRepository',
    'RetryStrategy',
    # Player
    'PlayerRepository',
    'SQLitePlayerRepository',
    'MockPlayerRepository',
    # Game
    'GameRepository',
    'SQLiteGameRepository',
    'MockGameRepository',
    # Shot
    'ShotRepository',
    'SQLiteShotRepository',
    'MockShotRepository',
]
