"""Data models - Dataclass definitions for all entities."""

from .game import Game, Player
from .shot import Shot, ShotInput
from .analytics import (
    GameStats,
    GameTypeSummary,
    OutcomeShare,
    MonthlyActivity,
    ShotAnalysis,
    DashboardReport,
)

__all__ = [
    'Game',
    'Player',
    'Shot',
    'ShotInput',
    'GameStats',
    'GameTypeSummary',
    'OutcomeShare',
    'MonthlyActivity',
    'ShotAnalysis',
    'DashboardReport',
]
