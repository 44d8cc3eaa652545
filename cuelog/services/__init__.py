"""Services - Game, shot and dashboard operations returning Result objects."""

from .base import Result, ResultStatus, BaseService
from .games import GameService, GameDetail
from .shots import ShotLogger, validate_shot_input, build_shot
from .dashboard import DashboardService

__all__ = [
    'Result',
    'ResultStatus',
    'BaseService',
    'GameService',
    'GameDetail',
    'ShotLogger',
    'validate_shot_input',
    'build_shot',
    'DashboardService',
]
