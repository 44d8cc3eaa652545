"""Cuelog - Billiards practice log.

This package provides tools for logging billiards games shot by shot and
analyzing the results.

Modules:
    models - Data models (dataclasses)
    db - Database repositories
    services - Game, shot and dashboard operations
    analytics - Dashboard aggregation (pure functions)
    helpers - Pure utility functions
    monitoring - Sentry error tracking
    config - Configuration
    tracker - Main facade wiring repositories into services
"""

from .config import Config, StorageConfig
from .analytics import compute_dashboard
from .tracker import PracticeTracker

__all__ = [
    'Config',
    'StorageConfig',
    'compute_dashboard',
    'PracticeTracker',
]

__version__ = '1.0.0'
