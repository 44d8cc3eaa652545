"""
Monitoring for the practice log

Provides:
- Sentry error tracking with context
- Decorators for error capture and slow-operation warnings
"""

from .config import MonitoringConfig
from .decorators import capture_errors, track_performance, with_user_context
from .sentry import (
    init_sentry,
    set_user_context,
    add_breadcrumb,
    capture_exception,
)

__all__ = [
    'MonitoringConfig',
    'capture_errors',
    'track_performance',
    'with_user_context',
    'init_sentry',
    'set_user_context',
    'add_breadcrumb',
    'capture_exception',
]
