"""
Sentry integration.

``init_sentry`` turns reporting on when ``SENTRY_DSN`` is configured. Until
then every helper below does nothing, so services can call them freely.
Shot notes are free text typed by the player and are scrubbed from events
before they leave the machine.
"""

import logging
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from .config import MonitoringConfig

logger = logging.getLogger(__name__)

SCRUBBED_KEYS = ('notes',)

_sentry_initialized = False


def _scrub(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: '[scrubbed]' if key in SCRUBBED_KEYS else _scrub(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_scrub(item) for item in value]
    return value


def scrub_event(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """``before_send`` hook removing shot notes from extras and breadcrumbs."""
    for section in ('extra', 'breadcrumbs', 'contexts'):
        if section in event:
            event[section] = _scrub(event[section])
    return event


def init_sentry(config: Optional[MonitoringConfig] = None) -> bool:
    """
    Initialize the Sentry SDK once per process.

    Returns:
        True when Sentry is active after the call
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    config = config or MonitoringConfig.from_env()
    if not config.sentry_enabled:
        logger.debug("SENTRY_DSN not set, error reporting disabled")
        return False

    try:
        sentry_sdk.init(
            dsn=config.sentry_dsn,
            environment=config.sentry_environment,
            traces_sample_rate=config.sentry_traces_sample_rate,
            # Warnings become breadcrumbs; logged errors become events
            integrations=[LoggingIntegration(level=logging.WARNING, event_level=logging.ERROR)],
            before_send=scrub_event,
            send_default_pii=False,
        )
        sentry_sdk.set_tag("app", config.app_name)
    except Exception as e:
        logger.error("Failed to initialize Sentry: %s", e)
        return False

    _sentry_initialized = True
    logger.debug("Sentry initialized (%s)", config.sentry_environment)
    return True


def is_initialized() -> bool:
    return _sentry_initialized


def set_user_context(user_id: Optional[str]) -> None:
    """Tag later events with the acting user's id only."""
    if not _sentry_initialized:
        return
    sentry_sdk.set_user({"id": user_id} if user_id else None)


def add_breadcrumb(
    message: str,
    category: str = "cuelog",
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
) -> None:
    if not _sentry_initialized:
        return
    sentry_sdk.add_breadcrumb(message=message, category=category, level=level, data=data)


def capture_exception(
    exception: Exception,
    level: str = "error",
    tags: Optional[Dict[str, str]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Send an exception with per-call tags and extras.

    Returns:
        The Sentry event id, or None when Sentry is off
    """
    if not _sentry_initialized:
        return None

    with sentry_sdk.new_scope() as scope:
        scope.set_level(level)
        for key, value in (tags or {}).items():
            scope.set_tag(key, value)
        for key, value in (extra or {}).items():
            scope.set_extra(key, value)
        return sentry_sdk.capture_exception(exception)
