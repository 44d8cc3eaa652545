"""Retry Strategy - Re-run repository calls that hit a locked SQLite database.

SQLite allows a single writer at a time. A second CLI process writing a shot
while the dashboard reads can see "database is locked" even with a busy
timeout, so service calls go through a RetryStrategy.
"""

import logging
import sqlite3
import time
from typing import Callable, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

TRANSIENT_MARKERS = ('locked', 'busy')


def is_transient(error: Exception) -> bool:
    """True for SQLite errors that may succeed on a second try (locked/busy database)."""
    if not isinstance(error, sqlite3.OperationalError):
        return False
    message = str(error).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


class RetryStrategy:
    """
    Call a function up to ``max_retries`` times, sleeping between attempts.

    Args:
        max_retries: Total attempts, including the first one
        base_delay: Seconds to wait after the first failure
        exponential_backoff: Double the wait after every failure
        retryable_exceptions: Exception types worth another attempt
            (defaults to sqlite3.OperationalError)
        should_retry: Extra check on a caught error; returning False
            re-raises it immediately
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 0.2,
        exponential_backoff: bool = True,
        retryable_exceptions: Optional[List[Type[Exception]]] = None,
        should_retry: Optional[Callable[[Exception], bool]] = None,
    ):
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.exponential_backoff = exponential_backoff
        self.retryable_exceptions = tuple(retryable_exceptions or [sqlite3.OperationalError])
        self.should_retry = should_retry

    def execute(self, func: Callable[[], T], on_retry: Optional[Callable[[int, Exception], None]] = None) -> T:
        """
        Return ``func()``, retrying retryable failures.

        ``on_retry(attempt, error)`` is called before each sleep. When every
        attempt fails the last error is raised.
        """
        attempts = max(self.max_retries, 1)

        for attempt in range(attempts):
            try:
                return func()
            except self.retryable_exceptions as e:
                if self.should_retry is not None and not self.should_retry(e):
                    raise
                if attempt == attempts - 1:
                    logger.warning("Giving up after %d attempts: %s", attempts, e)
                    raise

                delay = self._calculate_delay(attempt)
                logger.debug("Attempt %d failed (%s), retrying in %.2fs", attempt + 1, e, delay)
                if on_retry:
                    on_retry(attempt + 1, e)
                time.sleep(delay)

    def _calculate_delay(self, attempt: int) -> float:
        if not self.exponential_backoff:
            return self.base_delay
        return self.base_delay * (2 ** attempt)
