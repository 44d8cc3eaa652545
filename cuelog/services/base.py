"""Base Service - Result type and shared plumbing for all services."""

import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Generic, TypeVar

from ..db.retry import RetryStrategy, is_transient
from ..monitoring.sentry import capture_exception

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ResultStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class Result(Generic[T]):
    """
    Outcome of a service call: a status, an optional payload and a message.

    Expected failures (unknown game, invalid shot, storage errors) come back
    as ``Result.error`` so the CLI can print them and keep going. ``skipped``
    marks a request that had nothing to do, such as finishing a game twice.
    """
    status: ResultStatus
    data: Optional[T] = None
    message: str = ""

    @classmethod
    def success(cls, data: T, message: str = "") -> 'Result[T]':
        return cls(ResultStatus.SUCCESS, data, message)

    @classmethod
    def skipped(cls, message: str) -> 'Result[None]':
        return cls(ResultStatus.SKIPPED, message=message)

    @classmethod
    def error(cls, message: str) -> 'Result[None]':
        return cls(ResultStatus.ERROR, message=message)

    @property
    def is_success(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @property
    def is_skipped(self) -> bool:
        return self.status is ResultStatus.SKIPPED

    @property
    def is_error(self) -> bool:
        return self.status is ResultStatus.ERROR


class BaseService:
    """Shared helpers for services that talk to repositories."""

    NOT_SIGNED_IN = "Not signed in: a user id is required"

    def __init__(self, retry_strategy: Optional[RetryStrategy] = None):
        self.retry_strategy = retry_strategy or RetryStrategy(
            max_retries=3,
            should_retry=is_transient,
        )

    def _with_retry(self, func: Callable[[], T]) -> T:
        """Execute a repository call, retrying while the database is locked."""
        if self.retry_strategy:
            return self.retry_strategy.execute(func)
        return func()

    def _storage_error(self, title: str, error: sqlite3.Error, operation: str) -> Result:
        """
        Report a failed repository call once and return it as an error result.

        Logged at warning: ERROR records would become a second Sentry event.
        """
        logger.warning("%s: %s", title, error)
        capture_exception(error, tags={"operation": operation})
        return Result.error(f"{title}: {error}")
