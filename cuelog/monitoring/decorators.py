"""
Monitoring Decorators

Wrap service methods so storage failures reach Sentry with the operation
name, slow dashboard loads are logged, and events carry the acting user.
"""

import functools
import inspect
import logging
import time
from typing import Any, Callable, Dict, Optional, TypeVar, cast

from .sentry import add_breadcrumb, capture_exception, set_user_context

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def capture_errors(
    operation: Optional[str] = None,
    tags: Optional[Dict[str, str]] = None,
) -> Callable[[F], F]:
    """
    Report any exception raised by the wrapped call, then let it propagate.

    Usage:
        @capture_errors(operation="fetch_dashboard_data")
        def _fetch(self, user_id):
            ...
    """

    def decorator(func: F) -> F:
        name = operation or func.__name__
        error_tags = {"operation": name, **(tags or {})}

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            add_breadcrumb(message=name, category="cuelog")
            try:
                return func(*args, **kwargs)
            except Exception as e:
                capture_exception(
                    exception=e,
                    tags=error_tags,
                    extra={"function": func.__qualname__},
                )
                raise

        return cast(F, wrapper)

    return decorator


def track_performance(
    operation_name: Optional[str] = None,
    warn_threshold_seconds: float = 2.0,
) -> Callable[[F], F]:
    """Log a warning when the wrapped call runs longer than the threshold."""

    def decorator(func: F) -> F:
        name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - started
                add_breadcrumb(
                    message=f"{name} took {elapsed:.3f}s",
                    category="performance",
                    data={"duration_seconds": elapsed},
                )
                if elapsed > warn_threshold_seconds:
                    logger.warning("%s took %.2f seconds (threshold: %.2f)",
                                   name, elapsed, warn_threshold_seconds)

        return cast(F, wrapper)

    return decorator


def with_user_context(func: F) -> F:
    """
    Attach the call's ``user_id`` argument to Sentry before running it.

    The wrapped function must take a ``user_id`` parameter.
    """
    signature = inspect.signature(func)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        bound = signature.bind_partial(*args, **kwargs)
        set_user_context(bound.arguments.get("user_id"))
        return func(*args, **kwargs)

    return cast(F, wrapper)
