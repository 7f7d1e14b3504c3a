"""Error handling decorators for event-loop callbacks."""

import asyncio
import inspect
import logging
from functools import wraps
from typing import Any, Callable

from ...domain.exceptions import TransportError


def _log_failure(log: logging.Logger, operation_name: str, err: Exception) -> None:
    """Log err at a level matching how expected it is."""
    if isinstance(err, TransportError):
        # Expected transport failure - no stack trace
        log.error("%s transport error: %s", operation_name, err)
    elif isinstance(err, asyncio.TimeoutError):
        log.warning("%s timed out: %s", operation_name, err)
    elif isinstance(err, OSError):
        log.error("%s socket error: %s (errno %s)", operation_name, err, err.errno)
    else:
        log.error("%s unexpected error: %s", operation_name, err, exc_info=True)


def handle_transport_errors(
    operation_name: str,
    logger: logging.Logger = None,
    reraise: bool = True,
    default_return: Any = None,
):
    """Log exceptions escaping a callback, optionally swallowing them.

    Wraps both coroutine functions and plain functions. Meant for code the
    event loop calls directly (timer firings, asyncio protocol callbacks,
    the connect task), where an escaping exception would only reach the
    loop's default exception handler. Cancellation is never intercepted.

    Args:
        operation_name: Label used in log messages
        logger: Logger to use (defaults to the wrapped function's module logger)
        reraise: Re-raise after logging
        default_return: Returned instead when not re-raising

    Example:
        @handle_transport_errors("Timer callback", reraise=False)
        def _run_callback(self) -> None:
            self._callback()
    """

    def decorator(func: Callable):
        log = logger or logging.getLogger(func.__module__)

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as err:
                    _log_failure(log, operation_name, err)
                    if reraise:
                        raise
                    return default_return

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as err:
                _log_failure(log, operation_name, err)
                if reraise:
                    raise
                return default_return

        return sync_wrapper

    return decorator
