"""Connection state decorators."""

import logging
from functools import wraps
from typing import Callable

from ...domain.exceptions import NotConnectedError

_LOGGER = logging.getLogger(__name__)


def require_protocol_active(operation_name: str = None):
    """Decorator to ensure a protocol session is active before an operation.

    The decorated method's instance must expose an ``is_protocol_active``
    attribute.

    Args:
        operation_name: Name used in the error message (defaults to the
            function name)

    Example:
        @require_protocol_active("write")
        def write(self, data: bytes) -> WriteResult:
            # Session is guaranteed - just do work
            ...

    Raises:
        NotConnectedError: If no protocol session is active
    """

    def decorator(func: Callable):
        name = operation_name or func.__name__

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            if not self.is_protocol_active:
                state = getattr(self, "state", None)
                error_msg = f"Cannot {name}: not connected"
                if state is not None:
                    error_msg += f" (state: {state.name})"
                _LOGGER.debug(error_msg)
                raise NotConnectedError(error_msg)

            return func(self, *args, **kwargs)

        return wrapper

    return decorator
