"""Single-shot timer backed by the asyncio event loop."""

import asyncio
import logging
from typing import Callable, Optional

from ...domain.interfaces import ITimer
from ..decorators import handle_transport_errors

_LOGGER = logging.getLogger(__name__)


class AsyncioTimer(ITimer):
    """ITimer implementation using ``loop.call_later``.

    The event loop is resolved when the timer is armed, so timers can be
    created outside a running loop.

    Attributes:
        _callback: Function invoked when the countdown expires
        _loop: Explicit event loop, or None for the running loop
        _handle: Pending call_later handle while armed

    Example:
        >>> timer = AsyncioTimer(lambda: print("fired"))
        >>> timer.arm(0.1)
    """

    def __init__(
        self,
        callback: Callable[[], None],
        name: str = "timer",
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """Initialize timer.

        Args:
            callback: Function invoked when the countdown expires
            name: Label used in log messages
            loop: Event loop to schedule on (default: running loop)
        """
        self._callback = callback
        self._name = name
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    def arm(self, duration: float) -> None:
        """Start or restart the countdown."""
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(duration, self._fire)
        _LOGGER.debug("%s armed for %.3fs", self._name, duration)

    def cancel(self) -> None:
        """Stop the countdown."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            _LOGGER.debug("%s cancelled", self._name)

    @property
    def is_armed(self) -> bool:
        """Check if the countdown is running."""
        return self._handle is not None

    def _fire(self) -> None:
        self._handle = None
        _LOGGER.debug("%s fired", self._name)
        self._run_callback()

    @handle_transport_errors("Timer callback", reraise=False)
    def _run_callback(self) -> None:
        self._callback()

    def __repr__(self) -> str:
        """Developer representation."""
        return f"AsyncioTimer(name={self._name!r}, armed={self.is_armed})"
