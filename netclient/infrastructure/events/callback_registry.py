"""Subscription registry for event notifications."""

import logging
from enum import Enum
from typing import Callable, Dict, List

_LOGGER = logging.getLogger(__name__)


class CallbackRegistry:
    """Per-event callback lists with explicit unsubscribe.

    Callbacks run synchronously in subscription order. A callback that raises
    is logged and does not prevent the remaining callbacks from running.

    Example:
        >>> registry = CallbackRegistry()
        >>> unsubscribe = registry.subscribe(ClientEvent.DONE, on_done)
        >>> registry.emit(ClientEvent.DONE)
        >>> unsubscribe()
    """

    def __init__(self):
        """Initialize empty registry."""
        self._callbacks: Dict[Enum, List[Callable]] = {}

    def subscribe(self, event: Enum, callback: Callable) -> Callable[[], None]:
        """Register callback for event.

        Args:
            event: Event to watch
            callback: Function invoked with the event arguments

        Returns:
            Function that removes this subscription (idempotent)
        """
        self._callbacks.setdefault(event, []).append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(event, callback)

        return unsubscribe

    def unsubscribe(self, event: Enum, callback: Callable) -> None:
        """Remove callback from event. Unknown callbacks are ignored."""
        callbacks = self._callbacks.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def clear(self, event: Enum = None) -> None:
        """Remove all callbacks, or all callbacks of one event."""
        if event is None:
            self._callbacks.clear()
        else:
            self._callbacks.pop(event, None)

    def has_subscribers(self, event: Enum) -> bool:
        """Check if any callback is registered for event."""
        return bool(self._callbacks.get(event))

    def emit(self, event: Enum, *args) -> None:
        """Invoke every callback registered for event.

        Args:
            event: Event to publish
            *args: Arguments passed to each callback
        """
        # Copy so callbacks may unsubscribe while being notified
        for callback in list(self._callbacks.get(event, ())):
            try:
                callback(*args)
            except Exception as err:
                _LOGGER.error(
                    "Error in %s callback: %s", event.name, err, exc_info=True
                )
