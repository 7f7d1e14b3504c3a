"""ITransport interface for byte-stream transport implementations."""

from abc import ABC, abstractmethod
from typing import Callable

from ..value_objects import Endpoint, TransportEvent, TransportState


class ITransport(ABC):
    """Interface for non-blocking byte-stream transports.

    All operations return immediately. Progress is reported through
    notifications (see TransportEvent) delivered on the event loop in the
    order the underlying stream produced them.

    Connection lifecycle:
        1. connect(endpoint) → HOST_LOOKUP → CONNECTING → CONNECTED
        2. write(data) / read_available() while CONNECTED
        3. peer close or error → ERROR(code), then STATE_CHANGED(UNCONNECTED)
        4. abort() → UNCONNECTED immediately, without notifications

    Example:
        >>> transport = TcpTransport()
        >>> transport.subscribe(TransportEvent.STATE_CHANGED, on_state)
        >>> transport.connect(Endpoint("example.test", 9999))
    """

    @abstractmethod
    def connect(self, endpoint: Endpoint) -> None:
        """Begin an asynchronous connect.

        Args:
            endpoint: Remote endpoint

        Raises:
            TransportError: If the transport is not UNCONNECTED
        """

    @abstractmethod
    def abort(self) -> None:
        """Close immediately, discarding pending data.

        Idempotent. The transport is UNCONNECTED afterwards and no
        notification is published for the abort itself.
        """

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Queue bytes without blocking.

        Args:
            data: Bytes to send

        Returns:
            Number of bytes accepted (may be less than len(data))

        Raises:
            TransportError: If not connected or the write fails
        """

    @abstractmethod
    def read_available(self) -> bytes:
        """Return and clear all bytes received so far."""

    @abstractmethod
    def subscribe(self, event: TransportEvent, callback: Callable) -> Callable[[], None]:
        """Register a notification callback.

        Args:
            event: Notification kind
            callback: Callable matching the event signature

        Returns:
            Function that removes this subscription
        """

    @property
    @abstractmethod
    def state(self) -> TransportState:
        """Current transport state."""
