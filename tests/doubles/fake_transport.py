"""Fake transport for testing without sockets.

This fake implements the ITransport interface for testing.
"""

from typing import Callable, List, Optional, Union

from netclient.domain.exceptions import TransportError
from netclient.domain.interfaces import ITransport
from netclient.domain.value_objects import (
    Endpoint,
    TransportErrorCode,
    TransportEvent,
    TransportState,
)
from netclient.infrastructure.events import CallbackRegistry

WritePlanItem = Union[int, TransportError]


class FakeTransport(ITransport):
    """Fake TCP transport for testing.

    This fake lets tests drive connection progress, incoming data, peer
    close, errors and partial writes. Notifications are published
    synchronously.

    Attributes:
        connect_calls: Endpoints passed to connect()
        abort_count: Number of abort() calls
        written: Bytes accepted by write()

    Example:
        >>> transport = FakeTransport()
        >>> transport.connect(Endpoint("example.test", 9999))
        >>> transport.complete_connect()
        >>> transport.write(b"PING")
        4
        >>> transport.drain()
    """

    def __init__(self):
        """Initialize fake transport."""
        self._state = TransportState.UNCONNECTED
        self._events = CallbackRegistry()
        self._read_buffer = bytearray()
        self._write_plan: List[WritePlanItem] = []
        self._pending_written = 0
        self.connect_calls: List[Endpoint] = []
        self.abort_count = 0
        self.written = bytearray()

    def connect(self, endpoint: Endpoint) -> None:
        """Record the connect and enter CONNECTING."""
        if self._state != TransportState.UNCONNECTED:
            raise TransportError(
                f"Cannot connect in state {self._state.name}",
                code=TransportErrorCode.OPERATION_ERROR,
            )
        self.connect_calls.append(endpoint)
        self._set_state(TransportState.HOST_LOOKUP)
        self._set_state(TransportState.CONNECTING)

    def abort(self) -> None:
        """Drop to UNCONNECTED without notifications."""
        self.abort_count += 1
        self._state = TransportState.UNCONNECTED
        self._read_buffer.clear()
        self._pending_written = 0

    def write(self, data: bytes) -> int:
        """Accept bytes according to the write plan (default: everything)."""
        if self._state != TransportState.CONNECTED:
            raise TransportError(
                "Not connected", code=TransportErrorCode.OPERATION_ERROR
            )

        accepted = len(data)
        if self._write_plan:
            item = self._write_plan.pop(0)
            if isinstance(item, TransportError):
                raise item
            accepted = min(item, len(data))

        self.written.extend(data[:accepted])
        self._pending_written += accepted
        return accepted

    def read_available(self) -> bytes:
        """Return and clear received bytes."""
        data = bytes(self._read_buffer)
        self._read_buffer.clear()
        return data

    def subscribe(self, event: TransportEvent, callback: Callable) -> Callable[[], None]:
        """Register a notification callback."""
        return self._events.subscribe(event, callback)

    @property
    def state(self) -> TransportState:
        """Current state."""
        return self._state

    # Test helper methods

    def complete_connect(self) -> None:
        """Finish the pending connect successfully."""
        self._set_state(TransportState.CONNECTED)

    def fail(self, code: TransportErrorCode) -> None:
        """Report an error, then drop to UNCONNECTED like a socket does."""
        self._events.emit(TransportEvent.ERROR, code)
        self._set_state(TransportState.UNCONNECTED)

    def error_only(self, code: TransportErrorCode) -> None:
        """Report an error without a state change."""
        self._events.emit(TransportEvent.ERROR, code)

    def refuse_connect(self) -> None:
        """Peer refused the connection."""
        self.fail(TransportErrorCode.CONNECTION_REFUSED)

    def remote_close(self) -> None:
        """Peer closed the connection."""
        self._set_state(TransportState.CLOSING)
        self.fail(TransportErrorCode.REMOTE_HOST_CLOSED)

    def receive(self, data: bytes) -> None:
        """Deliver bytes from the peer."""
        self._read_buffer.extend(data)
        self._events.emit(TransportEvent.READABLE)

    def drain(self) -> None:
        """Report all accepted bytes as written."""
        if self._pending_written:
            count = self._pending_written
            self._pending_written = 0
            self._events.emit(TransportEvent.BYTES_WRITTEN, count)

    def plan_writes(self, *items: WritePlanItem) -> None:
        """Script the next write() calls.

        Each int caps the bytes accepted by one call; each TransportError is
        raised by one call.

        Example:
            >>> transport.plan_writes(3, TransportError("reset"))
        """
        self._write_plan.extend(items)

    def has_subscribers(self, event: TransportEvent) -> bool:
        """Check if anyone listens to event."""
        return self._events.has_subscribers(event)

    def _set_state(self, state: TransportState) -> None:
        if state == self._state:
            return
        self._state = state
        self._events.emit(TransportEvent.STATE_CHANGED, state)
