"""TCP transport implementation on the asyncio event loop.

This module implements the ITransport interface for plain TCP byte streams.
Connection establishment runs as a task on the loop; everything after that is
driven by asyncio.Protocol callbacks translated into transport notifications.
"""

import asyncio
import logging
import socket
from typing import Callable, Optional

from ...domain.exceptions import TransportError
from ...domain.interfaces import ITransport
from ...domain.value_objects import (
    Endpoint,
    TransportErrorCode,
    TransportEvent,
    TransportState,
)
from ..decorators import handle_transport_errors
from ..events import CallbackRegistry
from .socket_errors import error_code_from_exception

_LOGGER = logging.getLogger(__name__)


class _StreamProtocol(asyncio.Protocol):
    """asyncio protocol forwarding callbacks to its TcpTransport.

    Each protocol carries the generation of the connect attempt that created
    it; callbacks from a superseded attempt are dropped by the owner.
    """

    def __init__(self, owner: "TcpTransport", generation: int):
        self._owner = owner
        self._generation = generation

    def connection_made(self, transport):
        self._owner._on_connection_made(self._generation, transport)

    def data_received(self, data):
        self._owner._on_data_received(self._generation, data)

    def eof_received(self):
        self._owner._on_eof_received(self._generation)
        # Let asyncio close the transport, connection_lost follows
        return False

    def connection_lost(self, exc):
        self._owner._on_connection_lost(self._generation, exc)

    def pause_writing(self):
        self._owner._on_pause_writing(self._generation)

    def resume_writing(self):
        self._owner._on_resume_writing(self._generation)


class TcpTransport(ITransport):
    """Plain TCP transport for the connection manager.

    This implementation handles:
    - Host lookup via loop.getaddrinfo (HOST_LOOKUP)
    - Non-blocking connect to each resolved address in turn (CONNECTING)
    - Receive buffering with READABLE notifications
    - Drain detection through write-buffer flow control (BYTES_WRITTEN)
    - Peer close reported as REMOTE_HOST_CLOSED, then UNCONNECTED

    Notification order on failure is always ERROR(code) followed by
    STATE_CHANGED(UNCONNECTED).

    Attributes:
        _state: Current TransportState
        _transport: asyncio transport while connected
        _connect_task: Task running the connect sequence
        _generation: Incremented per connect/abort to drop stale callbacks
        _read_buffer: Bytes received and not yet read
        _pending_written: Bytes accepted but not yet reported as written
        _writing_paused: True while the asyncio write buffer is non-empty

    Example:
        >>> transport = TcpTransport()
        >>> transport.subscribe(TransportEvent.STATE_CHANGED, on_state)
        >>> transport.connect(Endpoint("127.0.0.1", 8080))
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Initialize TCP transport.

        Args:
            loop: Event loop to run on (default: loop running at connect time)
        """
        self._loop = loop
        self._state = TransportState.UNCONNECTED
        self._transport: Optional[asyncio.Transport] = None
        self._connect_task: Optional[asyncio.Task] = None
        self._generation = 0
        self._read_buffer = bytearray()
        self._pending_written = 0
        self._writing_paused = False
        self._endpoint: Optional[Endpoint] = None
        self._events = CallbackRegistry()

    # ------------------------------------------------------------------
    # ITransport
    # ------------------------------------------------------------------

    def connect(self, endpoint: Endpoint) -> None:
        """Begin connecting to endpoint.

        Raises:
            TransportError: If the transport is not UNCONNECTED
        """
        if self._state != TransportState.UNCONNECTED:
            raise TransportError(
                f"Cannot connect in state {self._state.name}",
                code=TransportErrorCode.OPERATION_ERROR,
            )

        loop = self._loop or asyncio.get_running_loop()
        self._loop = loop
        self._endpoint = endpoint
        self._generation += 1
        self._read_buffer.clear()

        _LOGGER.debug("Connecting to %s", endpoint)
        self._set_state(TransportState.HOST_LOOKUP)
        self._connect_task = loop.create_task(self._connect(self._generation, endpoint))

    def abort(self) -> None:
        """Close immediately and silently."""
        self._generation += 1

        if self._connect_task is not None and not self._connect_task.done():
            self._connect_task.cancel()
        self._connect_task = None

        if self._transport is not None:
            self._transport.abort()
            self._transport = None
            _LOGGER.debug("Aborted connection to %s", self._endpoint)

        self._read_buffer.clear()
        self._pending_written = 0
        self._writing_paused = False
        self._state = TransportState.UNCONNECTED

    def write(self, data: bytes) -> int:
        """Queue bytes on the asyncio transport.

        asyncio buffers whatever the socket does not take immediately, so the
        whole buffer is always accepted; drains are reported later through
        BYTES_WRITTEN.

        Raises:
            TransportError: If not connected or the transport is closing
        """
        if self._state != TransportState.CONNECTED or self._transport is None:
            raise TransportError(
                "Not connected", code=TransportErrorCode.OPERATION_ERROR
            )
        if self._transport.is_closing():
            raise TransportError(
                "Connection is closing", code=TransportErrorCode.REMOTE_HOST_CLOSED
            )

        try:
            self._transport.write(data)
        except (OSError, RuntimeError) as err:
            raise TransportError(
                f"Write failed: {err}", code=error_code_from_exception(err)
            ) from err

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Queued %d bytes to %s", len(data), self._endpoint)

        self._pending_written += len(data)
        if not self._writing_paused:
            self._loop.call_soon(self._report_written, self._generation)
        return len(data)

    def read_available(self) -> bytes:
        """Return and clear buffered received bytes."""
        data = bytes(self._read_buffer)
        self._read_buffer.clear()
        return data

    def subscribe(self, event: TransportEvent, callback: Callable) -> Callable[[], None]:
        """Register a notification callback."""
        return self._events.subscribe(event, callback)

    @property
    def state(self) -> TransportState:
        """Current transport state."""
        return self._state

    @property
    def bytes_available(self) -> int:
        """Number of received bytes waiting to be read."""
        return len(self._read_buffer)

    # ------------------------------------------------------------------
    # Connect sequence
    # ------------------------------------------------------------------

    @handle_transport_errors("TCP connect", reraise=False)
    async def _connect(self, generation: int, endpoint: Endpoint) -> None:
        """Resolve endpoint and connect to the first reachable address."""
        loop = self._loop

        try:
            infos = await loop.getaddrinfo(
                endpoint.host, endpoint.port, type=socket.SOCK_STREAM
            )
        except OSError as err:
            self._connect_failed(generation, err)
            return

        if generation != self._generation:
            return
        if not infos:
            self._connect_failed(
                generation, socket.gaierror(socket.EAI_NONAME, "No addresses")
            )
            return

        self._set_state(TransportState.CONNECTING)

        sock = None
        first_error: Optional[OSError] = None
        for family, sock_type, proto, _, address in infos:
            try:
                sock = socket.socket(family, sock_type, proto)
                sock.setblocking(False)
                await loop.sock_connect(sock, address)
                break
            except OSError as err:
                _LOGGER.debug("Connect to %s failed: %s", address, err)
                if sock is not None:
                    sock.close()
                    sock = None
                if first_error is None:
                    first_error = err
            except BaseException:
                # Cancelled by abort()
                if sock is not None:
                    sock.close()
                raise

        if sock is None:
            self._connect_failed(generation, first_error)
            return

        if generation != self._generation:
            sock.close()
            return

        try:
            await loop.create_connection(
                lambda: _StreamProtocol(self, generation), sock=sock
            )
        except OSError as err:
            sock.close()
            self._connect_failed(generation, err)

    def _connect_failed(self, generation: int, err: OSError) -> None:
        if generation != self._generation:
            return

        code = error_code_from_exception(err)
        _LOGGER.debug("Connect to %s failed: %s (%s)", self._endpoint, err, code.name)
        self._connect_task = None
        self._events.emit(TransportEvent.ERROR, code)
        if generation == self._generation:
            self._set_state(TransportState.UNCONNECTED)

    # ------------------------------------------------------------------
    # Protocol callbacks
    # ------------------------------------------------------------------

    def _on_connection_made(self, generation: int, transport) -> None:
        if generation != self._generation:
            transport.abort()
            return

        self._transport = transport
        self._connect_task = None
        # Any buffered byte pauses writing, so resume_writing marks a full drain
        transport.set_write_buffer_limits(high=0)
        _LOGGER.debug("Connected to %s", self._endpoint)
        self._set_state(TransportState.CONNECTED)

    @handle_transport_errors("TCP receive", reraise=False)
    def _on_data_received(self, generation: int, data: bytes) -> None:
        if generation != self._generation:
            return

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Received %d bytes from %s", len(data), self._endpoint)
        self._read_buffer.extend(data)
        self._events.emit(TransportEvent.READABLE)

    def _on_eof_received(self, generation: int) -> None:
        if generation != self._generation:
            return

        _LOGGER.debug("Remote host %s closed the connection", self._endpoint)
        self._set_state(TransportState.CLOSING)

    @handle_transport_errors("TCP connection lost", reraise=False)
    def _on_connection_lost(self, generation: int, exc: Optional[Exception]) -> None:
        if generation != self._generation:
            return

        code = (
            error_code_from_exception(exc)
            if exc is not None
            else TransportErrorCode.REMOTE_HOST_CLOSED
        )
        _LOGGER.debug("Connection to %s lost: %s", self._endpoint, code.name)

        self._transport = None
        self._pending_written = 0
        self._writing_paused = False
        self._events.emit(TransportEvent.ERROR, code)
        if generation == self._generation:
            self._set_state(TransportState.UNCONNECTED)

    def _on_pause_writing(self, generation: int) -> None:
        if generation == self._generation:
            self._writing_paused = True

    def _on_resume_writing(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._writing_paused = False
        self._report_written(generation)

    def _report_written(self, generation: int) -> None:
        if generation != self._generation or self._writing_paused:
            return
        if self._pending_written == 0:
            return

        count = self._pending_written
        self._pending_written = 0
        self._events.emit(TransportEvent.BYTES_WRITTEN, count)

    def _set_state(self, state: TransportState) -> None:
        if state == self._state:
            return
        _LOGGER.debug("Transport state: %s -> %s", self._state.name, state.name)
        self._state = state
        self._events.emit(TransportEvent.STATE_CHANGED, state)

    def __repr__(self) -> str:
        """Developer representation."""
        return f"TcpTransport(endpoint={self._endpoint}, state={self._state.name})"
