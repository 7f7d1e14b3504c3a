# Copyright (c) 2026 netclient Contributors
# Licensed under the MIT License
# See LICENSE file for full license text

"""Connection manager for the client transport lifecycle.

This module implements the reconnecting client state machine:
- Connect with a bounded connect timeout
- Retry gating through an attempt counter (RetryCounting policy)
- Optional reconnect after a fixed sleep (auto_reconnect policy)
- Transport error classification (ignorable vs. fatal)
- Protocol session hooks and readable / write-drained relaying
"""

import asyncio
import logging
from typing import Callable, Dict, Optional

from ...const import MSG_CONNECT_TIMEOUT, MSG_MAX_RETRIES
from ...domain.exceptions import (
    ClientError,
    ConnectTimeoutError,
    MaxRetriesExceededError,
)
from ...domain.interfaces import ITimer, ITransport
from ...domain.services import error_for_code
from ...domain.value_objects import (
    ClientEvent,
    Endpoint,
    RetryCounting,
    RetryPolicy,
    TransportErrorCode,
    TransportEvent,
    TransportState,
    WriteResult,
)
from ..decorators import require_protocol_active
from ..events import CallbackRegistry
from ..state_machines import (
    ConnectionEvent,
    ConnectionState,
    ConnectionStateMachine,
)
from ..timers import AsyncioTimer
from .tcp_transport import TcpTransport
from .writer import Writer

_LOGGER = logging.getLogger(__name__)

TransportFactory = Callable[[], ITransport]
TimerFactory = Callable[[Callable[[], None], str], ITimer]


class ConnectionManager:
    """Owns one outbound connection and drives its lifecycle.

    This implementation:
    - Creates the transport lazily and reuses it across attempts
    - Arms a connect timeout for every attempt
    - Gates every (re)connect on the attempt counter
    - Absorbs ignorable transport errors and fails on the rest
    - Emits exactly one of ERROR or DONE per lifecycle

    Only one of the connect-timeout and reconnect-sleep timers is ever armed.
    All transitions run on event-loop callbacks; there is no locking.

    Subclasses acting as a protocol layer may override protocol_started()
    and protocol_stopped().

    Attributes:
        _endpoint: Remote endpoint
        _policy: Retry policy
        _transport: Owned transport, None until the first start()
        _attempts: Attempt counter (meaning set by policy.counting)
        _last_error: Error surfaced by the ERROR event, if any

    Example:
        >>> manager = ConnectionManager(Endpoint("example.test", 9999))
        >>> manager.subscribe(ClientEvent.ERROR, on_error)
        >>> manager.subscribe(ClientEvent.READABLE, on_readable)
        >>> manager.start()
    """

    def __init__(
        self,
        endpoint: Endpoint,
        policy: Optional[RetryPolicy] = None,
        *,
        transport_factory: Optional[TransportFactory] = None,
        timer_factory: Optional[TimerFactory] = None,
    ):
        """Initialize connection manager.

        Args:
            endpoint: Remote endpoint to connect to
            policy: Retry policy (default: RetryPolicy())
            transport_factory: Builds the transport (default: TcpTransport)
            timer_factory: Builds timers from (callback, name)
                (default: AsyncioTimer)
        """
        self._endpoint = endpoint
        self._policy = policy or RetryPolicy()
        self._transport_factory = transport_factory or TcpTransport
        timer_factory = timer_factory or (
            lambda callback, name: AsyncioTimer(callback, name=name)
        )

        self._transport: Optional[ITransport] = None
        self._transport_subscriptions = []
        self._session_subscriptions = []
        self._session_open = False
        self._attempts = 0
        self._last_error: Optional[ClientError] = None
        self._closed_waiter: Optional[asyncio.Future] = None
        self._writer = Writer()
        self._events = CallbackRegistry()

        self._connect_timer = timer_factory(self._on_connect_timeout, "connect timeout")
        self._reconnect_timer = timer_factory(self._on_reconnect_sleep, "reconnect sleep")

        self._state_machine = ConnectionStateMachine()
        self._state_machine.on_state(
            ConnectionState.PROTOCOL_ACTIVE, self._on_protocol_active
        )
        self._state_machine.on_state(ConnectionState.FAILED, self._on_failed)

    @classmethod
    def from_config(cls, config, **kwargs) -> "ConnectionManager":
        """Create a manager from a validated ClientConfig.

        Args:
            config: ClientConfig from netclient.config
            **kwargs: Factories forwarded to the constructor
        """
        return cls(config.endpoint, config.policy, **kwargs)

    def _on_protocol_active(self):
        """Callback when protocol session starts."""
        _LOGGER.info("Protocol session started with %s", self._endpoint)

    def _on_failed(self):
        """Callback when the lifecycle fails."""
        _LOGGER.error(
            "Connection to %s failed while %s: %s",
            self._endpoint,
            self._state_machine.previous_state.name.lower(),
            self._last_error,
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin (or re-enter) a connection attempt.

        Idempotent while connecting. If the transport is already connected,
        the protocol session starts without a new connect.
        """
        if not self._state_machine.can_start:
            if self._state_machine.is_terminal:
                _LOGGER.warning(
                    "Ignoring start() in terminal state %s; call reset() first",
                    self.state.name,
                )
            else:
                _LOGGER.debug("start() while protocol active, nothing to do")
            return

        if self._transport is None:
            self._create_transport()

        if self._attempts >= self._policy.max_retries:
            self._emit_error(
                MaxRetriesExceededError(MSG_MAX_RETRIES, attempts=self._attempts)
            )
            return

        # Cancel first so the two timers are never armed together
        self._reconnect_timer.cancel()
        if not self._connect_timer.is_armed:
            self._connect_timer.arm(self._policy.connect_timeout)

        if self.state == ConnectionState.IDLE:
            self._state_machine.transition(ConnectionEvent.START)

        transport_state = self._transport.state
        if transport_state == TransportState.UNCONNECTED:
            _LOGGER.debug(
                "Connecting to %s (attempts: %d/%d)",
                self._endpoint,
                self._attempts,
                self._policy.max_retries,
            )
            self._transport.connect(self._endpoint)
        elif transport_state == TransportState.CONNECTED:
            self._protocol_start()
        else:
            _LOGGER.debug("Connect already in progress (%s)", transport_state.name)

    def stop(self) -> None:
        """Tear the connection down and emit DONE.

        Safe from any state. No-op when terminal, or when idle with no
        lifecycle in progress.
        """
        if self._state_machine.is_terminal:
            _LOGGER.debug("stop() in terminal state %s ignored", self.state.name)
            return
        if self.state == ConnectionState.IDLE and not self._reconnect_timer.is_armed:
            _LOGGER.debug("stop() before start() ignored")
            return

        self._emit_done()

    @require_protocol_active("write")
    def write(self, data: bytes) -> WriteResult:
        """Write bytes to the active session.

        Delivery is best-effort; see Writer.

        Raises:
            NotConnectedError: If no protocol session is active
        """
        result = self._writer.write(self._transport, data)
        if not result.success:
            _LOGGER.warning(
                "Write to %s incomplete (%d/%d bytes): %s",
                self._endpoint,
                result.bytes_written,
                len(data),
                result.error,
            )
        return result

    @require_protocol_active("read")
    def read(self) -> bytes:
        """Drain bytes received by the active session.

        Raises:
            NotConnectedError: If no protocol session is active
        """
        return self._transport.read_available()

    def subscribe(self, event: ClientEvent, callback: Callable) -> Callable[[], None]:
        """Register a callback for a client event.

        Args:
            event: ERROR(message), DONE(), READABLE() or WRITE_DRAINED(count)
            callback: Callable matching the event signature

        Returns:
            Function that removes this subscription
        """
        return self._events.subscribe(event, callback)

    def reset(self) -> None:
        """Return a terminal manager to IDLE for a fresh lifecycle.

        Drops the old transport (a new one is built on the next start()),
        clears the attempt counter and the last error.
        """
        if not self._state_machine.is_terminal:
            _LOGGER.debug("reset() in state %s ignored", self.state.name)
            return

        _LOGGER.info("Resetting connection to %s", self._endpoint)
        self._transport = None
        self._attempts = 0
        self._last_error = None
        self._closed_waiter = None
        self._state_machine.transition(ConnectionEvent.RESET)

    async def wait_closed(self) -> None:
        """Wait for the lifecycle to end.

        Returns when DONE is emitted.

        Raises:
            ClientError: The error surfaced through the ERROR event
        """
        if self.state == ConnectionState.STOPPED:
            return
        if self.state == ConnectionState.FAILED:
            raise self._last_error

        if self._closed_waiter is None or self._closed_waiter.done():
            self._closed_waiter = asyncio.get_running_loop().create_future()
        await asyncio.shield(self._closed_waiter)

    def get_status(self) -> Dict:
        """Get current connection diagnostics.

        Example:
            >>> info = manager.get_status()
            >>> print(f"Attempts: {info['attempts']}/{info['max_retries']}")
        """
        return {
            "endpoint": str(self._endpoint),
            "state": self.state.name.lower(),
            "attempts": self._attempts,
            "max_retries": self._policy.max_retries,
            "counting": self._policy.counting.value,
            "reconnect_pending": self.is_reconnect_pending,
            "last_error": str(self._last_error) if self._last_error else None,
        }

    # ------------------------------------------------------------------
    # Protocol layer hooks
    # ------------------------------------------------------------------

    def protocol_started(self) -> None:
        """Hook invoked after the session becomes active."""

    def protocol_stopped(self) -> None:
        """Hook invoked after the session stops, before DONE or a reconnect."""

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state_machine.state

    @property
    def is_protocol_active(self) -> bool:
        """Check if a protocol session is active."""
        return self._state_machine.is_protocol_active

    @property
    def is_reconnect_pending(self) -> bool:
        """Check if a reconnect is scheduled."""
        return self._reconnect_timer.is_armed

    @property
    def attempts(self) -> int:
        """Current attempt counter."""
        return self._attempts

    @property
    def last_error(self) -> Optional[ClientError]:
        """Error surfaced by the ERROR event, if any."""
        return self._last_error

    @property
    def endpoint(self) -> Endpoint:
        """Remote endpoint."""
        return self._endpoint

    @property
    def policy(self) -> RetryPolicy:
        """Retry policy."""
        return self._policy

    @property
    def transport(self) -> Optional[ITransport]:
        """Owned transport, None before the first start()."""
        return self._transport

    # ------------------------------------------------------------------
    # Transport notifications
    # ------------------------------------------------------------------

    def _create_transport(self) -> None:
        self._transport = self._transport_factory()
        self._transport_subscriptions = [
            self._transport.subscribe(
                TransportEvent.STATE_CHANGED, self._on_transport_state_changed
            ),
            self._transport.subscribe(TransportEvent.ERROR, self._on_transport_error),
        ]
        _LOGGER.debug("Created transport %r", self._transport)

    def _on_transport_state_changed(self, transport_state: TransportState) -> None:
        if self._state_machine.is_terminal:
            return

        if transport_state == TransportState.CONNECTED:
            if self._state_machine.is_connecting:
                self._protocol_start()
        elif transport_state == TransportState.UNCONNECTED:
            if self._state_machine.is_protocol_active:
                self._on_session_closed()
            elif self._state_machine.is_connecting:
                self._on_connect_dropped()

    def _on_transport_error(self, code: TransportErrorCode) -> None:
        if self._state_machine.is_terminal:
            return

        error = error_for_code(code, self._endpoint)
        if error is None:
            _LOGGER.debug("Ignoring transport condition %s", code.name)
            return

        self._emit_error(error)

    def _on_readable(self) -> None:
        self._events.emit(ClientEvent.READABLE)

    def _on_bytes_written(self, count: int) -> None:
        self._events.emit(ClientEvent.WRITE_DRAINED, count)

    # ------------------------------------------------------------------
    # Timer notifications
    # ------------------------------------------------------------------

    def _on_connect_timeout(self) -> None:
        if self._state_machine.is_terminal:
            return

        _LOGGER.warning(
            "Connect to %s timed out after %.3fs",
            self._endpoint,
            self._policy.connect_timeout,
        )
        self._emit_error(ConnectTimeoutError(MSG_CONNECT_TIMEOUT))

    def _on_reconnect_sleep(self) -> None:
        if self._state_machine.is_terminal:
            return

        _LOGGER.debug("Reconnect sleep elapsed, restarting")
        self.start()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def _protocol_start(self) -> None:
        if self._attempts >= self._policy.max_retries:
            self._emit_error(
                MaxRetriesExceededError(MSG_MAX_RETRIES, attempts=self._attempts)
            )
            return

        self._stop_timers()
        if self._policy.counting is RetryCounting.SESSIONS:
            self._attempts += 1
        else:
            self._attempts = 0

        self._session_subscriptions = [
            self._transport.subscribe(TransportEvent.READABLE, self._on_readable),
            self._transport.subscribe(
                TransportEvent.BYTES_WRITTEN, self._on_bytes_written
            ),
        ]
        self._session_open = True
        self._state_machine.transition(ConnectionEvent.CONNECTED)
        self.protocol_started()

    def _protocol_stop(self) -> None:
        # Runs once per session even if protocol_stopped() re-enters stop()
        if not self._session_open:
            return
        self._session_open = False

        self._unsubscribe_session()
        if self._policy.counting is RetryCounting.SESSIONS:
            self._attempts -= 1
        self._transport.abort()
        _LOGGER.info("Protocol session with %s stopped", self._endpoint)
        self.protocol_stopped()

    def _on_session_closed(self) -> None:
        """Peer closed an active session."""
        if not self._policy.auto_reconnect:
            self._emit_done()
            return

        self._protocol_stop()
        if self._state_machine.is_terminal:
            return
        self._state_machine.transition(ConnectionEvent.CONNECTION_DROPPED)
        self._schedule_reconnect()

    def _on_connect_dropped(self) -> None:
        """Connect attempt ended before a session started.

        Without auto_reconnect the attempt stays in CONNECTING with its
        connect timeout armed: a later start() reconnects within the same
        deadline, otherwise the timeout ends the lifecycle.
        """
        if self._policy.counting is RetryCounting.FAILURES:
            self._attempts += 1

        _LOGGER.debug(
            "Connect attempt to %s ended without a session (attempts: %d/%d)",
            self._endpoint,
            self._attempts,
            self._policy.max_retries,
        )
        if self._policy.auto_reconnect:
            self._state_machine.transition(ConnectionEvent.CONNECTION_DROPPED)
            self._schedule_reconnect()

    def _schedule_reconnect(self) -> None:
        self._connect_timer.cancel()
        self._reconnect_timer.arm(self._policy.reconnect_sleep)
        _LOGGER.debug(
            "Reconnecting to %s in %.3fs", self._endpoint, self._policy.reconnect_sleep
        )

    # ------------------------------------------------------------------
    # Terminal paths
    # ------------------------------------------------------------------

    def _emit_error(self, error: ClientError) -> None:
        if self._state_machine.is_terminal:
            _LOGGER.debug("Suppressing error after termination: %s", error)
            return

        self._last_error = error
        self._state_machine.transition(ConnectionEvent.FAIL)
        self._teardown()
        self._resolve_waiter(error)
        self._events.emit(ClientEvent.ERROR, str(error))

    def _emit_done(self) -> None:
        if self._state_machine.is_terminal:
            _LOGGER.debug("Suppressing done after termination")
            return

        self._state_machine.transition(ConnectionEvent.STOP)
        self._teardown()
        self._resolve_waiter(None)
        self._events.emit(ClientEvent.DONE)

    def _teardown(self) -> None:
        """Release timers, subscriptions and the transport connection.

        Called after the terminal transition, so hooks run from here see a
        terminal state and cannot start a second teardown.
        """
        self._stop_timers()

        # Unsubscribe before aborting so nothing from this transport
        # drives another transition
        for unsubscribe in self._transport_subscriptions:
            unsubscribe()
        self._transport_subscriptions = []

        if self._session_open:
            self._protocol_stop()
        elif self._transport is not None:
            self._transport.abort()

    def _unsubscribe_session(self) -> None:
        for unsubscribe in self._session_subscriptions:
            unsubscribe()
        self._session_subscriptions = []

    def _stop_timers(self) -> None:
        self._connect_timer.cancel()
        self._reconnect_timer.cancel()

    def _resolve_waiter(self, error: Optional[ClientError]) -> None:
        waiter = self._closed_waiter
        if waiter is None or waiter.done():
            return
        if error is None:
            waiter.set_result(None)
        else:
            waiter.set_exception(error)

    def __repr__(self) -> str:
        """Developer representation."""
        return (
            f"ConnectionManager(endpoint={self._endpoint}, state={self.state.name}, "
            f"attempts={self._attempts})"
        )
