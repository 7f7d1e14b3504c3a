"""Lifecycle state machine for a connection manager."""

import logging
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

_LOGGER = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection manager states."""

    IDLE = auto()
    CONNECTING = auto()
    PROTOCOL_ACTIVE = auto()
    STOPPED = auto()
    FAILED = auto()


class ConnectionEvent(Enum):
    """Inputs accepted by the lifecycle table."""

    START = auto()
    CONNECTED = auto()
    CONNECTION_DROPPED = auto()
    STOP = auto()
    FAIL = auto()
    RESET = auto()


LIVE_STATES = (
    ConnectionState.IDLE,
    ConnectionState.CONNECTING,
    ConnectionState.PROTOCOL_ACTIVE,
)
TERMINAL_STATES = (ConnectionState.STOPPED, ConnectionState.FAILED)

_TRANSITIONS: Dict[Tuple[ConnectionState, ConnectionEvent], ConnectionState] = {
    (ConnectionState.IDLE, ConnectionEvent.START): ConnectionState.CONNECTING,
    (ConnectionState.CONNECTING, ConnectionEvent.CONNECTED): (
        ConnectionState.PROTOCOL_ACTIVE
    ),
    (ConnectionState.CONNECTING, ConnectionEvent.CONNECTION_DROPPED): (
        ConnectionState.IDLE
    ),
    (ConnectionState.PROTOCOL_ACTIVE, ConnectionEvent.CONNECTION_DROPPED): (
        ConnectionState.IDLE
    ),
    **{(live, ConnectionEvent.STOP): ConnectionState.STOPPED for live in LIVE_STATES},
    **{(live, ConnectionEvent.FAIL): ConnectionState.FAILED for live in LIVE_STATES},
    **{(done, ConnectionEvent.RESET): ConnectionState.IDLE for done in TERMINAL_STATES},
}


class ConnectionStateMachine:
    """Table-driven validator for the connection lifecycle.

    Table:
        IDLE --START--> CONNECTING --CONNECTED--> PROTOCOL_ACTIVE
        CONNECTING, PROTOCOL_ACTIVE --CONNECTION_DROPPED--> IDLE
        any live state --STOP--> STOPPED, --FAIL--> FAILED
        STOPPED, FAILED --RESET--> IDLE

    Events not in the table are rejected and leave the state unchanged, so
    terminal states absorb everything except RESET.

    Example:
        >>> lifecycle = ConnectionStateMachine()
        >>> lifecycle.transition(ConnectionEvent.START)
        True
        >>> lifecycle.transition(ConnectionEvent.RESET)
        False
        >>> lifecycle.state.name
        'CONNECTING'
    """

    def __init__(self):
        """Start in IDLE with no entry callbacks."""
        self._state = ConnectionState.IDLE
        self._previous_state: Optional[ConnectionState] = None
        self._entry_callbacks: Dict[ConnectionState, List[Callable[[], None]]] = {}

    @property
    def state(self) -> ConnectionState:
        """Current state."""
        return self._state

    @property
    def previous_state(self) -> Optional[ConnectionState]:
        """State left by the last accepted transition."""
        return self._previous_state

    @property
    def is_protocol_active(self) -> bool:
        """Check if a protocol session is active."""
        return self._state is ConnectionState.PROTOCOL_ACTIVE

    @property
    def is_connecting(self) -> bool:
        """Check if a connect attempt is in flight."""
        return self._state is ConnectionState.CONNECTING

    @property
    def is_terminal(self) -> bool:
        """Check if the lifecycle has ended (STOPPED or FAILED)."""
        return self._state in TERMINAL_STATES

    @property
    def can_start(self) -> bool:
        """Check if start() may (re)enter a connect attempt."""
        return self.can_transition(ConnectionEvent.START) or self.is_connecting

    def can_transition(self, event: ConnectionEvent) -> bool:
        """Check if event is accepted in the current state."""
        return (self._state, event) in _TRANSITIONS

    def transition(self, event: ConnectionEvent) -> bool:
        """Apply event.

        Entry callbacks of the new state run after the state has changed.

        Args:
            event: Lifecycle input

        Returns:
            False if the table rejects event in the current state
        """
        target = _TRANSITIONS.get((self._state, event))
        if target is None:
            _LOGGER.debug("Rejected %s in state %s", event.name, self._state.name)
            return False

        self._previous_state, self._state = self._state, target
        _LOGGER.debug(
            "Lifecycle %s -> %s on %s",
            self._previous_state.name,
            target.name,
            event.name,
        )

        for callback in list(self._entry_callbacks.get(target, ())):
            try:
                callback()
            except Exception as err:
                _LOGGER.error(
                    "Entry callback for %s failed: %s", target.name, err, exc_info=True
                )
        return True

    def on_state(self, state: ConnectionState, callback: Callable[[], None]) -> None:
        """Run callback every time state is entered.

        Args:
            state: State to watch
            callback: Called without arguments
        """
        self._entry_callbacks.setdefault(state, []).append(callback)

    def __str__(self) -> str:
        """Readable form."""
        return f"ConnectionStateMachine({self._state.name})"

    def __repr__(self) -> str:
        """Developer representation."""
        previous = self._previous_state.name if self._previous_state else None
        return (
            f"<ConnectionStateMachine state={self._state.name} previous={previous}>"
        )
