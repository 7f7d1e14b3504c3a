"""State machines for managing complex state transitions."""

from .connection_state_machine import (
    ConnectionStateMachine,
    ConnectionState,
    ConnectionEvent,
)

__all__ = [
    "ConnectionStateMachine",
    "ConnectionState",
    "ConnectionEvent",
]
