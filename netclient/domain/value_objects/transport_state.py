"""Transport socket states."""

from enum import Enum, auto


class TransportState(Enum):
    """Lifecycle states reported by a byte-stream transport.

    State Transitions:
        UNCONNECTED -> HOST_LOOKUP -> CONNECTING -> CONNECTED
        CONNECTED -> CLOSING -> UNCONNECTED
        Any state -> UNCONNECTED (error or abort)
    """

    UNCONNECTED = auto()
    HOST_LOOKUP = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    CLOSING = auto()
