"""Notification kinds published by transports and connection managers."""

from enum import Enum, auto


class TransportEvent(Enum):
    """Notifications published by an ITransport.

    Callback signatures:
        STATE_CHANGED: callback(state: TransportState)
        ERROR: callback(code: TransportErrorCode)
        READABLE: callback()
        BYTES_WRITTEN: callback(count: int)
    """

    STATE_CHANGED = auto()
    ERROR = auto()
    READABLE = auto()
    BYTES_WRITTEN = auto()


class ClientEvent(Enum):
    """Notifications published by a connection manager.

    Callback signatures:
        ERROR: callback(message: str)
        DONE: callback()
        READABLE: callback()
        WRITE_DRAINED: callback(count: int)
    """

    ERROR = auto()
    DONE = auto()
    READABLE = auto()
    WRITE_DRAINED = auto()
