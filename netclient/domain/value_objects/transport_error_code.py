"""Transport error codes.

Closed set of socket-level failure kinds a transport can report. Concrete
transports translate their native errors (errno values, resolver failures)
into these codes.
"""

from enum import Enum, auto


class TransportErrorCode(Enum):
    """Socket-level error kinds."""

    CONNECTION_REFUSED = auto()  # Peer refused the connection
    REMOTE_HOST_CLOSED = auto()  # Peer closed or reset the connection
    HOST_NOT_FOUND = auto()  # Name resolution failed
    SOCKET_ACCESS = auto()  # Insufficient privileges
    SOCKET_RESOURCE = auto()  # Out of memory, buffers or descriptors
    SOCKET_TIMEOUT = auto()  # A socket operation timed out
    DATAGRAM_TOO_LARGE = auto()  # Message larger than the OS limit
    NETWORK = auto()  # Network down or unreachable
    ADDRESS_IN_USE = auto()  # Local address already bound
    ADDRESS_NOT_AVAILABLE = auto()  # Local address not assignable
    UNSUPPORTED_OPERATION = auto()  # Operation or family not supported
    PROXY_AUTHENTICATION_REQUIRED = auto()
    PROXY_PROTOCOL = auto()  # Proxy spoke an unexpected protocol
    UNKNOWN_SOCKET = auto()  # Unidentified socket error

    # Not enumerated by the classifier; reported as unknown
    PROXY_CONNECTION_REFUSED = auto()
    PROXY_CONNECTION_CLOSED = auto()
    PROXY_CONNECTION_TIMEOUT = auto()
    PROXY_NOT_FOUND = auto()
    SSL_HANDSHAKE_FAILED = auto()
    OPERATION_ERROR = auto()
    TEMPORARY_ERROR = auto()
