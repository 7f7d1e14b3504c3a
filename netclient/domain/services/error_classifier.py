"""Transport error classification.

Pure mapping from transport error codes to the reaction a connection manager
takes. No state, no I/O.

Classification:
    IGNORABLE: expected mid-flight conditions (refused while probing, a
        sub-operation timeout, peer closing before protocol data)
    HOST_UNREACHABLE: name resolution failure
    FATAL: resource, permission, address or proxy failures
    UNKNOWN: anything not enumerated above
"""

import logging
from typing import Dict, Optional

from ...const import (
    MSG_BAD_SOCKET_ERROR,
    MSG_HOST_NOT_FOUND,
    MSG_UNKNOWN_SOCKET_ERROR,
)
from ..exceptions import (
    ClientError,
    FatalTransportError,
    HostNotFoundError,
    UnknownTransportError,
)
from ..value_objects import Endpoint, ErrorClass, TransportErrorCode

_LOGGER = logging.getLogger(__name__)

_CLASSIFICATION: Dict[TransportErrorCode, ErrorClass] = {
    TransportErrorCode.CONNECTION_REFUSED: ErrorClass.IGNORABLE,
    TransportErrorCode.SOCKET_TIMEOUT: ErrorClass.IGNORABLE,
    TransportErrorCode.REMOTE_HOST_CLOSED: ErrorClass.IGNORABLE,
    TransportErrorCode.HOST_NOT_FOUND: ErrorClass.HOST_UNREACHABLE,
    TransportErrorCode.SOCKET_ACCESS: ErrorClass.FATAL,
    TransportErrorCode.SOCKET_RESOURCE: ErrorClass.FATAL,
    TransportErrorCode.DATAGRAM_TOO_LARGE: ErrorClass.FATAL,
    TransportErrorCode.ADDRESS_IN_USE: ErrorClass.FATAL,
    TransportErrorCode.NETWORK: ErrorClass.FATAL,
    TransportErrorCode.ADDRESS_NOT_AVAILABLE: ErrorClass.FATAL,
    TransportErrorCode.UNSUPPORTED_OPERATION: ErrorClass.FATAL,
    TransportErrorCode.PROXY_AUTHENTICATION_REQUIRED: ErrorClass.FATAL,
    TransportErrorCode.PROXY_PROTOCOL: ErrorClass.FATAL,
    TransportErrorCode.UNKNOWN_SOCKET: ErrorClass.FATAL,
}


def classify_error(code: TransportErrorCode) -> ErrorClass:
    """Classify a transport error code.

    Args:
        code: Error reported by a transport

    Returns:
        ErrorClass for the code; UNKNOWN for anything not enumerated

    Example:
        >>> classify_error(TransportErrorCode.CONNECTION_REFUSED)
        <ErrorClass.IGNORABLE: 'ignorable'>
        >>> classify_error(TransportErrorCode.SSL_HANDSHAKE_FAILED)
        <ErrorClass.UNKNOWN: 'unknown'>
    """
    return _CLASSIFICATION.get(code, ErrorClass.UNKNOWN)


def error_for_code(
    code: TransportErrorCode, endpoint: Endpoint
) -> Optional[ClientError]:
    """Build the terminal error for a transport error code.

    Args:
        code: Error reported by a transport
        endpoint: Endpoint being connected to (used in host errors)

    Returns:
        ClientError to surface, or None if the code is ignorable
    """
    error_class = classify_error(code)

    if error_class is ErrorClass.IGNORABLE:
        return None

    if error_class is ErrorClass.HOST_UNREACHABLE:
        _LOGGER.warning("Host not found: %s", endpoint)
        return HostNotFoundError(
            MSG_HOST_NOT_FOUND.format(endpoint=endpoint), endpoint=endpoint
        )

    if error_class is ErrorClass.FATAL:
        _LOGGER.error("Bad socket error, aborting: %s", getattr(code, "name", code))
        return FatalTransportError(MSG_BAD_SOCKET_ERROR, code=code)

    _LOGGER.error("Unknown socket error: %s", getattr(code, "name", code))
    return UnknownTransportError(MSG_UNKNOWN_SOCKET_ERROR, code=code)
