"""Translation of native socket errors into transport error codes."""

import errno
import socket
from typing import Dict

from ...domain.value_objects import TransportErrorCode

_ERRNO_CODES: Dict[int, TransportErrorCode] = {
    errno.ECONNREFUSED: TransportErrorCode.CONNECTION_REFUSED,
    errno.ETIMEDOUT: TransportErrorCode.SOCKET_TIMEOUT,
    errno.ECONNRESET: TransportErrorCode.REMOTE_HOST_CLOSED,
    errno.ECONNABORTED: TransportErrorCode.REMOTE_HOST_CLOSED,
    errno.EPIPE: TransportErrorCode.REMOTE_HOST_CLOSED,
    errno.EACCES: TransportErrorCode.SOCKET_ACCESS,
    errno.EPERM: TransportErrorCode.SOCKET_ACCESS,
    errno.ENOMEM: TransportErrorCode.SOCKET_RESOURCE,
    errno.ENOBUFS: TransportErrorCode.SOCKET_RESOURCE,
    errno.EMFILE: TransportErrorCode.SOCKET_RESOURCE,
    errno.ENFILE: TransportErrorCode.SOCKET_RESOURCE,
    errno.EMSGSIZE: TransportErrorCode.DATAGRAM_TOO_LARGE,
    errno.EADDRINUSE: TransportErrorCode.ADDRESS_IN_USE,
    errno.EADDRNOTAVAIL: TransportErrorCode.ADDRESS_NOT_AVAILABLE,
    errno.ENETDOWN: TransportErrorCode.NETWORK,
    errno.ENETUNREACH: TransportErrorCode.NETWORK,
    errno.ENETRESET: TransportErrorCode.NETWORK,
    errno.EHOSTUNREACH: TransportErrorCode.NETWORK,
    errno.EOPNOTSUPP: TransportErrorCode.UNSUPPORTED_OPERATION,
    errno.EAFNOSUPPORT: TransportErrorCode.UNSUPPORTED_OPERATION,
    errno.EPROTONOSUPPORT: TransportErrorCode.UNSUPPORTED_OPERATION,
    errno.EAGAIN: TransportErrorCode.TEMPORARY_ERROR,
}


def error_code_from_exception(exc: BaseException) -> TransportErrorCode:
    """Map an exception raised by the socket layer to a TransportErrorCode.

    Args:
        exc: Exception from getaddrinfo, connect, send or the asyncio
            transport's connection_lost

    Returns:
        Matching code; UNKNOWN_SOCKET when nothing matches

    Example:
        >>> error_code_from_exception(ConnectionRefusedError(errno.ECONNREFUSED, "refused"))
        <TransportErrorCode.CONNECTION_REFUSED: 1>
        >>> error_code_from_exception(socket.gaierror(socket.EAI_NONAME, "unknown"))
        <TransportErrorCode.HOST_NOT_FOUND: 3>
    """
    # gaierror numbers live in their own namespace, check before errno
    if isinstance(exc, socket.gaierror):
        return TransportErrorCode.HOST_NOT_FOUND

    if isinstance(exc, OSError) and exc.errno in _ERRNO_CODES:
        return _ERRNO_CODES[exc.errno]

    if isinstance(exc, ConnectionRefusedError):
        return TransportErrorCode.CONNECTION_REFUSED
    if isinstance(exc, (ConnectionResetError, ConnectionAbortedError, BrokenPipeError)):
        return TransportErrorCode.REMOTE_HOST_CLOSED
    if isinstance(exc, TimeoutError):
        return TransportErrorCode.SOCKET_TIMEOUT

    return TransportErrorCode.UNKNOWN_SOCKET
