"""Custom exceptions for the netclient connection core.

This module defines the error taxonomy surfaced by a connection manager.
Every terminal failure is represented by a ClientError subclass; its string
form is the message delivered through the error event.
"""

from typing import Optional


class ClientError(Exception):
    """Base class for terminal connection failures."""


class ConnectTimeoutError(ClientError):
    """Asynchronous connect did not complete within the connect timeout."""


class MaxRetriesExceededError(ClientError):
    """The attempt counter reached the retry policy bound.

    Attributes:
        attempts: Counter value when the bound was hit
    """

    def __init__(self, message: str, attempts: int = 0):
        self.attempts = attempts
        super().__init__(message)


class HostNotFoundError(ClientError):
    """The endpoint host name could not be resolved.

    Attributes:
        endpoint: Endpoint that failed to resolve
    """

    def __init__(self, message: str, endpoint=None):
        self.endpoint = endpoint
        super().__init__(message)


class FatalTransportError(ClientError):
    """Known-bad transport condition (access, resources, address in use, ...).

    Attributes:
        code: TransportErrorCode that caused the failure
    """

    def __init__(self, message: str, code=None):
        self.code = code
        super().__init__(message)


class UnknownTransportError(FatalTransportError):
    """Transport condition the classifier does not enumerate."""


class NotConnectedError(Exception):
    """Operation requires an active protocol session.

    Raised by write/read when the connection manager is not protocol-active.
    This is a usage error, not a connection failure, so it is never delivered
    through the error event.
    """


class TransportError(Exception):
    """Low-level transport failure raised by ITransport operations.

    Attributes:
        code: TransportErrorCode describing the failure
    """

    def __init__(self, message: str, code: Optional[object] = None):
        self.code = code
        super().__init__(message)
