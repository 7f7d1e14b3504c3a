"""Write result DTO."""

from dataclasses import dataclass


@dataclass
class WriteResult:
    """Result of writing a buffer to a transport.

    Delivery is best-effort: on failure, bytes_written reports how much the
    transport accepted before the error and the rest of the buffer is dropped.

    Attributes:
        success: Whether the whole buffer was accepted
        bytes_written: Number of bytes accepted by the transport
        error: Error description if failed
    """

    success: bool
    bytes_written: int = 0
    error: str = ""
