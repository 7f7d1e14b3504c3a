"""Endpoint value object.

Represents the fixed remote (host, port) a client connects to.
"""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Endpoint:
    """Immutable remote TCP endpoint.

    Attributes:
        host: Host name or IP address literal
        port: TCP port (0 - 65535)

    Example:
        >>> endpoint = Endpoint("example.test", 9999)
        >>> str(endpoint)
        'example.test:9999'

    Raises:
        TypeError: If host is not a string or port is not an int
        ValueError: If host is empty or port is outside uint16 range
    """

    host: str
    port: int

    MIN_PORT: ClassVar[int] = 0
    MAX_PORT: ClassVar[int] = 0xFFFF

    def __post_init__(self) -> None:
        """Validate host and port."""
        if not isinstance(self.host, str):
            raise TypeError(f"Host must be str, got {type(self.host).__name__}")
        if not self.host:
            raise ValueError("Host must not be empty")

        # bool is an int subclass but never a port
        if not isinstance(self.port, int) or isinstance(self.port, bool):
            raise TypeError(f"Port must be int, got {type(self.port).__name__}")
        if self.port < self.MIN_PORT or self.port > self.MAX_PORT:
            raise ValueError(
                f"Port must be between {self.MIN_PORT} and {self.MAX_PORT}, "
                f"got {self.port}"
            )

    def __str__(self) -> str:
        """Format as host:port."""
        return f"{self.host}:{self.port}"
