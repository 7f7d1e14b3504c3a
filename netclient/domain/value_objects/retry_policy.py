"""RetryPolicy value object."""

from dataclasses import dataclass

from ...const import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RECONNECT_SLEEP,
)
from .retry_counting import RetryCounting


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable connection retry configuration.

    Attributes:
        max_retries: Bound checked by the attempt counter before every
            (re)connect attempt
        connect_timeout: Seconds allowed for an asynchronous connect
        reconnect_sleep: Seconds to wait before a new attempt when
            auto_reconnect is enabled
        counting: What the attempt counter counts
        auto_reconnect: Schedule a new attempt after the connection drops

    Example:
        >>> policy = RetryPolicy(max_retries=3, connect_timeout=0.1)
        >>> policy.counting
        <RetryCounting.SESSIONS: 'sessions'>
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    reconnect_sleep: float = DEFAULT_RECONNECT_SLEEP
    counting: RetryCounting = RetryCounting.SESSIONS
    auto_reconnect: bool = False

    def __post_init__(self) -> None:
        """Validate bounds.

        Raises:
            ValueError: If max_retries is negative or a duration is not positive
        """
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.connect_timeout <= 0:
            raise ValueError(
                f"connect_timeout must be positive, got {self.connect_timeout}"
            )
        if self.reconnect_sleep <= 0:
            raise ValueError(
                f"reconnect_sleep must be positive, got {self.reconnect_sleep}"
            )
        if not isinstance(self.counting, RetryCounting):
            raise TypeError(
                f"counting must be RetryCounting, got {type(self.counting).__name__}"
            )
