"""ITimer interface for single-shot timers."""

from abc import ABC, abstractmethod


class ITimer(ABC):
    """Single-shot countdown timer.

    The callback is bound at construction. Arming an armed timer restarts the
    countdown. A fired timer is no longer armed when its callback runs.

    Example:
        >>> timer = AsyncioTimer(on_timeout)
        >>> timer.arm(0.1)
        >>> timer.is_armed
        True
        >>> timer.cancel()
        >>> timer.is_armed
        False
    """

    @abstractmethod
    def arm(self, duration: float) -> None:
        """Start (or restart) the countdown.

        Args:
            duration: Seconds until the callback fires
        """

    @abstractmethod
    def cancel(self) -> None:
        """Stop the countdown. Safe to call when not armed."""

    @property
    @abstractmethod
    def is_armed(self) -> bool:
        """Check if the countdown is running."""
