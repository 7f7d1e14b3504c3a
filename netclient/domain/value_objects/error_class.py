"""Transport error classification."""

from enum import Enum


class ErrorClass(Enum):
    """How a connection manager reacts to a transport error."""

    IGNORABLE = "ignorable"  # Transient, no state change
    HOST_UNREACHABLE = "host_unreachable"  # Resolution failure, fatal
    FATAL = "fatal"  # Known-bad condition
    UNKNOWN = "unknown"  # Unexpected condition, fatal

    @property
    def is_fatal(self) -> bool:
        """Check if the error terminates the connection.

        Example:
            >>> ErrorClass.IGNORABLE.is_fatal
            False
            >>> ErrorClass.UNKNOWN.is_fatal
            True
        """
        return self is not ErrorClass.IGNORABLE
