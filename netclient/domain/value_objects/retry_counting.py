"""Retry counting strategy enum."""

from enum import Enum


class RetryCounting(Enum):
    """What the attempt counter of a connection manager counts.

    SESSIONS:
        Incremented when a protocol session becomes active and decremented
        when it stops. The counter tracks concurrently active sessions.
    FAILURES:
        Incremented for every connect attempt that ends before a protocol
        session becomes active. Reset to zero once a session starts.
    """

    SESSIONS = "sessions"
    FAILURES = "failures"
