"""Hand-written fakes for the netclient interfaces.

FakeTransport and FakeTimer implement ITransport and ITimer, so tests drive
socket progress and timer expiry by calling helper methods instead of
waiting on a real loop. EventRecorder captures what a manager emits.

Example:
    >>> from tests.doubles import FakeTransport
    >>> transport = FakeTransport()
    >>> transport.connect(Endpoint("example.test", 9999))
    >>> transport.complete_connect()
"""

from .fake_timer import FakeTimer, FakeTimerFactory
from .fake_transport import FakeTransport
from .event_recorder import EventRecorder

__all__ = [
    "FakeTimer",
    "FakeTimerFactory",
    "FakeTransport",
    "EventRecorder",
]
