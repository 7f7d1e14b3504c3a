"""Domain interfaces for netclient.

Infrastructure implementations fulfil these contracts. Using them enables:
- Testability: deterministic fakes replace sockets and clocks in tests
- Flexibility: swap the asyncio TCP transport without touching the manager
"""

from .i_timer import ITimer
from .i_transport import ITransport

__all__ = [
    "ITimer",
    "ITransport",
]
