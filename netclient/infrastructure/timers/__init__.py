"""Timer implementations."""

from .asyncio_timer import AsyncioTimer

__all__ = [
    "AsyncioTimer",
]
