"""Transport implementations and the connection manager.

This module contains the asyncio TCP implementation of the transport
interface, the buffer writer, and the connection manager that drives the
connect → protocol-active → stop/fail lifecycle on top of them.
"""

from .tcp_transport import TcpTransport
from .writer import Writer
from .connection_manager import ConnectionManager

__all__ = [
    "TcpTransport",
    "Writer",
    "ConnectionManager",
]
