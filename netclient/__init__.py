# Copyright (c) 2026 netclient Contributors
# Licensed under the MIT License
# See LICENSE file for full license text

"""Reconnecting TCP client transport core.

netclient owns a single outbound TCP connection to a fixed endpoint and
drives it through connect, protocol-active and stop/fail, so that a protocol
layer (such as an XML-RPC client) only deals with bytes.

Example:
    >>> from netclient import ConnectionManager, Endpoint, RetryPolicy
    >>> manager = ConnectionManager(Endpoint("example.test", 9999), RetryPolicy())
    >>> manager.start()
"""

from .config import ClientConfig, load_client_config, load_client_config_file
from .domain.exceptions import (
    ClientError,
    ConnectTimeoutError,
    FatalTransportError,
    HostNotFoundError,
    MaxRetriesExceededError,
    NotConnectedError,
    TransportError,
    UnknownTransportError,
)
from .domain.value_objects import (
    ClientEvent,
    Endpoint,
    RetryCounting,
    RetryPolicy,
    WriteResult,
)
from .infrastructure.state_machines import ConnectionState
from .infrastructure.transport import ConnectionManager, TcpTransport

__all__ = [
    "ClientConfig",
    "ClientError",
    "ClientEvent",
    "ConnectTimeoutError",
    "ConnectionManager",
    "ConnectionState",
    "Endpoint",
    "FatalTransportError",
    "HostNotFoundError",
    "MaxRetriesExceededError",
    "NotConnectedError",
    "RetryCounting",
    "RetryPolicy",
    "TcpTransport",
    "TransportError",
    "UnknownTransportError",
    "WriteResult",
    "load_client_config",
    "load_client_config_file",
]
