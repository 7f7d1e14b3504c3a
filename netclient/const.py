"""Constants for the netclient connection core.

This file contains only the defaults and messages shared by the domain and
infrastructure layers.
"""

from __future__ import annotations

# Retry policy defaults
DEFAULT_MAX_RETRIES = 10
DEFAULT_CONNECT_TIMEOUT = 10.0  # seconds
DEFAULT_RECONNECT_SLEEP = 1.0  # seconds

# Error messages surfaced through the error event
MSG_CONNECT_TIMEOUT = "Connect timeout"
MSG_MAX_RETRIES = "Maximum protocol retries reached"
MSG_HOST_NOT_FOUND = "Host not found: {endpoint}"
MSG_BAD_SOCKET_ERROR = "Bad socket error"
MSG_UNKNOWN_SOCKET_ERROR = "Unknown socket error"
