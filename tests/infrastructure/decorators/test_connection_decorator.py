"""Tests for connection decorator."""

import pytest

from netclient.domain.exceptions import NotConnectedError
from netclient.infrastructure.decorators.connection_decorator import (
    require_protocol_active,
)
from netclient.infrastructure.state_machines import ConnectionState


class Session:
    """Minimal object exposing the attributes the decorator reads."""

    def __init__(self, active: bool, state=None):
        self.is_protocol_active = active
        if state is not None:
            self.state = state

    @require_protocol_active("write")
    def write(self, data: bytes) -> int:
        return len(data)

    @require_protocol_active()
    def read(self) -> bytes:
        return b"data"


class TestRequireProtocolActive:
    """Test protocol session decorator."""

    def test_active_session_runs_method(self):
        """Test method runs while the session is active."""
        session = Session(active=True)
        assert session.write(b"PING") == 4

    def test_inactive_session_raises(self):
        """Test NotConnectedError names the operation and state."""
        session = Session(active=False, state=ConnectionState.CONNECTING)

        with pytest.raises(NotConnectedError) as exc_info:
            session.write(b"PING")

        assert str(exc_info.value) == "Cannot write: not connected (state: CONNECTING)"

    def test_default_operation_name(self):
        """Test function name is used when no operation name is given."""
        session = Session(active=False)

        with pytest.raises(NotConnectedError, match="^Cannot read: not connected$"):
            session.read()

    def test_preserves_function_metadata(self):
        """Test functools.wraps keeps the wrapped name."""
        assert Session.write.__name__ == "write"
