"""Pytest configuration and fixtures for netclient tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import netclient
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from netclient.domain.value_objects import Endpoint, RetryPolicy
from netclient.infrastructure.transport import ConnectionManager
from tests.doubles import EventRecorder, FakeTimerFactory, FakeTransport


@pytest.fixture
def endpoint() -> Endpoint:
    """Endpoint used across tests."""
    return Endpoint("example.test", 9999)


@pytest.fixture
def policy() -> RetryPolicy:
    """Default retry policy with a short connect timeout."""
    return RetryPolicy(max_retries=10, connect_timeout=0.1, reconnect_sleep=0.05)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Create fake transport."""
    return FakeTransport()


@pytest.fixture
def timers() -> FakeTimerFactory:
    """Create fake timer factory."""
    return FakeTimerFactory()


@pytest.fixture
def make_manager(endpoint, policy, fake_transport, timers):
    """Build connection managers wired to the fake transport and timers."""

    def _make(policy_override: RetryPolicy | None = None, manager_cls=ConnectionManager):
        return manager_cls(
            endpoint,
            policy_override or policy,
            transport_factory=lambda: fake_transport,
            timer_factory=timers,
        )

    return _make


@pytest.fixture
def manager(make_manager):
    """Connection manager with fake transport and timers."""
    return make_manager()


@pytest.fixture
def events(manager) -> EventRecorder:
    """Record every client event emitted by the manager fixture."""
    return EventRecorder(manager)
