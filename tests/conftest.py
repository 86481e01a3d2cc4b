"""Shared test fixtures for slotstream."""

from __future__ import annotations

import pytest

from slotstream.observability import EventLog, StackCollector
from slotstream.protocol.sink import StreamSink
from slotstream.state import GridState


@pytest.fixture
def sink() -> StreamSink:
    """A sink roomy enough that nothing in a unit test is dropped."""
    return StreamSink(capacity=10_000)


@pytest.fixture
def collector() -> StackCollector:
    return StackCollector(EventLog())


@pytest.fixture
def state(collector: StackCollector) -> GridState:
    """A default 10x10 grid wired to the collector fixture."""
    return GridState(collector=collector)
