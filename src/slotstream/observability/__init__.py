"""Observability — a unified event model for streams and grid updates.

Aggregates events from:
- **Pounce**: Connection lifecycle (open, request, response, disconnect, close)
- **Slotstream**: Stream attach/close, frame renders, hover triggers

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from multiple threads.

Quick Start:
    >>> from slotstream.observability import StackCollector, EventLog
    >>> log = EventLog()
    >>> collector = StackCollector(log)
    >>> # Pass collector to Pounce as lifecycle_collector
    >>> # GridState records frames via collector.record_frame(...)

"""

from slotstream.observability.collector import StackCollector
from slotstream.observability.events import (
    FrameRendered,
    HoverReceived,
    StackEvent,
    StreamClosed,
    StreamOpened,
    now_ns,
)
from slotstream.observability.log import EventLog

__all__ = [
    "EventLog",
    "FrameRendered",
    "HoverReceived",
    "StackCollector",
    "StackEvent",
    "StreamClosed",
    "StreamOpened",
    "now_ns",
]
