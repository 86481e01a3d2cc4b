"""Event model for slotstream observability.

Defines event types for stream lifecycle and grid rendering.
Pounce lifecycle events are stored alongside them unchanged.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass

from slotstream._types import CloseReason


# ---------------------------------------------------------------------------
# Stream lifecycle events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StreamOpened:
    """A client opened the document stream and a renderer was attached.

    Attributes:
        stream_id: Identifier of the new stream sink.
        superseded: Stream id of the renderer this one replaced, if any.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    stream_id: str
    superseded: str | None
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class StreamClosed:
    """The transport stopped draining a stream.

    Attributes:
        stream_id: Identifier of the stream sink.
        reason: ``eof`` when the producer closed it, ``disconnect`` when the
            client went away first.
        dropped: Chunks discarded over the stream's lifetime.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    stream_id: str
    reason: CloseReason
    dropped: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Grid events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FrameRendered:
    """A full grid frame was pushed through the attached renderer.

    Attributes:
        stream_id: Stream the frame was written to.
        render_pass: Render-pass counter embedded in the frame's ids.
        root_mount: Mount id now holding the frame.
        size_bytes: Length of the frame markup (UTF-8).
        duration_ms: Time spent composing and enqueueing.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    stream_id: str
    render_pass: int
    root_mount: int
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class HoverReceived:
    """A hover trigger updated a cell.

    Attributes:
        x: Row of the cell.
        y: Column of the cell.
        value: Cell value after the update.
        token: Render-pass token echoed back by the browser (not validated).
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    x: int
    y: int
    value: int
    token: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type StackEvent = StreamOpened | StreamClosed | FrameRendered | HoverReceived


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
