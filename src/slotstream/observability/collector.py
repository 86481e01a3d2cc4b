"""Stack collector — one place for every component to report into.

Implements Pounce's ``LifecycleCollector`` protocol so it can be passed
directly to the server.  Also provides typed methods for the stream and
grid events slotstream emits itself.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from typing import Any

from slotstream._types import CloseReason
from slotstream.observability.events import (
    FrameRendered,
    HoverReceived,
    StreamClosed,
    StreamOpened,
    now_ns,
)
from slotstream.observability.log import EventLog


class StackCollector:
    """Unified event collector.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Pounce LifecycleCollector protocol -----

    def record(self, event: Any) -> None:
        """Record a Pounce lifecycle event as-is."""
        self._log.append(event)

    # ----- Stream events -----

    def record_stream_opened(self, stream_id: str, *, superseded: str | None = None) -> None:
        self._log.append(
            StreamOpened(stream_id=stream_id, superseded=superseded, timestamp_ns=now_ns())
        )

    def record_stream_closed(
        self,
        stream_id: str,
        *,
        reason: CloseReason,
        dropped: int = 0,
    ) -> None:
        self._log.append(
            StreamClosed(
                stream_id=stream_id,
                reason=reason,
                dropped=dropped,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Grid events -----

    def record_frame(
        self,
        stream_id: str,
        *,
        render_pass: int,
        root_mount: int,
        size_bytes: int,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a grid frame pushed through a renderer."""
        self._log.append(
            FrameRendered(
                stream_id=stream_id,
                render_pass=render_pass,
                root_mount=root_mount,
                size_bytes=size_bytes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_hover(self, x: int, y: int, *, value: int, token: str = "") -> None:
        self._log.append(
            HoverReceived(x=x, y=y, value=value, token=token, timestamp_ns=now_ns())
        )
