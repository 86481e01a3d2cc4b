"""Stream sink — the bounded, lossy channel between renderer and transport.

The producer side (``enqueue``) never blocks and never raises: a chunk that
does not fit, or arrives after the consumer has gone, is dropped and counted.
The consumer side is an async iterator drained by the HTTP response.

Thread Safety:
    Backed by ``asyncio.Queue``.  Producer and consumer must share the event
    loop that serves the connection.

"""

from __future__ import annotations

import asyncio
import uuid
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from slotstream._types import Chunk, StreamID

DEFAULT_CAPACITY: Final = 1000

# End-of-stream marker; always has a reserved slot in the queue.
_EOF: Final = object()


class StreamSink:
    """Ordered chunk queue for one streamed response.

    Args:
        capacity: Maximum number of chunks waiting to be consumed.
        stream_id: Identifier used in observability events.  A random id
            is generated when omitted.

    """

    __slots__ = ("_capacity", "_closed", "_disconnected", "_dropped", "_queue", "stream_id")

    def __init__(self, capacity: int = DEFAULT_CAPACITY, *, stream_id: StreamID | None = None) -> None:
        self.stream_id: StreamID = stream_id or uuid.uuid4().hex
        self._capacity = capacity
        # One extra slot so close() can always deliver EOF.
        self._queue: asyncio.Queue[Chunk | object] = asyncio.Queue(maxsize=capacity + 1)
        self._closed = False
        self._disconnected = False
        self._dropped = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def pending(self) -> int:
        """Chunks enqueued but not yet taken by the consumer."""
        # EOF is always last, so once it is taken the queue is empty.
        eof = 1 if self._closed else 0
        return max(self._queue.qsize() - eof, 0)

    @property
    def dropped(self) -> int:
        """Chunks discarded because the sink was full, closed or disconnected."""
        return self._dropped

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def disconnected(self) -> bool:
        return self._disconnected

    @property
    def accepting(self) -> bool:
        """True while enqueued chunks can still reach a consumer."""
        return not (self._closed or self._disconnected)

    def enqueue(self, chunk: Chunk) -> bool:
        """Append *chunk* to the stream.

        Returns False when the chunk was dropped.  Never blocks.
        """
        if not self.accepting or self._queue.qsize() >= self._capacity:
            self._dropped += 1
            return False
        try:
            self._queue.put_nowait(chunk)
        except asyncio.QueueFull:
            self._dropped += 1
            return False
        return True

    def close(self) -> None:
        """End the stream from the producer side.

        The consumer still receives everything already queued, then stops.
        """
        if self._closed:
            return
        self._closed = True
        if not self._disconnected:
            self._queue.put_nowait(_EOF)

    def disconnect(self) -> None:
        """Mark the consumer as gone; later chunks are discarded."""
        if self._disconnected:
            return
        self._disconnected = True
        while not self._queue.empty():
            self._queue.get_nowait()

    def drain_nowait(self) -> list[Chunk]:
        """Take every chunk currently queued without waiting.

        Stops at end-of-stream, leaving the marker in place.
        """
        chunks: list[Chunk] = []
        while not self._queue.empty():
            item = self._queue.get_nowait()
            if item is _EOF:
                self._queue.put_nowait(_EOF)
                break
            chunks.append(item)  # type: ignore[arg-type]
        return chunks

    async def chunks(self) -> AsyncIterator[Chunk]:
        """Yield chunks in enqueue order until the producer closes the sink.

        Catches ``CancelledError`` (client disconnect / task cancellation)
        and ``GeneratorExit`` (generator cleanup) so a dropped connection
        ends iteration quietly.

        """
        try:
            while True:
                item = await self._queue.get()
                if item is _EOF:
                    return
                yield item  # type: ignore[misc]
        except (asyncio.CancelledError, GeneratorExit):
            return

    def __aiter__(self) -> AsyncIterator[Chunk]:
        return self.chunks()
