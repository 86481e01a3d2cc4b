"""Tests for slotstream.protocol.sink — bounded, lossy chunk delivery."""

from __future__ import annotations

import asyncio

import pytest

from slotstream.protocol.sink import DEFAULT_CAPACITY, StreamSink


async def _collect(sink: StreamSink) -> list[str]:
    return [chunk async for chunk in sink]


class TestEnqueue:
    """Producer side: never blocks, never raises."""

    def test_default_capacity(self) -> None:
        assert StreamSink().capacity == DEFAULT_CAPACITY == 1000

    def test_enqueue_accepts_until_full(self) -> None:
        sink = StreamSink(capacity=3)
        assert [sink.enqueue(c) for c in "abc"] == [True, True, True]
        assert sink.pending == 3
        assert sink.dropped == 0

    def test_overflow_is_dropped_not_blocked(self) -> None:
        sink = StreamSink(capacity=5)
        results = [sink.enqueue(str(i)) for i in range(50)]

        assert results.count(True) == 5
        assert sink.pending == 5
        assert sink.dropped == 45
        # The survivors are the oldest chunks, in order.
        assert sink.drain_nowait() == ["0", "1", "2", "3", "4"]

    def test_room_frees_up_after_consumption(self) -> None:
        sink = StreamSink(capacity=2)
        sink.enqueue("a")
        sink.enqueue("b")
        assert not sink.enqueue("c")

        assert sink.drain_nowait() == ["a", "b"]
        assert sink.enqueue("d")
        assert sink.drain_nowait() == ["d"]

    def test_enqueue_after_disconnect_is_dropped(self) -> None:
        sink = StreamSink()
        sink.enqueue("kept")
        sink.disconnect()

        assert not sink.enqueue("late")
        assert sink.pending == 0
        assert sink.dropped == 1

    def test_enqueue_after_close_is_dropped(self) -> None:
        sink = StreamSink()
        sink.close()
        assert not sink.enqueue("late")
        assert sink.dropped == 1

    def test_stream_ids_are_unique(self) -> None:
        assert StreamSink().stream_id != StreamSink().stream_id

    def test_explicit_stream_id(self) -> None:
        assert StreamSink(stream_id="abc").stream_id == "abc"


class TestConsumption:
    """Consumer side: FIFO async iteration, finite only after close()."""

    @pytest.mark.asyncio
    async def test_fifo_order(self) -> None:
        sink = StreamSink()
        chunks = [f"<p>{i}</p>" for i in range(100)]
        for chunk in chunks:
            sink.enqueue(chunk)
        sink.close()

        assert await _collect(sink) == chunks

    @pytest.mark.asyncio
    async def test_close_delivers_eof_even_when_full(self) -> None:
        sink = StreamSink(capacity=2)
        sink.enqueue("a")
        sink.enqueue("b")
        sink.close()

        assert await asyncio.wait_for(_collect(sink), timeout=1) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        sink = StreamSink()
        sink.enqueue("x")
        sink.close()
        sink.close()
        assert sink.pending == 1
        assert await _collect(sink) == ["x"]

    @pytest.mark.asyncio
    async def test_consumer_waits_for_producer(self) -> None:
        """Chunks enqueued while the consumer is parked reach it in order."""
        sink = StreamSink()
        consumer = asyncio.create_task(_collect(sink))

        await asyncio.sleep(0)
        assert not consumer.done()

        sink.enqueue("first")
        await asyncio.sleep(0)
        sink.enqueue("second")
        sink.close()

        assert await asyncio.wait_for(consumer, timeout=1) == ["first", "second"]

    @pytest.mark.asyncio
    async def test_cancelled_consumer_ends_quietly(self) -> None:
        sink = StreamSink()
        consumer = asyncio.create_task(_collect(sink))
        await asyncio.sleep(0)

        consumer.cancel()
        assert await asyncio.wait_for(consumer, timeout=1) == []

    @pytest.mark.asyncio
    async def test_chunks_are_not_replayed(self) -> None:
        sink = StreamSink()
        sink.enqueue("once")
        assert sink.drain_nowait() == ["once"]
        sink.close()
        assert await _collect(sink) == []

    def test_drain_stops_at_eof(self) -> None:
        sink = StreamSink()
        sink.enqueue("a")
        sink.close()

        assert sink.drain_nowait() == ["a"]
        assert sink.drain_nowait() == []
        assert sink.pending == 0


class TestStalledConsumer:
    """A stalled consumer costs chunks, never producer progress."""

    def test_producer_survives_stall(self) -> None:
        sink = StreamSink(capacity=10)
        for i in range(10_000):
            sink.enqueue(f"chunk-{i}")

        assert sink.pending == 10
        assert sink.dropped == 9_990
        assert sink.accepting
