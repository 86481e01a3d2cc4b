"""Grid state — the shared object between page loads and hover triggers.

Holds the grid, the render-pass counter and the currently attached
renderer.  A page load attaches a fresh renderer; hover triggers mutate the
grid and, if a renderer is attached, stream a new frame through it.

Thread Safety:
    Every public method holds one ``threading.Lock`` for its whole duration,
    markup composition and enqueueing included.  Chunks from successive
    updates therefore reach the sink in the order the updates were applied.

"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Any

from slotstream.grid import empty_grid, preamble, render_grid
from slotstream.protocol.renderer import IncrementalRenderer
from slotstream.protocol.sink import DEFAULT_CAPACITY, StreamSink

if TYPE_CHECKING:
    from slotstream._types import Grid
    from slotstream.config import SlotstreamConfig
    from slotstream.observability.collector import StackCollector


class GridState:
    """Process-wide grid plus the renderer of the most recent page load.

    Args:
        size: Width and height of the grid.
        step: Amount added to a cell per hover.
        capacity: Pending-chunk bound for each new stream sink.
        title: Document title used in the preamble.
        collector: Optional event collector for frame and stream events.

    """

    __slots__ = (
        "_capacity",
        "_collector",
        "_grid",
        "_lock",
        "_renderer",
        "_size",
        "_step",
        "_title",
        "_uuid",
    )

    def __init__(
        self,
        *,
        size: int = 10,
        step: int = 5,
        capacity: int = DEFAULT_CAPACITY,
        title: str = "Hello streaming",
        collector: StackCollector | None = None,
    ) -> None:
        self._size = size
        self._step = step
        self._capacity = capacity
        self._title = title
        self._collector = collector
        self._grid: Grid = empty_grid(size)
        self._uuid = 0
        self._renderer: IncrementalRenderer | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls, config: SlotstreamConfig, collector: StackCollector | None = None
    ) -> GridState:
        return cls(
            size=config.grid_size,
            step=config.step,
            capacity=config.capacity,
            title=config.title,
            collector=collector,
        )

    @property
    def size(self) -> int:
        return self._size

    @property
    def render_pass(self) -> int:
        """Counter embedded in the next frame's cell ids."""
        with self._lock:
            return self._uuid

    @property
    def renderer(self) -> IncrementalRenderer | None:
        with self._lock:
            return self._renderer

    def snapshot(self) -> Grid:
        """Copy of the current grid."""
        with self._lock:
            return [list(row) for row in self._grid]

    def html(self) -> str:
        """Render the grid as a frame and advance the render-pass counter."""
        with self._lock:
            return self._html()

    def reset(self) -> None:
        """Zero every cell.  The counter and attached renderer are kept."""
        with self._lock:
            self._reset()

    def update(self, x: int, y: int) -> int:
        """Add one step to cell (x, y) and push a frame if a renderer is attached.

        Coordinates are not range-checked; callers validate first.
        Returns the cell's new value.
        """
        with self._lock:
            self._grid[x][y] += self._step
            if self._renderer is not None:
                self._render_frame(self._renderer)
            return self._grid[x][y]

    def create_renderer(self) -> StreamSink:
        """Open a new stream, attach a renderer to it and return the sink.

        Any previously attached renderer is orphaned: its sink gets nothing
        further, and is left for its own consumer to finish.
        """
        with self._lock:
            return self._create_renderer()

    def open_stream(self) -> StreamSink:
        """Reset the grid and attach a new renderer under one lock hold."""
        with self._lock:
            self._reset()
            return self._create_renderer()

    def detach(self) -> StreamSink | None:
        """Drop the attached renderer and close its sink.

        Used at shutdown so the open response can finish.
        """
        with self._lock:
            renderer, self._renderer = self._renderer, None
        if renderer is None:
            return None
        renderer.sink.close()
        return renderer.sink

    def stats(self) -> dict[str, Any]:
        """Summary of the grid and the attached stream."""
        with self._lock:
            renderer = self._renderer
            return {
                "size": self._size,
                "render_pass": self._uuid,
                "total": sum(sum(row) for row in self._grid),
                "stream": None
                if renderer is None
                else {
                    "id": renderer.sink.stream_id,
                    "root_mount": renderer.root.id,
                    "renders": renderer.render_count,
                    "pending": renderer.sink.pending,
                    "dropped": renderer.sink.dropped,
                },
            }

    # ----- lock held by caller -----

    def _reset(self) -> None:
        self._grid = empty_grid(self._size)

    def _html(self) -> str:
        html = render_grid(self._grid, self._uuid)
        self._uuid += 1
        return html

    def _create_renderer(self) -> StreamSink:
        sink = StreamSink(self._capacity)
        sink.enqueue(preamble(self._title))
        renderer = IncrementalRenderer(sink)

        previous = self._renderer
        if self._collector is not None:
            self._collector.record_stream_opened(
                sink.stream_id,
                superseded=previous.sink.stream_id if previous is not None else None,
            )
        self._render_frame(renderer)
        self._renderer = renderer
        return sink

    def _render_frame(self, renderer: IncrementalRenderer) -> None:
        t0 = time.perf_counter()
        render_pass = self._uuid
        html = self._html()
        root = renderer.render(html)
        if self._collector is not None:
            self._collector.record_frame(
                renderer.sink.stream_id,
                render_pass=render_pass,
                root_mount=root.id,
                size_bytes=len(html.encode("utf-8")),
                duration_ms=(time.perf_counter() - t0) * 1000,
            )
