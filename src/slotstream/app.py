"""Slotstream application — grid state served through Chirp.

``create_app`` wires one GridState into a Chirp App.  ``serve`` is the
public entry point that loads configuration and runs it on Pounce.

Routes:
    ``GET /``                      reset the grid, stream the live document
    ``GET /hover/{x}/{y}/{pass}``  bump a cell, always answers 404
    ``GET /__slotstream/stats``    JSON summary of state and events
"""

import json
import time
from collections.abc import AsyncIterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from slotstream._errors import CoordinateError
from slotstream.config import SlotstreamConfig
from slotstream.config_loader import load_config
from slotstream.observability import EventLog, StackCollector
from slotstream.state import GridState

if TYPE_CHECKING:
    from chirp import App

    from slotstream.protocol.sink import StreamSink

STATS_ENDPOINT = "/__slotstream/stats"


def check_coordinates(x: int, y: int, size: int) -> None:
    """Reject hover coordinates outside a ``size`` x ``size`` grid.

    Raises:
        CoordinateError: If either coordinate is out of range.

    """
    if not (0 <= x < size and 0 <= y < size):
        msg = f"cell ({x}, {y}) is outside the {size}x{size} grid"
        raise CoordinateError(msg)


async def stream_body(sink: StreamSink, collector: StackCollector | None = None) -> AsyncIterator[str]:
    """Drain *sink* as a response body.

    When iteration ends without the producer closing the sink, the client
    is gone; the sink is marked disconnected so later frames are dropped
    instead of queueing up.
    """
    reason = "disconnect"
    try:
        async for chunk in sink:
            yield chunk
        if sink.closed:
            reason = "eof"
    finally:
        sink.disconnect()
        if collector is not None:
            collector.record_stream_closed(
                sink.stream_id,
                reason=reason,  # type: ignore[arg-type]
                dropped=sink.dropped,
            )


def _create_chirp_app(config: SlotstreamConfig) -> App:
    """Create a Chirp App for the slotstream server.

    The grid lives in one event loop, so Pounce runs a single async
    worker.
    """
    from chirp import App, AppConfig

    app_config = AppConfig(
        host=config.host,
        port=config.port,
        debug=config.debug,
        workers=config.workers,
        worker_mode="async",
        static_dir=None,
    )
    return App(config=app_config)


def _wire_stream_routes(app: App, state: GridState, collector: StackCollector) -> None:
    """Register the document stream and the hover trigger on *app*."""
    from chirp import Response
    from chirp.http.response import StreamingResponse

    async def index() -> Any:
        sink = state.open_stream()
        return StreamingResponse(
            stream_body(sink, collector),
            content_type="text/html; charset=utf-8",
        )

    async def hover(x: int, y: int, token: str) -> Any:
        try:
            check_coordinates(x, y, state.size)
        except CoordinateError as exc:
            return Response(body=str(exc), status=400, content_type="text/plain; charset=utf-8")

        value = state.update(x, y)
        collector.record_hover(x, y, value=value, token=token)
        # The image request only exists to carry the trigger.
        return Response(body="", status=404)

    app.route("/", name="slotstream:index")(index)
    app.route("/hover/{x:int}/{y:int}/{token}", name="slotstream:hover")(hover)


def _wire_stats_endpoint(app: App, state: GridState, collector: StackCollector) -> None:
    """Register the ``/__slotstream/stats`` JSON endpoint."""
    from chirp import Response

    async def stats_handler() -> Any:
        payload = json.dumps(
            {"grid": state.stats(), "event_log": collector.log.stats()},
            indent=2,
        )
        return Response(body=payload, status=200, content_type="application/json")

    app.route(STATS_ENDPOINT, name="slotstream:stats")(stats_handler)


def _wire_shutdown(app: App, state: GridState) -> None:
    """Close the attached stream on shutdown so its response can finish."""

    @app.on_shutdown
    async def _close_stream() -> None:
        state.detach()


def create_app(
    config: SlotstreamConfig | None = None,
    *,
    state: GridState | None = None,
    collector: StackCollector | None = None,
) -> App:
    """Build a Chirp App serving one grid.

    Args:
        config: Server configuration; defaults apply when omitted.
        state: Grid state to serve.  Built from *config* when omitted.
        collector: Event collector shared by the state and the routes.

    """
    config = config or SlotstreamConfig()
    collector = collector if collector is not None else StackCollector(EventLog())
    state = state if state is not None else GridState.from_config(config, collector)

    app = _create_chirp_app(config)
    _wire_stream_routes(app, state, collector)
    _wire_stats_endpoint(app, state, collector)
    _wire_shutdown(app, state)
    return app


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def serve(root: str | Path = ".", **kwargs: Any) -> None:
    """Run the grid server on Pounce until interrupted.

    Args:
        root: Directory searched for slotstream.yaml / slotstream.toml.
        **kwargs: Override SlotstreamConfig fields.

    """
    from slotstream.banner import print_banner

    t0 = time.perf_counter()
    config = load_config(Path(root), **kwargs)

    collector = StackCollector(EventLog())
    app = create_app(config, collector=collector)

    load_ms = (time.perf_counter() - t0) * 1000
    print_banner(config, load_ms=load_ms)

    # Pounce lifecycle events land in the same EventLog as stream events.
    app.run(host=config.host, port=config.port, lifecycle_collector=collector)
