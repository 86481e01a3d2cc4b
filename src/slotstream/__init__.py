"""Slotstream — progressively patched HTML over one open response.

The first request gets a document shell and keeps its connection open.
Later requests change server state, and the change is appended to that
same response as markup: declarative shadow roots and named ``<slot>``s
let the browser swap the visible content without any script.

Quick start::

    import slotstream

    slotstream.serve()                    # http://0.0.0.0:3000

Building blocks::

    from slotstream import GridState, IncrementalRenderer, StreamSink

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "GridState",
    "IncrementalRenderer",
    "Mount",
    "SlotstreamConfig",
    "StreamSink",
    "__version__",
    "create_app",
    "serve",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import slotstream`` fast; Chirp is only imported when the
    application layer is requested.
    """
    if name == "SlotstreamConfig":
        from slotstream.config import SlotstreamConfig

        return SlotstreamConfig

    if name == "GridState":
        from slotstream.state import GridState

        return GridState

    if name == "IncrementalRenderer":
        from slotstream.protocol.renderer import IncrementalRenderer

        return IncrementalRenderer

    if name == "Mount":
        from slotstream.protocol.mounts import Mount

        return Mount

    if name == "StreamSink":
        from slotstream.protocol.sink import StreamSink

        return StreamSink

    if name == "create_app":
        from slotstream.app import create_app

        return create_app

    if name == "serve":
        from slotstream.app import serve

        return serve

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
