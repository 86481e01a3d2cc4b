"""Streaming protocol — mounts, the chunk sink and the incremental renderer.

Connects application markup to an open HTTP response through named slots
inside declarative shadow roots.
"""

from slotstream.protocol.mounts import Mount, MountRegistry
from slotstream.protocol.renderer import IncrementalRenderer, RenderPhase
from slotstream.protocol.sink import DEFAULT_CAPACITY, StreamSink

__all__ = [
    "DEFAULT_CAPACITY",
    "IncrementalRenderer",
    "Mount",
    "MountRegistry",
    "RenderPhase",
    "StreamSink",
]
