"""Incremental renderer — patches a live document through an open stream.

The document is never rewritten.  Every change is appended as markup that
the browser's streaming parser applies on its own:

- A declarative shadow root (``<template shadowrootmode="open">``) gives each
  fragment an isolated scope.
- Inside it, a named ``<slot>`` marks where the *next* fragment will land.
- A later ``<div slot="...">`` child of the host is projected into that slot,
  replacing whatever was shown there before.

Initial shell::

    <div><template shadowrootmode="open">
      <slot name="slot-0"></slot>
    </template></div>

One ``replace(slot-0, html)``::

    <div slot="slot-0"><template shadowrootmode="open">
      <slot name="slot-1">html</slot>
    </template>

The wrapper ``<div>`` is left open so the next fragment can still be
addressed as its child.  ``render`` closes it again before opening new
content, which is why every render is a two-step transition.

Delivery is at-most-once: the renderer never learns whether a chunk reached
the browser, and a chunk dropped by a full sink is not resent.

"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Final

from slotstream.protocol.mounts import Mount, MountRegistry

if TYPE_CHECKING:
    from slotstream._types import Chunk
    from slotstream.protocol.sink import StreamSink

SCOPE_OPEN: Final = '<template shadowrootmode="open">'
SCOPE_CLOSE: Final = "</template>"
PLACEHOLDER: Final = '<div style="display: none"></div>'
# Closes the previous fragment's wrapper and the placeholder's wrapper.
RETIRE: Final = "</div>" * 2


class RenderPhase(Enum):
    """Where the renderer is in its root transition."""

    IDLE = "idle"
    CLOSE_PREVIOUS = "close_previous"
    OPEN_NEW = "open_new"


class IncrementalRenderer:
    """Owns the mount counter, the sink's producer end and the root mount.

    Creating a renderer writes the initial shell: a scoped container
    holding one empty slot, which becomes the first root.

    Args:
        sink: Stream the markup is pushed into.

    """

    __slots__ = ("_mounts", "_phase", "_renders", "_root", "_sink")

    def __init__(self, sink: StreamSink) -> None:
        self._sink = sink
        self._mounts = MountRegistry()
        self._phase = RenderPhase.IDLE
        self._renders = 0
        self._root = self._initialize()

    @property
    def root(self) -> Mount:
        """The mount currently holding the visible content."""
        return self._root

    @property
    def sink(self) -> StreamSink:
        return self._sink

    @property
    def phase(self) -> RenderPhase:
        return self._phase

    @property
    def render_count(self) -> int:
        """Completed ``render`` calls."""
        return self._renders

    @property
    def mounts_allocated(self) -> int:
        return self._mounts.allocated

    def _initialize(self) -> Mount:
        self._write("<div>" + SCOPE_OPEN)
        mount = self._start_slot()
        self._end_slot()
        self._write(SCOPE_CLOSE + "</div>")
        return mount

    def render(self, html: str) -> Mount:
        """Replace the root content with *html* and return the new root.

        Runs CLOSE_PREVIOUS (swap in an invisible placeholder, then close
        the wrappers left open by the last fragment) followed by OPEN_NEW
        (project *html* into the placeholder's slot).
        """
        self._phase = RenderPhase.CLOSE_PREVIOUS
        placeholder = self.replace(self._root, PLACEHOLDER)
        self._write(RETIRE)

        self._phase = RenderPhase.OPEN_NEW
        self._root = self.replace(placeholder, html)

        self._phase = RenderPhase.IDLE
        self._renders += 1
        return self._root

    def replace(self, mount: Mount, html: str) -> Mount:
        """Project *html* into *mount*'s slot and return the mount now holding it.

        *mount* must be the one most recently returned for this region;
        stale or foreign mounts are not detected.
        """
        self._write(f'<div slot="{mount.slot_name}">' + SCOPE_OPEN)
        new_mount = self._start_slot()
        self._write(html)
        self._end_slot()
        self._write(SCOPE_CLOSE)
        return new_mount

    def _start_slot(self) -> Mount:
        mount = self._mounts.allocate()
        self._write(f'<slot name="{mount.slot_name}">')
        return mount

    def _end_slot(self) -> None:
        self._write("</slot>")

    def _write(self, chunk: Chunk) -> None:
        # Best effort; a full or abandoned sink counts the drop itself.
        self._sink.enqueue(chunk)
