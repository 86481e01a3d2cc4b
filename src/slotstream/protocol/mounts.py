"""Mount registry — names the insertion points of a streamed document.

A mount is an integer id that the renderer turns into a ``<slot>`` name.
Ids start at 0, only ever grow, and are never handed out twice.
"""

from __future__ import annotations

from dataclasses import dataclass

from slotstream._types import MountId

SLOT_PREFIX = "slot"


@dataclass(frozen=True, slots=True)
class Mount:
    """A replaceable region of the live document.

    Attributes:
        id: Position in allocation order, unique within one renderer.

    """

    id: MountId

    @property
    def slot_name(self) -> str:
        """Value used for both ``<slot name=...>`` and ``slot=...``."""
        return f"{SLOT_PREFIX}-{self.id}"


class MountRegistry:
    """Monotonic mount id allocator owned by a single renderer."""

    __slots__ = ("_next",)

    def __init__(self) -> None:
        self._next: MountId = 0

    @property
    def allocated(self) -> int:
        """Number of mounts handed out so far."""
        return self._next

    def allocate(self) -> Mount:
        mount = Mount(self._next)
        self._next += 1
        return mount
