"""Grid markup — the HTML the streamed document is built from.

Every cell carries its own ``:hover`` rule whose ``background-image`` points
at ``/hover/{x}/{y}/{pass}``.  The browser fetches that URL when the pointer
enters the cell, which is how interaction reaches the server without any
client-side script.

Cell ids embed the render-pass counter so a new frame never reuses an id
from an older frame that may still be in the DOM.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slotstream._types import Grid

HOVER_PREFIX = "/hover"

_CELL = """\
<div id="{cell_id}" style="width: 100%; height: 100%; background-color: rgb(0%, {value}%, 0%);">
<style>
#{cell_id}:hover {{
    background-image: url("{hover_url}");
}}
</style>
</div>"""


def preamble(title: str = "Hello streaming") -> str:
    """The static document head, written before any mount exists."""
    return f"""\
<!DOCTYPE html>
<head>
    <title>{html.escape(title)}</title>
</head>
<body>"""


def empty_grid(size: int) -> Grid:
    return [[0] * size for _ in range(size)]


def cell_id(x: int, y: int, render_pass: int) -> str:
    return f"grid-{x}-{y}-{render_pass}"


def hover_url(x: int, y: int, render_pass: int) -> str:
    return f"{HOVER_PREFIX}/{x}/{y}/{render_pass}"


def render_grid(grid: Grid, render_pass: int, *, cell_px: int = 40) -> str:
    """Render *grid* as a fixed-size CSS grid of green-tinted cells.

    Cell values map straight to the green channel percentage; values past
    100 are left for the browser to clamp.
    """
    size = len(grid)
    side = size * cell_px
    parts = [
        '<div style="display: grid; '
        f"grid-template-columns: repeat({size}, 1fr); "
        f"grid-template-rows: repeat({size}, 1fr); "
        f'width: {side}px; height: {side}px;">'
    ]
    for x, row in enumerate(grid):
        for y, value in enumerate(row):
            parts.append(
                _CELL.format(
                    cell_id=cell_id(x, y, render_pass),
                    value=value,
                    hover_url=hover_url(x, y, render_pass),
                )
            )
    parts.append("</div>")
    return "".join(parts)
