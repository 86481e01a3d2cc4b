"""Shared type definitions for slotstream."""

from typing import Literal

# One unit of markup pushed through a stream sink
type Chunk = str

# Raw integer behind a Mount
type MountId = int

# Identifier of one open stream (one GET / connection)
type StreamID = str

# Grid cell values, indexed [row][column]
type Grid = list[list[int]]

# Why a stream stopped producing output
type CloseReason = Literal["eof", "disconnect"]
