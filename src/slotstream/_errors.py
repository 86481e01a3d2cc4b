"""Slotstream error hierarchy.

All slotstream-specific errors inherit from SlotstreamError for easy catching.
The streaming protocol itself raises nothing; these cover the edges around it.
"""


class SlotstreamError(Exception):
    """Base error for all slotstream operations."""


class ConfigError(SlotstreamError):
    """Invalid or missing configuration."""


class CoordinateError(SlotstreamError):
    """A hover trigger named a cell outside the grid."""
