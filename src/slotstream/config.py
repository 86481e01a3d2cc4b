"""Slotstream configuration.

SlotstreamConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass

from slotstream._errors import ConfigError

_FIELD_TYPES: dict[str, type] = {
    "host": str,
    "port": int,
    "workers": int,
    "capacity": int,
    "grid_size": int,
    "step": int,
    "title": str,
    "debug": bool,
}


@dataclass(frozen=True, slots=True)
class SlotstreamConfig:
    """Configuration for a slotstream server.

    Attributes:
        host: Bind address.
        port: Bind port.
        workers: Number of Pounce workers.  Must be 1: a stream sink belongs
            to the event loop serving it, and each worker has its own loop.
        capacity: Pending-chunk bound for each stream sink.  Chunks pushed
            while a sink is full are dropped.
        grid_size: Width and height of the square grid.
        step: Amount a hover adds to a cell.
        title: Document title written in the streamed preamble.
        debug: Run Chirp in debug mode.

    """

    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1
    capacity: int = 1000
    grid_size: int = 10
    step: int = 5
    title: str = "Hello streaming"
    debug: bool = False

    def __post_init__(self) -> None:
        for name, expected in _FIELD_TYPES.items():
            value = getattr(self, name)
            # bool is an int subclass; only ``debug`` may be one.
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                msg = f"{name} must be {expected.__name__}, got {type(value).__name__} {value!r}"
                raise ConfigError(msg)
        if self.capacity < 1:
            msg = f"capacity must be at least 1, got {self.capacity}"
            raise ConfigError(msg)
        if self.grid_size < 1:
            msg = f"grid_size must be at least 1, got {self.grid_size}"
            raise ConfigError(msg)
        if not 0 <= self.port <= 65535:
            msg = f"port out of range: {self.port}"
            raise ConfigError(msg)
        if self.workers != 1:
            msg = (
                f"workers must be 1, got {self.workers}: each worker runs its own "
                "event loop and a stream can only be fed from the loop serving it"
            )
            raise ConfigError(msg)
