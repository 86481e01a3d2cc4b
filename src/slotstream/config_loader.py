"""Load SlotstreamConfig from slotstream.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from slotstream.config import SlotstreamConfig

if TYPE_CHECKING:
    from pathlib import Path

_KNOWN_KEYS = frozenset(
    {"host", "port", "workers", "capacity", "grid_size", "step", "title", "debug"}
)


def load_config(root: Path, **overrides: object) -> SlotstreamConfig:
    """Load SlotstreamConfig, optionally merging a config file found in *root*.

    Looks for slotstream.yaml, slotstream.yml, or slotstream.toml. If found,
    loads and merges with overrides. Overrides that are ``None`` are ignored
    so CLI flags left unset fall through to the file value.
    """
    file_config = _read_slotstream_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    return SlotstreamConfig(**merged)  # type: ignore[arg-type]


def _read_slotstream_config(root: Path) -> dict[str, object]:
    """Read config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("slotstream.yaml", "slotstream.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "slotstream.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    try:
        import yaml
    except ImportError:
        return {}
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except Exception:
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_slotstream_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    import tomllib

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError:
        return {}
    return _flatten_slotstream_section(data)


def _flatten_slotstream_section(data: dict[str, object]) -> dict[str, object]:
    """Extract slotstream.* keys into top-level config, dropping unknown keys."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("slotstream")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
