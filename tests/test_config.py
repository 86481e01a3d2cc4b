"""Tests for slotstream.config and slotstream.config_loader."""

from pathlib import Path

import pytest

from slotstream._errors import ConfigError
from slotstream.config import SlotstreamConfig
from slotstream.config_loader import load_config


class TestSlotstreamConfig:
    """SlotstreamConfig — frozen dataclass with sensible defaults."""

    def test_defaults(self) -> None:
        config = SlotstreamConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.workers == 1
        assert config.capacity == 1000
        assert config.grid_size == 10
        assert config.step == 5
        assert config.title == "Hello streaming"
        assert config.debug is False

    def test_frozen(self) -> None:
        config = SlotstreamConfig()
        with pytest.raises(AttributeError):
            config.port = 8000  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"capacity": 0},
            {"grid_size": 0},
            {"port": 70000},
            {"port": -1},
            {"workers": 0},
            {"workers": 2},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ConfigError):
            SlotstreamConfig(**kwargs)  # type: ignore[arg-type]

    def test_multiple_workers_rejected(self) -> None:
        """Streams are fed from one event loop; extra workers cannot reach them."""
        with pytest.raises(ConfigError, match="workers must be 1"):
            SlotstreamConfig(workers=4)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"port": "3000"},
            {"capacity": 1.5},
            {"grid_size": True},
            {"title": 42},
            {"host": None},
            {"debug": "yes"},
        ],
    )
    def test_wrong_types_rejected(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(ConfigError, match="must be"):
            SlotstreamConfig(**kwargs)  # type: ignore[arg-type]


class TestLoadConfig:
    """load_config — file values merged under CLI overrides."""

    def test_no_file_uses_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path) == SlotstreamConfig()

    def test_toml_top_level_and_section(self, tmp_path: Path) -> None:
        (tmp_path / "slotstream.toml").write_text(
            'port = 4000\n\n[slotstream]\ncapacity = 64\ntitle = "Grid"\n'
        )
        config = load_config(tmp_path)
        assert config.port == 4000
        assert config.capacity == 64
        assert config.title == "Grid"

    def test_yaml(self, tmp_path: Path) -> None:
        pytest.importorskip("yaml")
        (tmp_path / "slotstream.yaml").write_text("slotstream:\n  grid_size: 6\n  step: 1\n")
        config = load_config(tmp_path)
        assert config.grid_size == 6
        assert config.step == 1

    def test_yaml_wins_over_toml(self, tmp_path: Path) -> None:
        pytest.importorskip("yaml")
        (tmp_path / "slotstream.yml").write_text("port: 5000\n")
        (tmp_path / "slotstream.toml").write_text("port = 6000\n")
        assert load_config(tmp_path).port == 5000

    def test_overrides_win(self, tmp_path: Path) -> None:
        (tmp_path / "slotstream.toml").write_text("port = 4000\n")
        assert load_config(tmp_path, port=9000).port == 9000

    def test_none_overrides_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "slotstream.toml").write_text("port = 4000\n")
        assert load_config(tmp_path, port=None, host=None).port == 4000

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "slotstream.toml").write_text('colour = "green"\n[slotstream]\nshape = 1\n')
        assert load_config(tmp_path) == SlotstreamConfig()

    def test_broken_toml_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "slotstream.toml").write_text("port = = 3\n")
        assert load_config(tmp_path) == SlotstreamConfig()

    def test_invalid_value_from_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "slotstream.toml").write_text("capacity = 0\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_string_port_from_yaml_raises_config_error(self, tmp_path: Path) -> None:
        pytest.importorskip("yaml")
        (tmp_path / "slotstream.yaml").write_text('port: "3000"\n')
        with pytest.raises(ConfigError, match="port must be int"):
            load_config(tmp_path)

    def test_workers_from_file_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "slotstream.toml").write_text("workers = 4\n")
        with pytest.raises(ConfigError, match="workers must be 1"):
            load_config(tmp_path)
