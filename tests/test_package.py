"""Tests for slotstream package exports and metadata."""

import pytest

import slotstream


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(slotstream.__version__, str)
        assert "0.1.0" in slotstream.__version__

    def test_free_threading_declaration(self) -> None:
        assert slotstream._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in slotstream.__all__:
            getattr(slotstream, name)

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            slotstream.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
