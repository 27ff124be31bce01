"""Tests for PropertyEntry."""

import pytest

from objscope import PropertyEntry


class TestPropertyEntry:
    """Test PropertyEntry construction and invariants."""

    def test_value_entry(self):
        entry = PropertyEntry.value("Radius", "float", "2.0000", category="Circle")

        assert entry.formatted_value == "2.0000"
        assert entry.has_error is False
        assert entry.error_detail is None
        assert str(entry) == "Radius = 2.0000"

    def test_error_entry_has_placeholder(self):
        entry = PropertyEntry.error("Layer", "str", "eKeyNotFound")

        assert entry.has_error is True
        assert entry.error_detail == "eKeyNotFound"
        assert entry.formatted_value == "[Error: eKeyNotFound]"
        assert str(entry) == "Layer: [Error: eKeyNotFound]"

    def test_error_entry_without_detail(self):
        entry = PropertyEntry.error("Layer", "str", "")

        assert entry.error_detail == "Unknown error"

    def test_error_flag_and_detail_must_agree(self):
        with pytest.raises(ValueError):
            PropertyEntry("x", "int", "1", has_error=True)

        with pytest.raises(ValueError):
            PropertyEntry("x", "int", "1", error_detail="boom")

    def test_formatted_value_required(self):
        with pytest.raises(ValueError):
            PropertyEntry("x", "int", None)

    def test_entries_are_immutable(self):
        entry = PropertyEntry.value("x", "int", "1")

        with pytest.raises(AttributeError):
            entry.name = "y"

    def test_to_dict(self):
        entry = PropertyEntry.value("x", "int", "1", category="Point", declaring_type="geo.Point")

        assert entry.to_dict() == {
            "name": "x",
            "declared_type": "int",
            "formatted_value": "1",
            "category": "Point",
            "declaring_type": "geo.Point",
            "has_error": False,
            "error_detail": None,
        }
