"""
Unit tests for FieldMapping and can_submit_mapping().

Run: pytest tests/test_field_mapping.py -v
"""

import pytest
from pydantic import ValidationError

from field_mapping import FIELD_KEYS, FieldMapping, can_submit_mapping

COLUMNS = ["O3", "O5", "OC", "D3", "D5", "DC"]


class TestCanSubmitMapping:
    """Tests for can_submit_mapping()"""

    @pytest.mark.parametrize("mapping, expected", [
        (dict(source_3dz="O3", source_country="OC", dest_3dz="D3", dest_country="DC"), True),
        (dict(source_5dz="O5", source_country="OC", dest_5dz="D5", dest_country="DC"), True),
        (dict(source_3dz="O3", source_country="OC", dest_5dz="D5", dest_country="DC"), True),
        (dict(source_3dz="O3", dest_3dz="D3", dest_country="DC"), False),
        (dict(source_3dz="O3", source_country="OC", dest_3dz="D3"), False),
        (dict(source_country="OC", dest_3dz="D3", dest_country="DC"), False),
        (dict(source_3dz="O3", source_country="OC", dest_country="DC"), False),
        ({}, False),
    ])
    def test_rule(self, mapping, expected):
        """Both countries plus a ZIP field on each side."""
        assert can_submit_mapping(FieldMapping(**mapping)) is expected

    def test_blank_string_counts_as_unset(self):
        mapping = FieldMapping(source_3dz="O3", source_country="  ", dest_3dz="D3", dest_country="DC")

        assert mapping.source_country is None
        assert can_submit_mapping(mapping) is False


class TestFieldMapping:
    """Tests for FieldMapping helpers."""

    def test_merged_returns_new_mapping(self):
        """merged() should leave the original untouched."""
        base = FieldMapping(source_3dz="O3")

        updated = base.merged({"dest_3dz": "D3"})

        assert base.dest_3dz is None
        assert updated.source_3dz == "O3"
        assert updated.dest_3dz == "D3"

    def test_merged_can_unset(self):
        assert FieldMapping(source_3dz="O3").merged({"source_3dz": ""}).source_3dz is None

    def test_merged_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="weight"):
            FieldMapping().merged({"weight": "W"})

    def test_frozen(self):
        with pytest.raises(ValidationError):
            FieldMapping().source_3dz = "x"

    def test_available_columns_hide_other_fields(self):
        """A column mapped elsewhere should not be offered; the field's own column should."""
        mapping = FieldMapping(source_3dz="O3", dest_3dz="D3")

        assert mapping.available_columns(COLUMNS, "source_3dz") == ["O3", "O5", "OC", "D5", "DC"]
        assert "O3" not in mapping.available_columns(COLUMNS, "source_5dz")

    def test_to_form_drops_unset(self):
        assert FieldMapping(source_country="OC").to_form() == {"source_country": "OC"}

    def test_six_keys(self):
        assert set(FieldMapping().model_dump()) == set(FIELD_KEYS)
