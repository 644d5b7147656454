"""Tests for the edit list and its source map output."""

import json

import pytest

from routemacro.transform.edit_list import EditList, Insert, Retain
from routemacro.transform.source_map import encode_mappings, encode_vlq


class TestVlq:
    """Base64 VLQ encoding."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, "A"), (1, "C"), (-1, "D"), (15, "e"), (16, "gB"), (-16, "hB"), (1000, "w+B")],
    )
    def test_encode(self, value, expected):
        assert encode_vlq(value) == expected

    def test_mappings_are_relative(self):
        lines = [[(0, 0, 0, 0), (4, 0, 0, 4)], [], [(2, 0, 3, 1)]]

        assert encode_mappings(lines) == "AAAA,IAAI;;EAGH"


class TestEditList:
    """Edits are recorded against the original and applied once."""

    def test_no_edits(self):
        edits = EditList("unchanged")

        assert not edits.has_changed()
        assert edits.to_string() == "unchanged"
        assert edits.operations() == [Retain(0, 9)]

    def test_remove(self):
        edits = EditList("hello world").remove(5, 11)

        assert edits.has_changed()
        assert edits.to_string() == "hello"

    def test_overlapping_removals_merge(self):
        edits = EditList("abcdef").remove(1, 3).remove(2, 4)

        assert edits.operations() == [Retain(0, 1), Retain(4, 6)]
        assert edits.to_string() == "aef"

    def test_adjacent_retains_merge(self):
        edits = EditList("abcdef").insert(3, "")

        assert edits.operations() == [Retain(0, 6)]
        assert not edits.has_changed()

    def test_insert_order_is_preserved(self):
        edits = EditList("ab").insert(1, "1").insert(1, "2")

        assert edits.to_string() == "a12b"

    def test_insert_survives_removal(self):
        edits = EditList("abc").remove(0, 3).insert(1, "X")

        assert edits.operations() == [Insert("X")]
        assert edits.to_string() == "X"

    def test_byte_offsets(self):
        edits = EditList("héllo")

        assert len(edits) == 6
        assert edits.remove(1, 3).to_string() == "hllo"

    @pytest.mark.parametrize("start,end", [(-1, 2), (2, 1), (0, 100)])
    def test_invalid_range(self, start, end):
        with pytest.raises(ValueError, match="Invalid range"):
            EditList("abc").remove(start, end)

    def test_invalid_position(self):
        with pytest.raises(ValueError, match="Invalid position"):
            EditList("abc").insert(4, "x")


class TestGenerateMap:
    """Source maps point generated text back at the original."""

    def test_line_starts_only(self):
        source_map = EditList("x\n\n").generate_map("a.vue", hires=False)

        assert source_map.mappings == "AAAA;;"
        assert source_map.sources == ("a.vue",)
        assert source_map.sources_content == ("x\n\n",)

    def test_hires(self):
        assert EditList("ab").generate_map("a.vue").mappings == "AAAA,CAAC"

    def test_inserted_text_is_unmapped(self):
        edits = EditList("abcdef").remove(0, 2).insert(2, "xy")

        assert edits.to_string() == "xycdef"
        assert edits.generate_map("a.vue", hires=False).mappings == "EAAE"

    def test_removed_lines(self):
        edits = EditList("a\nb\nc").remove(0, 2)

        assert edits.generate_map("a.vue", hires=False).mappings == "AACA;AACA"

    def test_utf16_columns(self):
        assert EditList("é😀x").generate_map("a.vue").mappings == "AAAA,CAAC,EAAE"

    def test_without_content(self):
        source_map = EditList("abc").remove(0, 1).generate_map(
            "a.vue", include_content=False, file="out.js"
        )

        data = source_map.to_dict()
        assert "sourcesContent" not in data
        assert data["file"] == "out.js"
        assert json.loads(source_map.to_json()) == data

    def test_data_url(self):
        url = EditList("abc").remove(0, 1).generate_map("a.vue").to_data_url()

        assert url.startswith("data:application/json;charset=utf-8;base64,")
