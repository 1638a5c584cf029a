"""
Unit tests for file_intake module.

Tests the slot budget, media type and size filtering of a raw selection.
"""

import pytest

from MC_Libs.ImageEditingLib.image_models import RawFile
from MC_Libs.IntakeLib.file_intake import IntakeResult, remaining_slots, validate_selection
from MC_Libs.constants import MAX_FILE_SIZE_BYTES, OVERSIZED_FILES_WARNING


def _raw(name, media_type="image/png", size=100):
    return RawFile(name=name, media_type=media_type, data=b"", size=size)


class TestRemainingSlots:
    """Tests for remaining_slots function."""

    def test_subtracts_finalized(self):
        assert remaining_slots(3, 1) == 2

    def test_never_negative(self):
        assert remaining_slots(2, 5) == 0


class TestValidateSelection:
    """Tests for validate_selection function."""

    def test_accepts_all_within_capacity(self):
        files = [_raw("a.png"), _raw("b.png")]

        result = validate_selection(files, finalized_count=0, capacity=3)

        assert result.accepted == files
        assert result.warning is None

    def test_truncates_to_remaining_in_order(self):
        files = [_raw("a.png"), _raw("b.png"), _raw("c.png"), _raw("d.png")]

        result = validate_selection(files, finalized_count=1, capacity=3)

        assert [f.name for f in result.accepted] == ["a.png", "b.png"]
        assert [f.name for f in result.over_capacity] == ["c.png", "d.png"]
        assert result.warning is None

    def test_no_capacity_left(self):
        result = validate_selection([_raw("a.png")], finalized_count=3, capacity=3)

        assert result.accepted == []
        assert len(result.over_capacity) == 1

    def test_drops_non_images_silently(self):
        files = [_raw("notes.txt", media_type="text/plain"), _raw("a.png")]

        result = validate_selection(files, finalized_count=0, capacity=5)

        assert [f.name for f in result.accepted] == ["a.png"]
        assert [f.name for f in result.wrong_type] == ["notes.txt"]
        assert result.warning is None

    def test_oversized_file_warns_once(self):
        files = [
            _raw("big1.png", size=MAX_FILE_SIZE_BYTES + 1),
            _raw("ok.png"),
            _raw("big2.png", size=MAX_FILE_SIZE_BYTES * 2),
        ]

        result = validate_selection(files, finalized_count=0, capacity=5)

        assert [f.name for f in result.accepted] == ["ok.png"]
        assert len(result.oversized) == 2
        assert result.warning == OVERSIZED_FILES_WARNING

    def test_size_limit_is_inclusive(self):
        result = validate_selection([_raw("edge.png", size=MAX_FILE_SIZE_BYTES)], 0, 1)

        assert len(result.accepted) == 1

    def test_custom_size_limit(self):
        result = validate_selection([_raw("a.png", size=11)], 0, 1, size_limit_bytes=10)

        assert result.accepted == []
        assert result.warning == OVERSIZED_FILES_WARNING

    def test_budget_applies_before_type_filter(self):
        """A rejected file inside the budget still uses up a slot."""
        files = [_raw("notes.txt", media_type="text/plain"), _raw("a.png")]

        result = validate_selection(files, finalized_count=0, capacity=1)

        assert result.accepted == []
        assert [f.name for f in result.over_capacity] == ["a.png"]

    def test_capacity_one_with_oversized_first(self):
        """Capacity 1: an oversized first file takes the only slot and is dropped with a warning."""
        files = [_raw("big.png", size=MAX_FILE_SIZE_BYTES + 1), _raw("ok.png")]

        result = validate_selection(files, finalized_count=0, capacity=1)

        assert result.accepted == []
        assert result.warning == OVERSIZED_FILES_WARNING

    def test_capacity_one_with_oversized_second(self):
        files = [_raw("ok.png"), _raw("big.png", size=MAX_FILE_SIZE_BYTES + 1)]

        result = validate_selection(files, finalized_count=0, capacity=1)

        assert [f.name for f in result.accepted] == ["ok.png"]
        assert result.warning is None

    def test_empty_selection(self):
        result = validate_selection([], finalized_count=0, capacity=3)

        assert result == IntakeResult()

    @pytest.mark.parametrize("finalized", [0, 1, 2])
    def test_never_accepts_more_than_remaining(self, finalized):
        files = [_raw(f"{i}.png") for i in range(5)]

        result = validate_selection(files, finalized_count=finalized, capacity=3)

        assert len(result.accepted) == 3 - finalized
