"""Tests for numeric field editing."""

import math

import pytest

from planner.core.editor import edit_building_field, parse_number
from planner.core.errors import InvalidOperationError, OutOfRangeError
from planner.shapes import FlatShape, HippedShape, SaddleShape


class TestParseNumber:

    @pytest.mark.parametrize("value,expected", [("12.5", 12.5), (3, 3.0), (" 7 ", 7.0)])
    def test_accepts_numbers_and_numeric_text(self, value, expected):
        assert parse_number("w", value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True, math.inf, "nan", [1]])
    def test_rejects(self, value):
        with pytest.raises(OutOfRangeError):
            parse_number("w", value)


class TestDimensions:

    def test_text_input(self, flat):
        b = edit_building_field(FlatShape(), flat, "buildingWidth", "12.5")
        assert b.building_width == 12.5

    def test_snake_case_name(self, flat):
        b = edit_building_field(FlatShape(), flat, "building_length", 4)
        assert b.building_length == 4

    @pytest.mark.parametrize("value", [500, 0, -1, "abc"])
    def test_rejected_values(self, flat, value):
        with pytest.raises(OutOfRangeError):
            edit_building_field(FlatShape(), flat, "buildingWidth", value)

    def test_height_resettles_body(self, flat):
        b = edit_building_field(FlatShape(), flat, "buildingHeight", 8)
        assert b.building_position == (0, 4, 0)

    def test_saddle_roof_follows_width(self, saddle):
        b = edit_building_field(SaddleShape(), saddle, "buildingWidth", 14)
        assert b.roof_width == 14
        assert b.roof_length == 10

    def test_saddle_roof_height(self, saddle):
        b = edit_building_field(SaddleShape(), saddle, "roofHeight", "2.5")
        assert b.roof_height == 2.5
        with pytest.raises(OutOfRangeError):
            edit_building_field(SaddleShape(), saddle, "roofHeight", 101)

    def test_unknown_field(self, saddle):
        with pytest.raises(InvalidOperationError):
            edit_building_field(SaddleShape(), saddle, "roofRadius", 3)


class TestRotation:

    def test_flat_body_rotates(self, flat):
        b = edit_building_field(FlatShape(), flat, "buildingRotation", [0, math.pi / 2, 0])
        assert b.building_rotation == pytest.approx((0, math.pi / 2, 0))

    @pytest.mark.parametrize("shape,fixture", [(SaddleShape(), "saddle"), (HippedShape(), "hipped")])
    def test_roofed_body_does_not_rotate(self, request, shape, fixture):
        building = request.getfixturevalue(fixture)
        with pytest.raises(InvalidOperationError):
            edit_building_field(shape, building, "buildingRotation", [0, math.pi / 2, 0])

    def test_roofed_building_turns_with_group(self, saddle):
        b = edit_building_field(SaddleShape(), saddle, "groupRotation", [0, math.pi / 2, 0])
        assert b.group_rotation[1] == pytest.approx(math.pi / 2)
        assert b.roof_position == saddle.roof_position


class TestHippedFields:

    def test_integer_segments(self, hipped):
        b = edit_building_field(HippedShape(), hipped, "roofSegments", "6")
        assert b.roof_segments == 6
        assert isinstance(b.roof_segments, int)

    @pytest.mark.parametrize("value", [4.5, 2, 65])
    def test_rejected_segments(self, hipped, value):
        with pytest.raises(OutOfRangeError):
            edit_building_field(HippedShape(), hipped, "roofSegments", value)

    def test_roof_height_resettles_roof(self, hipped):
        b = edit_building_field(HippedShape(), hipped, "roofHeight", 4)
        assert b.roof_position == (0, 7, 0)


class TestVectors:

    def test_position_stays_grounded(self, flat):
        b = edit_building_field(FlatShape(), flat, "buildingPosition", [3, 9, "4"])
        assert b.building_position == (3, 2.5, 4)

    def test_rotation_stays_upright(self, flat):
        b = edit_building_field(FlatShape(), flat, "groupRotation", [1, 0.5, 1])
        assert b.group_rotation == (0, 0.5, 0)

    @pytest.mark.parametrize("value", [[1, 2], 3, [1, "x", 2]])
    def test_rejected_vectors(self, flat, value):
        with pytest.raises(OutOfRangeError):
            edit_building_field(FlatShape(), flat, "groupPosition", value)
