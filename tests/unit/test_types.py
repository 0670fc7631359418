"""Tests for Position and the compact "x,y" form."""

import pytest

from nodegrid.types import NodeKind, Position


class TestPositionParse:
    def test_integers(self):
        assert Position.parse("100,200") == Position(100, 200)

    def test_decimals_and_negatives(self):
        assert Position.parse("-12.5,3.25") == Position(-12.5, 3.25)

    def test_empty_string(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            Position.parse("")

    def test_wrong_part_count(self):
        with pytest.raises(ValueError, match="Expected format: 'X,Y'"):
            Position.parse("1,2,3")

    def test_bad_coordinate(self):
        with pytest.raises(ValueError, match="Invalid Y coordinate"):
            Position.parse("1,abc")


class TestPositionFormat:
    def test_integral_values_have_no_decimal(self):
        assert str(Position(100.0, 0.0)) == "100,0"

    def test_fractional_values(self):
        assert str(Position(12.5, -0.25)) == "12.5,-0.25"

    def test_reparses_to_same_position(self):
        pos = Position(150.0, 42.75)
        assert Position.parse(str(pos)) == pos


class TestPosition:
    def test_is_empty(self):
        assert Position.empty().is_empty
        assert not Position(0, 1).is_empty

    def test_translated(self):
        assert Position(1, 2).translated(10, -2) == Position(11, 0)

    def test_default_kind(self):
        assert NodeKind.default() is NodeKind.Component
