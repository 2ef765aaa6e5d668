"""Tests for the tagged last-move record."""

import pytest

from xml_path_cursor.navigation import LastMove, MoveKind


class TestLastMove:
    """Test move construction and derived values."""

    def test_start(self):
        move = LastMove.start()
        assert move.kind is MoveKind.START
        assert move.delta == 0
        assert move.is_exhausted is False

    def test_descended(self):
        move = LastMove.descended("book")
        assert move.name == "book"
        assert move.delta == 1

    def test_ascended(self):
        move = LastMove.ascended(3)
        assert move.kind is MoveKind.ASCENDED
        assert move.delta == -3

    def test_exhausted_defaults_to_one_level(self):
        assert LastMove.exhausted().delta == -1
        assert LastMove.exhausted(4).levels == 4
        assert LastMove.exhausted().is_exhausted is True

    def test_validation(self):
        with pytest.raises(ValueError, match="levels must be >= 0"):
            LastMove(MoveKind.ASCENDED, levels=-1)
        with pytest.raises(ValueError, match="must record the element name"):
            LastMove(MoveKind.DESCENDED, levels=1)
