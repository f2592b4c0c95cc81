"""
Tests for the literal <-> numerical value table and match method tables.
"""

import pytest

from selcrit.errors import DuplicateValuePairError
from selcrit.matching import (
    EXCLUSIVE_MATCH_METHODS,
    INCLUSIVE_MATCH_METHODS,
    MatchMethod,
    resolve_match_method,
)
from selcrit.values import ValuePair, ValueTable


class TestValueTable:
    """Test the bijective value table."""

    def test_add_returns_pair(self):
        """Should return the registered pair."""
        table = ValueTable()
        assert table.add(4, "Z") == ValuePair(numerical=4, literal="Z")
        assert len(table) == 1
        assert "Z" in table

    def test_both_directions_checked_before_write(self):
        """Should leave both directions untouched on rejection."""
        table = ValueTable()
        table.add(1, "X")
        table.add(2, "Y")
        with pytest.raises(DuplicateValuePairError):
            table.add(2, "W")
        assert table.numerical_for("W") is None
        assert table.literal_for(2) == "Y"
        assert table.literals() == ("X", "Y")

    def test_iteration_order(self):
        """Should iterate in registration order."""
        table = ValueTable()
        table.add(4, "Z")
        table.add(1, "X")
        assert [p.literal for p in table] == ["Z", "X"]


class TestMatchTables:
    """Test the per-kind match method tables."""

    def test_table_contents(self):
        """Should hold two operators per kind."""
        assert list(EXCLUSIVE_MATCH_METHODS) == [MatchMethod.IS, MatchMethod.IS_NOT]
        assert list(INCLUSIVE_MATCH_METHODS) == [MatchMethod.INCLUDES, MatchMethod.EXCLUDES]

    def test_tables_are_read_only(self):
        """Should not allow adding methods."""
        with pytest.raises(TypeError):
            EXCLUSIVE_MATCH_METHODS[MatchMethod.INCLUDES] = lambda current, state: True

    def test_resolve(self):
        """Should resolve public names and pass enum members through."""
        assert resolve_match_method("Is Not") is MatchMethod.IS_NOT
        assert resolve_match_method(MatchMethod.EXCLUDES) is MatchMethod.EXCLUDES
        assert resolve_match_method("IsNot") is None


class TestLiteralType:
    """Test literal type checking."""

    def test_non_string_literal_rejected(self):
        """Should refuse literals that are not strings."""
        table = ValueTable()
        with pytest.raises(TypeError):
            table.add(1, True)
        with pytest.raises(TypeError):
            table.add(2, 2)
        assert len(table) == 0
