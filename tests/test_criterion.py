"""
Tests for exclusive criteria.

These tests verify:
    - State storage and the modification counter
    - Value pair registration and lookups
    - Formatting of the current state and of descriptions
    - "Is" / "Is Not" matching and unknown match methods
    - XML export
"""

import logging
from xml.etree.ElementTree import Element

import pytest

from selcrit.config import CriterionConfig
from selcrit.criterion import Criterion, to_int32
from selcrit.errors import DuplicateValuePairError, UnknownMatchMethodError
from selcrit.matching import MatchMethod


@pytest.fixture
def criterion():
    c = Criterion("Mode")
    c.add_value_pair(0, "A")
    c.add_value_pair(1, "B")
    return c


class TestState:
    """Test state storage and modification tracking."""

    def test_initial_state(self):
        """Should start at 0 and unmodified."""
        c = Criterion("Mode")
        assert c.name == "Mode"
        assert c.state == 0
        assert not c.has_been_modified()
        assert c.get_modification_count() == 0

    def test_set_state_marks_modified(self, criterion):
        """Should count a change of state as a modification."""
        criterion.set_state(1)
        assert criterion.state == 1
        assert criterion.has_been_modified()
        assert criterion.get_modification_count() == 1

    def test_same_state_is_not_a_modification(self, criterion):
        """Should not count setting the current value again."""
        criterion.set_state(0)
        assert not criterion.has_been_modified()

        criterion.set_state(1)
        criterion.set_state(1)
        assert criterion.get_modification_count() == 1

    def test_unregistered_state_is_stored(self, criterion):
        """Should store any state without checking the value pairs."""
        criterion.set_state(42)
        assert criterion.state == 42

    def test_reset_modified_status(self, criterion):
        """Should clear the counter but keep the state."""
        criterion.set_state(1)
        criterion.reset_modified_status()
        assert not criterion.has_been_modified()
        assert criterion.state == 1

    def test_state_wraps_to_32_bits(self, criterion):
        """Should keep states in the signed 32-bit range."""
        criterion.set_state(0xFFFFFFFF)
        assert criterion.state == -1
        assert to_int32(1 << 31) == -(1 << 31)
        assert to_int32(1 << 32) == 0

    def test_exclusive_kind(self, criterion):
        """Should not be inclusive."""
        assert not criterion.is_inclusive()
        assert criterion.KIND == "Exclusive"


class TestValuePairs:
    """Test value pair registration and lookups."""

    def test_lookups(self, criterion):
        """Should resolve both directions."""
        assert criterion.get_literal_value(1) == "B"
        assert criterion.get_numerical_value("A") == 0

    def test_lookup_miss_returns_none(self, criterion):
        """Should return None for unknown values, never raise."""
        assert criterion.get_literal_value(7) is None
        assert criterion.get_numerical_value("Z") is None

    def test_duplicate_pair_rejected_once(self):
        """Should accept a pair once and reject it the second time."""
        c = Criterion("Mode")
        c.add_value_pair(1, "X")
        with pytest.raises(DuplicateValuePairError):
            c.add_value_pair(1, "X")
        assert len(c.value_pairs) == 1

    def test_duplicate_literal_rejected(self, criterion):
        """Should reject a known literal and leave the table unchanged."""
        with pytest.raises(DuplicateValuePairError, match="'B'"):
            criterion.add_value_pair(5, "B")
        assert criterion.get_literal_value(5) is None
        assert criterion.get_numerical_value("B") == 1

    def test_duplicate_numerical_rejected(self, criterion):
        """Should reject a known numerical value and leave the table unchanged."""
        with pytest.raises(DuplicateValuePairError, match="numerical value 1"):
            criterion.add_value_pair(1, "C")
        assert criterion.get_numerical_value("C") is None
        assert criterion.get_literal_value(1) == "B"

    def test_empty_literal_rejected(self, criterion):
        """Should refuse an empty literal."""
        with pytest.raises(ValueError):
            criterion.add_value_pair(3, "")

    def test_value_pairs_in_registration_order(self, criterion):
        """Should expose pairs in registration order."""
        assert [(p.numerical, p.literal) for p in criterion.value_pairs] == [(0, "A"), (1, "B")]
        assert criterion.list_possible_values() == "{A, B}"

    def test_duplicate_logs_warning(self, criterion, caplog):
        """Should log refused registrations."""
        with caplog.at_level(logging.WARNING, logger="selcrit.criterion"):
            with pytest.raises(DuplicateValuePairError):
                criterion.add_value_pair(0, "A")
        assert "Rejected value pair" in caplog.text


class TestFormatting:
    """Test formatted state and descriptions."""

    def test_formatted_state(self, criterion):
        """Should format the literal of the current state."""
        criterion.set_state(1)
        assert criterion.get_formatted_state() == "B"

    def test_unset_marker(self):
        """Should use the unset marker when no literal matches."""
        c = Criterion("Mode")
        c.add_value_pair(1, "B")
        assert c.get_formatted_state() == "<none>"

    def test_custom_unset_marker(self):
        """Should honour the configured unset marker."""
        c = Criterion("Mode", config=CriterionConfig(unset_marker="?"))
        assert c.get_formatted_state() == "?"

    def test_descriptions(self, criterion):
        """Should render the four description styles."""
        criterion.set_state(1)
        assert criterion.get_formatted_description(False, True) == "Mode = B"
        assert criterion.get_formatted_description(False, False) == "Criterion name: Mode, current state: B"
        assert criterion.get_formatted_description(True, False) == (
            "Criterion name: Mode, type kind: Exclusive, current state: B, states: {A, B}"
        )
        assert criterion.get_formatted_description(True, True) == (
            "Mode:\n=====\nPossible states (Exclusive): {A, B}\nCurrent state = B"
        )


class TestMatch:
    """Test exclusive match methods."""

    def test_is(self, criterion):
        """Should match equal states with 'Is'."""
        criterion.set_state(1)
        assert criterion.match("Is", 1)
        assert not criterion.match("Is", 0)

    def test_is_not(self, criterion):
        """Should match different states with 'Is Not'."""
        criterion.set_state(1)
        assert not criterion.match("Is Not", 1)
        assert criterion.match("Is Not", 0)

    def test_enum_method(self, criterion):
        """Should accept MatchMethod members."""
        assert criterion.match(MatchMethod.IS, 0)

    def test_inclusive_method_is_unknown(self, criterion):
        """Should raise for methods of the other kind."""
        criterion.set_state(1)
        with pytest.raises(UnknownMatchMethodError) as excinfo:
            criterion.match("Includes", 1)
        assert excinfo.value.method == "Includes"
        assert excinfo.value.criterion_name == "Mode"
        assert excinfo.value.available == ("Is", "Is Not")

    def test_unknown_method_is_lookup_error(self, criterion):
        """Should be catchable as a LookupError."""
        with pytest.raises(LookupError):
            criterion.match("Bogus", 1)

    def test_is_match_method_available(self, criterion):
        """Should probe methods without raising."""
        assert criterion.is_match_method_available("Is")
        assert criterion.is_match_method_available("Is Not")
        assert not criterion.is_match_method_available("Includes")
        assert not criterion.is_match_method_available("Bogus")
        assert criterion.match_methods == ("Is", "Is Not")


class TestXml:
    """Test XML export."""

    def test_attributes_and_children(self, criterion):
        """Should write name, kind, state, value pairs and methods."""
        criterion.set_state(1)
        element = criterion.to_xml(Element("SelectionCriterion"))
        assert element.get("Name") == "Mode"
        assert element.get("Kind") == "Exclusive"
        assert element.get("Value") == "B"
        pairs = [(p.get("Literal"), p.get("Numerical")) for p in element.findall("ValuePair")]
        assert pairs == [("A", "0"), ("B", "1")]
        assert [m.get("Name") for m in element.findall("MatchMethod")] == ["Is", "Is Not"]

    def test_without_value_pairs(self, criterion):
        """Should only write attributes when value pairs are not requested."""
        element = criterion.to_xml(Element("SelectionCriterion"), with_value_pairs=False)
        assert list(element) == []
        assert element.get("Value") == "A"

    def test_exported_state_resolves_back(self, criterion):
        """Should export a state that resolves to the same literal."""
        criterion.set_state(1)
        value = criterion.to_xml(Element("SelectionCriterion")).get("Value")
        assert criterion.get_literal_value(criterion.get_numerical_value(value)) == criterion.get_formatted_state()
