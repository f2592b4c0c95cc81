"""
Selection criteria: named runtime state variables that rules match against.

A criterion holds:
    - A table of value pairs (literal <-> numerical)
    - A current state (32-bit signed integer)
    - A modification counter
    - A fixed table of match methods

Two kinds exist:

    Criterion (exclusive):
        The state is ONE registered value.
        Example: Mode in {Normal, RingTone, InCall}

    InclusiveCriterion:
        The state is a bitmask; each set bit is one registered value.
        Example: OutputDevices = Speaker|Headset

ARCHITECTURAL RULE:
    Criteria are created by a Criteria registry, never directly by
    application code. The registry hands out its own instances; they stay
    valid for as long as the registry lives.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union
from xml.etree.ElementTree import Element, SubElement

from selcrit.config import CriterionConfig
from selcrit.errors import InvalidBitmaskValueError, UnknownMatchMethodError
from selcrit.matching import (
    EXCLUSIVE_MATCH_METHODS,
    INCLUSIVE_MATCH_METHODS,
    MatchMethod,
    MatchTable,
    resolve_match_method,
)
from selcrit.values import ValuePair, ValueTable


STATE_BITS = 32
_STATE_MASK = (1 << STATE_BITS) - 1
_SIGN_BIT = 1 << (STATE_BITS - 1)


def to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range used for states."""
    value = int(value) & _STATE_MASK
    return value - (1 << STATE_BITS) if value & _SIGN_BIT else value


class Criterion:
    """
    Exclusive criterion: the state is a single value of the domain.

    Supported match methods:
        "Is":     current state == rule value
        "Is Not": current state != rule value

    The state starts at 0 ("unset" unless a literal is registered for 0).
    set_state() does not check the new state against the registered values;
    keeping the state inside the domain is the caller's job.
    """

    KIND = "Exclusive"
    MATCH_METHODS: MatchTable = EXCLUSIVE_MATCH_METHODS

    def __init__(self, name: str,
                 logger: Optional[logging.Logger] = None,
                 config: Optional[CriterionConfig] = None) -> None:
        self._name = name
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._config = config if config is not None else CriterionConfig()
        self._values = ValueTable()
        self._state = 0
        self._modification_count = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, state={self.get_formatted_state()!r})"

    # ------------------------------------------------------------------
    # Identity and state
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> CriterionConfig:
        return self._config

    @property
    def state(self) -> int:
        return self._state

    def set_state(self, state: int) -> None:
        """
        Store a new state.

        The modification counter moves only when the state actually
        changes; setting the current value again is not a modification.
        """
        state = to_int32(state)
        if state == self._state:
            return

        previous = self.get_formatted_state()
        self._state = state
        self._modification_count += 1
        self._logger.debug(
            "Criterion %s: state %s -> %s", self._name, previous, self.get_formatted_state()
        )

    def is_inclusive(self) -> bool:
        return False

    def has_been_modified(self) -> bool:
        return self._modification_count > 0

    def get_modification_count(self) -> int:
        return self._modification_count

    def reset_modified_status(self) -> None:
        self._modification_count = 0

    # ------------------------------------------------------------------
    # Value pairs
    # ------------------------------------------------------------------

    def add_value_pair(self, numerical: int, literal: str) -> ValuePair:
        """
        Register a literal for a numerical value.

        Returns:
            The registered ValuePair

        Raises:
            DuplicateValuePairError: The literal or the numerical value is
                already registered. Nothing is added in that case.
        """
        numerical = to_int32(numerical)
        try:
            pair = self._values.add(numerical, literal)
        except ValueError as e:
            self._logger.warning("Criterion %s: %s", self._name, e)
            raise
        self._logger.debug("Criterion %s: added value pair %s = %d", self._name, literal, numerical)
        return pair

    @property
    def value_pairs(self) -> Tuple[ValuePair, ...]:
        return self._values.pairs()

    def get_literal_value(self, numerical: int) -> Optional[str]:
        return self._values.literal_for(to_int32(numerical))

    def get_numerical_value(self, literal: str) -> Optional[int]:
        return self._values.numerical_for(literal)

    def list_possible_values(self) -> str:
        """Registered literals in registration order, e.g. "{Normal, InCall}"."""
        return "{" + ", ".join(self._values.literals()) + "}"

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def get_formatted_state(self) -> str:
        literal = self._values.literal_for(self._state)
        return literal if literal is not None else self._config.unset_marker

    def get_formatted_description(self, with_type_info: bool = False,
                                  human_readable: bool = False) -> str:
        """
        Describe the criterion on one line (machine) or a few lines (human).

        Examples:
            human, no type info:   "Mode = InCall"
            machine, no type info: "Criterion name: Mode, current state: InCall"
            machine, type info:    "Criterion name: Mode, type kind: Exclusive,
                                    current state: InCall, states: {Normal, InCall}"
        """
        state = self.get_formatted_state()

        if human_readable:
            if not with_type_info:
                return f"{self._name} = {state}"
            title = f"{self._name}:"
            return (
                f"{title}\n{'=' * len(title)}\n"
                f"Possible states ({self.KIND}): {self.list_possible_values()}\n"
                f"Current state = {state}"
            )

        description = f"Criterion name: {self._name}"
        if with_type_info:
            description += f", type kind: {self.KIND}"
        description += f", current state: {state}"
        if with_type_info:
            description += f", states: {self.list_possible_values()}"
        return description

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    @property
    def match_methods(self) -> Tuple[str, ...]:
        """Names of the supported match methods."""
        return tuple(method.value for method in self.MATCH_METHODS)

    def is_match_method_available(self, method: Union[MatchMethod, str]) -> bool:
        resolved = resolve_match_method(method)
        return resolved is not None and resolved in self.MATCH_METHODS

    def match(self, method: Union[MatchMethod, str], state: int) -> bool:
        """
        Apply a match method to the current state.

        Args:
            method: Match method, as enum member or public name ("Is")
            state: Numerical value taken from the rule

        Returns:
            True if the current state satisfies the rule

        Raises:
            UnknownMatchMethodError: If this kind of criterion does not
                support the method. Use is_match_method_available() to check
                rules before evaluating them.
        """
        resolved = resolve_match_method(method)
        function = self.MATCH_METHODS.get(resolved) if resolved is not None else None
        if function is None:
            name = method.value if isinstance(method, MatchMethod) else str(method)
            self._logger.error("Criterion %s: unknown match method '%s'", self._name, name)
            raise UnknownMatchMethodError(name, self._name, self.match_methods)
        return function(self._state, to_int32(state))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_xml(self, element: Element, with_value_pairs: bool = True) -> Element:
        """
        Fill an XML element with this criterion's description.

        Attributes: Name, Kind, Value (formatted state).
        Children (when with_value_pairs): one ValuePair per registered
        value and one MatchMethod per supported method.
        """
        element.set("Name", self._name)
        element.set("Kind", self.KIND)
        element.set("Value", self.get_formatted_state())

        if with_value_pairs:
            for pair in self._values:
                SubElement(element, "ValuePair", Literal=pair.literal, Numerical=str(pair.numerical))
            for method in self.match_methods:
                SubElement(element, "MatchMethod", Name=method)
        return element


class InclusiveCriterion(Criterion):
    """
    Inclusive criterion: the state is a bitmask of simultaneously active values.

    Registered values are expected to be single bits (1, 2, 4, ...). This is
    only enforced when the config asks for strict_bitmask.

    Supported match methods:
        "Includes": every bit of the rule value is set in the state.
                    A rule value of 0 has no bits, so it ALWAYS matches.
        "Excludes": no bit of the rule value is set in the state.

    Formatting joins the literal of each active bit with the configured
    separator, in registration order: "Speaker|Headset". Active bits with no
    registered literal are written as numbers so nothing is silently dropped.
    """

    KIND = "Inclusive"
    MATCH_METHODS: MatchTable = INCLUSIVE_MATCH_METHODS

    def is_inclusive(self) -> bool:
        return True

    def add_value_pair(self, numerical: int, literal: str) -> ValuePair:
        """
        Register a literal for a bit value.

        Raises:
            DuplicateValuePairError: The literal or the numerical value is
                already registered
            InvalidBitmaskValueError: strict_bitmask is on and the value is
                neither 0 nor a single bit
        """
        if self._config.strict_bitmask and not _is_single_bit_or_zero(to_int32(numerical)):
            message = (
                f"Rejected value pair ({numerical}, '{literal}'): inclusive criterion "
                f"'{self._name}' only accepts single-bit values"
            )
            self._logger.warning("Criterion %s: %s", self._name, message)
            raise InvalidBitmaskValueError(message)
        return super().add_value_pair(numerical, literal)

    def get_numerical_value(self, literal: str) -> Optional[int]:
        """
        Resolve a literal, or a compound "A|B" literal, to a bitmask.

        Every part must be a registered literal. Any unknown part, numbers
        included, makes the whole lookup a miss.
        """
        numerical = self._values.numerical_for(literal)
        if numerical is not None:
            return numerical
        if literal == self._config.unset_marker:
            return 0

        mask = 0
        for part in literal.split(self._config.inclusive_separator):
            value = self._values.numerical_for(part)
            if value is None:
                return None
            mask |= value
        return to_int32(mask)

    def get_formatted_state(self) -> str:
        remaining = self._state & _STATE_MASK
        parts: List[str] = []

        for pair in self._values:
            bit = pair.numerical & _STATE_MASK
            if bit and _is_single_bit_or_zero(bit) and remaining & bit:
                parts.append(pair.literal)
                remaining &= ~bit

        # Active bits nobody registered
        for position in range(STATE_BITS):
            bit = 1 << position
            if remaining & bit:
                parts.append(str(to_int32(bit)))

        if parts:
            return self._config.inclusive_separator.join(parts)

        literal = self._values.literal_for(0)
        return literal if literal is not None else self._config.unset_marker


def _is_single_bit_or_zero(value: int) -> bool:
    value &= _STATE_MASK
    return value & (value - 1) == 0
