"""
Match methods: the named comparison operators a rule can apply to a criterion.

A rule such as "Mode Is Speaker" or "OutputDevices Includes Headset" reaches
this package already split into a method name and a numerical value. The
criterion looks the method up in its table and applies it to its current
state.

Each criterion kind owns a fixed table, built once when this module is
imported:

    Exclusive:  Is, Is Not
    Inclusive:  Includes, Excludes

ARCHITECTURAL RULE:
    Tables are read-only mappings. A criterion never adds or removes
    match methods after construction.
"""

from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Union


class MatchMethod(Enum):
    """
    Operators supported by criteria.

    The enum value is the public name used in rules and in serialized
    documents.
    """

    IS = "Is"
    IS_NOT = "Is Not"
    INCLUDES = "Includes"
    EXCLUDES = "Excludes"


MatchFunction = Callable[[int, int], bool]
MatchTable = Mapping[MatchMethod, MatchFunction]


def _is(current: int, state: int) -> bool:
    return current == state


def _is_not(current: int, state: int) -> bool:
    return current != state


def _includes(current: int, state: int) -> bool:
    # Every bit of the argument must be set. An empty mask has no bit to
    # miss, so "Includes 0" always matches.
    return (current & state) == state


def _excludes(current: int, state: int) -> bool:
    return (current & state) == 0


EXCLUSIVE_MATCH_METHODS: MatchTable = MappingProxyType({
    MatchMethod.IS: _is,
    MatchMethod.IS_NOT: _is_not,
})

INCLUSIVE_MATCH_METHODS: MatchTable = MappingProxyType({
    MatchMethod.INCLUDES: _includes,
    MatchMethod.EXCLUDES: _excludes,
})


def resolve_match_method(method: Union[MatchMethod, str]) -> Optional[MatchMethod]:
    """
    Turn a rule's method name into a MatchMethod.

    Returns None for names that are not operators at all, so callers can
    treat "unknown everywhere" and "unknown for this kind" the same way.
    """
    if isinstance(method, MatchMethod):
        return method
    try:
        return MatchMethod(method)
    except ValueError:
        return None
