"""
Value pairs: the association between a criterion's literal labels and
numerical codes.

A criterion's state is stored as an integer. Rules and humans speak in
literals ("Speaker", "Headset"). The ValueTable keeps both directions
in sync:

    literal -> numerical
    numerical -> literal

INVARIANTS:
    - No two literals share a numerical value
    - No two numerical values share a literal
    - The table only grows; pairs are never removed
    - A rejected insertion leaves both directions untouched
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from selcrit.errors import DuplicateValuePairError


@dataclass(frozen=True)
class ValuePair:
    """
    One registered value of a criterion.

    Properties:
        numerical: Code stored in the criterion state (e.g. 0x4)
        literal: Human-readable label (e.g. "Headset")
    """

    numerical: int
    literal: str


class ValueTable:
    """Two synchronized mappings between literals and numerical values."""

    def __init__(self) -> None:
        self._by_literal: Dict[str, int] = {}
        self._by_numerical: Dict[int, str] = {}

    def add(self, numerical: int, literal: str) -> ValuePair:
        """
        Register a new pair.

        Both directions are checked before anything is written.

        Raises:
            TypeError: If the literal is not a string
            ValueError: If the literal is empty
            DuplicateValuePairError: If the literal or numerical value is
                already registered
        """
        if not isinstance(literal, str):
            raise TypeError(f"Literal value must be a string, got {type(literal).__name__}")
        if not literal:
            raise ValueError("Literal value must be a non-empty string")
        if literal in self._by_literal:
            raise DuplicateValuePairError(
                f"Rejected value pair ({numerical}, '{literal}'): literal value "
                f"'{literal}' already associated with {self._by_literal[literal]}"
            )
        if numerical in self._by_numerical:
            raise DuplicateValuePairError(
                f"Rejected value pair ({numerical}, '{literal}'): numerical value "
                f"{numerical} already associated with '{self._by_numerical[numerical]}'"
            )

        self._by_literal[literal] = numerical
        self._by_numerical[numerical] = literal
        return ValuePair(numerical=numerical, literal=literal)

    def literal_for(self, numerical: int) -> Optional[str]:
        return self._by_numerical.get(numerical)

    def numerical_for(self, literal: str) -> Optional[int]:
        return self._by_literal.get(literal)

    def literals(self) -> Tuple[str, ...]:
        """Registered literals, in registration order."""
        return tuple(self._by_literal)

    def pairs(self) -> Tuple[ValuePair, ...]:
        return tuple(ValuePair(numerical=n, literal=l) for l, n in self._by_literal.items())

    def __iter__(self) -> Iterator[ValuePair]:
        return iter(self.pairs())

    def __len__(self) -> int:
        return len(self._by_literal)

    def __contains__(self, literal: object) -> bool:
        return literal in self._by_literal
