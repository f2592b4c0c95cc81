"""
Formatting and validation settings shared by all criteria of a registry.

Settings are plain data. They can be built in code or loaded from a YAML
mapping:

    unset_marker: "<none>"
    inclusive_separator: "|"
    strict_bitmask: false
"""
from __future__ import annotations

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict

import yaml

from selcrit.errors import SerializationError


DEFAULT_UNSET_MARKER = "<none>"
DEFAULT_INCLUSIVE_SEPARATOR = "|"


@dataclass(frozen=True)
class CriterionConfig:
    """
    Settings applied to every criterion created by a registry.

    Properties:
        unset_marker:
            Formatted state when no literal describes the current state.

        inclusive_separator:
            Joins the literals of an inclusive state ("A|B") and splits
            compound literals when resolving them back to a bitmask.

        strict_bitmask:
            When True, inclusive criteria only accept single-bit numerical
            values (and 0). Off by default: historically any integer was
            accepted and the caller was trusted to register single bits.
    """

    unset_marker: str = DEFAULT_UNSET_MARKER
    inclusive_separator: str = DEFAULT_INCLUSIVE_SEPARATOR
    strict_bitmask: bool = False

    def __post_init__(self) -> None:
        if not self.inclusive_separator:
            raise ValueError("inclusive_separator must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any] | None) -> CriterionConfig:
        if d is None:
            return cls()
        if not isinstance(d, dict):
            raise SerializationError(f"Config must be a mapping, got {type(d).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise SerializationError(f"Unknown config keys: {sorted(unknown)}")
        try:
            return cls(**d)
        except ValueError as e:
            raise SerializationError(f"Invalid config: {e}") from e


def config_from_yaml(s: str) -> CriterionConfig:
    return CriterionConfig.from_dict(yaml.safe_load(s))


def load_config(path) -> CriterionConfig:
    """Read a CriterionConfig from a YAML file."""
    try:
        with open(path, encoding="utf-8") as f:
            return config_from_yaml(f.read())
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found: {path}") from None
