"""
Selection Criteria Package

Runtime registry of named, typed state variables ("criteria") that a
configuration engine matches rules against:

    Mode Is InCall
    OutputDevices Includes Speaker

Each criterion maps literal labels to numerical codes, holds a current
state and exposes a fixed set of match methods. Exclusive criteria hold
one value; inclusive criteria hold a bitmask of values.

This package contains ZERO knowledge of:
    - Rule parsing (callers pass a method name and a numerical value)
    - Where criteria definitions come from
    - What a configuration does once it is selected
"""

from selcrit.config import CriterionConfig
from selcrit.criteria import Criteria
from selcrit.criterion import Criterion, InclusiveCriterion
from selcrit.errors import (
    CriterionError,
    DuplicateCriterionError,
    DuplicateValuePairError,
    InvalidBitmaskValueError,
    SerializationError,
    UnknownMatchMethodError,
)
from selcrit.matching import MatchMethod
from selcrit.values import ValuePair

__version__ = "0.1.0"

__all__ = [
    "Criteria",
    "Criterion",
    "CriterionConfig",
    "CriterionError",
    "DuplicateCriterionError",
    "DuplicateValuePairError",
    "InclusiveCriterion",
    "InvalidBitmaskValueError",
    "MatchMethod",
    "SerializationError",
    "UnknownMatchMethodError",
    "ValuePair",
]
