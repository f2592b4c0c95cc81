"""
Criteria registry: the single owner of every selection criterion.

The registry creates criteria (exclusive or inclusive), hands them out by
name, lists them, resets their modification counters at the end of a
configuration pass and exports them as XML.

Typical use:

    criteria = Criteria()
    mode = criteria.create_exclusive_criterion("Mode")
    mode.add_value_pair(0, "Normal")
    mode.add_value_pair(2, "InCall")

    mode.set_state(2)
    criteria.get_criterion("Mode").match("Is", 2)   # True
    criteria.get_criterion("Volume")                # None

ARCHITECTURAL RULE:
    Names are unique. Creating a criterion under a name that is already
    registered raises DuplicateCriterionError and leaves the existing
    criterion untouched.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional
from xml.etree.ElementTree import Element, SubElement

from selcrit.config import CriterionConfig
from selcrit.criterion import Criterion, InclusiveCriterion
from selcrit.errors import DuplicateCriterionError


class Criteria:
    """Named collection of criteria, in creation order."""

    def __init__(self, logger: Optional[logging.Logger] = None,
                 config: Optional[CriterionConfig] = None) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._config = config if config is not None else CriterionConfig()
        self._criteria: Dict[str, Criterion] = {}

    @property
    def config(self) -> CriterionConfig:
        return self._config

    def create_exclusive_criterion(self, name: str) -> Criterion:
        return self._register(Criterion(name, self._logger, self._config))

    def create_inclusive_criterion(self, name: str) -> InclusiveCriterion:
        return self._register(InclusiveCriterion(name, self._logger, self._config))

    def _register(self, criterion: Criterion) -> Criterion:
        if criterion.name in self._criteria:
            raise DuplicateCriterionError(f"Criterion '{criterion.name}' already exists")
        self._criteria[criterion.name] = criterion
        self._logger.info("Created %s criterion %s", criterion.KIND.lower(), criterion.name)
        return criterion

    def get_criterion(self, name: str) -> Optional[Criterion]:
        """
        Retrieve a criterion by name.

        Returns:
            Criterion object or None if not found
        """
        return self._criteria.get(name)

    def list_criteria(self, with_type_info: bool = False,
                      human_readable: bool = False) -> List[str]:
        """One formatted description per criterion (see Criterion.get_formatted_description)."""
        return [
            criterion.get_formatted_description(with_type_info, human_readable)
            for criterion in self._criteria.values()
        ]

    def reset_all_modified_status(self) -> None:
        for criterion in self._criteria.values():
            criterion.reset_modified_status()
        self._logger.debug("Reset modified status of %d criteria", len(self._criteria))

    def modified_criteria(self) -> List[Criterion]:
        """Criteria whose state changed since the last reset."""
        return [c for c in self._criteria.values() if c.has_been_modified()]

    def to_xml(self, element: Element, with_value_pairs: bool = True) -> Element:
        """Append one SelectionCriterion child per criterion to element."""
        for criterion in self._criteria.values():
            criterion.to_xml(SubElement(element, "SelectionCriterion"), with_value_pairs)
        return element

    def __len__(self) -> int:
        return len(self._criteria)

    def __iter__(self) -> Iterator[Criterion]:
        return iter(list(self._criteria.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._criteria
