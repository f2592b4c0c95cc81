"""
Serialization helpers for criteria (single criterion and whole registry).

Provides JSON/YAML round-trip via an intermediate dict representation
with the same fields as the XML export:

    name: Mode
    kind: Exclusive
    state: InCall            # formatted state
    numerical_state: 2       # raw state, so unregistered states survive
    value_pairs:
      - {literal: Normal, numerical: 0}
      - {literal: InCall, numerical: 2}

Loading rebuilds criteria through the registry factories and does not
count as a modification.
"""
from __future__ import annotations

import json
from typing import Any, Dict
from xml.etree.ElementTree import Element, tostring

import yaml

from selcrit.config import CriterionConfig
from selcrit.criteria import Criteria
from selcrit.criterion import Criterion
from selcrit.errors import SerializationError


KINDS = ("Exclusive", "Inclusive")


def criterion_to_dict(c: Criterion) -> Dict[str, Any]:
    return {
        "name": c.name,
        "kind": c.KIND,
        "state": c.get_formatted_state(),
        "numerical_state": c.state,
        "value_pairs": [{"literal": p.literal, "numerical": p.numerical} for p in c.value_pairs],
    }


def criterion_into_registry(d: Dict[str, Any], criteria: Criteria) -> Criterion:
    """Create the criterion described by d inside an existing registry."""
    if not isinstance(d, dict) or "name" not in d:
        raise SerializationError(f"Criterion entry must be a mapping with a name: {d!r}")

    kind = d.get("kind", "Exclusive")
    if kind == "Exclusive":
        c = criteria.create_exclusive_criterion(d["name"])
    elif kind == "Inclusive":
        c = criteria.create_inclusive_criterion(d["name"])
    else:
        raise SerializationError(f"Unsupported criterion kind for {d['name']}: {kind!r} (expected one of {KINDS})")

    for pair in d.get("value_pairs") or []:
        try:
            numerical, literal = int(pair["numerical"]), pair["literal"]
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(f"Invalid value pair for criterion {d['name']}: {pair!r}") from e
        if not isinstance(literal, str):
            raise SerializationError(
                f"Literal of value pair {pair!r} for criterion {d['name']} must be a string "
                f"(quote YAML values such as On, Off or numbers)"
            )
        c.add_value_pair(numerical, literal)

    if d.get("numerical_state") is not None:
        try:
            numerical_state = int(d["numerical_state"])
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Invalid numerical state {d['numerical_state']!r} for criterion {d['name']}"
            ) from e
        c.set_state(numerical_state)
    elif d.get("state") is not None:
        if not isinstance(d["state"], str):
            raise SerializationError(f"State of criterion {d['name']} must be a string: {d['state']!r}")
        numerical = c.get_numerical_value(d["state"])
        if numerical is None and d["state"] != criteria.config.unset_marker:
            raise SerializationError(f"Unknown state {d['state']!r} for criterion {d['name']}")
        c.set_state(numerical or 0)

    c.reset_modified_status()
    return c


def criterion_to_json(c: Criterion) -> str:
    return json.dumps(criterion_to_dict(c), sort_keys=True)


def criterion_from_json(s: str, criteria: Criteria) -> Criterion:
    d = json.loads(s)
    return criterion_into_registry(d, criteria)


def criterion_to_yaml(c: Criterion) -> str:
    return yaml.safe_dump(criterion_to_dict(c), sort_keys=False)


def criterion_from_yaml(s: str, criteria: Criteria) -> Criterion:
    d = yaml.safe_load(s)
    return criterion_into_registry(d, criteria)


def criteria_to_dict(criteria: Criteria) -> Dict[str, Any]:
    return {
        "config": criteria.config.to_dict(),
        "criteria": [criterion_to_dict(c) for c in criteria],
    }


def criteria_from_dict(d: Dict[str, Any]) -> Criteria:
    if not isinstance(d, dict):
        raise SerializationError(f"Criteria document must be a mapping, got {type(d).__name__}")
    criteria = Criteria(config=CriterionConfig.from_dict(d.get("config")))
    entries = d.get("criteria") or []
    if not isinstance(entries, list):
        raise SerializationError(f"criteria must be a list, got {type(entries).__name__}")
    for entry in entries:
        criterion_into_registry(entry, criteria)
    return criteria


def criteria_to_json(criteria: Criteria) -> str:
    return json.dumps(criteria_to_dict(criteria), sort_keys=True)


def criteria_from_json(s: str) -> Criteria:
    d = json.loads(s)
    return criteria_from_dict(d)


def criteria_to_yaml(criteria: Criteria) -> str:
    return yaml.safe_dump(criteria_to_dict(criteria), sort_keys=False)


def criteria_from_yaml(s: str) -> Criteria:
    d = yaml.safe_load(s)
    return criteria_from_dict(d)


def criteria_to_xml(criteria: Criteria, with_value_pairs: bool = True) -> str:
    root = Element("SelectionCriteria")
    criteria.to_xml(root, with_value_pairs)
    return tostring(root, encoding="unicode")
