#!/usr/bin/env python3
"""
Demo: Build the example audio criteria, evaluate a few rules and export them.
"""

import logging

from selcrit.examples import build_example_criteria
from selcrit.serialization import criteria_to_yaml, criteria_to_xml


RULES = [
    ("Mode", "Is", "InCall"),
    ("Mode", "Is Not", "Normal"),
    ("OutputDevices", "Includes", "Speaker|Bluetooth"),
    ("OutputDevices", "Excludes", "WiredHeadset"),
    ("InputDevices", "Is", "BuiltinMic"),
]


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    criteria = build_example_criteria()

    print("=" * 70)
    print("SELECTION CRITERIA")
    print("=" * 70)
    for description in criteria.list_criteria(with_type_info=True, human_readable=True):
        print(description)
        print()

    outputs = criteria.get_criterion("OutputDevices")
    outputs.set_state(outputs.get_numerical_value("Speaker|Bluetooth"))

    print("RULES")
    print("-" * 70)
    for name, method, literal in RULES:
        criterion = criteria.get_criterion(name)
        if not criterion.is_match_method_available(method):
            print(f"  {name} {method} {literal}: method not supported, skipped")
            continue
        result = criterion.match(method, criterion.get_numerical_value(literal))
        print(f"  {name} {method} {literal}: {result}")
    print()

    print("MODIFIED SINCE LAST RESET")
    print("-" * 70)
    for criterion in criteria.modified_criteria():
        print(f"  {criterion.name} = {criterion.get_formatted_state()}")
    criteria.reset_all_modified_status()
    print()

    print("YAML")
    print("-" * 70)
    print(criteria_to_yaml(criteria))

    print("XML")
    print("-" * 70)
    print(criteria_to_xml(criteria))


if __name__ == "__main__":
    main()
