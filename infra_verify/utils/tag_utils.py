# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Helpers for AWS key/value lists (tags and settings).

Expected tags are compared as a subset: every expected key must be present
with the exact expected value, and extra live entries are ignored.
"""

from typing import NamedTuple, Optional


class TagMismatch(NamedTuple):
    """A single expected tag that is missing or carries another value."""

    key: str
    expected: str
    observed: Optional[str]

    def describe(self) -> str:
        if self.observed is None:
            return f"Tag '{self.key}': expected '{self.expected}', observed no such tag"
        return f"Tag '{self.key}': expected '{self.expected}', observed '{self.observed}'"


def extract_tags(tag_list: list[dict[str, str]] | None) -> dict[str, str]:
    """
    Convert AWS tag list format to dictionary.

    Args:
        tag_list: List of tags in AWS format [{"Key": "...", "Value": "..."}]
                 or ECS format [{"key": "...", "value": "..."}]

    Returns:
        Dictionary of tag key-value pairs
    """
    if not tag_list:
        return {}

    result = {}
    for tag in tag_list:
        # EC2 uses capitalised keys, ECS lowercase
        key = tag.get("Key") or tag.get("key", "")
        value = tag.get("Value") or tag.get("value", "")
        if key:
            result[key] = value

    return result


def extract_settings(setting_list: list[dict[str, str]] | None) -> dict[str, str]:
    """Convert ECS cluster settings [{"name": ..., "value": ...}] to a dictionary."""
    if not setting_list:
        return {}
    return {
        setting["name"]: setting.get("value", "")
        for setting in setting_list
        if setting.get("name")
    }


def find_tag_mismatches(
    expected: dict[str, str], observed: dict[str, str]
) -> list[TagMismatch]:
    """
    Compare expected tags against live tags using subset containment.

    Args:
        expected: Tags that must be present
        observed: Tags found on the live resource

    Returns:
        Mismatches in expected-key order; empty when every expected tag matches
    """
    mismatches = []
    for key, value in expected.items():
        actual = observed.get(key)
        if actual != value:
            mismatches.append(TagMismatch(key=key, expected=value, observed=actual))
    return mismatches
