"""Lookup and coercion helpers for free-text device specifications.

Every helper is lenient: a missing or unparseable field comes back as None
(or False/0) and never raises. Callers pick their own defaults.
"""

import math
import re
from collections.abc import Iterable

from src.models import DeviceRecord, Feature, Specification

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def parse_number(text: str | None) -> float | None:
    """Parse a number out of free text by dropping everything but digits and dots.

    "5000mAh" -> 5000.0, "1.5GHz" -> 1.5, "4,500 mAh" -> 4500.0.

    Args:
        text: Raw specification value.

    Returns:
        Parsed number, or None if no digits remain.
    """
    if not text:
        return None
    stripped = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(stripped)
    if not match:
        return None
    return float(match.group(0))


def _name_matches(name: str, all_of: Iterable[str], any_of: Iterable[str]) -> bool:
    lowered = name.lower()
    all_terms = list(all_of)
    any_terms = list(any_of)
    if all_terms and not all(term in lowered for term in all_terms):
        return False
    if any_terms and not any(term in lowered for term in any_terms):
        return False
    return True


def find_specs(
    device: DeviceRecord,
    any_of: Iterable[str] = (),
    all_of: Iterable[str] = (),
) -> list[Specification]:
    """Return every specification whose name matches, case-insensitively.

    Args:
        device: Device to search.
        any_of: Name must contain at least one of these substrings.
        all_of: Name must contain all of these substrings.

    Returns:
        Matching specifications in listed order.
    """
    any_terms = [t.lower() for t in any_of]
    all_terms = [t.lower() for t in all_of]
    return [s for s in device.specifications if _name_matches(s.name, all_terms, any_terms)]


def find_spec(
    device: DeviceRecord,
    any_of: Iterable[str] = (),
    all_of: Iterable[str] = (),
) -> Specification | None:
    """Return the first matching specification, or None."""
    matches = find_specs(device, any_of=any_of, all_of=all_of)
    return matches[0] if matches else None


def spec_number(
    device: DeviceRecord,
    any_of: Iterable[str] = (),
    all_of: Iterable[str] = (),
) -> float | None:
    """Numeric value of the first matching specification, or None."""
    spec = find_spec(device, any_of=any_of, all_of=all_of)
    if spec is None:
        return None
    return parse_number(spec.value)


def enabled_features(device: DeviceRecord) -> list[Feature]:
    return [f for f in device.features if f.available]


def has_feature(device: DeviceRecord, *terms: str) -> bool:
    """True if an enabled feature's name contains any of the terms."""
    lowered = [t.lower() for t in terms]
    return any(any(t in f.name.lower() for t in lowered) for f in enabled_features(device))


def count_features(device: DeviceRecord, *terms: str) -> int:
    """Number of enabled features whose name contains any of the terms."""
    lowered = [t.lower() for t in terms]
    return sum(1 for f in enabled_features(device) if any(t in f.name.lower() for t in lowered))
