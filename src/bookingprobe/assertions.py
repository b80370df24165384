"""Checks shared by API tests.

Each check returns a bool so it reads naturally inside a plain
``assert``; pytest's assertion rewriting supplies the failure detail.
"""

from __future__ import annotations

from typing import Any, Iterable


def is_one_of(status: int, expected: Iterable[int]) -> bool:
    """Check if status code is one of the provided values."""
    return status in set(expected)


def is_valid_json(body: Any) -> bool:
    """Check if a normalized body holds decoded JSON structure.

    Only objects and arrays count; a body left as text (or a bare
    scalar) does not.
    """
    return isinstance(body, (dict, list))


def is_within_response_time(elapsed_ms: float, max_ms: float) -> bool:
    """Check if response time is within acceptable range."""
    return elapsed_ms <= max_ms


def missing_keys(data: Any, expected_keys: Iterable[str]) -> list[str]:
    """Return the expected keys absent from a decoded JSON object."""
    if not isinstance(data, dict):
        return list(expected_keys)
    return [key for key in expected_keys if key not in data]


def validate_schema(data: Any, expected_keys: Iterable[str]) -> bool:
    """Validate that a decoded JSON object carries every expected key."""
    return not missing_keys(data, expected_keys)
