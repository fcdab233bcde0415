"""Utility helper functions."""

import json
import re
from typing import Any

TRUTHY_VALUES = ("1", "true", "yes", "y", "on")

_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")

_MISSING = object()


def to_boolean(value: Any, default: bool = False) -> bool:
    """Interpret a query-string style flag.

    Args:
        value: Raw value (usually a string) or None
        default: Result when value is None

    Returns:
        True only for one of the recognised truthy spellings
    """
    if value is None:
        return default
    return str(value).strip().lower() in TRUTHY_VALUES


def int_prefix(value: Any) -> str | None:
    """Return the leading ASCII integer text of a raw value, sign included."""
    if value is None or isinstance(value, bool):
        return None
    match = _INT_PREFIX.match(str(value))
    return match.group(1) if match else None


def parse_int(value: Any) -> int | None:
    """Parse a leading integer from a raw value, or None if there is none.

    Leading whitespace, an optional sign and trailing garbage are accepted,
    so "42abc" parses as 42 and "abc" does not parse. Only ASCII digits
    count, and a digit run too long to convert does not parse either.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    digits = int_prefix(value)
    if digits is None:
        return None
    sign, magnitude = (digits[0], digits[1:]) if digits[0] in "+-" else ("", digits)
    try:
        return int(sign + (magnitude.lstrip("0") or "0"))
    except ValueError:
        return None


def split_list(value: str | None) -> list[str]:
    """Split a comma list, trimming items and dropping empty ones."""
    if not value:
        return []
    return [item.strip() for item in str(value).split(",") if item.strip()]


def _list_index(items: list[Any], segment: str) -> int | None:
    if not (segment.isascii() and segment.isdigit()) or len(segment) > len(str(len(items))):
        return None
    index = int(segment)
    return index if index < len(items) else None


def get_path(data: Any, path: str, default: Any = None) -> Any:
    """Read a dotted path from nested dictionaries and lists.

    Args:
        data: Nested dictionary to read from
        path: Dotted path, e.g. "address.city" or "route.0.latitude"
        default: Value returned when any segment is missing

    Returns:
        The value at the path or default
    """
    current = data
    for segment in path.split("."):
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list):
            index = _list_index(current, segment)
            if index is None:
                return default
            current = current[index]
        else:
            return default
    return current


def has_path(data: Any, path: str) -> bool:
    """Check whether a dotted path exists in nested dictionaries and lists."""
    return get_path(data, path, _MISSING) is not _MISSING


def set_path(target: dict[str, Any], path: str, value: Any) -> None:
    """Write a value at a dotted path, creating intermediate dictionaries."""
    parts = path.split(".")
    current = target

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value


def flatten_dict(
    d: dict[str, Any],
    parent_key: str = "",
    separator: str = ".",
) -> dict[str, Any]:
    """Flatten a nested dictionary.

    Lists are kept as compact JSON text instead of being expanded, since a
    variable-length list cannot be represented as a fixed set of columns.

    Args:
        d: Dictionary to flatten
        parent_key: Parent key prefix
        separator: Key separator

    Returns:
        Flattened dictionary
    """
    items: list[tuple[str, Any]] = []

    for key, value in d.items():
        new_key = f"{parent_key}{separator}{key}" if parent_key else key

        if isinstance(value, dict):
            items.extend(flatten_dict(value, new_key, separator).items())
        elif isinstance(value, (list, tuple)):
            items.append((new_key, json.dumps(value, separators=(",", ":"), ensure_ascii=False)))
        else:
            items.append((new_key, value))

    return dict(items)
