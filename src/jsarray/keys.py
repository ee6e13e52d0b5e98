"""Key and index helpers shared by the container operations."""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Iterable, Mapping
from typing import Final

from .errors import JsArrayTypeError

Key = int | str

_CANONICAL_INT_KEY: Final = re.compile(r"0|[1-9][0-9]*")


def is_sequential(keys: Iterable[object]) -> bool:
    """True when ``keys`` are exactly ``0..n-1`` in iteration order."""
    for expected, key in enumerate(keys):
        if type(key) is not int or key != expected:
            return False
    return True


def is_spreadable(value: object) -> bool:
    """Values that ``flat`` and ``concat`` unwrap into their elements."""
    if isinstance(value, (list, tuple)):
        return True
    return bool(getattr(value, "_jsarray_container", False))


def entries_of(value: object) -> list[tuple[Key, object]]:
    """Ordered ``(key, value)`` pairs of any accepted container input."""
    if value is None:
        return []
    if getattr(value, "_jsarray_container", False):
        return list(value.entries())
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, (str, bytes)):
        raise JsArrayTypeError(f"cannot build a container from {type(value).__name__}")
    if hasattr(value, "tolist"):
        listed = value.tolist()
        if not isinstance(listed, list):
            listed = [listed]
        return list(enumerate(listed))
    return list(enumerate(value))


def coerce_key(key: object) -> Key:
    """Validate a container key; canonical integer strings such as ``"3"`` become ints."""
    if isinstance(key, str):
        return decode_key(key)
    if isinstance(key, bool) or not isinstance(key, int):
        raise JsArrayTypeError(f"container keys must be int or str, got {type(key).__name__}")
    if key < 0:
        raise JsArrayTypeError(f"integer keys must be non-negative, got {key}")
    return key


def normalize_items(value: object) -> dict[Key, object]:
    """Copy ``value`` into a dict, renumbering keys that form ``{0..n-1}``."""
    pairs = [(coerce_key(key), item) for key, item in entries_of(value)]
    keys = [key for key, _ in pairs]
    if _covers_range(keys):
        return {index: item for index, (_, item) in enumerate(pairs)}
    return dict(pairs)


def _covers_range(keys: list[object]) -> bool:
    if not all(type(key) is int for key in keys):
        return False
    return set(keys) == set(range(len(keys)))


def reindex(values: Iterable[object]) -> dict[Key, object]:
    return dict(enumerate(values))


def next_index(keys: Iterable[object]) -> int:
    """Integer key an appended value receives: one past the largest int key."""
    ints = [key for key in keys if type(key) is int]
    return max(ints) + 1 if ints else 0


def normalize_index(index: int, length: int) -> int | None:
    """Resolve a possibly negative index; ``None`` when out of ``[0, length)``."""
    if index < 0:
        index += length
    if index < 0 or index >= length:
        return None
    return index


def clamp_bound(bound: int, length: int) -> int:
    """Resolve a possibly negative slice bound into ``[0, length]``."""
    if bound < 0:
        return max(length + bound, 0)
    return min(bound, length)


def decode_key(key: str) -> Key:
    """JSON object keys written as canonical non-negative integers become ints."""
    if _CANONICAL_INT_KEY.fullmatch(key):
        return int(key)
    return key


def strict_equals(left: object, right: object) -> bool:
    """Type-and-value equality with no coercion between kinds."""
    if left is right and not isinstance(left, float):
        return True
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(
            strict_equals(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, dict):
        if list(left) != list(right):
            return False
        return all(strict_equals(left[key], right[key]) for key in left)
    if getattr(left, "_jsarray_container", False):
        return strict_equals(left.to_array(), right.to_array())
    return bool(left == right)


def stringify(value: object) -> str:
    """String conversion following JavaScript's ``Array.prototype.join``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, numbers.Number):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if getattr(value, "_jsarray_container", False):
        return value.join(",")
    return str(value)


def sort_key(value: object) -> tuple[int, object]:
    """Total order for the default ``sort``: numbers, then strings, then the rest by text, ``None`` last."""
    if value is None:
        return (3, 0)
    if isinstance(value, numbers.Real):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, stringify(value))
