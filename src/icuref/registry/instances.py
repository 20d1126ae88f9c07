"""Message instances and structural value equality.

A message instance is one (message key, values) occurrence. Two
registrations of the same key share an instance when their values are
structurally equal:

- mappings are equal when they have the same keys and equal values,
  regardless of insertion order
- lists and tuples are equal when they have equal items in the same order
  (a list equals a tuple with the same items)
- bool is never equal to a number (True != 1)
- None is only equal to None
- numbers compare by value (1 == 1.0); NaN equals NaN
- anything else compares with ==

Equality never depends on object identity: two distinct dicts with the
same content are equal, and a dict mutated after registration does not
change the registered instance (values are deep-copied).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from icuref.core.depth_guard import DepthGuard

__all__ = ["MessageInstance", "ResolvedInstance", "deep_equal"]


@dataclass(frozen=True, slots=True)
class MessageInstance:
    """One registered (message key, template, values) occurrence.

    Attributes:
        message_key: Canonical key "<relative file> | <declared name>"
        template: Base-language template text
        values: Placeholder values (None when registered without values)
    """

    message_key: str
    template: str
    values: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ResolvedInstance:
    """A token resolved for a locale.

    Attributes:
        instance: The registered instance the token refers to
        formatted_string: The instance formatted for the requested locale
    """

    instance: MessageInstance
    formatted_string: str


def _is_sequence(value: object) -> bool:
    return isinstance(value, list | tuple)


def deep_equal(left: Any, right: Any) -> bool:
    """Structural equality of two values (see module docstring).

    Examples:
        >>> deep_equal({"a": [1, {"b": 2}]}, {"a": (1.0, {"b": 2})})
        True
        >>> deep_equal({"flag": True}, {"flag": 1})
        False
        >>> deep_equal(None, {})
        False

    Raises:
        DepthLimitExceededError: If values nest deeper than MAX_DEPTH
            (including self-referencing containers)
    """
    return _deep_equal(left, right, DepthGuard())


def _deep_equal(left: Any, right: Any, guard: DepthGuard) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if left is None or right is None:
        return left is None and right is None

    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        if left.keys() != right.keys():
            return False
        with guard:
            return all(_deep_equal(left[key], right[key], guard) for key in left)

    if _is_sequence(left) or _is_sequence(right):
        if not (_is_sequence(left) and _is_sequence(right)) or len(left) != len(right):
            return False
        with guard:
            return all(_deep_equal(a, b, guard) for a, b in zip(left, right, strict=True))

    if isinstance(left, float) and isinstance(right, float) and math.isnan(left):
        return math.isnan(right)
    return bool(left == right)
