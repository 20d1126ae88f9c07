"""Enumerations for icuref type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ArgumentType(StrEnum):
    """Formatting type of an ICU argument.

    StrEnum provides automatic string conversion: str(ArgumentType.NUMBER) == "number"
    """

    SIMPLE = "simple"
    """Argument without a type: {name}"""

    NUMBER = "number"
    """Number argument: {count, number} or {bytes, number, bytes}"""

    DATE = "date"
    """Date argument: {when, date, short}"""

    TIME = "time"
    """Time argument: {when, time, short}"""

    PLURAL = "plural"
    """Cardinal plural: {count, plural, one {# item} other {# items}}"""

    SELECTORDINAL = "selectordinal"
    """Ordinal plural: {place, selectordinal, one {#st} other {#th}}"""

    SELECT = "select"
    """Keyword select: {kind, select, script {Script} other {Other}}"""


class NumberStyle(StrEnum):
    """Number styles with a value-preprocessing rule attached.

    Values of arguments formatted with one of these styles are converted to
    the displayed unit before the template is rendered.
    """

    MILLISECONDS = "milliseconds"
    """Rounded to the nearest multiple of 10."""

    SECONDS = "seconds"
    """Milliseconds shown as seconds with one decimal (timeInMs only)."""

    BYTES = "bytes"
    """Bytes shown as kilobytes."""


class NodeKind(StrEnum):
    """Shape of a node in a document tree.

    Documents are trees over a closed set of shapes; every node is tagged
    with exactly one kind before it is visited.
    """

    MAPPING = "mapping"
    """String-keyed mutable mapping (dict)."""

    SEQUENCE = "sequence"
    """Ordered mutable sequence (list)."""

    FROZEN_MAPPING = "frozen_mapping"
    """Read-only mapping (MappingProxyType); rebuilt when a value changes."""

    FROZEN_SEQUENCE = "frozen_sequence"
    """Immutable ordered sequence (tuple); rebuilt when an item changes."""

    STRING = "string"
    """String leaf, possibly a reference token."""

    SCALAR = "scalar"
    """Any other leaf (numbers, booleans, None, bytes, objects)."""


__all__ = [
    "ArgumentType",
    "NodeKind",
    "NumberStyle",
]
