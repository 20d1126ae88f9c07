"""Reference token codec.

A reference token stands in for a formatted message inside a document
until the document is localized:

    "<message key> # <instance index>"
    "core/audits/metrics.py | title # 0"

The message key always contains " | ". A string is a token only if it
ends with " # " followed by decimal digits and the part before contains
" | ". Plain strings that merely contain these characters elsewhere are
not tokens.

Python 3.13+. Zero external dependencies.
"""

import re
from typing import NamedTuple

from icuref.constants import INSTANCE_SEPARATOR, MESSAGE_KEY_SEPARATOR
from icuref.diagnostics import InvalidInstanceIdError
from icuref.diagnostics.templates import ErrorTemplate

__all__ = ["InstanceId", "decode", "encode", "is_token"]

# The full pattern backtracks heavily on long strings; the suffix check
# rejects almost every non-token first.
_QUICK_PATTERN = re.compile(r" # [0-9]+\Z")
_TOKEN_PATTERN = re.compile(r"(.* \| .*) # ([0-9]+)\Z")


class InstanceId(NamedTuple):
    """Decoded reference token."""

    message_key: str
    index: int


def is_token(value: object) -> bool:
    """Check whether a value is a reference token.

    Examples:
        >>> is_token("core/a.py | title # 3")
        True
        >>> is_token("Results # 3")
        False
        >>> is_token(42)
        False
    """
    return (
        isinstance(value, str)
        and _QUICK_PATTERN.search(value) is not None
        and _TOKEN_PATTERN.search(value) is not None
    )


def decode(token: str) -> InstanceId:
    """Split a token into message key and instance index.

    Raises:
        InvalidInstanceIdError: If token is not a reference token

    Example:
        >>> decode("core/a.py | title # 12")
        InstanceId(message_key='core/a.py | title', index=12)
    """
    match = _TOKEN_PATTERN.search(token) if _QUICK_PATTERN.search(token) else None
    if match is None:
        raise InvalidInstanceIdError(ErrorTemplate.invalid_instance_id(token))
    return InstanceId(match.group(1), int(match.group(2)))


def encode(message_key: str, index: int) -> str:
    """Build the token of an instance.

    Raises:
        ValueError: If index is negative, or message_key lacks " | " or
            contains a line break (tokens are single-line)

    Example:
        >>> encode("core/a.py | title", 0)
        'core/a.py | title # 0'
    """
    if index < 0:
        msg = f"Instance index must be non-negative, got {index}"
        raise ValueError(msg)
    if MESSAGE_KEY_SEPARATOR not in message_key or "\n" in message_key:
        msg = f"{message_key!r} is not a message key"
        raise ValueError(msg)
    return f"{message_key}{INSTANCE_SEPARATOR}{index}"
