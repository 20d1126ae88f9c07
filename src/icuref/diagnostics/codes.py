"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (locales, messages, values, instances)
        2000-2999: Formatting errors (rendering failures, depth limits)
        3000-3999: Syntax errors (ICU template parser failures)
        4000-4999: Registry errors (declarations, report paths)
        5000-5999: Warnings (non-fatal catalog discrepancies)
    """

    # Lookup errors (1000-1999)
    UNSUPPORTED_LOCALE = 1001
    MESSAGE_NOT_FOUND = 1002
    MISSING_VALUE = 1003
    INVALID_INSTANCE_ID = 1004

    # Formatting errors (2000-2999)
    FORMATTING_FAILED = 2001
    MAX_DEPTH_EXCEEDED = 2002

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_CHARACTER = 3002
    INVALID_ARGUMENT_TYPE = 3003
    MISSING_OTHER_OPTION = 3004
    DUPLICATE_OPTION = 3005

    # Registry errors (4000-4999)
    TEMPLATE_NOT_DECLARED = 4001
    UNREPRESENTABLE_PATH_SEGMENT = 4002

    # Warnings (5000-5999)
    BASE_TEMPLATE_MISMATCH = 5001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        position: Character offset in the template (syntax errors only)
        hint: Suggestion for fixing the error
        message_key: Message key involved in the error, if any
        locale_code: Locale involved in the error, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    position: int | None = None
    hint: str | None = None
    message_key: str | None = None
    locale_code: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MESSAGE_NOT_FOUND]: ICU message not found in destination locale
              --> message: core/audits/foo.py | title
              = locale: de
              = help: Add the message to the 'de' catalog or pass a base template

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
