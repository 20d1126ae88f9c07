"""Diagnostic system for icuref errors.

Provides structured error diagnostics with codes, hints and positions.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    DepthLimitExceededError,
    FormattingError,
    IcuRefError,
    InvalidInstanceIdError,
    MessageNotFoundError,
    MissingValueError,
    TemplateNotDeclaredError,
    TemplateSyntaxError,
    UnrepresentablePathError,
    UnsupportedLocaleError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FormattingError",
    "IcuRefError",
    "InvalidInstanceIdError",
    "MessageNotFoundError",
    "MissingValueError",
    "OutputFormat",
    "TemplateNotDeclaredError",
    "TemplateSyntaxError",
    "UnrepresentablePathError",
    "UnsupportedLocaleError",
]
