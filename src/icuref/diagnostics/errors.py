"""icuref exception hierarchy with structured diagnostics.

Integrates with diagnostic codes for Rust/Elm-inspired error messages.
Every exception optionally stores the Diagnostic it was raised from.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "DepthLimitExceededError",
    "FormattingError",
    "IcuRefError",
    "InvalidInstanceIdError",
    "MessageNotFoundError",
    "MissingValueError",
    "TemplateNotDeclaredError",
    "TemplateSyntaxError",
    "UnrepresentablePathError",
    "UnsupportedLocaleError",
]


class IcuRefError(Exception):
    """Base exception for all icuref errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize IcuRefError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class UnsupportedLocaleError(IcuRefError, LookupError):
    """Locale has no catalog.

    Raised by every format/resolve path when the requested locale was not
    loaded. Negotiate with lookup_locale() first to avoid it.
    """


class MessageNotFoundError(IcuRefError, LookupError):
    """Message text is neither in the target catalog nor supplied as fallback."""


class MissingValueError(IcuRefError):
    """Template references a placeholder that has no value.

    Attributes:
        argument_id: Name of the placeholder without a value
    """

    def __init__(self, message: str | Diagnostic, *, argument_id: str = "") -> None:
        """Initialize MissingValueError.

        Args:
            message: Error message string OR Diagnostic object
            argument_id: Name of the placeholder without a value
        """
        super().__init__(message)
        self.argument_id = argument_id


class InvalidInstanceIdError(IcuRefError):
    """Reference token is malformed or points at no registered instance.

    Covers unknown message keys and out-of-range instance indices.
    """


class UnrepresentablePathError(IcuRefError):
    """Document path segment cannot be written in report path syntax.

    Segments must not contain ']', quotes or whitespace.
    """


class TemplateNotDeclaredError(IcuRefError):
    """Template text passed to the registry matches no declared message."""


class TemplateSyntaxError(IcuRefError):
    """ICU template text is malformed.

    Attributes:
        position: Character offset where parsing failed
    """

    def __init__(self, message: str | Diagnostic, *, position: int = 0) -> None:
        """Initialize TemplateSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            position: Character offset where parsing failed
        """
        super().__init__(message)
        self.position = position


class FormattingError(IcuRefError):
    """Locale-aware formatting of a value failed.

    Raised when a number or date cannot be converted or rendered by Babel.
    """


class DepthLimitExceededError(IcuRefError):
    """Maximum nesting depth exceeded.

    Indicates either:
    - A document or template nested deeper than MAX_DEPTH
    - Adversarial input designed to cause stack overflow
    """
