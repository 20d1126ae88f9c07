"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def unsupported_locale(locale_code: str) -> Diagnostic:
        """Locale has no catalog.

        Args:
            locale_code: The locale that was requested

        Returns:
            Diagnostic for UNSUPPORTED_LOCALE
        """
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_LOCALE,
            message=f"Unsupported locale '{locale_code}'",
            hint="Negotiate the locale with lookup_locale() before formatting",
            locale_code=locale_code,
        )

    @staticmethod
    def message_not_found(message_key: str, locale_code: str) -> Diagnostic:
        """Message text missing from catalog and fallback.

        Args:
            message_key: The message key that was looked up
            locale_code: The target locale

        Returns:
            Diagnostic for MESSAGE_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message="ICU message not found in destination locale",
            hint=f"Add the message to the '{locale_code}' catalog or pass a base template",
            message_key=message_key,
            locale_code=locale_code,
        )

    @staticmethod
    def missing_value(argument_id: str) -> Diagnostic:
        """Template placeholder without a value.

        Args:
            argument_id: The placeholder name

        Returns:
            Diagnostic for MISSING_VALUE
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_VALUE,
            message=(
                f'ICU Message contains a value reference ("{argument_id}") '
                "that wasn't provided"
            ),
            hint=f"Pass a value for '{argument_id}' when registering the message",
        )

    @staticmethod
    def invalid_instance_id(token: str) -> Diagnostic:
        """Token is malformed or references no instance.

        Args:
            token: The offending token text

        Returns:
            Diagnostic for INVALID_INSTANCE_ID
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_INSTANCE_ID,
            message=f"{token} is not a valid message instance ID",
            hint="Tokens are only valid for the registry that issued them",
        )

    @staticmethod
    def unrepresentable_path_segment(segment: str) -> Diagnostic:
        """Path segment with characters the path syntax cannot carry.

        Args:
            segment: The offending segment

        Returns:
            Diagnostic for UNREPRESENTABLE_PATH_SEGMENT
        """
        return Diagnostic(
            code=DiagnosticCode.UNREPRESENTABLE_PATH_SEGMENT,
            message=f'Cannot handle "{segment}" in i18n',
            hint="Document keys must not contain ']', quotes or whitespace",
        )

    @staticmethod
    def template_not_declared(template: str) -> Diagnostic:
        """Template text matches no declaration.

        Args:
            template: The template text passed by the caller

        Returns:
            Diagnostic for TEMPLATE_NOT_DECLARED
        """
        return Diagnostic(
            code=DiagnosticCode.TEMPLATE_NOT_DECLARED,
            message=f"Could not locate: {template}",
            hint="Pass the exact template text declared for the source file",
        )

    @staticmethod
    def base_template_mismatch(message_key: str, base_locale: str) -> Diagnostic:
        """Supplied base template differs from the base catalog.

        Args:
            message_key: The message key
            base_locale: The base-language locale code

        Returns:
            Warning Diagnostic for BASE_TEMPLATE_MISMATCH
        """
        return Diagnostic(
            code=DiagnosticCode.BASE_TEMPLATE_MISMATCH,
            message=(
                f"Message \"{message_key}\" does not match its '{base_locale}' counterpart. "
                "Regenerate the locale catalogs to update."
            ),
            message_key=message_key,
            locale_code=base_locale,
            severity="warning",
        )

    @staticmethod
    def formatting_failed(value: object, reason: str) -> Diagnostic:
        """Value could not be formatted.

        Args:
            value: The value that failed
            reason: Underlying error text

        Returns:
            Diagnostic for FORMATTING_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED,
            message=f"Formatting failed for {value!r}: {reason}",
        )

    @staticmethod
    def depth_exceeded(max_depth: int) -> Diagnostic:
        """Nesting deeper than the configured limit.

        Args:
            max_depth: The limit that was exceeded

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum nesting depth ({max_depth}) exceeded",
            hint="Check for malformed or adversarial input",
        )

    @staticmethod
    def unexpected_eof(position: int, expected: str) -> Diagnostic:
        """Template ended inside an argument.

        Args:
            position: Offset of the end of input
            expected: What the parser was looking for

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected end of template at position {position}: expected {expected}",
            position=position,
        )

    @staticmethod
    def unexpected_character(position: int, found: str, expected: str) -> Diagnostic:
        """Template contains a character the grammar does not allow here.

        Args:
            position: Offset of the character
            found: The character found
            expected: What the parser was looking for

        Returns:
            Diagnostic for UNEXPECTED_CHARACTER
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            message=(
                f"Unexpected character {found!r} at position {position}: expected {expected}"
            ),
            position=position,
        )

    @staticmethod
    def invalid_argument_type(position: int, type_name: str) -> Diagnostic:
        """Unknown argument type keyword.

        Args:
            position: Offset of the keyword
            type_name: The keyword found

        Returns:
            Diagnostic for INVALID_ARGUMENT_TYPE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_ARGUMENT_TYPE,
            message=f"Invalid argument type '{type_name}' at position {position}",
            position=position,
            hint="Use one of: number, date, time, plural, selectordinal, select",
        )

    @staticmethod
    def missing_other_option(position: int, argument_id: str) -> Diagnostic:
        """plural/select without an 'other' branch.

        Args:
            position: Offset of the argument
            argument_id: The argument name

        Returns:
            Diagnostic for MISSING_OTHER_OPTION
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_OTHER_OPTION,
            message=f"Argument '{argument_id}' at position {position} has no 'other' option",
            position=position,
        )

    @staticmethod
    def duplicate_option(position: int, selector: str) -> Diagnostic:
        """Same selector used twice in one plural/select.

        Args:
            position: Offset of the duplicate selector
            selector: The duplicated selector

        Returns:
            Diagnostic for DUPLICATE_OPTION
        """
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_OPTION,
            message=f"Duplicate option '{selector}' at position {position}",
            position=position,
        )
