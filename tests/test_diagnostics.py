"""Tests for diagnostics: codes, templates, formatter and exceptions."""

import json

import pytest

from icuref.diagnostics import (
    DepthLimitExceededError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    FormattingError,
    IcuRefError,
    InvalidInstanceIdError,
    MessageNotFoundError,
    MissingValueError,
    OutputFormat,
    TemplateNotDeclaredError,
    TemplateSyntaxError,
    UnrepresentablePathError,
    UnsupportedLocaleError,
)


class TestDiagnosticCode:
    def test_codes_are_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]

        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "low", "high"),
        [
            (DiagnosticCode.UNSUPPORTED_LOCALE, 1000, 1999),
            (DiagnosticCode.MAX_DEPTH_EXCEEDED, 2000, 2999),
            (DiagnosticCode.DUPLICATE_OPTION, 3000, 3999),
            (DiagnosticCode.TEMPLATE_NOT_DECLARED, 4000, 4999),
            (DiagnosticCode.BASE_TEMPLATE_MISMATCH, 5000, 5999),
        ],
    )
    def test_code_ranges(self, code: DiagnosticCode, low: int, high: int) -> None:
        assert low <= code.value <= high


class TestDiagnosticFormatter:
    def test_rust_format_with_message_context(self) -> None:
        diagnostic = ErrorTemplate.message_not_found("core/a.py | title", "de")

        assert diagnostic.format_error() == (
            "error[MESSAGE_NOT_FOUND]: ICU message not found in destination locale\n"
            "  --> message: core/a.py | title\n"
            "  = locale: de\n"
            "  = help: Add the message to the 'de' catalog or pass a base template"
        )

    def test_rust_format_with_position(self) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF, message="Unexpected end", position=7
        )

        assert diagnostic.format_error() == "error[UNEXPECTED_EOF]: Unexpected end\n  --> offset 7"

    def test_warning_severity(self) -> None:
        diagnostic = ErrorTemplate.base_template_mismatch("core/a.py | title", "en")

        assert diagnostic.format_error().startswith("warning[BASE_TEMPLATE_MISMATCH]: ")

    def test_simple_format(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert (
            formatter.format(ErrorTemplate.unsupported_locale("xx"))
            == "UNSUPPORTED_LOCALE: Unsupported locale 'xx'"
        )

    def test_json_format(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        diagnostic = ErrorTemplate.message_not_found("core/a.py | title", "de")

        data = json.loads(formatter.format(diagnostic))

        assert data["code"] == "MESSAGE_NOT_FOUND"
        assert data["code_value"] == DiagnosticCode.MESSAGE_NOT_FOUND.value
        assert data["message_key"] == "core/a.py | title"
        assert data["locale_code"] == "de"
        assert data["severity"] == "error"
        assert "position" not in data

    def test_truncate(self) -> None:
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, truncate=True, max_length=10
        )
        diagnostic = Diagnostic(code=DiagnosticCode.FORMATTING_FAILED, message="x" * 50)

        assert formatter.format(diagnostic) == "FORMATTING_FAILED: " + "x" * 10 + "..."

    def test_format_all(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        result = formatter.format_all(
            [ErrorTemplate.unsupported_locale("xx"), ErrorTemplate.unsupported_locale("yy")]
        )

        assert result.split("\n\n") == [
            "UNSUPPORTED_LOCALE: Unsupported locale 'xx'",
            "UNSUPPORTED_LOCALE: Unsupported locale 'yy'",
        ]

    def test_str_is_message(self) -> None:
        assert str(ErrorTemplate.unsupported_locale("xx")) == "Unsupported locale 'xx'"


class TestErrorTemplate:
    def test_missing_value_message(self) -> None:
        diagnostic = ErrorTemplate.missing_value("timeInMs")

        assert diagnostic.code is DiagnosticCode.MISSING_VALUE
        assert diagnostic.message == (
            'ICU Message contains a value reference ("timeInMs") that wasn\'t provided'
        )

    def test_invalid_instance_id_message(self) -> None:
        diagnostic = ErrorTemplate.invalid_instance_id("core/a.py | x # 9")

        assert diagnostic.message == "core/a.py | x # 9 is not a valid message instance ID"

    def test_template_not_declared_message(self) -> None:
        assert ErrorTemplate.template_not_declared("Hi").message == "Could not locate: Hi"

    def test_unrepresentable_path_message(self) -> None:
        diagnostic = ErrorTemplate.unrepresentable_path_segment("a b")

        assert diagnostic.message == 'Cannot handle "a b" in i18n'


class TestExceptions:
    @pytest.mark.parametrize(
        "exc_type",
        [
            DepthLimitExceededError,
            FormattingError,
            InvalidInstanceIdError,
            MessageNotFoundError,
            MissingValueError,
            TemplateNotDeclaredError,
            TemplateSyntaxError,
            UnrepresentablePathError,
            UnsupportedLocaleError,
        ],
    )
    def test_hierarchy(self, exc_type: type[IcuRefError]) -> None:
        assert issubclass(exc_type, IcuRefError)

    def test_lookup_errors(self) -> None:
        """Missing locales and messages can be caught as LookupError."""
        assert issubclass(UnsupportedLocaleError, LookupError)
        assert issubclass(MessageNotFoundError, LookupError)

    def test_plain_message(self) -> None:
        error = IcuRefError("plain")

        assert str(error) == "plain"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        diagnostic = ErrorTemplate.unsupported_locale("xx")
        error = UnsupportedLocaleError(diagnostic)

        assert error.diagnostic is diagnostic
        assert str(error).startswith("error[UNSUPPORTED_LOCALE]: Unsupported locale 'xx'")

    def test_missing_value_argument_id(self) -> None:
        error = MissingValueError(ErrorTemplate.missing_value("n"), argument_id="n")

        assert error.argument_id == "n"

    def test_template_syntax_position(self) -> None:
        error = TemplateSyntaxError(ErrorTemplate.unexpected_eof(4, "'}'"), position=4)

        assert error.position == 4
        assert "--> offset 4" in str(error)
