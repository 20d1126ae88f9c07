"""Render Diagnostic records as text.

Three renderings are supported: a multi-line compiler-style block (the
text of every IcuRefError), a one-line summary for log records, and a JSON
object for tools that post-process registry or catalog problems.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Rendering of a diagnostic."""

    RUST = "rust"
    """error[CODE]: message, followed by '-->' and '=' context lines."""

    SIMPLE = "simple"
    """CODE: message"""

    JSON = "json"
    """One JSON object per diagnostic."""


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns diagnostics into strings.

    Message and hint texts can quote whole templates or document values,
    so an optional limit truncates them for bounded log lines.

    Attributes:
        output_format: Rendering to produce
        truncate: Shorten message and hint texts longer than max_length
        max_length: Text length kept when truncating

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> formatter.format(ErrorTemplate.unsupported_locale("xx"))
        "UNSUPPORTED_LOCALE: Unsupported locale 'xx'"
    """

    output_format: OutputFormat = OutputFormat.RUST
    truncate: bool = False
    max_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured output format."""
        code = diagnostic.code.name
        message = self._clip(diagnostic.message)
        match self.output_format:
            case OutputFormat.SIMPLE:
                return f"{code}: {message}"
            case OutputFormat.JSON:
                return self._to_json(diagnostic, message)
            case _:
                return "\n".join(self._block_lines(diagnostic, message))

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics, separated by blank lines."""
        return "\n\n".join(map(self.format, diagnostics))

    def _block_lines(self, diagnostic: Diagnostic, message: str) -> list[str]:
        lines = [f"{diagnostic.severity}[{diagnostic.code.name}]: {message}"]
        # A template offset is more precise than the message key
        if diagnostic.position is not None:
            lines.append(f"  --> offset {diagnostic.position}")
        elif diagnostic.message_key:
            lines.append(f"  --> message: {diagnostic.message_key}")
        if diagnostic.locale_code:
            lines.append(f"  = locale: {diagnostic.locale_code}")
        if diagnostic.hint:
            lines.append(f"  = help: {self._clip(diagnostic.hint)}")
        return lines

    def _to_json(self, diagnostic: Diagnostic, message: str) -> str:
        record: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "severity": diagnostic.severity,
            "message": message,
        }
        optional = {
            "position": diagnostic.position,
            "message_key": diagnostic.message_key,
            "locale_code": diagnostic.locale_code,
            "hint": self._clip(diagnostic.hint) if diagnostic.hint else None,
        }
        record.update({key: value for key, value in optional.items() if value is not None})
        return json.dumps(record, ensure_ascii=False)

    def _clip(self, text: str) -> str:
        if not self.truncate or len(text) <= self.max_length:
            return text
        return f"{text[: self.max_length]}..."
