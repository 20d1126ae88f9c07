"""Read position over template text.

The parser never mutates a position: each step returns a new Cursor, and a
sub-parser hands back the cursor it stopped at inside a ParseResult. A
failed branch therefore cannot leave shared state half-advanced, and end of
input is a property (is_eof) rather than a sentinel character.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from icuref.diagnostics import TemplateSyntaxError
from icuref.diagnostics.templates import ErrorTemplate

__all__ = ["Cursor", "ParseResult"]

# ICU Pattern_White_Space
_WHITESPACE = frozenset(" \t\n\v\f\r\u0085\u200e\u200f\u2028\u2029")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Offset into a template.

    Example:
        >>> start = Cursor("{n}", 0)
        >>> start.advance().current
        'n'
        >>> start.current
        '{'
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True once every character has been consumed."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor.

        Raises:
            TemplateSyntaxError: At end of input
        """
        if self.is_eof:
            raise TemplateSyntaxError(
                ErrorTemplate.unexpected_eof(self.pos, "more input"), position=self.pos
            )
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character offset positions ahead, or None past the end."""
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else None

    def advance(self, count: int = 1) -> "Cursor":
        """Cursor count characters further on, stopping at the end."""
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def skip_whitespace(self) -> "Cursor":
        """Cursor at the next non-whitespace character.

        Example:
            >>> Cursor("  , number", 0).skip_whitespace().current
            ','
        """
        pos = self.pos
        while pos < len(self.source) and self.source[pos] in _WHITESPACE:
            pos += 1
        return self if pos == self.pos else Cursor(self.source, pos)

    def expect(self, char: str, expected: str | None = None) -> "Cursor":
        """Consume a required character.

        Args:
            char: Required character
            expected: What to call it in the error message (default: repr of char)

        Returns:
            Cursor after char

        Raises:
            TemplateSyntaxError: If at EOF or the current character differs
        """
        description = expected or repr(char)
        if self.is_eof:
            raise TemplateSyntaxError(
                ErrorTemplate.unexpected_eof(self.pos, description), position=self.pos
            )
        found = self.source[self.pos]
        if found != char:
            raise TemplateSyntaxError(
                ErrorTemplate.unexpected_character(self.pos, found, description),
                position=self.pos,
            )
        return self.advance()


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """What a sub-parser produced and where it stopped.

    Sub-parsers share one shape:
        def _parse_foo(self, cursor: Cursor, ...) -> ParseResult[Foo]
    """

    value: T
    cursor: Cursor
