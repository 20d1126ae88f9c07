"""ICU MessageFormat template parser.

Recursive-descent parser over the immutable Cursor. Each sub-parser takes a
cursor and returns a ParseResult holding the parsed node and the cursor
positioned after it. Unlike a resource parser there is no error recovery:
a template is a single message, so the first syntax error raises
TemplateSyntaxError with the offending offset.

Grammar (subset of ICU MessageFormat used by application templates):

    message        := (text | argument | '#')*
    argument       := '{' ws id ws (',' ws type ws (',' ws style-or-options)?)? '}'
    type           := 'number' | 'date' | 'time' | 'plural' | 'selectordinal' | 'select'
    plural-options := ('offset:' ws digits ws)? (selector ws '{' message '}' ws)+
    select-options := (keyword ws '{' message '}' ws)+

Quoting follows ICU's default apostrophe mode:
    - '' is always a literal apostrophe
    - an apostrophe before '{', '}', '|' or (inside plural) '#' starts a
      quoted literal that ends at the next single apostrophe
    - any other apostrophe is literal text

Python 3.13+.
"""

from __future__ import annotations

import functools
import re

from icuref.constants import MAX_DEPTH, TEMPLATE_CACHE_SIZE
from icuref.core.depth_guard import DepthGuard
from icuref.diagnostics import TemplateSyntaxError
from icuref.diagnostics.templates import ErrorTemplate
from icuref.syntax.ast import (
    ArgumentElement,
    ArgumentFormat,
    DateFormat,
    Element,
    MessageTemplate,
    NumberFormat,
    Option,
    PluralFormat,
    PoundElement,
    SelectFormat,
    TextElement,
    TimeFormat,
)
from icuref.syntax.cursor import Cursor, ParseResult

__all__ = ["TemplateParser", "clear_template_cache", "parse_template"]

PLURAL_CATEGORIES: frozenset[str] = frozenset(
    {"zero", "one", "two", "few", "many", "other"}
)

_EXACT_SELECTOR = re.compile(r"=-?[0-9]+(\.[0-9]+)?")
_DIGITS = frozenset("0123456789")

# Characters that end an identifier, keyword or selector
_NAME_TERMINATORS = frozenset("{},#'| \t\n\r")


class TemplateParser:
    """Parser for ICU MessageFormat template text.

    Holds a DepthGuard so that deeply nested plural/select branches fail
    with DepthLimitExceededError instead of RecursionError. A parser
    instance is not thread-safe; parse_template() creates one per call.

    Example:
        >>> parser = TemplateParser()
        >>> parser.parse("{count, plural, one {# file} other {# files}}")
        MessageTemplate(elements=(ArgumentElement(id='count', ...),))
    """

    __slots__ = ("_guard",)

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        """Initialize parser.

        Args:
            max_depth: Maximum plural/select nesting depth (default: MAX_DEPTH)
        """
        self._guard = DepthGuard(max_depth=max_depth)

    def parse(self, source: str) -> MessageTemplate:
        """Parse template text into a MessageTemplate.

        Args:
            source: ICU MessageFormat template text

        Returns:
            Parsed template

        Raises:
            TemplateSyntaxError: If the template is malformed
            DepthLimitExceededError: If nesting exceeds max_depth
        """
        self._guard.reset()
        result = self._parse_message(Cursor(source, 0), in_plural=False, nested=False)
        return result.value

    # ------------------------------------------------------------------
    # Message text
    # ------------------------------------------------------------------

    def _parse_message(
        self, cursor: Cursor, *, in_plural: bool, nested: bool
    ) -> ParseResult[MessageTemplate]:
        """Parse elements until EOF (top level) or an unmatched '}' (nested)."""
        elements: list[Element] = []
        text: list[str] = []

        def flush() -> None:
            if text:
                elements.append(TextElement("".join(text)))
                text.clear()

        while not cursor.is_eof:
            ch = cursor.current
            if ch == "{":
                flush()
                arg = self._parse_argument(cursor, in_plural=in_plural)
                elements.append(arg.value)
                cursor = arg.cursor
            elif ch == "}":
                if nested:
                    break
                raise TemplateSyntaxError(
                    ErrorTemplate.unexpected_character(cursor.pos, ch, "text or '{'"),
                    position=cursor.pos,
                )
            elif ch == "#" and in_plural:
                flush()
                elements.append(PoundElement())
                cursor = cursor.advance()
            elif ch == "'":
                literal = self._parse_apostrophe(cursor, in_plural=in_plural)
                text.append(literal.value)
                cursor = literal.cursor
            else:
                text.append(ch)
                cursor = cursor.advance()

        if nested and cursor.is_eof:
            raise TemplateSyntaxError(
                ErrorTemplate.unexpected_eof(cursor.pos, "'}'"), position=cursor.pos
            )
        flush()
        return ParseResult(MessageTemplate(tuple(elements)), cursor)

    @staticmethod
    def _parse_apostrophe(cursor: Cursor, *, in_plural: bool) -> ParseResult[str]:
        """Parse an apostrophe: escaped quote, quoted literal, or plain text."""
        nxt = cursor.peek(1)
        if nxt == "'":
            return ParseResult("'", cursor.advance(2))
        if nxt is None or not (nxt in "{}|" or (nxt == "#" and in_plural)):
            return ParseResult("'", cursor.advance())

        # Quoted literal: runs to the next single apostrophe (or EOF)
        cursor = cursor.advance()
        chars: list[str] = []
        while not cursor.is_eof:
            ch = cursor.current
            if ch == "'":
                if cursor.peek(1) == "'":
                    chars.append("'")
                    cursor = cursor.advance(2)
                    continue
                cursor = cursor.advance()
                break
            chars.append(ch)
            cursor = cursor.advance()
        return ParseResult("".join(chars), cursor)

    # ------------------------------------------------------------------
    # Arguments
    # ------------------------------------------------------------------

    def _parse_argument(
        self, cursor: Cursor, *, in_plural: bool
    ) -> ParseResult[ArgumentElement]:
        """Parse '{' id [, type [, style-or-options]] '}'."""
        start = cursor.pos
        cursor = cursor.expect("{").skip_whitespace()

        name = _parse_name(cursor, "argument name")
        cursor = name.cursor.skip_whitespace()

        if not cursor.is_eof and cursor.current == "}":
            return ParseResult(ArgumentElement(name.value, None, start), cursor.advance())

        cursor = cursor.expect(",", "',' or '}'").skip_whitespace()
        type_pos = cursor.pos
        type_name = _parse_name(cursor, "argument type")
        cursor = type_name.cursor.skip_whitespace()

        fmt: ArgumentFormat
        match type_name.value:
            case "number" | "date" | "time":
                style = self._parse_style(cursor)
                cursor = style.cursor
                if type_name.value == "number":
                    fmt = NumberFormat(style.value)
                elif type_name.value == "date":
                    fmt = DateFormat(style.value)
                else:
                    fmt = TimeFormat(style.value)
            case "plural" | "selectordinal":
                cursor = cursor.expect(",", "','").skip_whitespace()
                plural = self._parse_plural(
                    cursor, name.value, start, ordinal=type_name.value == "selectordinal"
                )
                fmt, cursor = plural.value, plural.cursor
            case "select":
                cursor = cursor.expect(",", "','").skip_whitespace()
                select = self._parse_select(cursor, name.value, start, in_plural=in_plural)
                fmt, cursor = select.value, select.cursor
            case _:
                raise TemplateSyntaxError(
                    ErrorTemplate.invalid_argument_type(type_pos, type_name.value),
                    position=type_pos,
                )

        cursor = cursor.skip_whitespace().expect("}", "'}'")
        return ParseResult(ArgumentElement(name.value, fmt, start), cursor)

    @staticmethod
    def _parse_style(cursor: Cursor) -> ParseResult[str | None]:
        """Parse the optional ', style' of number/date/time arguments.

        The style runs up to the closing brace; quoted sections may contain
        braces (CLDR date patterns such as "'{'yyyy'}'").
        """
        if cursor.is_eof or cursor.current != ",":
            return ParseResult(None, cursor)
        cursor = cursor.advance().skip_whitespace()
        start = cursor.pos
        quoted = False
        while not cursor.is_eof:
            ch = cursor.current
            if ch == "'":
                quoted = not quoted
            elif ch == "{" and not quoted:
                raise TemplateSyntaxError(
                    ErrorTemplate.unexpected_character(cursor.pos, ch, "argument style"),
                    position=cursor.pos,
                )
            elif ch == "}" and not quoted:
                break
            cursor = cursor.advance()
        style = cursor.source[start : cursor.pos].strip()
        if not style and cursor.is_eof:
            raise TemplateSyntaxError(
                ErrorTemplate.unexpected_eof(cursor.pos, "argument style"),
                position=cursor.pos,
            )
        if not style:
            raise TemplateSyntaxError(
                ErrorTemplate.unexpected_character(cursor.pos, "}", "argument style"),
                position=cursor.pos,
            )
        return ParseResult(style, cursor)

    def _parse_plural(
        self, cursor: Cursor, argument_id: str, start: int, *, ordinal: bool
    ) -> ParseResult[PluralFormat]:
        """Parse [offset:N] followed by plural options."""
        offset = 0
        if cursor.source.startswith("offset:", cursor.pos):
            cursor = cursor.advance(len("offset:")).skip_whitespace()
            digits_start = cursor.pos
            while not cursor.is_eof and cursor.current in _DIGITS:
                cursor = cursor.advance()
            if cursor.pos == digits_start:
                found = "EOF" if cursor.is_eof else cursor.current
                raise TemplateSyntaxError(
                    ErrorTemplate.unexpected_character(cursor.pos, found, "offset digits"),
                    position=cursor.pos,
                )
            offset = int(cursor.source[digits_start : cursor.pos])
            cursor = cursor.skip_whitespace()

        options = self._parse_options(
            cursor, argument_id, start, in_plural=True, plural=True
        )
        return ParseResult(
            PluralFormat(options.value, offset=offset, ordinal=ordinal), options.cursor
        )

    def _parse_select(
        self, cursor: Cursor, argument_id: str, start: int, *, in_plural: bool
    ) -> ParseResult[SelectFormat]:
        """Parse select options. '#' keeps the meaning of the enclosing plural."""
        options = self._parse_options(
            cursor, argument_id, start, in_plural=in_plural, plural=False
        )
        return ParseResult(SelectFormat(options.value), options.cursor)

    def _parse_options(
        self,
        cursor: Cursor,
        argument_id: str,
        start: int,
        *,
        in_plural: bool,
        plural: bool,
    ) -> ParseResult[tuple[Option, ...]]:
        """Parse 'selector {message}' pairs up to the argument's closing brace."""
        options: list[Option] = []
        seen: set[str] = set()

        while True:
            cursor = cursor.skip_whitespace()
            if cursor.is_eof:
                raise TemplateSyntaxError(
                    ErrorTemplate.unexpected_eof(cursor.pos, "option or '}'"),
                    position=cursor.pos,
                )
            if cursor.current == "}":
                break

            selector_pos = cursor.pos
            selector = _parse_name(cursor, "option selector")
            if plural and not (
                selector.value in PLURAL_CATEGORIES or _EXACT_SELECTOR.fullmatch(selector.value)
            ):
                raise TemplateSyntaxError(
                    ErrorTemplate.unexpected_character(
                        selector_pos, selector.value, "plural category or '=N'"
                    ),
                    position=selector_pos,
                )
            if selector.value in seen:
                raise TemplateSyntaxError(
                    ErrorTemplate.duplicate_option(selector_pos, selector.value),
                    position=selector_pos,
                )
            seen.add(selector.value)

            cursor = selector.cursor.skip_whitespace().expect("{", "'{'")
            with self._guard:
                body = self._parse_message(cursor, in_plural=in_plural, nested=True)
            cursor = body.cursor.expect("}", "'}'")
            options.append(Option(selector.value, body.value))

        if "other" not in seen:
            raise TemplateSyntaxError(
                ErrorTemplate.missing_other_option(start, argument_id), position=start
            )
        return ParseResult(tuple(options), cursor)


def _parse_name(cursor: Cursor, expected: str) -> ParseResult[str]:
    """Parse an argument name, type keyword or option selector."""
    start = cursor.pos
    while not cursor.is_eof and cursor.current not in _NAME_TERMINATORS:
        cursor = cursor.advance()
    if cursor.pos == start:
        if cursor.is_eof:
            raise TemplateSyntaxError(
                ErrorTemplate.unexpected_eof(cursor.pos, expected), position=cursor.pos
            )
        raise TemplateSyntaxError(
            ErrorTemplate.unexpected_character(cursor.pos, cursor.current, expected),
            position=cursor.pos,
        )
    return ParseResult(cursor.source[start : cursor.pos], cursor)


@functools.lru_cache(maxsize=TEMPLATE_CACHE_SIZE)
def parse_template(source: str) -> MessageTemplate:
    """Parse template text, caching the result.

    Templates are immutable ASTs, so one parse is shared by every locale
    and every formatting call. Failed parses are not cached.

    Args:
        source: ICU MessageFormat template text

    Returns:
        Parsed MessageTemplate

    Raises:
        TemplateSyntaxError: If the template is malformed

    Example:
        >>> parse_template("{n} items").elements[0].id
        'n'
    """
    return TemplateParser().parse(source)


def clear_template_cache() -> None:
    """Clear the parsed template cache."""
    parse_template.cache_clear()
