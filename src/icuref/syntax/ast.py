"""ICU MessageFormat AST (Abstract Syntax Tree) node definitions.

Covers the ICU MessageFormat subset used by application message templates:
literal text, simple/number/date/time arguments, cardinal and ordinal
plurals with '#' substitution, and keyword selects.

Example:
    "Potential savings of {wastedMs, number, milliseconds} ms" parses to

    MessageTemplate(elements=(
        TextElement("Potential savings of "),
        ArgumentElement("wastedMs", NumberFormat("milliseconds")),
        TextElement(" ms"),
    ))

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from icuref.enums import ArgumentType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Template structure
    "MessageTemplate",
    "TextElement",
    "ArgumentElement",
    "PoundElement",
    # Argument formats
    "NumberFormat",
    "DateFormat",
    "TimeFormat",
    "PluralFormat",
    "SelectFormat",
    "Option",
    # Type aliases
    "Element",
    "ArgumentFormat",
    "TemplateNode",
]


# ============================================================================
# TEMPLATE STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class MessageTemplate:
    """Root node: a sequence of elements rendered in order.

    Also used for the body of every plural/select option.
    """

    elements: tuple["Element", ...]


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text with quoting already removed."""

    value: str


@dataclass(frozen=True, slots=True)
class PoundElement:
    """'#' inside a plural option: the plural value minus the offset."""


@dataclass(frozen=True, slots=True)
class ArgumentElement:
    """Placeholder: {id} or {id, type} or {id, type, style-or-options}.

    Attributes:
        id: Placeholder name, looked up in the values mapping
        format: Formatting directive (None for a simple {id})
        position: Character offset of the opening brace
    """

    id: str
    format: "ArgumentFormat | None" = None
    position: int = 0

    @property
    def type(self) -> ArgumentType:
        """Argument type derived from the format node."""
        match self.format:
            case None:
                return ArgumentType.SIMPLE
            case NumberFormat():
                return ArgumentType.NUMBER
            case DateFormat():
                return ArgumentType.DATE
            case TimeFormat():
                return ArgumentType.TIME
            case PluralFormat(ordinal=True):
                return ArgumentType.SELECTORDINAL
            case PluralFormat():
                return ArgumentType.PLURAL
            case SelectFormat():
                return ArgumentType.SELECT

    @property
    def style(self) -> str | None:
        """Style of number/date/time arguments; None otherwise."""
        match self.format:
            case NumberFormat(style=style) | DateFormat(style=style) | TimeFormat(style=style):
                return style
            case _:
                return None

    @staticmethod
    def guard(node: object) -> TypeIs["ArgumentElement"]:
        """Type guard for ArgumentElement."""
        return isinstance(node, ArgumentElement)


# ============================================================================
# ARGUMENT FORMATS
# ============================================================================


@dataclass(frozen=True, slots=True)
class NumberFormat:
    """{id, number} or {id, number, style}.

    Style is a builtin ("integer", "percent") or the name of a registered
    number format ("milliseconds", "seconds", "bytes", "extendedPercent").
    """

    style: str | None = None


@dataclass(frozen=True, slots=True)
class DateFormat:
    """{id, date} or {id, date, short|medium|long|full|<CLDR pattern>}."""

    style: str | None = None


@dataclass(frozen=True, slots=True)
class TimeFormat:
    """{id, time} or {id, time, short|medium|long|full|<CLDR pattern>}."""

    style: str | None = None


@dataclass(frozen=True, slots=True)
class Option:
    """One branch of a plural or select argument.

    Attributes:
        selector: "=N" exact match, a CLDR plural category, or a select keyword
        value: Template rendered when this branch is chosen
    """

    selector: str
    value: MessageTemplate


@dataclass(frozen=True, slots=True)
class PluralFormat:
    """{id, plural, ...} or {id, selectordinal, ...}.

    Attributes:
        options: Branches in source order (always includes "other")
        offset: Subtracted from the value before category selection and '#'
        ordinal: True for selectordinal
    """

    options: tuple[Option, ...]
    offset: int = 0
    ordinal: bool = False

    def option(self, selector: str) -> Option | None:
        """Return the option with the given selector, if any."""
        for option in self.options:
            if option.selector == selector:
                return option
        return None


@dataclass(frozen=True, slots=True)
class SelectFormat:
    """{id, select, key {...} other {...}}."""

    options: tuple[Option, ...]

    def option(self, selector: str) -> Option | None:
        """Return the option with the given selector, if any."""
        for option in self.options:
            if option.selector == selector:
                return option
        return None


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Element = TextElement | ArgumentElement | PoundElement
type ArgumentFormat = NumberFormat | DateFormat | TimeFormat | PluralFormat | SelectFormat
type TemplateNode = MessageTemplate | Element | ArgumentFormat | Option
