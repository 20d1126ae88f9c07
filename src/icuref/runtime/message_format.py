"""ICU message renderer - converts a template AST to a formatted string.

Walks the MessageTemplate produced by the parser, interpolating values and
selecting plural/select branches. Numbers, dates and times are formatted
through LocaleContext (Babel); plural categories come from CLDR rules.

Python 3.13+. Depends on Babel (via LocaleContext and plural_rules).

Thread Safety:
    IcuMessageFormat is immutable. Per-call state (the current '#' value)
    is passed explicitly, so one instance can format from many threads.
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from icuref.core.depth_guard import DepthGuard
from icuref.diagnostics import FormattingError, MissingValueError
from icuref.diagnostics.templates import ErrorTemplate
from icuref.runtime.locale_context import LocaleContext
from icuref.runtime.number_formats import (
    DEFAULT_NUMBER_FORMAT,
    NUMBER_FORMATS,
    NumberFormatOptions,
    resolve_number_format,
)
from icuref.runtime.plural_rules import select_plural_category
from icuref.syntax.ast import (
    ArgumentElement,
    DateFormat,
    MessageTemplate,
    NumberFormat,
    Option,
    PluralFormat,
    PoundElement,
    SelectFormat,
    TextElement,
    TimeFormat,
)
from icuref.syntax.parser import parse_template

__all__ = ["IcuMessageFormat", "value_to_text"]


def value_to_text(value: Any) -> str:
    """Convert a value to text for a simple {id} argument.

    Mirrors how JavaScript stringifies message values, so that text
    rendered here matches text rendered by browser-side formatters:

    - str: returned as-is
    - bool: "true"/"false"
    - None: "null"
    - integral floats: without fraction ("5.0" -> "5")
    - sequences: items joined by ","
    - anything else: str()

    Example:
        >>> value_to_text(True), value_to_text(None), value_to_text(3.0)
        ('true', 'null', '3')
    """
    if isinstance(value, str):
        return value
    # Check bool BEFORE int/float (bool is subclass of int in Python)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list | tuple):
        return ",".join("" if item is None else value_to_text(item) for item in value)
    return str(value)


def _as_number(value: Any) -> int | float | Decimal:
    """Coerce a value to a number for number/plural arguments.

    Integral floats and Decimals become int: 1.0 selects the "one" branch
    the same way 1 does.

    Raises:
        FormattingError: If value is a bool or not numeric
    """
    if isinstance(value, bool):
        raise FormattingError(ErrorTemplate.formatting_failed(value, "expected a number"))
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed(value, "expected a number")
            ) from e
    if isinstance(value, int):
        return value
    if isinstance(value, float | Decimal):
        if not Decimal(value).is_finite():
            raise FormattingError(ErrorTemplate.formatting_failed(value, "number is not finite"))
        if value == int(value):
            return int(value)
        return value
    raise FormattingError(ErrorTemplate.formatting_failed(value, "expected a number"))


class IcuMessageFormat:
    """Formatter for one template in one locale.

    Example:
        >>> fmt = IcuMessageFormat("{count, plural, one {# file} other {# files}}", "en")
        >>> fmt.format({"count": 1})
        '1 file'
        >>> fmt.format({"count": 1200})
        '1,200 files'
    """

    __slots__ = ("_context", "_formats", "_locale", "_template")

    def __init__(
        self,
        template: str | MessageTemplate,
        locale: str,
        formats: Mapping[str, NumberFormatOptions] = NUMBER_FORMATS,
    ) -> None:
        """Initialize formatter.

        Args:
            template: Template text or a parsed MessageTemplate
            locale: Locale whose number, date and plural rules are applied
            formats: Named number formats for {id, number, <name>}

        Raises:
            TemplateSyntaxError: If template text is malformed
        """
        self._template = parse_template(template) if isinstance(template, str) else template
        self._locale = locale
        self._formats = formats
        self._context = LocaleContext.create(locale)

    @property
    def template(self) -> MessageTemplate:
        """Parsed template."""
        return self._template

    @property
    def locale(self) -> str:
        """Locale code the formatter was created for."""
        return self._locale

    def format(self, values: Mapping[str, Any] | None = None) -> str:
        """Render the template.

        Args:
            values: Argument values keyed by placeholder name

        Returns:
            Formatted string

        Raises:
            MissingValueError: If a rendered placeholder has no value
            FormattingError: If a value cannot be formatted
            DepthLimitExceededError: If branches nest deeper than MAX_DEPTH
        """
        return self._render(self._template, values or {}, None, DepthGuard())

    def _render(
        self,
        template: MessageTemplate,
        values: Mapping[str, Any],
        pound: int | float | Decimal | None,
        guard: DepthGuard,
    ) -> str:
        parts: list[str] = []
        for element in template.elements:
            match element:
                case TextElement(value=text):
                    parts.append(text)
                case PoundElement():
                    if pound is None:
                        parts.append("#")
                    else:
                        parts.append(self._format_number(pound, DEFAULT_NUMBER_FORMAT))
                case ArgumentElement():
                    parts.append(self._render_argument(element, values, pound, guard))
        return "".join(parts)

    def _render_argument(
        self,
        element: ArgumentElement,
        values: Mapping[str, Any],
        pound: int | float | Decimal | None,
        guard: DepthGuard,
    ) -> str:
        if element.id not in values:
            raise MissingValueError(
                ErrorTemplate.missing_value(element.id), argument_id=element.id
            )
        value = values[element.id]

        match element.format:
            case None:
                return value_to_text(value)
            case NumberFormat(style=style):
                return self._format_number(
                    _as_number(value), resolve_number_format(style, self._formats)
                )
            case DateFormat(style=style):
                return self._context.format_date(value, style)
            case TimeFormat(style=style):
                return self._context.format_time(value, style)
            case PluralFormat() as plural:
                number = _as_number(value)
                option = self._select_plural(plural, number)
                with guard:
                    return self._render(option.value, values, number - plural.offset, guard)
            case SelectFormat() as select:
                option = select.option(value_to_text(value)) or select.option("other")
                if option is None:
                    raise FormattingError(
                        ErrorTemplate.formatting_failed(value, "no matching select option")
                    )
                with guard:
                    return self._render(option.value, values, pound, guard)
        raise FormattingError(  # pragma: no cover
            ErrorTemplate.formatting_failed(value, "unsupported argument format")
        )

    def _select_plural(self, plural: PluralFormat, number: int | float | Decimal) -> Option:
        """Pick a plural branch: exact '=N', then CLDR category, then 'other'."""
        exact = Decimal(str(number)) if not isinstance(number, Decimal) else number
        for option in plural.options:
            if option.selector.startswith("=") and Decimal(option.selector[1:]) == exact:
                return option

        category = select_plural_category(
            number - plural.offset, self._locale, ordinal=plural.ordinal
        )
        option = plural.option(category) or plural.option("other")
        if option is None:
            raise FormattingError(
                ErrorTemplate.formatting_failed(number, "no matching plural option")
            )
        return option

    def _format_number(
        self, value: int | float | Decimal, options: NumberFormatOptions
    ) -> str:
        return self._context.format_number(
            value,
            minimum_fraction_digits=options.minimum_fraction_digits,
            maximum_fraction_digits=options.maximum_fraction_digits,
            use_grouping=options.use_grouping,
            percent=options.percent,
        )
