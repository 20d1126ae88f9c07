"""Message formatting against locale catalogs.

Resolves the text of a message for a locale (falling back to the
base-language template the caller supplies), converts unit-bearing values
to their display unit, and renders the result with the ICU engine.

Value preprocessing, per placeholder style:

    milliseconds    rounded to the nearest 10          1234 -> 1230
    seconds         milliseconds to seconds, 1 decimal  5238 -> 5.2
                    (only for the placeholder timeInMs)
    bytes           bytes to kilobytes                  2048 -> 2.0

Rounding matches JavaScript's Math.round (half rounds toward +infinity),
so reports formatted here agree with reports formatted in a browser.

Python 3.13+. Uses Babel (via the ICU renderer).
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from icuref.config import I18nConfig
from icuref.constants import MESSAGE_KEY_SEPARATOR
from icuref.diagnostics import (
    FormattingError,
    MessageNotFoundError,
    MissingValueError,
    UnsupportedLocaleError,
)
from icuref.diagnostics.templates import ErrorTemplate
from icuref.enums import ArgumentType, NumberStyle
from icuref.introspection import extract_arguments
from icuref.localization.types import CatalogEntry, LocaleCode, MessageKey
from icuref.runtime.message_format import IcuMessageFormat
from icuref.runtime.number_formats import NUMBER_FORMATS

__all__ = [
    "FormattedMessage",
    "format_catalog_message",
    "format_message",
    "preprocess_values",
    "renderer_strings",
]

logger = logging.getLogger(__name__)

type Catalogs = Mapping[LocaleCode, Mapping[MessageKey, CatalogEntry]]

# Placeholder the seconds conversion applies to
_SECONDS_ARGUMENT = "timeInMs"


@dataclass(frozen=True, slots=True)
class FormattedMessage:
    """Result of formatting one message.

    Attributes:
        formatted_string: Rendered text
        template: Template text that was rendered (catalog text or fallback)
    """

    formatted_string: str
    template: str


def _js_round(value: int | float | Decimal) -> int:
    """JavaScript Math.round: floor(x + 0.5)."""
    half = Decimal("0.5") if isinstance(value, Decimal) else 0.5
    return math.floor(value + half)


def _convert(value: Any, argument_id: str, style: NumberStyle) -> int | float | Decimal:
    """Convert one value to the display unit of its style.

    Raises:
        FormattingError: If the value is not numeric
    """
    if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
        raise FormattingError(
            ErrorTemplate.formatting_failed(value, f"'{argument_id}' must be a number")
        )
    try:
        match style:
            case NumberStyle.MILLISECONDS:
                return _js_round(value / 10) * 10
            case NumberStyle.SECONDS:
                return _js_round(value / 100) / 10
            case NumberStyle.BYTES:
                return value / 1024
    except (OverflowError, ValueError, ArithmeticError) as e:
        raise FormattingError(ErrorTemplate.formatting_failed(value, str(e))) from e
    return value  # pragma: no cover


def preprocess_values(
    template: str, values: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Check and unit-convert the values of a template.

    The input mapping is never modified; a deep copy is converted.

    Args:
        template: ICU template text
        values: Placeholder values

    Returns:
        Converted copy of values

    Raises:
        MissingValueError: If any placeholder of the template (including
            those inside plural/select branches) has no value
        FormattingError: If a unit-converted value is not numeric
        TemplateSyntaxError: If the template is malformed

    Example:
        >>> preprocess_values("{timeInMs, number, seconds} s", {"timeInMs": 5238})
        {'timeInMs': 5.2}
    """
    values = values or {}
    arguments = extract_arguments(template)
    for argument in arguments:
        if argument.id not in values:
            raise MissingValueError(
                ErrorTemplate.missing_value(argument.id), argument_id=argument.id
            )

    converted = copy.deepcopy(dict(values))
    # Directive order matters when one placeholder carries several styles
    for style in (NumberStyle.MILLISECONDS, NumberStyle.SECONDS, NumberStyle.BYTES):
        targets = {
            argument.id
            for argument in arguments
            if argument.type is ArgumentType.NUMBER
            and argument.style == style
            and (style is not NumberStyle.SECONDS or argument.id == _SECONDS_ARGUMENT)
        }
        for argument_id in targets:
            converted[argument_id] = _convert(converted[argument_id], argument_id, style)
    return converted


def _resolve_template(
    catalogs: Catalogs,
    locale: LocaleCode,
    message_key: MessageKey,
    template: str | None,
    config: I18nConfig,
) -> str:
    """Find the text to render: catalog text, else the supplied base template."""
    if locale not in catalogs:
        raise UnsupportedLocaleError(ErrorTemplate.unsupported_locale(locale))

    entry = catalogs[locale].get(message_key)
    text = entry["message"] if entry is not None else None
    if text:
        return text

    if template and not config.strict:
        base_catalog = catalogs.get(config.base_locale, {})
        base_entry = base_catalog.get(message_key)
        if base_entry is None or base_entry["message"] != template:
            diagnostic = ErrorTemplate.base_template_mismatch(message_key, config.base_locale)
            logger.warning("%s", diagnostic.message)
        return template

    raise MessageNotFoundError(ErrorTemplate.message_not_found(message_key, locale))


def format_message(
    catalogs: Catalogs,
    locale: LocaleCode,
    message_key: MessageKey,
    template: str | None = None,
    values: Mapping[str, Any] | None = None,
    *,
    config: I18nConfig | None = None,
) -> FormattedMessage:
    """Format a message for a locale.

    Args:
        catalogs: Locale catalogs
        locale: Target locale (must be a catalog locale)
        message_key: Canonical message key
        template: Base-language template used when the target catalog has
            no text for the key
        values: Placeholder values
        config: Configuration (default: I18nConfig())

    Returns:
        FormattedMessage with the rendered string and the template used

    Raises:
        UnsupportedLocaleError: If locale has no catalog
        MessageNotFoundError: If no text is available (or the catalog
            misses the key and config.strict is set)
        MissingValueError: If a placeholder has no value
        FormattingError: If a value cannot be formatted
        TemplateSyntaxError: If the template is malformed

    Example:
        >>> format_message(catalogs, "en", "core/lib/i18n.py | ms",
        ...                "{timeInMs, number, milliseconds}\\xa0ms", {"timeInMs": 1234})
        FormattedMessage(formatted_string='1,230\\xa0ms', template='{timeInMs, ...')
    """
    config = config or I18nConfig()
    text = _resolve_template(catalogs, locale, message_key, template, config)

    prepared = preprocess_values(text, values)
    formatter = IcuMessageFormat(text, config.number_locale_for(locale), NUMBER_FORMATS)
    return FormattedMessage(formatter.format(prepared), text)


def format_catalog_message(
    catalogs: Catalogs,
    locale: LocaleCode,
    message_key: MessageKey,
    values: Mapping[str, Any] | None = None,
    *,
    config: I18nConfig | None = None,
) -> str:
    """Format a catalog message directly by key, without a fallback template.

    Raises:
        ValueError: If message_key is not of the form '<file> | <name>'
        UnsupportedLocaleError: If locale has no catalog
        MessageNotFoundError: If the catalog has no text for the key
    """
    if MESSAGE_KEY_SEPARATOR not in message_key:
        msg = f"'{message_key}' is not a message key"
        raise ValueError(msg)
    return format_message(catalogs, locale, message_key, None, values, config=config).formatted_string


def renderer_strings(
    catalogs: Catalogs, locale: LocaleCode, source_prefix: str
) -> dict[str, str]:
    """Return the raw catalog text of every message declared under a prefix.

    Used to hand untranslated-at-runtime strings (e.g. report renderer UI
    labels) to a client that formats them itself.

    Args:
        catalogs: Locale catalogs
        locale: Catalog locale
        source_prefix: Source path prefix of the wanted message keys

    Returns:
        Declared name -> catalog text

    Raises:
        UnsupportedLocaleError: If locale has no catalog
    """
    if locale not in catalogs:
        raise UnsupportedLocaleError(ErrorTemplate.unsupported_locale(locale))

    strings: dict[str, str] = {}
    for message_key, entry in catalogs[locale].items():
        source, separator, name = message_key.partition(MESSAGE_KEY_SEPARATOR)
        if separator and source.startswith(source_prefix):
            strings[name] = entry["message"]
    return strings
