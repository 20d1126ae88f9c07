"""Per-locale number, date and time formatting on top of Babel.

A LocaleContext wraps one Babel Locale. Contexts are created through
LocaleContext.create(), which resolves unknown locales to a usable one and
keeps recently used contexts in a bounded LRU cache shared by all threads.
Nothing here touches the process-wide locale module state.

Rounding:
    Babel rounds half-to-even. Message values are rounded half-up (ties
    away from zero, as Intl.NumberFormat does) to the maximum number of
    fraction digits before they reach Babel, so Babel's own rounding never
    changes the result.

Python 3.13+. Uses Babel.
"""

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from icuref.constants import BABEL_FALLBACK_LOCALE, MAX_LOCALE_CACHE_SIZE
from icuref.diagnostics import FormattingError
from icuref.diagnostics.templates import ErrorTemplate
from icuref.locale_utils import normalize_locale

__all__ = ["DATE_STYLES", "LocaleContext", "round_half_up"]

logger = logging.getLogger(__name__)

# Named styles understood by Babel; any other style string is a CLDR pattern
DATE_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})

# Integer and fraction part of a CLDR number pattern ("#,##0.###", "#,##,##0")
_NUMBER_CORE = re.compile(r"[#,0]*0(?:\.[0#]*)?")

_FORMAT_ERRORS = (ValueError, TypeError, InvalidOperation, AttributeError, KeyError, OverflowError)

type Number = int | float | Decimal
type DateLike = datetime | date | time | int | float | str


def _to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal exactly as its shortest repr reads."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_half_up(value: Number, digits: int) -> Decimal:
    """Round to a fixed number of fraction digits, ties away from zero.

    Example:
        >>> round_half_up(2.5, 0)
        Decimal('3')
        >>> round_half_up(-1.25, 1)
        Decimal('-1.3')
    """
    return _to_decimal(value).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def _build_pattern(
    base_pattern: str, minimum_fraction_digits: int, maximum_fraction_digits: int, use_grouping: bool
) -> str:
    """Rewrite the fraction digits (and grouping) of a locale pattern.

    Keeps the locale's prefix/suffix ("%", non-breaking spaces) and its
    grouping sizes; only the positive subpattern is used.
    """
    positive = base_pattern.split(";")[0]
    match = _NUMBER_CORE.search(positive)
    if match is None:
        core_start, core_end = len(positive), len(positive)
        integer = "#,##0"
    else:
        core_start, core_end = match.span()
        integer = match.group(0).split(".")[0]
    if not use_grouping:
        integer = "0"
    fraction = "0" * minimum_fraction_digits + "#" * (
        maximum_fraction_digits - minimum_fraction_digits
    )
    core = f"{integer}.{fraction}" if fraction else integer
    return positive[:core_start] + core + positive[core_end:]


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Formatting rules of one locale.

    Build instances with LocaleContext.create(); clear_cache(), cache_size()
    and cache_info() manage the shared cache.

    Examples:
        >>> ctx = LocaleContext.create("en")
        >>> ctx.format_number(1234.5)
        '1,234.5'

        >>> ctx = LocaleContext.create("de-DE")
        >>> ctx.format_number(1234.5)
        '1.234,5'

        >>> ctx = LocaleContext.create("de-XX")  # Unknown region
        >>> ctx.babel_locale.language, ctx.is_fallback
        ('de', True)

    Thread Safety:
        Instances are immutable and can be shared between threads. Cache
        operations are protected by RLock.
    """

    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def cache_info(cls) -> dict[str, int | tuple[str, ...]]:
        """Describe the cache.

        Returns:
            Dictionary with size, max_size and the cached locale codes in
            LRU order.
        """
        with cls._cache_lock:
            return {
                "size": len(cls._cache),
                "max_size": MAX_LOCALE_CACHE_SIZE,
                "locales": tuple(cls._cache.keys()),
            }

    @classmethod
    def create(cls, locale_code: str) -> "LocaleContext":
        """Create (or fetch from cache) the context for a locale.

        Fallback chain for locales CLDR does not know:
            1. The locale itself ("de-CH")
            2. Its language subtag ("de")
            3. en_US
        Each fallback logs a WARNING; the requested code is preserved in
        locale_code and is_fallback is set.

        Args:
            locale_code: BCP-47 or POSIX locale code

        Returns:
            LocaleContext instance (never raises for bad locale codes)
        """
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = Locale.parse(cache_key)
        except UnknownLocaleError:
            language = cache_key.split("_")[0]
            try:
                babel_locale = Locale.parse(language)
                logger.warning(
                    "Unknown locale '%s'. Falling back to '%s'", locale_code, language
                )
            except (UnknownLocaleError, ValueError):
                logger.warning(
                    "Unknown locale '%s'. Falling back to %s",
                    locale_code,
                    BABEL_FALLBACK_LOCALE,
                )
                babel_locale = Locale.parse(BABEL_FALLBACK_LOCALE)
            used_fallback = True
        except ValueError as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to %s",
                locale_code,
                e,
                BABEL_FALLBACK_LOCALE,
            )
            babel_locale = Locale.parse(BABEL_FALLBACK_LOCALE)
            used_fallback = True

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = ctx
            return ctx

    @property
    def babel_locale(self) -> Locale:
        """Babel Locale object used for CLDR data."""
        return self._babel_locale

    def format_number(
        self,
        value: Number,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
        use_grouping: bool = True,
        percent: bool = False,
    ) -> str:
        """Format a number with locale-specific separators.

        Args:
            value: Number to format
            minimum_fraction_digits: Minimum decimal places (default: 0)
            maximum_fraction_digits: Maximum decimal places (default: 3)
            use_grouping: Use the locale's grouping separator (default: True)
            percent: Multiply by 100 and use the locale's percent pattern

        Returns:
            Formatted number string

        Raises:
            FormattingError: If the value is not a finite number or Babel fails

        Examples:
            >>> LocaleContext.create("en").format_number(1234)
            '1,234'
            >>> LocaleContext.create("en").format_number(5.25, minimum_fraction_digits=1,
            ...                                          maximum_fraction_digits=1)
            '5.3'
            >>> LocaleContext.create("en").format_number(0.1234, percent=True,
            ...                                          maximum_fraction_digits=2)
            '12.34%'
        """
        if maximum_fraction_digits < minimum_fraction_digits:
            maximum_fraction_digits = minimum_fraction_digits
        try:
            number = _to_decimal(value)
            if not number.is_finite():
                raise ValueError("number is not finite")  # noqa: TRY301
            if percent:
                number = round_half_up(number.scaleb(2), maximum_fraction_digits).scaleb(-2)
                base = self._babel_locale.percent_formats.get(None)
            else:
                number = round_half_up(number, maximum_fraction_digits)
                base = self._babel_locale.decimal_formats.get(None)
            base_pattern = base.pattern if base is not None else ("#,##0%" if percent else "#,##0.###")
            pattern = _build_pattern(
                base_pattern, minimum_fraction_digits, maximum_fraction_digits, use_grouping
            )
            return str(
                babel_numbers.format_decimal(number, format=pattern, locale=self._babel_locale)
            )
        except _FORMAT_ERRORS as e:
            raise FormattingError(ErrorTemplate.formatting_failed(value, str(e))) from e

    def format_date(self, value: DateLike, style: str | None = None) -> str:
        """Format the date part of a value.

        Args:
            value: datetime/date, ISO 8601 string, or epoch milliseconds
            style: "short", "medium", "long", "full" or a CLDR pattern
                (default: "medium")

        Returns:
            Formatted date string

        Raises:
            FormattingError: If the value cannot be converted or formatted
        """
        moment = self._coerce_datetime(value)
        try:
            return str(
                babel_dates.format_date(moment, format=style or "medium", locale=self._babel_locale)
            )
        except _FORMAT_ERRORS as e:
            raise FormattingError(ErrorTemplate.formatting_failed(value, str(e))) from e

    def format_time(self, value: DateLike, style: str | None = None) -> str:
        """Format the time part of a value.

        Args:
            value: datetime/time, ISO 8601 string, or epoch milliseconds
            style: "short", "medium", "long", "full" or a CLDR pattern
                (default: "medium")

        Returns:
            Formatted time string

        Raises:
            FormattingError: If the value cannot be converted or formatted
        """
        moment = value if isinstance(value, time) else self._coerce_datetime(value)
        try:
            return str(
                babel_dates.format_time(moment, format=style or "medium", locale=self._babel_locale)
            )
        except _FORMAT_ERRORS as e:
            raise FormattingError(ErrorTemplate.formatting_failed(value, str(e))) from e

    @staticmethod
    def _coerce_datetime(value: DateLike) -> datetime | date:
        """Convert epoch milliseconds and ISO strings to datetime."""
        match value:
            case datetime() | date():
                return value
            case bool():
                pass
            case int() | float():
                try:
                    return datetime.fromtimestamp(value / 1000, tz=UTC)
                except (OverflowError, OSError, ValueError) as e:
                    raise FormattingError(ErrorTemplate.formatting_failed(value, str(e))) from e
            case str():
                try:
                    return datetime.fromisoformat(value)
                except ValueError as e:
                    raise FormattingError(
                        ErrorTemplate.formatting_failed(value, "not ISO 8601 format")
                    ) from e
        raise FormattingError(ErrorTemplate.formatting_failed(value, "not a date or time"))
