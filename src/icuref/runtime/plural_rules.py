"""CLDR plural rules implementation using Babel.

Provides cardinal and ordinal plural category selection for all locales
using Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from decimal import Decimal

from babel.core import UnknownLocaleError

from icuref.locale_utils import get_babel_locale

__all__ = ["select_plural_category"]


def select_plural_category(
    n: int | float | Decimal, locale: str, *, ordinal: bool = False
) -> str:
    """Select CLDR plural category for a number.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "lv_LV", "en-US", "ar-SA")
        ordinal: Use ordinal rules (selectordinal) instead of cardinal

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en")
        'one'
        >>> select_plural_category(5, "ru_RU")
        'many'
        >>> select_plural_category(2, "en", ordinal=True)
        'two'
        >>> select_plural_category(23, "en", ordinal=True)
        'few'

    Unknown or invalid locales fall back to the one/other rule
    (ordinals: always "other").
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        if ordinal:
            return "other"
        return "one" if abs(n) == 1 else "other"

    rule = locale_obj.ordinal_form if ordinal else locale_obj.plural_form
    return rule(n)
