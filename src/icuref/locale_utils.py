"""Helpers at the boundary between language tags and Babel.

Catalogs and callers use BCP-47 tags ("de-CH"); Babel parses POSIX-style
identifiers ("de_CH"). Tags are converted only where a Babel Locale is
built.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
]

# Values of the platform locale that carry no language
_NEUTRAL_LOCALES = frozenset({"C", "POSIX", "C.UTF-8"})

# Environment variables consulted, highest priority first
_LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")


def normalize_locale(locale_code: str) -> str:
    """Return the Babel identifier of a language tag.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("de")
        'de'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Parse a tag into a Babel Locale, once per tag.

    Plural selection calls this for every plural argument it renders.

    Raises:
        babel.core.UnknownLocaleError: If CLDR has no data for the tag
        ValueError: If the tag cannot be parsed

    Example:
        >>> get_babel_locale("de-CH").territory
        'CH'
    """
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Forget every parsed Babel Locale."""
    get_babel_locale.cache_clear()


def _strip_encoding(value: str) -> str:
    return value.split(".", 1)[0]


def get_system_locale() -> str:
    """Return the platform's locale, for negotiation without a request.

    The interpreter's own view (locale.getlocale()) wins; otherwise the
    environment is read in POSIX priority order. Neutral locales such as
    "C" are skipped and encodings ("de_DE.UTF-8") are dropped.

    Returns:
        The detected identifier ("de_DE"), or "en_US" when none is set
    """
    import locale  # noqa: PLC0415

    try:
        language, _ = locale.getlocale()
    except (ValueError, AttributeError):
        language = None
    if language and language not in _NEUTRAL_LOCALES:
        return _strip_encoding(language)

    for name in _LOCALE_ENV_VARS:
        value = os.environ.get(name)
        if value and value not in _NEUTRAL_LOCALES:
            return _strip_encoding(value)

    return "en_US"
