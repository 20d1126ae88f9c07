"""Shared constants for icuref.

This module provides centralized configuration constants used across the
syntax, runtime, localization and registry packages. Placing constants here
avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Locales: Default, base-language and pseudo-locale codes
- Token format: Separators of the reference token wire format
- Depth limits: Recursion protection for parsing and document walking
- Cache limits: Memory bounds for caching subsystems

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locales
    "DEFAULT_LOCALE",
    "BASE_LOCALE",
    "PSEUDO_LOCALES",
    "PSEUDO_LOCALE_NUMBER_FORMAT",
    "BABEL_FALLBACK_LOCALE",
    # Token format
    "MESSAGE_KEY_SEPARATOR",
    "INSTANCE_SEPARATOR",
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "TEMPLATE_CACHE_SIZE",
]

# ============================================================================
# LOCALES
# ============================================================================

# Locale returned when negotiation finds no supported match.
DEFAULT_LOCALE: str = "en"

# Locale whose catalog holds the base-language text of every message.
# Catalog sets must always contain it.
BASE_LOCALE: str = "en"

# Accented / bidi pseudo-localized English. The catalog text is used as-is,
# but numbers are formatted with a non-English locale so that unformatted
# numbers stand out during review.
PSEUDO_LOCALES: frozenset[str] = frozenset({"en-XA", "en-XL"})
PSEUDO_LOCALE_NUMBER_FORMAT: str = "de-DE"

# Babel locale used when a locale is unknown to CLDR.
BABEL_FALLBACK_LOCALE: str = "en_US"

# ============================================================================
# TOKEN FORMAT
# ============================================================================

# "<source file> | <declared name>"
MESSAGE_KEY_SEPARATOR: str = " | "

# "<message key> # <instance index>"
INSTANCE_SEPARATOR: str = " # "

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: template parser (nested plural/select), document walker.
# Report documents are rarely deeper than 15 levels; 100 levels of nesting
# is malformed or adversarial input.
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum cached parsed templates. Covers every declared message of a
# large application in every supported locale.
TEMPLATE_CACHE_SIZE: int = 4096
