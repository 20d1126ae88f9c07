"""Locale catalogs, negotiation and message formatting.

Python 3.13+.
"""

from .formatting import (
    FormattedMessage,
    format_catalog_message,
    format_message,
    preprocess_values,
    renderer_strings,
)
from .loading import CatalogLoader, LocaleCatalogs, PathCatalogLoader, validate_catalog
from .negotiation import canonicalize_locale_tag, lookup_closest_locale, lookup_locale
from .types import CatalogEntry, LocaleCode, MessageKey, SourcePath
from .ui_strings import UI_STRINGS

__all__ = [
    "UI_STRINGS",
    "CatalogEntry",
    "CatalogLoader",
    "FormattedMessage",
    "LocaleCatalogs",
    "LocaleCode",
    "MessageKey",
    "PathCatalogLoader",
    "SourcePath",
    "canonicalize_locale_tag",
    "format_catalog_message",
    "format_message",
    "lookup_closest_locale",
    "lookup_locale",
    "preprocess_values",
    "renderer_strings",
    "validate_catalog",
]
