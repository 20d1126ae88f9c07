"""icuref - ICU message formatting with deferred, reference-based localization.

Producer code registers (template, values) pairs and embeds the returned
reference tokens in its output document. Once the target locale is known,
the document is localized in one pass: every token is replaced by its
formatted text and a report records where each message was used.

Public API:
    InstanceRegistry - Declares templates, registers instances, resolves tokens
    I18nConfig - Registry/formatting configuration
    LocaleCatalogs - Locale -> catalog mapping with locale negotiation
    PathCatalogLoader - Loads "<locale>.json" catalogs from disk
    IcuMessageFormat - ICU MessageFormat renderer (Babel-backed)
    format_message - Format one message for a locale
    lookup_locale - Negotiate the best supported locale
    parse_template - Parse ICU template text to an AST
    is_token - Check whether a string is a reference token

Exceptions:
    IcuRefError - Base exception class
    TemplateSyntaxError - Malformed ICU template
    MissingValueError - Template placeholder without a value
    MessageNotFoundError - No text for a message in a locale
    InvalidInstanceIdError - Token that refers to no registered instance

Submodules:
    icuref.syntax - ICU template AST, parser and visitor
    icuref.introspection - Placeholder extraction
    icuref.runtime - Babel-backed rendering, plural rules, RWLock
    icuref.localization - Catalogs, negotiation, message formatting
    icuref.registry - Instance registry, token codec, document walker
    icuref.diagnostics - Error types and diagnostics
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .config import I18nConfig
from .diagnostics import (
    IcuRefError,
    InvalidInstanceIdError,
    MessageNotFoundError,
    MissingValueError,
    TemplateSyntaxError,
)
from .localization import LocaleCatalogs, PathCatalogLoader, format_message, lookup_locale
from .registry import InstanceRegistry, is_token
from .runtime import IcuMessageFormat
from .syntax import parse_template

# Version information - populated from package metadata
try:
    __version__ = _get_version("icuref")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "I18nConfig",
    "IcuMessageFormat",
    "IcuRefError",
    "InstanceRegistry",
    "InvalidInstanceIdError",
    "LocaleCatalogs",
    "MessageNotFoundError",
    "MissingValueError",
    "PathCatalogLoader",
    "TemplateSyntaxError",
    "__version__",
    "format_message",
    "is_token",
    "lookup_locale",
    "parse_template",
]
