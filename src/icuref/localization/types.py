"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization and
registry packages and by user code when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import TypedDict

__all__ = [
    "CatalogEntry",
    "LocaleCode",
    "MessageKey",
    "SourcePath",
]

type MessageKey = str
"""Canonical message key: '<relative/source/file> | <declaredName>'."""

type LocaleCode = str
"""BCP-47 locale code (e.g., 'en', 'de-CH', 'zh-Hant-TW')."""

type SourcePath = str
"""Path of the source file that declares a message table."""


class CatalogEntry(TypedDict):
    """One message of a locale catalog, as stored in catalog JSON files."""

    message: str
