"""Locale catalog loading.

A catalog maps message keys to translated templates for one locale. The
full set of catalogs (one per supported locale) is held by LocaleCatalogs,
an immutable mapping that always contains the base-language catalog.

Catalog files are JSON objects in the shape the translation pipeline
produces:

    {
      "core/lib/i18n.py | ms": {"message": "{timeInMs, number, milliseconds} ms"},
      ...
    }

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Protocol

from icuref.constants import BASE_LOCALE, DEFAULT_LOCALE
from icuref.localization.negotiation import lookup_locale
from icuref.localization.types import CatalogEntry, LocaleCode, MessageKey

__all__ = [
    "CatalogLoader",
    "LocaleCatalogs",
    "PathCatalogLoader",
    "validate_catalog",
]

logger = logging.getLogger(__name__)


class CatalogLoader(Protocol):
    """Protocol for loading one locale's catalog.

    Implementations may read from disk, a database, package resources or
    a remote service.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, data):
        ...         self._data = data
        ...     def load(self, locale):
        ...         return self._data[locale]
    """

    def load(self, locale: LocaleCode) -> Mapping[MessageKey, CatalogEntry]:
        """Load the catalog of a locale.

        Args:
            locale: Locale code

        Returns:
            Mapping of message key to catalog entry

        Raises:
            FileNotFoundError: If the catalog does not exist
            ValueError: If the catalog is malformed
        """
        ...


def validate_catalog(
    data: Any, source: str = "<catalog>"
) -> dict[MessageKey, CatalogEntry]:
    """Validate raw catalog data and return a clean copy.

    Args:
        data: Parsed JSON (or any mapping) to validate
        source: Description used in error messages

    Returns:
        Dict of message key to {"message": str}

    Raises:
        ValueError: If the data is not a mapping of key -> {"message": str}
    """
    if not isinstance(data, Mapping):
        msg = f"Catalog {source} must be an object, got {type(data).__name__}"
        raise ValueError(msg)
    catalog: dict[MessageKey, CatalogEntry] = {}
    for key, entry in data.items():
        if not isinstance(key, str):
            msg = f"Catalog {source} has a non-string message key: {key!r}"
            raise ValueError(msg)
        if not isinstance(entry, Mapping) or not isinstance(entry.get("message"), str):
            msg = f"Catalog {source} entry '{key}' must have a string 'message'"
            raise ValueError(msg)
        catalog[key] = {"message": entry["message"]}
    return catalog


@dataclass(frozen=True, slots=True)
class PathCatalogLoader:
    """File system catalog loader using a path template.

    Security:
        Locale codes containing path separators or ".." are rejected, and
        every resolved path is checked against a fixed root directory.

    Example:
        >>> loader = PathCatalogLoader("locales/{locale}.json")
        >>> catalog = loader.load("de")
        # Loads from: locales/de.json

    Attributes:
        base_path: Path template with {locale} placeholder
        root_dir: Root directory for traversal validation. Defaults to the
            static prefix of base_path.
    """

    base_path: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate template and cache the resolved root directory.

        Raises:
            ValueError: If base_path does not contain {locale}
        """
        if "{locale}" not in self.base_path:
            msg = f"base_path must contain '{{locale}}' placeholder, got: '{self.base_path}'"
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.base_path.split("{locale}")[0]
            # "locales/{locale}.json" -> "locales/"; "cat_{locale}.json" -> cwd
            cut = max(static_prefix.rfind("/"), static_prefix.rfind("\\")) + 1
            prefix_dir = static_prefix[:cut]
            resolved = Path(prefix_dir).resolve() if prefix_dir else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    def describe_path(self, locale: LocaleCode) -> str:
        """Return the catalog path of a locale, for diagnostics."""
        return self.base_path.replace("{locale}", locale)

    def load(self, locale: LocaleCode) -> dict[MessageKey, CatalogEntry]:
        """Load and validate a catalog JSON file.

        Raises:
            ValueError: If locale is unsafe, the path escapes the root or the
                content is not a valid catalog
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """
        self._validate_locale(locale)
        full_path = Path(self.describe_path(locale)).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = f"Path traversal detected: catalog for '{locale}' escapes root directory"
            raise ValueError(msg) from None

        try:
            data = json.loads(full_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            msg = f"Catalog {full_path} is not valid JSON: {e}"
            raise ValueError(msg) from e
        catalog = validate_catalog(data, str(full_path))
        logger.debug("Loaded %d messages for '%s' from %s", len(catalog), locale, full_path)
        return catalog


class LocaleCatalogs(Mapping[LocaleCode, Mapping[MessageKey, CatalogEntry]]):
    """Immutable set of locale catalogs.

    Always contains the base-language catalog, which holds the reference
    text of every message.

    Example:
        >>> catalogs = LocaleCatalogs({
        ...     "en": {"a.js | title": {"message": "Title"}},
        ...     "de": {"a.js | title": {"message": "Titel"}},
        ... })
        >>> catalogs.supported_locales
        ('de', 'en')
        >>> catalogs.lookup_locale("de-AT")
        'de'
    """

    __slots__ = ("_base_locale", "_catalogs", "_default_locale")

    def __init__(
        self,
        catalogs: Mapping[LocaleCode, Mapping[MessageKey, Any]],
        *,
        base_locale: LocaleCode = BASE_LOCALE,
        default_locale: LocaleCode = DEFAULT_LOCALE,
    ) -> None:
        """Validate and freeze catalogs.

        Args:
            catalogs: locale -> message key -> {"message": str}
            base_locale: Locale that must be present
            default_locale: Result of lookup_locale() when nothing matches

        Raises:
            ValueError: If the base locale is missing or an entry is malformed
        """
        if base_locale not in catalogs:
            msg = f"Catalogs must include the base locale '{base_locale}'"
            raise ValueError(msg)
        self._catalogs: Mapping[LocaleCode, Mapping[MessageKey, CatalogEntry]] = (
            MappingProxyType({
                locale: MappingProxyType(validate_catalog(entries, f"'{locale}'"))
                for locale, entries in catalogs.items()
            })
        )
        self._base_locale = base_locale
        self._default_locale = default_locale

    @classmethod
    def from_loader(
        cls,
        loader: CatalogLoader,
        locales: Iterable[LocaleCode],
        *,
        base_locale: LocaleCode = BASE_LOCALE,
        default_locale: LocaleCode = DEFAULT_LOCALE,
    ) -> LocaleCatalogs:
        """Load catalogs for the given locales.

        The base locale is loaded even if not listed.

        Raises:
            FileNotFoundError: If a catalog is missing
            ValueError: If a catalog is malformed
        """
        wanted = list(dict.fromkeys([base_locale, *locales]))
        return cls(
            {locale: loader.load(locale) for locale in wanted},
            base_locale=base_locale,
            default_locale=default_locale,
        )

    def __getitem__(self, locale: LocaleCode) -> Mapping[MessageKey, CatalogEntry]:
        return self._catalogs[locale]

    def __iter__(self) -> Iterator[LocaleCode]:
        return iter(self._catalogs)

    def __len__(self) -> int:
        return len(self._catalogs)

    def __repr__(self) -> str:
        return f"LocaleCatalogs(locales={self.supported_locales!r})"

    @property
    def base_locale(self) -> LocaleCode:
        """Locale of the base-language catalog."""
        return self._base_locale

    @property
    def supported_locales(self) -> tuple[LocaleCode, ...]:
        """Sorted locale codes."""
        return tuple(sorted(self._catalogs))

    def lookup_locale(self, requested: str | None = None) -> LocaleCode:
        """Negotiate the best loaded locale for a requested tag."""
        return lookup_locale(requested, self._catalogs.keys(), self._default_locale)

    def base_message(self, message_key: MessageKey) -> str | None:
        """Base-language text of a message, or None if absent."""
        entry = self._catalogs[self._base_locale].get(message_key)
        return entry["message"] if entry is not None else None
