"""Configuration for message registration and formatting.

Provides a single frozen dataclass that encapsulates the parameters shared
by the registry, the formatter and the document walker.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from icuref.constants import (
    BASE_LOCALE,
    DEFAULT_LOCALE,
    MAX_DEPTH,
    PSEUDO_LOCALE_NUMBER_FORMAT,
    PSEUDO_LOCALES,
)

__all__ = ["I18nConfig"]

_PACKAGE_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True, slots=True)
class I18nConfig:
    """Immutable configuration for an InstanceRegistry.

    All fields have sensible defaults; constructing ``I18nConfig()`` with
    no arguments produces a usable configuration.

    Attributes:
        project_root: Directory message keys are made relative to. Keys are
            stable only if every participant uses the same root.
        default_locale: Locale returned when negotiation finds no match.
        base_locale: Locale whose catalog holds the base-language text.
        pseudo_locales: Locales rendered with the text of their catalog but
            the number rules of ``pseudo_number_locale``.
        pseudo_number_locale: Number/plural locale used for pseudo-locales.
        shared_strings_source: File that the shared templates are keyed
            under (``<relative path> | <name>``).
        strict: If True, a message missing from the target catalog raises
            MessageNotFoundError instead of falling back to the base
            template (default: False).
        max_depth: Maximum document nesting depth for the walker.

    Example:
        >>> config = I18nConfig(project_root=Path("/srv/app"), strict=True)
        >>> registry = InstanceRegistry(catalogs, config=config)
    """

    project_root: Path = field(default=_PACKAGE_DIR.parent)
    default_locale: str = DEFAULT_LOCALE
    base_locale: str = BASE_LOCALE
    pseudo_locales: frozenset[str] = PSEUDO_LOCALES
    pseudo_number_locale: str = PSEUDO_LOCALE_NUMBER_FORMAT
    shared_strings_source: Path = field(
        default=_PACKAGE_DIR / "localization" / "ui_strings.py"
    )
    strict: bool = False
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If a locale code is empty or max_depth is not positive.
        """
        if not self.default_locale:
            msg = "default_locale must not be empty"
            raise ValueError(msg)
        if not self.base_locale:
            msg = "base_locale must not be empty"
            raise ValueError(msg)
        if not self.pseudo_number_locale:
            msg = "pseudo_number_locale must not be empty"
            raise ValueError(msg)
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        # Accept str paths for convenience
        object.__setattr__(self, "project_root", Path(self.project_root))
        object.__setattr__(self, "shared_strings_source", Path(self.shared_strings_source))
        object.__setattr__(self, "pseudo_locales", frozenset(self.pseudo_locales))

    def number_locale_for(self, locale_code: str) -> str:
        """Return the locale whose number and plural rules format locale_code.

        Example:
            >>> I18nConfig().number_locale_for("en-XA")
            'de-DE'
            >>> I18nConfig().number_locale_for("fr")
            'fr'
        """
        if locale_code in self.pseudo_locales:
            return self.pseudo_number_locale
        return locale_code
