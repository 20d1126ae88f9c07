"""Instance registry: identities for (template, values) pairs.

Producer code declares the base-language templates of a source file and
registers a template with its values wherever a localizable string is
needed. Registration returns a reference token that is embedded in the
output document instead of text. Later, for any locale, the registry
resolves tokens back to formatted text (see replace_tokens()).

Lifecycle:
    registry = InstanceRegistry(catalogs)
    str_ = registry.declare(__file__, UIStrings)    # once per source file
    token = str_(UIStrings["title"], {"count": 3})   # any number of times
    report = registry.replace_tokens(document, "de")

Identity:
    Instances are keyed by "<source file relative to project root> | <name>".
    Within a key, registering structurally equal values returns the same
    index; different values append a new index. Indices are never reused
    or reassigned, so a token stays valid for the life of the registry.

Thread Safety:
    Registration (find-or-append) holds the write side of an RWLock;
    lookups hold the read side. Formatting runs outside the lock.

Python 3.13+. Uses Babel (via formatting).
"""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from icuref.config import I18nConfig
from icuref.constants import MESSAGE_KEY_SEPARATOR
from icuref.diagnostics import InvalidInstanceIdError, TemplateNotDeclaredError
from icuref.diagnostics.templates import ErrorTemplate
from icuref.localization.formatting import (
    format_catalog_message,
    format_message,
)
from icuref.localization.formatting import (
    renderer_strings as catalog_renderer_strings,
)
from icuref.localization.ui_strings import UI_STRINGS
from icuref.registry.codec import decode, encode, is_token
from icuref.registry.instances import MessageInstance, ResolvedInstance, deep_equal
from icuref.registry.walker import MessagePathReport, replace_tokens
from icuref.runtime.rwlock import RWLock

if TYPE_CHECKING:
    from icuref.localization.types import CatalogEntry, LocaleCode, MessageKey

__all__ = ["InstanceRegistry", "MessageIdFactory"]

logger = logging.getLogger(__name__)

type StrPath = str | os.PathLike[str]


@dataclass(frozen=True, slots=True)
class MessageIdFactory:
    """Token factory bound to one declared source file.

    Returned by InstanceRegistry.declare(); calling it registers a
    template of that file (or a shared template) and returns its token.

    Example:
        >>> str_ = registry.declare("core/audits/metrics.py", {"title": "Metrics"})
        >>> str_("Metrics")
        'core/audits/metrics.py | title # 0'
    """

    registry: InstanceRegistry
    source_file: str

    def __call__(self, template: str, values: Mapping[str, Any] | None = None) -> str:
        """Register template with values; return the reference token."""
        return self.registry.register(self.source_file, template, values)


class InstanceRegistry:
    """Registry of message instances for one set of catalogs.

    Args:
        catalogs: Locale catalogs (must contain config.base_locale)
        config: Configuration (default: I18nConfig())
        shared_strings: Templates every source file may register, keyed
            under config.shared_strings_source

    Example:
        >>> registry = InstanceRegistry(catalogs)
        >>> str_ = registry.declare("core/audits/a.py", {"title": "Fast page"})
        >>> document = {"audits": {"a": {"title": str_("Fast page")}}}
        >>> registry.replace_tokens(document, "en")
        {'core/audits/a.py | title': ['audits.a.title']}
        >>> document["audits"]["a"]["title"]
        'Fast page'
    """

    __slots__ = ("_catalogs", "_config", "_declarations", "_instances", "_lock", "_shared_strings")

    def __init__(
        self,
        catalogs: Mapping[LocaleCode, Mapping[MessageKey, CatalogEntry]],
        *,
        config: I18nConfig | None = None,
        shared_strings: Mapping[str, str] = UI_STRINGS,
    ) -> None:
        self._config = config or I18nConfig()
        if self._config.base_locale not in catalogs:
            msg = f"Catalogs must include the base locale '{self._config.base_locale}'"
            raise ValueError(msg)
        self._catalogs = catalogs
        self._shared_strings = dict(shared_strings)
        self._declarations: dict[str, dict[str, str]] = {}
        self._instances: dict[MessageKey, list[MessageInstance]] = {}
        self._lock = RWLock()

    def __repr__(self) -> str:
        return (
            f"InstanceRegistry(locales={len(self._catalogs)}, "
            f"files={len(self._declarations)}, instances={len(self)})"
        )

    @property
    def config(self) -> I18nConfig:
        """Registry configuration."""
        return self._config

    # ------------------------------------------------------------------
    # Declaration and registration
    # ------------------------------------------------------------------

    def declare(self, source_file: StrPath, ui_strings: Mapping[str, str]) -> MessageIdFactory:
        """Declare the base-language templates of a source file.

        Re-declaring a file replaces its table.

        Args:
            source_file: Path of the declaring file (usually __file__)
            ui_strings: Declared name -> template

        Returns:
            Token factory bound to source_file
        """
        path = _absolute(source_file)
        with self._lock.write():
            if path in self._declarations:
                logger.debug("Re-declaring messages of %s", path)
            self._declarations[path] = dict(ui_strings)
        return MessageIdFactory(self, path)

    def register(
        self,
        source_file: StrPath,
        template: str,
        values: Mapping[str, Any] | None = None,
    ) -> str:
        """Register a template (identified by its exact text) with values.

        The template is looked up in the shared strings overlaid with the
        file's declarations: shared names come first (a shared name the file
        redeclares takes the file's text), then the file's other names. Text
        equal to a shared template keeps the shared message key unless the
        file redeclares that name.

        Args:
            source_file: Declaring file
            template: Exact declared template text
            values: Placeholder values (deep-copied)

        Returns:
            Reference token "<message key> # <index>"

        Raises:
            TemplateNotDeclaredError: If no declaration has this text
        """
        path = _absolute(source_file)
        with self._lock.read():
            declared = self._declarations.get(path, {})
            name = _find_name({**self._shared_strings, **declared}, template)
        if name is None:
            raise TemplateNotDeclaredError(ErrorTemplate.template_not_declared(template))
        key_file = path if name in declared else str(self._config.shared_strings_source)
        return self._register(self.message_key(key_file, name), template, values)

    def register_key(
        self,
        source_file: StrPath,
        name: str,
        values: Mapping[str, Any] | None = None,
    ) -> str:
        """Register a declared message by name instead of by text.

        Raises:
            TemplateNotDeclaredError: If neither the file nor the shared
                strings declare name
        """
        path = _absolute(source_file)
        with self._lock.read():
            declared = self._declarations.get(path, {})
            if name in declared:
                key_file, template = path, declared[name]
            elif name in self._shared_strings:
                key_file, template = (
                    str(self._config.shared_strings_source),
                    self._shared_strings[name],
                )
            else:
                raise TemplateNotDeclaredError(ErrorTemplate.template_not_declared(name))
        return self._register(self.message_key(key_file, name), template, values)

    def message_key(self, source_file: StrPath, name: str) -> MessageKey:
        """Canonical key of a declared name: '<relative/path> | <name>'.

        Paths are relative to config.project_root with "/" separators on
        every platform.
        """
        relative = os.path.relpath(_absolute(source_file), self._config.project_root)
        relative = relative.replace(os.sep, "/")
        return f"{relative}{MESSAGE_KEY_SEPARATOR}{name}"

    def _register(
        self, message_key: MessageKey, template: str, values: Mapping[str, Any] | None
    ) -> str:
        stored = None if values is None else copy.deepcopy(dict(values))
        with self._lock.write():
            instances = self._instances.setdefault(message_key, [])
            for index, instance in enumerate(instances):
                if deep_equal(instance.values, stored):
                    return encode(message_key, index)
            instances.append(MessageInstance(message_key, template, stored))
            index = len(instances) - 1
        logger.debug("New instance %d of %s", index, message_key)
        return encode(message_key, index)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def lookup(self, token: str) -> MessageInstance:
        """Return the registered instance a token refers to.

        Raises:
            InvalidInstanceIdError: If token is malformed, its key is unknown
                or its index is out of range
        """
        message_key, index = decode(token)
        with self._lock.read():
            instances = self._instances.get(message_key, [])
            if index >= len(instances):
                raise InvalidInstanceIdError(ErrorTemplate.invalid_instance_id(token))
            return instances[index]

    def resolve(self, token: str, locale: LocaleCode) -> ResolvedInstance:
        """Resolve a token and format its instance for a locale.

        Raises:
            InvalidInstanceIdError: If the token refers to no instance
            UnsupportedLocaleError: If locale has no catalog
            MessageNotFoundError: If no text is available for the message
            MissingValueError: If the registered values lack a placeholder
            FormattingError: If a value cannot be formatted
        """
        instance = self.lookup(token)
        formatted = format_message(
            self._catalogs,
            locale,
            instance.message_key,
            instance.template,
            instance.values,
            config=self._config,
        )
        return ResolvedInstance(instance, formatted.formatted_string)

    def get_formatted(self, value: str, locale: LocaleCode) -> str:
        """Format value if it is a token; return any other string unchanged."""
        if is_token(value):
            return self.resolve(value, locale).formatted_string
        return value

    def get_formatted_from_id_and_values(
        self,
        locale: LocaleCode,
        message_key: MessageKey,
        values: Mapping[str, Any] | None = None,
    ) -> str:
        """Format a catalog message by key, bypassing registration.

        Raises:
            ValueError: If message_key is not of the form '<file> | <name>'
            MessageNotFoundError: If the locale catalog lacks the key
        """
        return format_catalog_message(
            self._catalogs, locale, message_key, values, config=self._config
        )

    def renderer_strings(self, locale: LocaleCode, source_prefix: str) -> dict[str, str]:
        """Raw catalog text of every message whose source starts with source_prefix."""
        return catalog_renderer_strings(self._catalogs, locale, source_prefix)

    def replace_tokens(self, document: object, locale: LocaleCode) -> MessagePathReport:
        """Localize every token in a document in place; report where each was used."""
        return replace_tokens(document, self, locale, max_depth=self._config.max_depth)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def instances(self, message_key: MessageKey) -> tuple[MessageInstance, ...]:
        """Registered instances of a key, in index order."""
        with self._lock.read():
            return tuple(self._instances.get(message_key, ()))

    @property
    def message_keys(self) -> tuple[MessageKey, ...]:
        """Keys with at least one instance, in first-registration order."""
        with self._lock.read():
            return tuple(self._instances)

    def __len__(self) -> int:
        """Total number of registered instances."""
        with self._lock.read():
            return sum(len(instances) for instances in self._instances.values())

    def __contains__(self, message_key: object) -> bool:
        with self._lock.read():
            return message_key in self._instances


def _absolute(source_file: StrPath) -> str:
    return os.path.abspath(os.fspath(source_file))


def _find_name(table: Mapping[str, str], template: str) -> str | None:
    """First declared name whose template text equals template."""
    for name, text in table.items():
        if text == template:
            return name
    return None
