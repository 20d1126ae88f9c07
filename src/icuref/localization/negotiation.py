"""Locale negotiation: map a requested language tag to a supported locale.

Fallback chain for a requested tag:
    1. exact match ("de-CH-1996")
    2. progressively shorter prefixes ("de-CH", then "de")
    3. the default locale ("en")

Tags are canonicalized (BCP-47 casing, "_" accepted as separator) before
matching; supported tags are compared exactly as given.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from icuref.constants import DEFAULT_LOCALE
from icuref.locale_utils import get_system_locale

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

__all__ = [
    "canonicalize_locale_tag",
    "lookup_closest_locale",
    "lookup_locale",
]

logger = logging.getLogger(__name__)

_MAX_SUBTAG_LENGTH = 8


def canonicalize_locale_tag(tag: str) -> str:
    """Return the canonical BCP-47 casing of a language tag.

    Language and variants lowercase, script titlecase, region uppercase;
    everything from the first singleton (extension or private use) on is
    lowercase.

    Args:
        tag: Language tag with "-" or "_" separators

    Returns:
        Canonical tag with "-" separators

    Raises:
        ValueError: If the tag is structurally invalid

    Examples:
        >>> canonicalize_locale_tag("de-ch-1996")
        'de-CH-1996'
        >>> canonicalize_locale_tag("en_us")
        'en-US'
        >>> canonicalize_locale_tag("zh-hant-tw")
        'zh-Hant-TW'
    """
    if not tag:
        msg = "Language tag must not be empty"
        raise ValueError(msg)

    subtags = tag.replace("_", "-").split("-")
    for subtag in subtags:
        if not subtag or len(subtag) > _MAX_SUBTAG_LENGTH or not (
            subtag.isascii() and subtag.isalnum()
        ):
            msg = f"Invalid language tag: '{tag}'"
            raise ValueError(msg)

    language = subtags[0]
    if not (language.isalpha() and (2 <= len(language) <= 3 or 5 <= len(language) <= 8)):
        msg = f"Invalid primary language subtag in '{tag}'"
        raise ValueError(msg)

    canonical = [language.lower()]
    seen_script = seen_region = in_extension = False
    for subtag in subtags[1:]:
        if in_extension or len(subtag) == 1:
            in_extension = True
            canonical.append(subtag.lower())
        elif not (seen_script or seen_region) and len(subtag) == 4 and subtag.isalpha():
            seen_script = True
            canonical.append(subtag.title())
        elif not seen_region and (
            (len(subtag) == 2 and subtag.isalpha()) or (len(subtag) == 3 and subtag.isdigit())
        ):
            seen_region = True
            canonical.append(subtag.upper())
        else:
            # Variants; no script or region may follow
            seen_script = seen_region = True
            canonical.append(subtag.lower())
    return "-".join(canonical)


def lookup_closest_locale(
    tag_or_tags: str | Sequence[str] | None, supported: Collection[str]
) -> str | None:
    """Find the closest supported locale for one or more requested tags.

    For each requested tag in order, tries the tag itself and then each
    shorter prefix obtained by dropping the last subtag.

    Args:
        tag_or_tags: One tag or tags in preference order
        supported: Supported locale tags (LocaleCatalogs.lookup_locale passes
            the loaded catalogs)

    Returns:
        Matching supported tag, or None

    Examples:
        >>> lookup_closest_locale("de-CH-1996", {"de-CH", "de"})
        'de-CH'
        >>> lookup_closest_locale(["xx", "fr-CA"], {"fr"})
        'fr'
        >>> lookup_closest_locale("xx-ZZ", {"en"}) is None
        True
    """
    if tag_or_tags is None:
        return None
    tags = [tag_or_tags] if isinstance(tag_or_tags, str) else list(tag_or_tags)
    for tag in tags:
        parts = tag.split("-")
        while parts:
            candidate = "-".join(parts)
            if candidate in supported:
                return candidate
            parts.pop()
    return None


def lookup_locale(
    requested: str | None,
    supported: Collection[str],
    default: str = DEFAULT_LOCALE,
) -> str:
    """Negotiate the best supported locale for a request.

    A requested tag of None uses the platform locale. Never raises:
    malformed tags and unmatched tags both degrade to the default.

    Args:
        requested: Requested language tag, or None for the platform locale
        supported: Supported locale tags
        default: Locale returned when nothing matches

    Returns:
        Supported locale tag or default

    Examples:
        >>> lookup_locale("de-CH-1996", {"en", "de-CH", "de"})
        'de-CH'
        >>> lookup_locale("xx-ZZ", {"en", "de"})
        'en'
    """
    tag = requested if requested is not None else get_system_locale()
    try:
        canonical = canonicalize_locale_tag(tag)
    except ValueError:
        logger.debug("Malformed locale tag '%s'; using '%s'", tag, default)
        return default

    closest = lookup_closest_locale(canonical, supported)
    if closest is None:
        logger.debug("No supported locale for '%s'; using '%s'", canonical, default)
        return default
    return closest
