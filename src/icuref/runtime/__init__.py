"""Runtime formatting: Babel-backed ICU rendering, plural rules, locks.

Python 3.13+.
"""

from .locale_context import LocaleContext
from .message_format import IcuMessageFormat, value_to_text
from .number_formats import NUMBER_FORMATS, NumberFormatOptions, resolve_number_format
from .plural_rules import select_plural_category
from .rwlock import RWLock

__all__ = [
    "NUMBER_FORMATS",
    "IcuMessageFormat",
    "LocaleContext",
    "NumberFormatOptions",
    "RWLock",
    "resolve_number_format",
    "select_plural_category",
    "value_to_text",
]
