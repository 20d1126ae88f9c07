"""ICU MessageFormat syntax: AST, cursor, parser and visitor.

Python 3.13+.
"""

from .ast import (
    ArgumentElement,
    ArgumentFormat,
    DateFormat,
    Element,
    MessageTemplate,
    NumberFormat,
    Option,
    PluralFormat,
    PoundElement,
    SelectFormat,
    TemplateNode,
    TextElement,
    TimeFormat,
)
from .cursor import Cursor, ParseResult
from .parser import TemplateParser, clear_template_cache, parse_template
from .visitor import TemplateVisitor

__all__ = [
    "ArgumentElement",
    "ArgumentFormat",
    "Cursor",
    "DateFormat",
    "Element",
    "MessageTemplate",
    "NumberFormat",
    "Option",
    "ParseResult",
    "PluralFormat",
    "PoundElement",
    "SelectFormat",
    "TemplateNode",
    "TemplateParser",
    "TemplateVisitor",
    "TextElement",
    "TimeFormat",
    "clear_template_cache",
    "parse_template",
]
