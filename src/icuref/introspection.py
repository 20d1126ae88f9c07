"""ICU template introspection: which arguments does a template use?

Extracts every argument referenced by a template, including arguments
nested inside plural and select branches, together with its type and
style. Value preprocessing uses this to find unit-converted placeholders
and to reject templates whose values are incomplete.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from icuref.enums import ArgumentType
from icuref.syntax.ast import ArgumentElement, MessageTemplate
from icuref.syntax.parser import parse_template
from icuref.syntax.visitor import TemplateVisitor

__all__ = [
    "ArgumentCollector",
    "ArgumentInfo",
    "extract_argument_ids",
    "extract_arguments",
]


@dataclass(frozen=True, slots=True)
class ArgumentInfo:
    """Immutable metadata about one argument occurrence.

    Example:
        {wastedMs, number, milliseconds} ->
        ArgumentInfo(id="wastedMs", type=ArgumentType.NUMBER, style="milliseconds")
    """

    id: str
    """Placeholder name."""

    type: ArgumentType
    """Argument type (simple, number, plural, ...)."""

    style: str | None = None
    """Style of number/date/time arguments."""


class ArgumentCollector(TemplateVisitor[object]):
    """Visitor that records every ArgumentElement in source order."""

    __slots__ = ("arguments",)

    def __init__(self) -> None:
        super().__init__()
        self.arguments: list[ArgumentInfo] = []

    def visit_ArgumentElement(self, node: ArgumentElement) -> object:
        """Record argument, then descend into plural/select branches."""
        self.arguments.append(ArgumentInfo(node.id, node.type, node.style))
        return self.generic_visit(node)


def extract_arguments(template: str | MessageTemplate) -> tuple[ArgumentInfo, ...]:
    """Extract all argument occurrences from a template.

    An argument used several times appears once per occurrence.

    Args:
        template: Template text or an already parsed MessageTemplate

    Returns:
        Tuple of ArgumentInfo in source order (outer argument before the
        arguments of its branches)

    Raises:
        TemplateSyntaxError: If template text is malformed

    Example:
        >>> [a.id for a in extract_arguments("{n, plural, one {{who}} other {#}}")]
        ['n', 'who']
    """
    parsed = parse_template(template) if isinstance(template, str) else template
    collector = ArgumentCollector()
    collector.visit(parsed)
    return tuple(collector.arguments)


def extract_argument_ids(template: str | MessageTemplate) -> frozenset[str]:
    """Return the set of placeholder names referenced by a template."""
    return frozenset(arg.id for arg in extract_arguments(template))
