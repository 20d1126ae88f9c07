"""Document walker: localize every reference token inside a document.

A document is a tree of mappings, sequences and leaves (typically parsed
JSON). The walker visits it depth-first, replaces each string value that
is a reference token with its formatted text for one locale, and reports
where each message was used:

    {
      "core/audits/a.py | title": ["audits.first.title"],
      "core/lib/i18n.py | ms": [{"values": {"timeInMs": 12}, "path": "audits.first.displayValue"}],
    }

Node shapes form a closed set (NodeKind). Each node is classified once and
dispatched on its kind; mapping keys are never inspected for tokens.
Immutable containers (tuples, MappingProxyType) cannot be changed in place,
so they are rebuilt when they hold a token.

Paths:
    Letter-only segments are joined with "." and every other segment is
    written in brackets: ["audits", "first-paint", "details", "items", "0"]
    becomes "audits[first-paint].details.items[0]".

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable, Mapping, MutableMapping, MutableSequence, Sequence
from typing import TYPE_CHECKING, Any, Protocol, TypedDict

from icuref.constants import MAX_DEPTH
from icuref.core.depth_guard import DepthGuard
from icuref.diagnostics import UnrepresentablePathError
from icuref.diagnostics.templates import ErrorTemplate
from icuref.enums import NodeKind
from icuref.registry.codec import is_token

if TYPE_CHECKING:
    from icuref.registry.instances import ResolvedInstance

__all__ = [
    "DocumentWalker",
    "MessagePathReport",
    "TokenResolver",
    "ValuesPath",
    "classify",
    "format_path",
    "replace_tokens",
]

logger = logging.getLogger(__name__)

_PLAIN_SEGMENT = re.compile(r"[A-Za-z]+")
_FORBIDDEN_SEGMENT_CHARS = re.compile(r"[\]\"'\s]")


class ValuesPath(TypedDict):
    """Report entry of an instance registered with values."""

    values: dict[str, Any]
    path: str


type MessagePathReport = dict[str, list[str | ValuesPath]]


class TokenResolver(Protocol):
    """Anything that can resolve a token for a locale (InstanceRegistry)."""

    def resolve(self, token: str, locale: str) -> ResolvedInstance:
        """Resolve a reference token to its instance and formatted text."""
        ...


def format_path(segments: Iterable[str]) -> str:
    """Render a document path as a string.

    Args:
        segments: Mapping keys and sequence indices from the root

    Returns:
        Dotted/bracketed path

    Raises:
        UnrepresentablePathError: If a segment contains ']', a quote or
            whitespace

    Examples:
        >>> format_path(["audits", "first-paint", "details", "items", "0"])
        'audits[first-paint].details.items[0]'
        >>> format_path(["0", "title"])
        '[0].title'
    """
    path = ""
    for segment in segments:
        if _PLAIN_SEGMENT.fullmatch(segment):
            path = f"{path}.{segment}" if path else segment
            continue
        if _FORBIDDEN_SEGMENT_CHARS.search(segment):
            raise UnrepresentablePathError(ErrorTemplate.unrepresentable_path_segment(segment))
        path += f"[{segment}]"
    return path


# Sequences whose items are never document nodes
_LEAF_SEQUENCES = (bytes, bytearray, memoryview, range)


def classify(node: object) -> NodeKind:
    """Tag a document node with its shape.

    Examples:
        >>> classify({"a": 1})
        <NodeKind.MAPPING: 'mapping'>
        >>> classify((1, 2))
        <NodeKind.FROZEN_SEQUENCE: 'frozen_sequence'>
        >>> classify(b"raw")
        <NodeKind.SCALAR: 'scalar'>
    """
    if isinstance(node, str):
        return NodeKind.STRING
    if isinstance(node, _LEAF_SEQUENCES):
        return NodeKind.SCALAR
    if isinstance(node, MutableMapping):
        return NodeKind.MAPPING
    if isinstance(node, MutableSequence):
        return NodeKind.SEQUENCE
    if isinstance(node, Mapping):
        return NodeKind.FROZEN_MAPPING
    if isinstance(node, Sequence):
        return NodeKind.FROZEN_SEQUENCE
    return NodeKind.SCALAR


def _rebuild_sequence(original: Sequence[Any], items: list[Any]) -> Sequence[Any]:
    if isinstance(original, tuple) and hasattr(original, "_make"):
        return original._make(items)  # named tuple
    return type(original)(items)  # type: ignore[call-arg]


def _rebuild_mapping(original: Mapping[Any, Any], items: dict[Any, Any]) -> Mapping[Any, Any]:
    return type(original)(items)  # type: ignore[call-arg]


class DocumentWalker:
    """Replaces reference tokens in one document for one locale.

    Mutable containers are changed in place. Tuples and read-only mappings
    that hold a token are rebuilt and the copy is stored in their parent;
    when the root itself is rebuilt, the copy is available as `document`.

    A walker is single-use state for one walk; replace_tokens() creates one
    per call.

    Attributes:
        report: Message key -> paths (or values+path entries) found so far
        document: The walked document, or its rebuilt copy
    """

    __slots__ = ("_guard", "_locale", "_resolver", "_seen", "document", "report")

    def __init__(
        self, resolver: TokenResolver, locale: str, *, max_depth: int = MAX_DEPTH
    ) -> None:
        self._resolver = resolver
        self._locale = locale
        self._guard = DepthGuard(max_depth=max_depth)
        # id -> (node, result); holding the node keeps its id from being reused
        self._seen: dict[int, tuple[object, object]] = {}
        self.report: MessagePathReport = {}
        self.document: object = None

    def walk(self, document: object) -> MessagePathReport:
        """Walk a document, replacing tokens.

        Raises:
            InvalidInstanceIdError: If a token refers to no registered instance
            UnrepresentablePathError: If a token sits at an unrepresentable path
            DepthLimitExceededError: If the document nests deeper than max_depth
            (and any formatting error of the resolved message)
        """
        self.document = self._visit(document, [])
        return self.report

    def _visit(self, node: Any, path: list[str]) -> object:
        kind = classify(node)
        if kind is NodeKind.STRING or kind is NodeKind.SCALAR:
            return node
        if id(node) in self._seen:
            return self._seen[id(node)][1]
        self._seen[id(node)] = (node, node)

        with self._guard:
            match kind:
                case NodeKind.MAPPING:
                    self._visit_children(node, list(node.items()), path)
                    result = node
                case NodeKind.SEQUENCE:
                    self._visit_children(node, list(enumerate(node)), path)
                    result = node
                case NodeKind.FROZEN_MAPPING:
                    values = dict(node.items())
                    changed = self._visit_children(values, list(values.items()), path)
                    result = _rebuild_mapping(node, values) if changed else node
                case NodeKind.FROZEN_SEQUENCE:
                    items = list(node)
                    changed = self._visit_children(items, list(enumerate(items)), path)
                    result = _rebuild_sequence(node, items) if changed else node

        self._seen[id(node)] = (node, result)
        return result

    def _visit_children(
        self, container: Any, children: list[tuple[Any, Any]], path: list[str]
    ) -> bool:
        """Visit the values of a container, storing replacements into it.

        Returns:
            Whether any value was replaced
        """
        changed = False
        for key, value in children:
            child_path = [*path, str(key)]
            if classify(value) is NodeKind.STRING and is_token(value):
                replacement = self._replace(value, child_path)
            else:
                replacement = self._visit(value, child_path)
            if replacement is not value:
                container[key] = replacement
                changed = True
        return changed

    def _replace(self, token: str, path: list[str]) -> str:
        resolved = self._resolver.resolve(token, self._locale)
        instance = resolved.instance
        path_text = format_path(path)
        entry: str | ValuesPath = (
            path_text
            if instance.values is None
            else {"values": copy.deepcopy(instance.values), "path": path_text}
        )
        self.report.setdefault(instance.message_key, []).append(entry)
        return resolved.formatted_string


def replace_tokens(
    document: object,
    resolver: TokenResolver,
    locale: str,
    *,
    max_depth: int = MAX_DEPTH,
) -> MessagePathReport:
    """Replace every reference token in a document and report the paths.

    Mutable containers are modified in place and tuples or read-only
    mappings holding tokens are replaced by rebuilt copies in their parent.
    A document without tokens is left unchanged and yields an empty report.
    Use DocumentWalker directly to get the rebuilt copy of an immutable root.

    Args:
        document: Mapping/sequence tree (leaves are left alone)
        resolver: Token resolver, usually an InstanceRegistry
        locale: Target locale
        max_depth: Maximum nesting depth

    Returns:
        Report of message keys to the paths where they were used
    """
    report = DocumentWalker(resolver, locale, max_depth=max_depth).walk(document)
    logger.debug(
        "Replaced %d tokens of %d messages for '%s'",
        sum(len(paths) for paths in report.values()),
        len(report),
        locale,
    )
    return report
