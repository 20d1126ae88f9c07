"""Visitor pattern for template AST traversal.

Follows the stdlib ast.NodeVisitor naming convention: methods are named
visit_NodeName (PascalCase), e.g. visit_ArgumentElement.

Python 3.13+.
"""

from collections.abc import Callable
from dataclasses import Field, fields
from typing import ClassVar

from icuref.constants import MAX_DEPTH
from icuref.core.depth_guard import DepthGuard

from .ast import TemplateNode

__all__ = ["TemplateVisitor"]


class TemplateVisitor[T = TemplateNode]:
    """Base visitor for traversing a MessageTemplate.

    generic_visit() traverses all child nodes automatically. Override
    visit_NodeType methods to add behavior, calling generic_visit() to
    continue into children.

    Dispatch table is built once per subclass via __init_subclass__.

    Example:
        >>> class CountPlurals(TemplateVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_PluralFormat(self, node):
        ...         self.count += 1
        ...         return self.generic_visit(node)
        ...
        >>> visitor = CountPlurals()
        >>> visitor.visit(parse_template("{n, plural, other {#}}"))
        >>> visitor.count
        1
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    _class_visit_methods: ClassVar[dict[str, str]] = {}
    _fields_cache: ClassVar[dict[type, tuple[Field[object], ...]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {
            name[len("visit_") :]: name
            for name in dir(cls)
            if name.startswith("visit_")
        }

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum traversal depth (default: MAX_DEPTH)
        """
        self._depth_guard = DepthGuard(
            max_depth=max_depth if max_depth is not None else MAX_DEPTH
        )
        self._instance_dispatch_cache: dict[type, Callable[[TemplateNode], T]] = {}

    def visit(self, node: TemplateNode) -> T:
        """Visit a node, dispatching to visit_<NodeType> or generic_visit."""
        node_type = type(node)
        cached = self._instance_dispatch_cache.get(node_type)
        if cached is not None:
            return cached(node)

        method_name = self._class_visit_methods.get(node_type.__name__)
        method = getattr(self, method_name) if method_name else self.generic_visit
        self._instance_dispatch_cache[node_type] = method
        return method(node)  # type: ignore[no-any-return]  # getattr returns Any

    def generic_visit(self, node: TemplateNode) -> T:
        """Visit all child nodes; returns the node itself.

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
        """
        node_type = type(node)
        node_fields = TemplateVisitor._fields_cache.get(node_type)
        if node_fields is None:
            node_fields = fields(node)  # type: ignore[arg-type]
            TemplateVisitor._fields_cache[node_type] = node_fields

        with self._depth_guard:
            for field in node_fields:
                value = getattr(node, field.name)
                if isinstance(value, tuple):
                    for item in value:
                        if hasattr(item, "__dataclass_fields__"):
                            self.visit(item)
                elif hasattr(value, "__dataclass_fields__"):
                    self.visit(value)

        return node  # type: ignore[return-value]  # T defaults to TemplateNode
