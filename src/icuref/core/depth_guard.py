"""Nesting limits for the recursive parts of icuref.

Three places recurse on input they do not control: the template parser
and renderer (plural/select branches inside branches), the document walker
(report documents), and deep_equal (registered values). Each holds a
DepthGuard and enters it once per nesting level, so hostile or cyclic
input ends in DepthLimitExceededError rather than RecursionError.

A guard is plain mutable state owned by one traversal; it is not shared
between threads.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from icuref.constants import MAX_DEPTH
from icuref.diagnostics import DepthLimitExceededError
from icuref.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)

# Interpreter frames one guarded level costs in the deepest user (the walker)
_FRAMES_PER_LEVEL = 3


@dataclass(slots=True)
class DepthGuard:
    """Counts nesting levels and refuses to go deeper than max_depth.

    Example:
        >>> guard = DepthGuard(max_depth=2)
        >>> with guard, guard:
        ...     guard.depth
        2

    Attributes:
        max_depth: Deepest level allowed (clamped to what the interpreter's
            recursion limit can afford)
        current_depth: Levels currently entered
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Check before counting: a refused entry never reaches __exit__
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(ErrorTemplate.depth_exceeded(self.max_depth))
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Levels currently entered."""
        return self.current_depth

    def reset(self) -> None:
        """Start counting from zero, e.g. before reusing a parser."""
        self.current_depth = 0


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Lower a depth limit the recursion limit could not sustain.

    Args:
        requested_depth: Limit asked for
        reserve_frames: Frames kept free for callers above the traversal

    Returns:
        requested_depth, or the largest affordable depth (logged at WARNING)

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(100)
        100
        >>> depth_clamp(500)
        316
    """
    affordable = (sys.getrecursionlimit() - reserve_frames) // _FRAMES_PER_LEVEL
    if requested_depth <= affordable:
        return requested_depth
    logger.warning(
        "Depth limit %d needs more than the recursion limit of %d allows. "
        "Clamping to %d.",
        requested_depth,
        sys.getrecursionlimit(),
        affordable,
    )
    return affordable
