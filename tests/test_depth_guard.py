"""Tests for DepthGuard and depth_clamp."""

import logging
import sys

import pytest

from icuref.constants import MAX_DEPTH
from icuref.core.depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp
from icuref.diagnostics import DiagnosticCode


class TestDepthGuard:
    def test_defaults(self) -> None:
        guard = DepthGuard()

        assert guard.max_depth == MAX_DEPTH
        assert guard.depth == 0

    def test_tracks_depth(self) -> None:
        guard = DepthGuard(max_depth=5)

        with guard:
            assert guard.depth == 1
            with guard:
                assert guard.depth == 2
            assert guard.depth == 1
        assert guard.depth == 0

    def test_limit(self) -> None:
        guard = DepthGuard(max_depth=2)

        with guard, guard, pytest.raises(DepthLimitExceededError) as exc_info:
            with guard:
                pass

        assert exc_info.value.diagnostic.code is DiagnosticCode.MAX_DEPTH_EXCEEDED
        assert "(2)" in str(exc_info.value)

    def test_failed_enter_does_not_leak_depth(self) -> None:
        guard = DepthGuard(max_depth=1)

        with guard:
            for _ in range(3):
                with pytest.raises(DepthLimitExceededError), guard:
                    pass
            assert guard.depth == 1
        assert guard.depth == 0

    def test_exit_on_exception(self) -> None:
        guard = DepthGuard()

        with pytest.raises(ValueError, match="inner"), guard:
            raise ValueError("inner")

        assert guard.depth == 0

    def test_reset(self) -> None:
        guard = DepthGuard()
        guard.__enter__()
        guard.__enter__()

        guard.reset()

        assert guard.depth == 0


class TestDepthClamp:
    def test_within_limit(self) -> None:
        assert depth_clamp(10) == 10

    def test_clamped(self, caplog: pytest.LogCaptureFixture) -> None:
        requested = sys.getrecursionlimit()
        expected = (sys.getrecursionlimit() - 50) // 3

        with caplog.at_level(logging.WARNING, logger="icuref.core.depth_guard"):
            assert depth_clamp(requested) == expected

        assert "Clamping" in caplog.text

    def test_guard_clamps_on_construction(self) -> None:
        guard = DepthGuard(max_depth=sys.getrecursionlimit())

        assert guard.max_depth == (sys.getrecursionlimit() - 50) // 3
