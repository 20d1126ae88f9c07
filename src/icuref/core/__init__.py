"""Core utilities shared across syntax, runtime and registry layers.

This package provides foundational utilities that the template parser and
the document walker both depend on:

    core <- syntax <- runtime <- localization <- registry

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError

__all__ = ["DepthGuard", "DepthLimitExceededError"]
