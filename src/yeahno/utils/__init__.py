"""Shared utilities for yeahno."""

from .debug_logger import DebugLogger

__all__ = [
    "DebugLogger",
]
