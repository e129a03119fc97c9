"""Debug tracing gated by the ``YEAHNO_DEBUG`` setting.

Output goes through the standard ``logging`` module at INFO level so it shows
up with the default handler configuration once enabled. Tool calls are traced
per surface::

    [DEBUG-TOOL] mcp site_add_site START
    [DEBUG-TOOL] mcp site_add_site SUCCESS in 3ms
"""

from __future__ import annotations

import contextlib
import logging
import time

from collections.abc import Iterator

logger = logging.getLogger(__name__)


class DebugLogger:
    """Process-wide debug switch plus tool-call tracing."""

    _debug_enabled: bool = False

    @staticmethod
    def set_debug_enabled(enabled: bool) -> None:
        DebugLogger._debug_enabled = enabled

    @staticmethod
    def is_debug_enabled() -> bool:
        return DebugLogger._debug_enabled

    @staticmethod
    def debug(message: str, *args: object) -> None:
        """Log ``message % args`` when debug mode is on."""
        if DebugLogger._debug_enabled:
            logger.info("[DEBUG] " + message, *args)

    @staticmethod
    @contextlib.contextmanager
    def trace_tool(surface: str, tool_name: str) -> Iterator[None]:
        """Trace one tool call on *surface*; failures are logged by exception class only."""
        if not DebugLogger._debug_enabled:
            yield
            return

        logger.info("[DEBUG-TOOL] %s %s START", surface, tool_name)
        start = time.monotonic()
        try:
            yield
        except Exception as e:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.info("[DEBUG-TOOL] %s %s ERROR in %dms: %s", surface, tool_name, elapsed_ms, type(e).__name__)
            raise
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info("[DEBUG-TOOL] %s %s SUCCESS in %dms", surface, tool_name, elapsed_ms)
