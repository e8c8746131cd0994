"""Package logger and timing helpers. Everything goes to stderr; stdout carries the protocol."""
from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any, Optional

from .config import ServerConfig

logger = logging.getLogger("mcp_w3c_specs")

_LOG_PERFORMANCE = False


def configure_logging(config: ServerConfig) -> None:
    """Apply the level and performance flag from ``config``."""
    global _LOG_PERFORMANCE
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.setLevel(logging.DEBUG if config.debug else logging.INFO)
    _LOG_PERFORMANCE = config.log_performance


def performance_enabled() -> bool:
    return _LOG_PERFORMANCE


def log_tool_call(tool_name: str, args: Any) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Tool called: %s %s", tool_name, json.dumps(args, default=str))


def log_tool_result(tool_name: str, result_size: int) -> None:
    logger.debug("Tool result: %s (%d chars)", tool_name, result_size)


class PerformanceTimer:
    """Wall-clock timer; durations are logged only when performance logging is on."""

    def __init__(self, label: str) -> None:
        self.label = label
        self._start = time.perf_counter()
        self.duration_ms: Optional[float] = None
        if _LOG_PERFORMANCE:
            logger.debug("%s started", label)

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000

    def end(self) -> float:
        self.duration_ms = self._elapsed_ms()
        if _LOG_PERFORMANCE:
            logger.info("[PERF] %s: %.1fms", self.label, self.duration_ms)
        return self.duration_ms

    def checkpoint(self, name: str) -> float:
        elapsed = self._elapsed_ms()
        if _LOG_PERFORMANCE:
            logger.info("[PERF] %s -> %s: %.1fms", self.label, name, elapsed)
        return elapsed

    def __enter__(self) -> "PerformanceTimer":
        return self

    def __exit__(self, *exc: object) -> None:
        self.end()
