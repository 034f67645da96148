"""
Structured logging for scenario replays.

Provides configurable log levels (silent, normal, verbose, debug)
with consistent formatting for per-step clock values, verdicts,
and replay statistics.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Dict, Mapping, TextIO


class LogLevel(Enum):
    """
    Logging levels for the replayer.

    SILENT:  No output at all.
    NORMAL:  Final verdict and comparison results.
    VERBOSE: Per-step clock values and statistics.
    DEBUG:   Detailed per-step processing output.
    """

    SILENT = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


class ReplayLogger:
    """
    Structured logger for scenario replays.

    Output is filtered by the configured log level.

    Attributes:
        level: The minimum log level to display.
        stream: The output stream (defaults to stdout).
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.NORMAL,
        stream: TextIO = sys.stdout,
    ) -> None:
        self.level: LogLevel = level
        self.stream: TextIO = stream

    def debug(self, message: str, **kwargs: Any) -> None:
        """
        Log a debug message (only shown at DEBUG level).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.level.value >= LogLevel.DEBUG.value:
            self._write(f"[DEBUG] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log an info message (shown at VERBOSE and DEBUG levels).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write(f"[INFO] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def step(self, index: int, description: str, clock: str) -> None:
        """Log a replayed step and the resulting clock at VERBOSE level."""
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write(f"[STEP {index}] {description} -> {clock}")

    def comparison(self, left: str, right: str, result: str) -> None:
        """Log a comparison result (shown at NORMAL level and above)."""
        if self.level.value >= LogLevel.NORMAL.value:
            self._write(f"{left} vs {right}: {result}")

    def final_clocks(self, clocks: Mapping[str, str]) -> None:
        """Log every process's final clock at VERBOSE level."""
        if self.level.value >= LogLevel.VERBOSE.value:
            entries = ", ".join(f"{p}: {c}" for p, c in sorted(clocks.items()))
            self._write(f"[CLOCKS] Final: {{{entries}}}")

    def verdict_consistent(self) -> None:
        """Log a CONSISTENT verdict (shown at NORMAL level and above)."""
        if self.level.value >= LogLevel.NORMAL.value:
            self._write("CONSISTENT: Every transition advanced its clock")

    def verdict_violated(self, count: int) -> None:
        """Log a VIOLATED verdict (shown at NORMAL level and above)."""
        if self.level.value >= LogLevel.NORMAL.value:
            self._write(f"VIOLATED: {count} transition(s) failed to advance")

    def statistics(self, stats: Dict[str, Any]) -> None:
        """
        Log replay statistics (shown at VERBOSE level and above).

        Args:
            stats: Dictionary of statistic names to values.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write("=== Statistics ===")
            for key, value in stats.items():
                label = key.replace("_", " ").title()
                self._write(f"  {label}: {value}")

    def _write(self, message: str) -> None:
        """Write a line to the output stream."""
        self.stream.write(message + "\n")
