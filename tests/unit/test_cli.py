"""
Tests for the splitbrain command-line interface.

Tests cover argument parsing, output modes, exit codes, and error
handling.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from splitbrain.cli import _build_parser, _resolve_log_level
from splitbrain.utils.logger import LogLevel

FIXTURES = Path(__file__).parent.parent / "fixtures"
SCENARIOS = FIXTURES / "scenarios"

MESSAGE_SCENARIO = str(SCENARIOS / "message_exchange.hlc")
SKEWED_SCENARIO = str(SCENARIOS / "skewed_clock.hlc")


def _run_cli(*args: str, timeout: int = 30) -> subprocess.CompletedProcess[str]:
    """Run the splitbrain CLI as a subprocess."""
    cmd = [sys.executable, "-m", "splitbrain", *args]
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=str(Path(__file__).parent.parent.parent),
    )


# ---------------------------------------------------------------------------
# Tests: Argument Parsing
# ---------------------------------------------------------------------------


class TestArgumentParsing:
    """Test the argument parser directly."""

    def test_defaults(self) -> None:
        args = _build_parser().parse_args(["-s", "x.hlc"])
        assert args.scenario == Path("x.hlc")
        assert args.start is None
        assert args.output == "normal"
        assert args.debug == 0
        assert not args.stats

    def test_start_override(self) -> None:
        args = _build_parser().parse_args(["-s", "x.hlc", "--start", "250"])
        assert args.start == 250

    @pytest.mark.parametrize(
        "output,debug,expected",
        [
            ("normal", 0, LogLevel.NORMAL),
            ("silent", 0, LogLevel.SILENT),
            ("verbose", 0, LogLevel.VERBOSE),
            ("normal", 1, LogLevel.VERBOSE),
            ("normal", 2, LogLevel.VERBOSE),
            ("silent", 3, LogLevel.DEBUG),
        ],
    )
    def test_resolve_log_level(self, output: str, debug: int, expected: LogLevel) -> None:
        assert _resolve_log_level(output, debug) is expected


# ---------------------------------------------------------------------------
# Tests: Exit Codes and Output
# ---------------------------------------------------------------------------


class TestInvocation:
    """Test invoking the CLI end to end."""

    def test_missing_scenario_flag(self) -> None:
        result = _run_cli()
        assert result.returncode == 2

    def test_nonexistent_scenario(self) -> None:
        result = _run_cli("-s", "/nonexistent/scenario.hlc")
        assert result.returncode == 2
        assert "not found" in result.stderr

    def test_consistent_scenario(self) -> None:
        result = _run_cli("-s", MESSAGE_SCENARIO)
        assert result.returncode == 0
        assert "P1 105:0 vs P2 105:2: LESS_THAN" in result.stdout
        assert "CONSISTENT" in result.stdout

    def test_silent_output(self) -> None:
        result = _run_cli("-s", MESSAGE_SCENARIO, "-o", "silent")
        assert result.returncode == 0
        assert result.stdout == ""

    def test_verbose_output(self) -> None:
        result = _run_cli("-s", SKEWED_SCENARIO, "-o", "verbose")
        assert result.returncode == 0
        assert "[STEP 2] P1 @ 400 tick -> 500:1" in result.stdout
        assert "=== Statistics ===" in result.stdout

    def test_stats_flag(self) -> None:
        result = _run_cli("-s", SKEWED_SCENARIO, "--stats")
        assert result.returncode == 0
        assert "Ticks: 4" in result.stdout

    def test_negative_start_rejected(self) -> None:
        result = _run_cli("-s", MESSAGE_SCENARIO, "--start", "-5")
        assert result.returncode == 2

    def test_version(self) -> None:
        result = _run_cli("--version")
        assert result.returncode == 0
        assert "splitbrain" in result.stdout


class TestErrorHandling:
    """Test error handling for invalid inputs."""

    def test_syntax_error(self) -> None:
        result = _run_cli("-s", str(SCENARIOS / "syntax_error.hlc"))
        assert result.returncode == 2
        assert "Syntax error" in result.stderr

    def test_unknown_message(self) -> None:
        result = _run_cli("-s", str(SCENARIOS / "unknown_message.hlc"))
        assert result.returncode == 2
        assert "never_sent" in result.stderr

    def test_empty_scenario(self) -> None:
        result = _run_cli("-s", str(SCENARIOS / "empty.hlc"))
        assert result.returncode == 2
        assert "no statements" in result.stderr
