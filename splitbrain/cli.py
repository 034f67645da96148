"""
Command-line interface for replaying hybrid logical clock scenarios.

Provides argument parsing and orchestration for replaying scenario
files across simulated processes and reporting whether every clock
transition behaved.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import splitbrain
from splitbrain.core.replay import ScenarioReplayer
from splitbrain.utils.logger import LogLevel, ReplayLogger
from splitbrain.utils.scenario_reader import ScenarioReader


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the splitbrain CLI."""
    parser = argparse.ArgumentParser(
        prog="splitbrain",
        description=(
            "splitbrain: replay hybrid logical clock scenarios "
            "across simulated processes"
        ),
    )

    required = parser.add_argument_group("required arguments")
    required.add_argument(
        "-s",
        "--scenario",
        type=Path,
        required=True,
        help="Path to scenario file",
    )

    parser.add_argument(
        "--start",
        type=int,
        default=None,
        help="Initial wall-clock reading in ms for every process "
        "(default: start directive, else 0)",
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=["silent", "normal", "verbose"],
        default="normal",
        help="Output level (default: normal)",
    )
    parser.add_argument(
        "-d",
        "--debug",
        type=int,
        choices=[0, 1, 2, 3],
        default=0,
        help="Debug level 0-3 (default: 0)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print statistics after the replay",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"splitbrain {splitbrain.__version__}",
    )

    return parser


def _resolve_log_level(output: str, debug: int) -> LogLevel:
    """Determine the effective log level from output and debug settings."""
    if debug >= 3:
        return LogLevel.DEBUG
    if output == "verbose" or debug >= 1:
        return LogLevel.VERBOSE
    if output == "silent":
        return LogLevel.SILENT
    return LogLevel.NORMAL


def main() -> None:
    """Entry point for the ``splitbrain`` CLI command."""
    parser = _build_parser()
    args = parser.parse_args()

    try:
        _run(args)
    except SystemExit:
        raise
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)


def _run(args: argparse.Namespace) -> None:
    """Execute the replay pipeline."""
    if not args.scenario.exists():
        print(f"Error: Scenario file not found: {args.scenario}", file=sys.stderr)
        sys.exit(2)

    if args.start is not None and args.start < 0:
        print("Error: --start must be non-negative", file=sys.stderr)
        sys.exit(2)

    log_level = _resolve_log_level(args.output, args.debug)
    stream = sys.stdout if args.output != "silent" else open(os.devnull, "w")
    logger = ReplayLogger(level=log_level, stream=stream)

    data = ScenarioReader(args.scenario).read_all(start=args.start)
    if not data.statements:
        print("Error: Scenario file has no statements", file=sys.stderr)
        sys.exit(2)

    logger.info(
        f"Replaying {data.metadata.statement_count} statements",
        processes=", ".join(sorted(data.metadata.processes)),
        start=data.start,
    )
    replayer = ScenarioReplayer(
        processes=data.metadata.processes,
        start=data.start,
        logger=logger,
    )
    result = replayer.run(data.statements)

    for violation in result.violations:
        print(f"Violation: {violation}", file=sys.stderr)

    # Statistics (skip if verbose already printed them)
    if args.stats and log_level.value < LogLevel.VERBOSE.value:
        print()
        print("=== Statistics ===")
        for key, value in result.statistics.items():
            label = key.replace("_", " ").title()
            print(f"  {label}: {value}")

    if result.consistent:
        sys.exit(0)
    else:
        sys.exit(1)
