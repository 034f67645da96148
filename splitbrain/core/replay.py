"""
Scenario replay over simulated processes.

Each process owns a :class:`SharedClock` bound to its own
:class:`ScriptedTimeSource`, so scenarios can model processes whose
wall clocks disagree, stall, or run backwards.  Every transition is
checked against the two guarantees a hybrid logical clock makes:

1. A process's new clock is strictly greater than its previous clock.
2. A clock produced by receiving a message is strictly greater than the
   stamp the message carried.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from splitbrain.core.hybrid_logical_clock import HybridLogicalClock
from splitbrain.core.partial_comparison import PartialComparison
from splitbrain.core.physical_clock import EPOCH, ScriptedTimeSource, Timestamp
from splitbrain.core.shared_clock import SharedClock
from splitbrain.parser.ast_nodes import (
    Compare,
    MergeFrom,
    ProcessStatement,
    Receive,
    Send,
    Statement,
    Tick,
)
from splitbrain.utils.logger import LogLevel, ReplayLogger


class ReplayError(Exception):
    """Exception raised when a scenario cannot be replayed."""

    pass


@dataclass(frozen=True)
class ReplayRecord:
    """
    Outcome of one replayed statement.

    Attributes:
        index: Position of the statement in the scenario (from 1).
        statement: The replayed statement.
        clock: The acting process's clock afterwards (``None`` for
            comparisons).
        comparison: The comparison result (comparisons only).
    """

    index: int
    statement: Statement
    clock: Optional[HybridLogicalClock] = None
    comparison: Optional[PartialComparison] = None


@dataclass
class ReplayResult:
    """
    Result of replaying a whole scenario.

    Attributes:
        consistent: True when no transition violated monotonicity.
        records: One record per statement, in order.
        final_clocks: Each process's clock after the last statement.
        violations: Human-readable descriptions of failed checks.
        statistics: Replay counters.
    """

    consistent: bool
    records: List[ReplayRecord]
    final_clocks: Dict[str, HybridLogicalClock]
    violations: List[str] = field(default_factory=list)
    statistics: Dict[str, Any] = field(default_factory=dict)


class ScenarioReplayer:
    """
    Replays scenario statements against simulated process clocks.

    Attributes:
        processes: The simulated process IDs.
        start: Initial wall-clock reading of every process.
    """

    def __init__(
        self,
        processes: Iterable[str],
        start: Timestamp = EPOCH,
        logger: Optional[ReplayLogger] = None,
    ) -> None:
        """
        Raises:
            ValueError: If *processes* is empty.
        """
        procs = frozenset(processes)
        if not procs:
            raise ValueError("ScenarioReplayer requires at least one process")

        self.processes: frozenset[str] = procs
        self.start: Timestamp = start
        self._logger = logger or ReplayLogger(level=LogLevel.SILENT)

        self._sources: Dict[str, ScriptedTimeSource] = {
            p: ScriptedTimeSource(start) for p in procs
        }
        self._clocks: Dict[str, SharedClock] = {
            p: SharedClock.with_time_source(self._sources[p]) for p in procs
        }
        self._messages: Dict[str, HybridLogicalClock] = {}
        self._violations: List[str] = []
        self._stats: Dict[str, int] = {
            "steps": 0,
            "ticks": 0,
            "sends": 0,
            "receives": 0,
            "merges": 0,
            "comparisons": 0,
        }

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def run(self, statements: Iterable[Statement]) -> ReplayResult:
        """
        Replay *statements* in order.

        Raises:
            ReplayError: If a statement names an unknown process, receives
                an unsent message, or re-sends a message name.
        """
        records: List[ReplayRecord] = []
        for index, statement in enumerate(statements, start=1):
            records.append(self.apply(index, statement))

        final = self.clocks()
        self._logger.final_clocks({p: c.to_string() for p, c in final.items()})
        stats = self.statistics()
        if self._violations:
            self._logger.verdict_violated(len(self._violations))
        else:
            self._logger.verdict_consistent()
        self._logger.statistics(stats)

        return ReplayResult(
            consistent=not self._violations,
            records=records,
            final_clocks=final,
            violations=list(self._violations),
            statistics=stats,
        )

    def apply(self, index: int, statement: Statement) -> ReplayRecord:
        """Replay a single statement and return its record."""
        self._stats["steps"] += 1
        for process in statement.processes:
            self._require_process(process, statement)

        if isinstance(statement, Compare):
            return self._compare(index, statement)
        if not isinstance(statement, ProcessStatement):
            raise ReplayError(f"Unsupported statement: {statement!r}")

        if statement.reading is not None:
            self._sources[statement.process].set(statement.reading)

        holder = self._clocks[statement.process]
        before = holder.current
        self._logger.debug(
            f"Applying {statement.describe()}",
            line=statement.line,
            before=before.to_string(),
        )

        if isinstance(statement, Tick):
            after = holder.tick()
            self._stats["ticks"] += 1
        elif isinstance(statement, Send):
            after = self._send(holder, statement)
        elif isinstance(statement, Receive):
            after = self._receive(holder, statement)
        elif isinstance(statement, MergeFrom):
            after = holder.merge(self._clocks[statement.source].current)
            self._stats["merges"] += 1
        else:
            raise ReplayError(f"Unsupported statement: {statement!r}")

        if not after > before:
            self._violation(
                statement,
                f"clock of {statement.process} did not advance "
                f"({before.to_string()} -> {after.to_string()})",
            )

        self._logger.step(index, statement.describe(), after.to_string())
        return ReplayRecord(index=index, statement=statement, clock=after)

    def clocks(self) -> Dict[str, HybridLogicalClock]:
        """Return every process's current clock."""
        return {p: holder.current for p, holder in self._clocks.items()}

    def statistics(self) -> Dict[str, Any]:
        """Return replay statistics."""
        stats: Dict[str, Any] = dict(self._stats)
        stats["messages"] = len(self._messages)
        stats["max_counter"] = max(c.counter for c in self.clocks().values())
        stats["violations"] = len(self._violations)
        return stats

    # ------------------------------------------------------------------ #
    # Statement handlers
    # ------------------------------------------------------------------ #

    def _send(self, holder: SharedClock, statement: Send) -> HybridLogicalClock:
        if statement.message in self._messages:
            raise ReplayError(
                f"Message '{statement.message}' sent twice (line {statement.line})"
            )
        stamp = holder.tick()
        self._messages[statement.message] = stamp
        self._stats["sends"] += 1
        return stamp

    def _receive(self, holder: SharedClock, statement: Receive) -> HybridLogicalClock:
        if statement.stamp is not None:
            timestamp, counter = statement.stamp
            remote = HybridLogicalClock.from_wire(
                timestamp, counter, self._sources[statement.process],
            )
        else:
            if statement.message not in self._messages:
                raise ReplayError(
                    f"Message '{statement.message}' received before it was sent "
                    f"(line {statement.line})"
                )
            remote = self._messages[statement.message]

        after = holder.observe(remote)
        self._stats["receives"] += 1
        if not after > remote:
            self._violation(
                statement,
                f"receipt at {statement.process} ({after.to_string()}) does not "
                f"follow the received stamp ({remote.to_string()})",
            )
        return after

    def _compare(self, index: int, statement: Compare) -> ReplayRecord:
        left = self._clocks[statement.left].current
        right = self._clocks[statement.right].current
        result = left.compare(right)
        self._stats["comparisons"] += 1
        self._logger.comparison(
            f"{statement.left} {left.to_string()}",
            f"{statement.right} {right.to_string()}",
            result.name,
        )
        return ReplayRecord(index=index, statement=statement, comparison=result)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _require_process(self, process: str, statement: Statement) -> None:
        if process not in self.processes:
            raise ReplayError(
                f"Unknown process '{process}' (line {statement.line}; "
                f"known: {sorted(self.processes)})"
            )

    def _violation(self, statement: Statement, message: str) -> None:
        text = f"line {statement.line}: {message}"
        self._violations.append(text)
        self._logger.info(f"Violation at {text}")
