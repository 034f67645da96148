"""
Fidge-Mattern vector clock.

Vector clocks keep one logical counter per process and order events
exactly by causality:

    e ≺ f  ⟺  VC(e) < VC(f)

where < is the strict componentwise ordering.  Unlike hybrid logical
clocks they expose concurrency directly: two clocks where neither is
componentwise ≤ the other compare ``INCOMPARABLE``.  Their merge (the
componentwise maximum) is a join, so it is idempotent.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from splitbrain.core.mergeable import IdempotentMergeable
from splitbrain.core.partial_comparison import PartialComparison, PartiallyComparable


class VectorClock(PartiallyComparable, IdempotentMergeable):
    """
    Vector clock over a fixed set of processes.

    All operations return *new* instances.

    Attributes:
        clock: Copy of the mapping from process ID to its counter.
        processes: Frozenset of all process IDs tracked by this clock.
    """

    __slots__ = ("_clock", "_processes")

    def __init__(
        self,
        processes: Iterable[str],
        initial_values: Optional[Dict[str, int]] = None,
    ) -> None:
        """
        Initialise a vector clock for *processes*.

        Args:
            processes: Non-empty collection of process identifiers.
            initial_values: Optional starting counters; missing processes
                start at zero.

        Raises:
            ValueError: If *processes* is empty, or *initial_values*
                names an unknown process or holds a negative counter.
        """
        procs = frozenset(processes)
        if not procs:
            raise ValueError("VectorClock requires at least one process")

        vals = initial_values or {}
        unknown = set(vals) - procs
        if unknown:
            raise ValueError(f"Unknown processes {sorted(unknown)} (known: {sorted(procs)})")
        if any(v < 0 for v in vals.values()):
            raise ValueError(f"Vector clock counters must be non-negative: {vals}")

        self._clock: Dict[str, int] = {p: vals.get(p, 0) for p in procs}
        self._processes: frozenset[str] = procs

    @property
    def clock(self) -> Dict[str, int]:
        return dict(self._clock)

    @property
    def processes(self) -> frozenset[str]:
        return self._processes

    # ------------------------------------------------------------------ #
    # Clock operations
    # ------------------------------------------------------------------ #

    def increment(self, process: str) -> VectorClock:
        """
        Return a **new** VectorClock with *process*'s counter incremented.

        Raises:
            ValueError: If *process* is not tracked by this clock.
        """
        if process not in self._processes:
            raise ValueError(f"Unknown process '{process}' (known: {sorted(self._processes)})")

        new_vals = dict(self._clock)
        new_vals[process] += 1
        return VectorClock(self._processes, initial_values=new_vals)

    def merge(self, other: VectorClock) -> VectorClock:
        """
        Return a **new** VectorClock holding the componentwise maximum.

        Raises:
            TypeError: If *other* is not a VectorClock.
            ValueError: If the two clocks track different process sets.
        """
        self._check_compatible(other, "merge")
        merged = {p: max(self._clock[p], other._clock[p]) for p in self._processes}
        return VectorClock(self._processes, initial_values=merged)

    # ------------------------------------------------------------------ #
    # Ordering
    # ------------------------------------------------------------------ #

    def compare(self, other: VectorClock) -> PartialComparison:
        """
        Compare componentwise.

        Returns ``INCOMPARABLE`` when the clocks are concurrent.

        Raises:
            TypeError: If *other* is not a VectorClock.
            ValueError: If the two clocks track different process sets.
        """
        self._check_compatible(other, "compare")
        le = all(self._clock[p] <= other._clock[p] for p in self._processes)
        ge = all(self._clock[p] >= other._clock[p] for p in self._processes)
        if le and ge:
            return PartialComparison.EQUAL
        if le:
            return PartialComparison.LESS_THAN
        if ge:
            return PartialComparison.GREATER_THAN
        return PartialComparison.INCOMPARABLE

    def is_concurrent_with(self, other: VectorClock) -> bool:
        """True when neither clock causally precedes the other."""
        return not self.is_comparable_with(other)

    def _check_compatible(self, other: object, action: str) -> None:
        if not isinstance(other, VectorClock):
            raise TypeError(f"Cannot {action} VectorClock with {type(other).__name__}")
        if self._processes != other._processes:
            raise ValueError(
                f"Cannot {action} clocks with different process sets: "
                f"{sorted(self._processes)} vs {sorted(other._processes)}"
            )

    # ------------------------------------------------------------------ #
    # Parsing
    # ------------------------------------------------------------------ #

    @classmethod
    def from_string(cls, s: str, processes: Iterable[str]) -> VectorClock:
        """
        Parse a vector clock from the format ``"P1:2;P2:1;P3:0"``.

        Raises:
            ValueError: If the string is malformed or the parsed
                processes do not match *processes*.
        """
        procs = frozenset(processes)
        vals: Dict[str, int] = {}
        try:
            for token in s.split(";"):
                proc_id, count_str = token.split(":")
                vals[proc_id.strip()] = int(count_str.strip())
        except (ValueError, TypeError) as exc:
            raise ValueError(f"Malformed vector clock string: '{s}'") from exc

        if frozenset(vals.keys()) != procs:
            raise ValueError(
                f"Processes in string {sorted(vals.keys())} "
                f"do not match expected {sorted(procs)}"
            )

        return cls(procs, initial_values=vals)

    def to_string(self) -> str:
        """Return the ``"P1:2;P2:1"`` text form, sorted by process."""
        return ";".join(f"{p}:{self._clock[p]}" for p in sorted(self._processes))

    # ------------------------------------------------------------------ #
    # Equality / hashing / repr
    # ------------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorClock):
            return NotImplemented
        return self._processes == other._processes and self._clock == other._clock

    def __hash__(self) -> int:
        return hash((self._processes, tuple(sorted(self._clock.items()))))

    def __repr__(self) -> str:
        entries = ", ".join(f"{p}:{self._clock[p]}" for p in sorted(self._processes))
        return f"VectorClock({entries})"
