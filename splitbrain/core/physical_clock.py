"""
Wall-clock time sources and the immutable physical clock that wraps them.

Timestamps are integer milliseconds since the Unix epoch.  A
:class:`PhysicalClock` never regresses: if its time source jumps
backwards (e.g. after an NTP correction), the clock holds its previous
reading until the source catches up.
"""

from __future__ import annotations

import time
from typing import Callable

from splitbrain.core.mergeable import IdempotentMergeable
from splitbrain.core.partial_comparison import (
    PartialComparison,
    PartiallyComparable,
    partial_max,
)
from splitbrain.core.tickable import Tickable

Timestamp = int
TimeSource = Callable[[], Timestamp]

#: The fixed start of time for every clock: the Unix epoch.
EPOCH: Timestamp = 0


def system_time_source() -> Timestamp:
    """Read the system wall clock in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class ScriptedTimeSource:
    """
    A time source whose reading is set explicitly.

    Useful for tests and simulations.  The reading may be moved
    backwards to model a misbehaving wall clock.

    Attributes:
        reading: The value returned by the next call.
    """

    __slots__ = ("reading",)

    def __init__(self, reading: Timestamp = EPOCH) -> None:
        self.reading: Timestamp = reading

    def __call__(self) -> Timestamp:
        return self.reading

    def set(self, reading: Timestamp) -> None:
        """Make subsequent calls return *reading*."""
        self.reading = reading

    def advance(self, delta: Timestamp) -> None:
        """Move the reading forward by *delta* milliseconds."""
        self.reading += delta

    def __repr__(self) -> str:
        return f"ScriptedTimeSource({self.reading})"


class PhysicalClock(Tickable, PartiallyComparable, IdempotentMergeable):
    """
    Immutable wrapper around a wall-clock time source.

    Every :meth:`tick` returns a new instance holding
    ``max(source(), previous timestamp)``.  The time source binding is
    not part of the clock's value: equality, hashing and comparison look
    at the timestamp only.

    Attributes:
        timestamp: The most recently observed reading.
        time_source: The callable this clock reads from.
    """

    __slots__ = ("_time_source", "_timestamp")

    def __init__(self, time_source: TimeSource, timestamp: Timestamp = EPOCH) -> None:
        """
        Bind a clock to *time_source* holding *timestamp*.

        Raises:
            ValueError: If *timestamp* is before the epoch.
        """
        if timestamp < EPOCH:
            raise ValueError(f"Timestamp {timestamp} is before the epoch ({EPOCH})")
        self._time_source: TimeSource = time_source
        self._timestamp: Timestamp = timestamp

    @classmethod
    def wrap(cls, time_source: TimeSource = system_time_source) -> PhysicalClock:
        """Return a clock at the epoch, bound to *time_source*."""
        return cls(time_source)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def timestamp(self) -> Timestamp:
        return self._timestamp

    @property
    def time_source(self) -> TimeSource:
        return self._time_source

    def get_timestamp(self) -> Timestamp:
        """Return the currently held reading."""
        return self._timestamp

    # ------------------------------------------------------------------ #
    # Clock operations
    # ------------------------------------------------------------------ #

    def tick(self) -> PhysicalClock:
        """
        Read the time source and return a **new** clock.

        The new timestamp is never earlier than the current one.  Errors
        raised by the time source propagate to the caller.
        """
        reading = self._time_source()
        return PhysicalClock(self._time_source, max(reading, self._timestamp))

    def start_of_time(self) -> PhysicalClock:
        """Return a clock at the epoch bound to the same time source."""
        return PhysicalClock(self._time_source)

    def merge(self, other: PhysicalClock) -> PhysicalClock:
        """Return whichever of the two clocks is later (*self* on a tie)."""
        if not isinstance(other, PhysicalClock):
            raise TypeError(f"Cannot merge PhysicalClock with {type(other).__name__}")
        later = partial_max(self, other)
        return later if later is not None else self

    # ------------------------------------------------------------------ #
    # Ordering
    # ------------------------------------------------------------------ #

    def compare(self, other: PhysicalClock) -> PartialComparison:
        if not isinstance(other, PhysicalClock):
            raise TypeError(f"Cannot compare PhysicalClock with {type(other).__name__}")
        if self._timestamp < other._timestamp:
            return PartialComparison.LESS_THAN
        if self._timestamp > other._timestamp:
            return PartialComparison.GREATER_THAN
        return PartialComparison.EQUAL

    # ------------------------------------------------------------------ #
    # Equality / hashing / repr
    # ------------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhysicalClock):
            return NotImplemented
        return self._timestamp == other._timestamp

    def __hash__(self) -> int:
        return hash(self._timestamp)

    def __repr__(self) -> str:
        return f"PhysicalClock({self._timestamp})"
