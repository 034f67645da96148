"""
Hybrid Logical Clock (HLC) implementation.

Described by Kulkarni, Demirbas et al. in "Logical Physical Clocks and
Consistent Snapshots in Globally Distributed Databases".

An HLC pairs a wall-clock timestamp of millisecond precision with a
logical counter.  The counter orders events that map to the same
timestamp, so the clock is strictly monotonic even when the physical
source stalls or runs backwards:

    (l', c') > (l, c)   under lexicographic order, for every tick

Unlike Lamport clocks, the timestamp component never drifts far from
real time, so a single value both reports real-time events and orders
them causally.
"""

from __future__ import annotations

from typing import Optional, Tuple

from splitbrain.core.mergeable import Mergeable
from splitbrain.core.partial_comparison import PartialComparison, PartiallyComparable
from splitbrain.core.physical_clock import (
    EPOCH,
    PhysicalClock,
    Timestamp,
    TimeSource,
    system_time_source,
)
from splitbrain.core.tickable import Tickable


class HybridLogicalClock(Tickable, PartiallyComparable, Mergeable):
    """
    Immutable hybrid logical clock value.

    Every :meth:`tick` and :meth:`merge` returns a **new** instance.
    Values are totally ordered by ``(timestamp, counter)``; equality and
    hashing use the same pair, so the backing physical clock is not part
    of the value.

    The merge is a causal event: its result is strictly greater than
    both inputs, even when they are identical.  It is commutative but
    not idempotent, and since every nested merge counts as an event it
    is associative in its timestamp only; the counter reflects how many
    merges were performed.

    Attributes:
        timestamp: The latest physical or merged timestamp committed to.
        counter: Orders events sharing the same timestamp.
        physical_clock: The owned clock consulted on each tick.
    """

    __slots__ = ("_physical_clock", "_timestamp", "_counter")

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def __init__(
        self,
        physical_clock: PhysicalClock,
        timestamp: Timestamp = EPOCH,
        counter: int = 0,
    ) -> None:
        """
        Build a clock value.

        Most callers want :meth:`start_of_time` or :meth:`from_wire`.

        Raises:
            ValueError: If *timestamp* is before the epoch or *counter*
                is negative.
        """
        if timestamp < EPOCH:
            raise ValueError(f"Timestamp {timestamp} is before the epoch ({EPOCH})")
        if counter < 0:
            raise ValueError(f"Counter must be non-negative, got {counter}")
        self._physical_clock: PhysicalClock = physical_clock
        self._timestamp: Timestamp = timestamp
        self._counter: int = counter

    @classmethod
    def start_of_time(cls, time_source: Optional[TimeSource] = None) -> HybridLogicalClock:
        """
        Return a fresh clock at the epoch with counter 0.

        The result is less than or equal to every other clock value.

        Args:
            time_source: Wall-clock reader for future ticks (defaults to
                the system clock).
        """
        source = time_source if time_source is not None else system_time_source
        physical = PhysicalClock.wrap(source)
        return cls(physical, physical.timestamp, 0)

    @classmethod
    def from_wire(
        cls,
        timestamp: Timestamp,
        counter: int,
        time_source: Optional[TimeSource] = None,
    ) -> HybridLogicalClock:
        """
        Rebuild a clock from its serialized ``(timestamp, counter)`` pair.

        The result is bound to *time_source* (the local system clock by
        default); the sender's time source is never transmitted.

        Raises:
            ValueError: If either component is out of range.
        """
        source = time_source if time_source is not None else system_time_source
        return cls(PhysicalClock.wrap(source), timestamp, counter)

    @classmethod
    def from_string(
        cls, s: str, time_source: Optional[TimeSource] = None,
    ) -> HybridLogicalClock:
        """
        Parse a clock from the format ``"<timestamp>:<counter>"``.

        Raises:
            ValueError: If the string is malformed or out of range.
        """
        try:
            ts_str, counter_str = s.split(":")
            timestamp = int(ts_str.strip())
            counter = int(counter_str.strip())
        except (ValueError, TypeError, AttributeError) as exc:
            raise ValueError(f"Malformed hybrid logical clock string: '{s}'") from exc
        return cls.from_wire(timestamp, counter, time_source)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def timestamp(self) -> Timestamp:
        return self._timestamp

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def physical_clock(self) -> PhysicalClock:
        return self._physical_clock

    # ------------------------------------------------------------------ #
    # Clock operations
    # ------------------------------------------------------------------ #

    def tick(self) -> HybridLogicalClock:
        """
        Return a **new** clock for a local event.

        The timestamp follows the physical clock but never regresses
        below this clock's own timestamp.  The counter restarts at 0
        whenever the timestamp advances and increments otherwise.
        """
        ticked = self._physical_clock.tick()
        next_timestamp = max(ticked.timestamp, self._timestamp)
        if next_timestamp == self._timestamp:
            next_counter = self._counter + 1
        else:
            next_counter = 0
        return HybridLogicalClock(ticked, next_timestamp, next_counter)

    def merge(self, other: HybridLogicalClock) -> HybridLogicalClock:
        """
        Return a **new** clock after observing a remote clock value.

        The result is strictly greater than both *self* and *other*.
        The physical clock of *self* is kept: merging updates the logical
        value, not which wall clock backs future ticks.

        Raises:
            TypeError: If *other* is not a HybridLogicalClock.
        """
        if not isinstance(other, HybridLogicalClock):
            raise TypeError(
                f"Cannot merge HybridLogicalClock with {type(other).__name__}"
            )

        next_timestamp = max(self._timestamp, other._timestamp)
        if self._timestamp == other._timestamp:
            next_counter = max(self._counter, other._counter) + 1
        elif next_timestamp == other._timestamp:
            next_counter = other._counter + 1
        else:
            next_counter = self._counter + 1
        return HybridLogicalClock(self._physical_clock, next_timestamp, next_counter)

    # ------------------------------------------------------------------ #
    # Ordering
    # ------------------------------------------------------------------ #

    def compare(self, other: HybridLogicalClock) -> PartialComparison:
        """
        Compare by timestamp, then by counter.

        Never returns ``INCOMPARABLE``.

        Raises:
            TypeError: If *other* is not a HybridLogicalClock.
        """
        if not isinstance(other, HybridLogicalClock):
            raise TypeError(
                f"Cannot compare HybridLogicalClock with {type(other).__name__}"
            )
        mine = self.to_wire()
        theirs = other.to_wire()
        if mine < theirs:
            return PartialComparison.LESS_THAN
        if mine > theirs:
            return PartialComparison.GREATER_THAN
        return PartialComparison.EQUAL

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HybridLogicalClock):
            return NotImplemented
        return self.compare(other) is PartialComparison.LESS_THAN

    def __le__(self, other: object) -> bool:
        if not isinstance(other, HybridLogicalClock):
            return NotImplemented
        return self.compare(other) is not PartialComparison.GREATER_THAN

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, HybridLogicalClock):
            return NotImplemented
        return self.compare(other) is PartialComparison.GREATER_THAN

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, HybridLogicalClock):
            return NotImplemented
        return self.compare(other) is not PartialComparison.LESS_THAN

    # ------------------------------------------------------------------ #
    # Serialization
    # ------------------------------------------------------------------ #

    def to_wire(self) -> Tuple[Timestamp, int]:
        """Return the ``(timestamp, counter)`` pair carried between processes."""
        return (self._timestamp, self._counter)

    def to_string(self) -> str:
        """Return the ``"<timestamp>:<counter>"`` text form."""
        return f"{self._timestamp}:{self._counter}"

    # ------------------------------------------------------------------ #
    # Equality / hashing / repr
    # ------------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HybridLogicalClock):
            return NotImplemented
        return self.to_wire() == other.to_wire()

    def __hash__(self) -> int:
        return hash(self.to_wire())

    def __repr__(self) -> str:
        return f"HybridLogicalClock(timestamp={self._timestamp}, counter={self._counter})"
