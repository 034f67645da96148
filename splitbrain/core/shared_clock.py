"""
Thread-safe holder for a process's current hybrid logical clock.

Clock values are immutable, so concurrent callers only need to agree on
which value is current.  :class:`SharedClock` swaps that reference under
a lock; it is meant to be created by the owning component and passed
explicitly to whatever needs to timestamp events.
"""

from __future__ import annotations

from threading import Lock
from typing import Optional

from splitbrain.core.hybrid_logical_clock import HybridLogicalClock
from splitbrain.core.physical_clock import TimeSource


class SharedClock:
    """
    Mutable, lock-protected reference to a :class:`HybridLogicalClock`.

    Usage: call :meth:`tick` to stamp a local or outgoing event and
    :meth:`observe` when a message carrying a remote clock arrives.

    Attributes:
        current: The most recently committed clock value.
    """

    __slots__ = ("_current", "_mutex")

    def __init__(self, initial: Optional[HybridLogicalClock] = None) -> None:
        self._current: HybridLogicalClock = (
            initial if initial is not None else HybridLogicalClock.start_of_time()
        )
        self._mutex = Lock()

    @classmethod
    def with_time_source(cls, time_source: TimeSource) -> SharedClock:
        """Return a holder starting at the epoch, bound to *time_source*."""
        return cls(HybridLogicalClock.start_of_time(time_source))

    @property
    def current(self) -> HybridLogicalClock:
        return self._current

    def tick(self) -> HybridLogicalClock:
        """Advance the clock for a local event and return the new value."""
        with self._mutex:
            self._current = self._current.tick()
            return self._current

    def merge(self, remote: HybridLogicalClock) -> HybridLogicalClock:
        """Merge *remote* into the clock and return the new value."""
        with self._mutex:
            self._current = self._current.merge(remote)
            return self._current

    observe = merge

    def __repr__(self) -> str:
        return f"SharedClock({self._current!r})"
