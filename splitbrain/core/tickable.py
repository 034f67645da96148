"""
The producible-next-value capability shared by clock types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Tickable(ABC):
    """
    Immutable values that can produce their own successor.

    Each call to :meth:`tick` returns a **new** instance and leaves the
    receiver untouched.  Implementations need not have a physical notion
    of time; a purely logical counter qualifies.
    """

    __slots__ = ()

    @abstractmethod
    def tick(self) -> Tickable:
        """Return the next value of this clock."""

    @property
    @abstractmethod
    def timestamp(self) -> int:
        """A snapshot of the current time according to this clock."""
