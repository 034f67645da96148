"""
Partial comparison results and the partially-comparable contract.

Some values do not form a total order: two concurrent vector clocks, or
two overlapping integer ranges such as ``[1, 5)`` and ``[3, 5)``, are
neither less than, greater than, nor equal to each other.  Comparing
such values yields a :class:`PartialComparison` rather than a boolean.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, TypeVar


class PartialComparison(Enum):
    """
    Outcome of comparing two partially ordered values.

    The integer values are stable codes, safe to persist or transmit.

    LESS_THAN:     The left value precedes the right value.
    GREATER_THAN:  The left value follows the right value.
    EQUAL:         Both values are equivalent.
    INCOMPARABLE:  No definite order exists between the values.
    """

    LESS_THAN = 0
    GREATER_THAN = 1
    EQUAL = 2
    INCOMPARABLE = 3

    @property
    def code(self) -> int:
        """The stable numeric code of this result."""
        return self.value

    @classmethod
    def from_code(cls, code: int) -> PartialComparison:
        """
        Look up a result by its numeric code.

        Raises:
            ValueError: If *code* is not an integer between 0 and 3.
        """
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(
                f"Could not look up a PartialComparison given code {code!r}. "
                f"Expected an integer between 0 and 3."
            )
        if not 0 <= code < len(cls):
            raise ValueError(
                f"Could not look up a PartialComparison given code {code}. "
                f"Expected between 0 and 3."
            )
        return cls(code)


class PartiallyComparable(ABC):
    """
    Values that can be compared with one another under a partial order.

    Implementations must be reflexive (a value compares ``EQUAL`` to
    itself) and anti-symmetric (``a.compare(b)`` is ``LESS_THAN`` exactly
    when ``b.compare(a)`` is ``GREATER_THAN``).  ``INCOMPARABLE`` may only
    be returned when no definite order exists.
    """

    __slots__ = ()

    @abstractmethod
    def compare(self, other: PartiallyComparable) -> PartialComparison:
        """Compare *self* with *other*."""

    def is_comparable_with(self, other: PartiallyComparable) -> bool:
        """True when a definite order exists between *self* and *other*."""
        return self.compare(other) is not PartialComparison.INCOMPARABLE


T = TypeVar("T", bound=PartiallyComparable)


def partial_min(a: T, b: T) -> Optional[T]:
    """
    Return the lesser of *a* and *b*, or ``None`` if they are incomparable.

    When the two values are equal, *a* is returned.
    """
    comparison = a.compare(b)
    if comparison in (PartialComparison.EQUAL, PartialComparison.LESS_THAN):
        return a
    if comparison is PartialComparison.GREATER_THAN:
        return b
    return None


def partial_max(a: T, b: T) -> Optional[T]:
    """
    Return the greater of *a* and *b*, or ``None`` if they are incomparable.

    When the two values are equal, *a* is returned.
    """
    comparison = a.compare(b)
    if comparison in (PartialComparison.EQUAL, PartialComparison.GREATER_THAN):
        return a
    if comparison is PartialComparison.LESS_THAN:
        return b
    return None
