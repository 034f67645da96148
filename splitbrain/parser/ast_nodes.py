"""
Statement nodes for the clock scenario language.

Each line of a scenario parses into exactly one statement.  Process
statements act on a single process's clock, optionally after setting
that process's wall-clock reading with ``@ <reading>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple


class Statement:
    """Base class for all scenario statements."""

    line: int

    @property
    def processes(self) -> FrozenSet[str]:
        """Process names referenced by this statement."""
        raise NotImplementedError

    def describe(self) -> str:
        """Return the statement in canonical scenario syntax."""
        raise NotImplementedError


@dataclass(frozen=True)
class ProcessStatement(Statement):
    """
    A statement acting on one process's clock.

    Attributes:
        process: The process whose clock changes.
        reading: Wall-clock reading to set before acting, if any.
        line: Source line number (0 when built programmatically).
    """

    process: str
    reading: Optional[int] = None
    line: int = 0

    @property
    def processes(self) -> FrozenSet[str]:
        return frozenset({self.process})

    def _prefix(self) -> str:
        if self.reading is None:
            return self.process
        return f"{self.process} @ {self.reading}"


@dataclass(frozen=True)
class Tick(ProcessStatement):
    """A local event: ``P1 tick``."""

    def describe(self) -> str:
        return f"{self._prefix()} tick"


@dataclass(frozen=True)
class Send(ProcessStatement):
    """A message send: ``P1 send m1``.  Ticks and records the stamp."""

    message: str = ""

    def describe(self) -> str:
        return f"{self._prefix()} send {self.message}"


@dataclass(frozen=True)
class Receive(ProcessStatement):
    """
    A message receipt: ``P2 receive m1`` or ``P2 receive 120:1``.

    Exactly one of *message* (a previously sent message name) and
    *stamp* (a literal ``(timestamp, counter)`` pair) is set.
    """

    message: Optional[str] = None
    stamp: Optional[Tuple[int, int]] = None

    def describe(self) -> str:
        if self.stamp is not None:
            return f"{self._prefix()} receive {self.stamp[0]}:{self.stamp[1]}"
        return f"{self._prefix()} receive {self.message}"


@dataclass(frozen=True)
class MergeFrom(ProcessStatement):
    """A direct state merge: ``P1 merge P2``."""

    source: str = ""

    @property
    def processes(self) -> FrozenSet[str]:
        return frozenset({self.process, self.source})

    def describe(self) -> str:
        return f"{self._prefix()} merge {self.source}"


@dataclass(frozen=True)
class Compare(Statement):
    """
    A comparison of two processes' current clocks: ``compare P1 P2``.

    Attributes:
        left: The process on the left of the comparison.
        right: The process on the right of the comparison.
        line: Source line number (0 when built programmatically).
    """

    left: str
    right: str
    line: int = 0

    @property
    def processes(self) -> FrozenSet[str]:
        return frozenset({self.left, self.right})

    def describe(self) -> str:
        return f"compare {self.left} {self.right}"
