"""
Scenario file reader.

Reads clock scenarios: comment-line directives followed by one
statement per line.  Expected format::

    # Optional: processes directive (otherwise inferred)
    # processes: P1|P2

    # Optional: initial wall-clock reading for every process
    # start: 100

    P1 @ 100 tick
    P1 send m1
    P2 @ 90 receive m1
    compare P1 P2
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Optional

from splitbrain.core.physical_clock import EPOCH
from splitbrain.parser.ast_nodes import Statement
from splitbrain.parser.grammar import ScenarioParser


@dataclass
class ScenarioMetadata:
    """
    Metadata extracted from a scenario file.

    Attributes:
        processes: Set of all process IDs.
        statement_count: Total number of statements.
        start: Initial wall-clock reading (if specified or overridden).
    """

    processes: FrozenSet[str]
    statement_count: int
    start: Optional[int] = None


@dataclass
class ScenarioData:
    """
    Complete scenario loaded from a file.

    Attributes:
        statements: Statements in file order.
        metadata: Scenario metadata.
    """

    statements: List[Statement]
    metadata: ScenarioMetadata

    @property
    def start(self) -> int:
        """The effective initial reading (the epoch when unspecified)."""
        return self.metadata.start if self.metadata.start is not None else EPOCH


class ScenarioReader:
    """
    Parses scenario files into statements.

    Attributes:
        filepath: Path to the scenario file.
    """

    def __init__(self, filepath: Path) -> None:
        self.filepath: Path = Path(filepath)
        self._parser = ScenarioParser()

    def read_all(self, start: Optional[int] = None) -> ScenarioData:
        """
        Read all statements and directives.

        Args:
            start: Override the ``start`` directive from the file.

        Returns:
            ScenarioData with all statements and metadata.

        Raises:
            FileNotFoundError: If the scenario file does not exist.
            ValueError: If a directive is malformed, or a statement
                names a process missing from the ``processes`` directive.
            LexerError, ParseError: If a statement is invalid.
        """
        if not self.filepath.exists():
            raise FileNotFoundError(f"Scenario file not found: {self.filepath}")

        text = self.filepath.read_text()
        directives = self.parse_directives(text)
        statements = self._parser.parse(text)

        referenced: set[str] = set()
        for statement in statements:
            referenced |= statement.processes

        declared = directives.get("processes")
        if declared is not None:
            undeclared = referenced - declared
            if undeclared:
                raise ValueError(
                    f"Statements reference undeclared processes: {sorted(undeclared)}"
                )
            processes = declared
        else:
            processes = frozenset(referenced)

        metadata = ScenarioMetadata(
            processes=processes,
            statement_count=len(statements),
            start=start if start is not None else directives.get("start"),
        )
        return ScenarioData(statements=statements, metadata=metadata)

    @staticmethod
    def parse_directives(text: str) -> dict:
        """
        Extract directives from comment lines.

        Raises:
            ValueError: If a ``start`` directive is not a non-negative integer.
        """
        directives: dict = {}
        for line in text.splitlines():
            line = line.strip()
            if not line.startswith("#"):
                continue
            content = line.lstrip("#").strip()
            if content.startswith("processes:"):
                val = content.split(":", 1)[1].strip()
                directives["processes"] = frozenset(
                    p.strip() for p in val.split("|") if p.strip()
                )
            elif content.startswith("start:"):
                val = content.split(":", 1)[1].strip()
                try:
                    start = int(val)
                except ValueError as exc:
                    raise ValueError(f"Malformed start directive: '{val}'") from exc
                if start < EPOCH:
                    raise ValueError(f"Start reading {start} is before the epoch")
                directives["start"] = start
        return directives
