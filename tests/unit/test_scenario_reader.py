"""
Tests for the scenario file reader.

Tests cover directive extraction, process inference and validation,
start overrides, and error handling.
"""

from pathlib import Path

import pytest

from splitbrain.core.physical_clock import EPOCH
from splitbrain.parser.ast_nodes import Compare, Receive, Send, Tick
from splitbrain.parser.grammar import ParseError
from splitbrain.utils.scenario_reader import ScenarioReader


class TestDirectives:
    """Test directive parsing."""

    def test_processes_directive(self) -> None:
        directives = ScenarioReader.parse_directives("# processes: P1 | P2|P3\n")
        assert directives["processes"] == frozenset({"P1", "P2", "P3"})

    def test_start_directive(self) -> None:
        assert ScenarioReader.parse_directives("# start: 100")["start"] == 100

    def test_no_directives(self) -> None:
        assert ScenarioReader.parse_directives("P1 tick\n# just a comment") == {}

    def test_malformed_start_raises(self) -> None:
        with pytest.raises(ValueError):
            ScenarioReader.parse_directives("# start: soon")

    def test_negative_start_raises(self) -> None:
        with pytest.raises(ValueError):
            ScenarioReader.parse_directives("# start: -4")


class TestReadAll:
    """Test loading complete scenarios."""

    def test_message_exchange(self, scenarios_dir: Path) -> None:
        data = ScenarioReader(scenarios_dir / "message_exchange.hlc").read_all()
        assert data.metadata.processes == frozenset({"P1", "P2"})
        assert data.metadata.statement_count == 5
        assert data.start == 100
        assert [type(s) for s in data.statements] == [Tick, Send, Receive, Tick, Compare]

    def test_inferred_processes(self, scenarios_dir: Path) -> None:
        data = ScenarioReader(scenarios_dir / "skewed_clock.hlc").read_all()
        assert data.metadata.processes == frozenset({"P1"})
        assert data.metadata.start is None
        assert data.start == EPOCH

    def test_start_override(self, scenarios_dir: Path) -> None:
        data = ScenarioReader(scenarios_dir / "message_exchange.hlc").read_all(start=7)
        assert data.start == 7

    def test_empty_scenario(self, scenarios_dir: Path) -> None:
        data = ScenarioReader(scenarios_dir / "empty.hlc").read_all()
        assert data.statements == []
        assert data.metadata.processes == frozenset({"P1"})

    def test_undeclared_process_raises(self, tmp_scenario_file: Path) -> None:
        tmp_scenario_file.write_text("# processes: P1\nP1 tick\nP2 tick\n")
        with pytest.raises(ValueError, match="P2"):
            ScenarioReader(tmp_scenario_file).read_all()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ScenarioReader(tmp_path / "missing.hlc").read_all()

    def test_syntax_error_raises(self, scenarios_dir: Path) -> None:
        with pytest.raises(ParseError):
            ScenarioReader(scenarios_dir / "syntax_error.hlc").read_all()
