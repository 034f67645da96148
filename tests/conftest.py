"""
Shared pytest fixtures for the splitbrain test suite.

Provides scripted time sources, clocks bound to them, and paths to
the scenario fixtures used across unit and integration tests.
"""

from pathlib import Path

import pytest

from splitbrain.core.hybrid_logical_clock import HybridLogicalClock
from splitbrain.core.physical_clock import ScriptedTimeSource


@pytest.fixture
def source() -> ScriptedTimeSource:
    """A scripted time source reading 0 until told otherwise."""
    return ScriptedTimeSource()


@pytest.fixture
def hlc(source: ScriptedTimeSource) -> HybridLogicalClock:
    """A hybrid logical clock at the epoch, bound to ``source``."""
    return HybridLogicalClock.start_of_time(source)


@pytest.fixture
def three_processes() -> frozenset[str]:
    """A standard set of three process identifiers."""
    return frozenset({"P1", "P2", "P3"})


@pytest.fixture
def tmp_scenario_file(tmp_path: Path) -> Path:
    """Path for a temporary scenario file."""
    return tmp_path / "scenario.hlc"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def scenarios_dir(fixtures_dir: Path) -> Path:
    """Path to the scenario fixtures directory."""
    return fixtures_dir / "scenarios"
