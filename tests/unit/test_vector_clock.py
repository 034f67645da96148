"""
Tests for the vector clock.

Tests cover creation, increment, the idempotent merge, partial
comparison (including concurrent clocks), min/max selection, and
string round-trips.
"""

import pytest

from splitbrain.core.partial_comparison import PartialComparison, partial_max, partial_min
from splitbrain.core.vector_clock import VectorClock

PROCS = frozenset({"P1", "P2"})


def _vc(p1: int = 0, p2: int = 0) -> VectorClock:
    return VectorClock(PROCS, initial_values={"P1": p1, "P2": p2})


class TestCreation:
    """Test VectorClock initialization."""

    def test_all_counters_start_at_zero(self, three_processes: frozenset[str]) -> None:
        vc = VectorClock(three_processes)
        assert vc.clock == {"P1": 0, "P2": 0, "P3": 0}

    def test_partial_initial_values(self, three_processes: frozenset[str]) -> None:
        vc = VectorClock(three_processes, initial_values={"P1": 2})
        assert vc.clock == {"P1": 2, "P2": 0, "P3": 0}

    def test_empty_processes_raises(self) -> None:
        with pytest.raises(ValueError):
            VectorClock(set())

    def test_unknown_initial_process_raises(self) -> None:
        with pytest.raises(ValueError):
            VectorClock(PROCS, initial_values={"P9": 1})

    def test_negative_counter_raises(self) -> None:
        with pytest.raises(ValueError):
            VectorClock(PROCS, initial_values={"P1": -1})

    def test_clock_is_a_copy(self) -> None:
        vc = _vc(1, 1)
        vc.clock["P1"] = 99
        assert vc.clock["P1"] == 1


class TestIncrement:
    """Test local events."""

    def test_increment_one_component(self) -> None:
        vc = _vc().increment("P1").increment("P1")
        assert vc.clock == {"P1": 2, "P2": 0}

    def test_original_unchanged(self) -> None:
        vc = _vc()
        vc.increment("P1")
        assert vc.clock["P1"] == 0

    def test_unknown_process_raises(self) -> None:
        with pytest.raises(ValueError):
            _vc().increment("P3")


class TestMerge:
    """Test the componentwise-maximum merge."""

    def test_componentwise_maximum(self) -> None:
        assert _vc(3, 1).merge(_vc(1, 4)) == _vc(3, 4)

    def test_idempotent(self) -> None:
        vc = _vc(2, 3)
        assert vc.merge(vc) == vc

    def test_commutative_and_associative(self) -> None:
        a, b, c = _vc(3, 0), _vc(0, 2), _vc(1, 5)
        assert a.merge(b) == b.merge(a)
        assert a.merge(b).merge(c) == a.merge(b.merge(c))

    def test_mismatched_processes_raises(self) -> None:
        with pytest.raises(ValueError):
            _vc().merge(VectorClock({"P1", "P3"}))

    def test_other_type_raises(self) -> None:
        with pytest.raises(TypeError):
            _vc().merge({"P1": 1})  # type: ignore[arg-type]


class TestCompare:
    """Test partial comparison."""

    def test_equal(self) -> None:
        assert _vc(2, 3).compare(_vc(2, 3)) is PartialComparison.EQUAL

    def test_less_than(self) -> None:
        assert _vc(1, 2).compare(_vc(1, 3)) is PartialComparison.LESS_THAN

    def test_greater_than(self) -> None:
        assert _vc(2, 3).compare(_vc(1, 2)) is PartialComparison.GREATER_THAN

    def test_concurrent_is_incomparable(self) -> None:
        a, b = _vc(2, 1), _vc(1, 2)
        assert a.compare(b) is PartialComparison.INCOMPARABLE
        assert b.compare(a) is PartialComparison.INCOMPARABLE
        assert a.is_concurrent_with(b)

    def test_ordered_not_concurrent(self) -> None:
        assert not _vc(1, 1).is_concurrent_with(_vc(2, 2))

    def test_mismatched_processes_raises(self) -> None:
        with pytest.raises(ValueError):
            _vc().compare(VectorClock({"P1", "P3"}))


class TestMinMax:
    """Test partial_min / partial_max over vector clocks."""

    def test_ordered_clocks(self) -> None:
        low, high = _vc(1, 1), _vc(2, 2)
        assert partial_min(low, high) is low
        assert partial_max(low, high) is high

    def test_concurrent_clocks_have_no_min_or_max(self) -> None:
        a, b = _vc(2, 1), _vc(1, 2)
        assert partial_min(a, b) is None
        assert partial_max(a, b) is None


class TestStrings:
    """Test parsing and formatting."""

    def test_from_string(self) -> None:
        vc = VectorClock.from_string("P1:2;P2:1", PROCS)
        assert vc == _vc(2, 1)

    def test_to_string_sorted(self) -> None:
        assert _vc(2, 1).to_string() == "P1:2;P2:1"

    def test_from_string_mismatched_processes_raises(self) -> None:
        with pytest.raises(ValueError):
            VectorClock.from_string("P1:2", PROCS)

    def test_from_string_malformed_raises(self) -> None:
        with pytest.raises(ValueError):
            VectorClock.from_string("invalid", {"P1"})

    def test_hash_consistency(self) -> None:
        assert len({_vc(1, 2), _vc(1, 2)}) == 1

    def test_repr_contains_values(self) -> None:
        s = repr(_vc(1, 2))
        assert "P1:1" in s
        assert "P2:2" in s
