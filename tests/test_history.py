"""Tests for the rolling frame history."""

from __future__ import annotations

from jump_trigger.analysis.history import FrameHistory
from jump_trigger.core.types import FrameStat


def _stat(timestamp: int, brightness: float = 100.0) -> FrameStat:
    return FrameStat(brightness=brightness, edge_intensity=5.0, timestamp=timestamp)


class TestFrameHistory:
    """Tests for the FrameHistory class."""

    def test_starts_empty(self) -> None:
        """New history has no entries."""
        history = FrameHistory()

        assert len(history) == 0
        assert history.latest is None
        assert history.snapshot() == ()

    def test_keeps_insertion_order(self) -> None:
        """Snapshot is oldest first."""
        history = FrameHistory()
        for t in (0, 16, 33):
            history.update(_stat(t), t)

        assert [s.timestamp for s in history.snapshot()] == [0, 16, 33]
        assert history.latest == _stat(33)

    def test_prunes_entries_at_retention_boundary(self) -> None:
        """An entry exactly retention_ms old is dropped."""
        history = FrameHistory(retention_ms=1000)
        history.update(_stat(0), 0)
        history.update(_stat(500), 500)

        history.update(_stat(1000), 1000)

        assert [s.timestamp for s in history] == [500, 1000]

    def test_entries_just_inside_window_survive(self) -> None:
        """An entry 999 ms old is kept."""
        history = FrameHistory(retention_ms=1000)
        history.update(_stat(1), 1)

        history.update(_stat(1000), 1000)

        assert len(history) == 2

    def test_all_retained_entries_within_window(self) -> None:
        """After every update, no entry is retention_ms old or older."""
        history = FrameHistory(retention_ms=1000)
        timestamps = [0, 10, 250, 260, 700, 980, 1240, 1250, 1900, 2600, 2601, 4000]

        for t in timestamps:
            history.update(_stat(t), t)
            assert all(t - s.timestamp < 1000 for s in history)
            assert history.latest is not None and history.latest.timestamp == t

    def test_long_pause_empties_history(self) -> None:
        """Pruning after a long gap removes everything."""
        history = FrameHistory(retention_ms=1000)
        for t in range(0, 500, 16):
            history.update(_stat(t), t)

        removed = history.prune(10_000)

        assert removed > 0
        assert len(history) == 0

    def test_no_count_limit(self) -> None:
        """Only elapsed time bounds the length."""
        history = FrameHistory(retention_ms=1000)
        for t in range(1000):
            history.update(_stat(t), t)

        assert len(history) == 1000

    def test_clear(self) -> None:
        """Clear removes all entries."""
        history = FrameHistory()
        history.update(_stat(0), 0)

        history.clear()

        assert len(history) == 0
