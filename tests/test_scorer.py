"""Tests for motion scoring."""

from __future__ import annotations

import pytest

from jump_trigger.analysis.history import FrameHistory
from jump_trigger.analysis.scorer import MotionScorer, _max_consecutive_delta
from jump_trigger.core.types import FrameStat, MotionScore

from conftest import make_stats


class TestMotionScorer:
    """Tests for the MotionScorer class."""

    @pytest.mark.parametrize("count", range(6))
    def test_short_history_returns_sentinel(self, count: int) -> None:
        """Fewer than 6 entries is insufficient data, whatever the content."""
        stats = make_stats([0.0, 255.0, 0.0, 255.0, 0.0][:count])

        score = MotionScorer().score(stats)

        assert not score.is_sufficient
        assert score == MotionScore.insufficient(count)
        assert score.combined == 0.0

    def test_still_subject_scores_zero(self, still_stats: list[FrameStat]) -> None:
        """Constant brightness and edges give no motion."""
        score = MotionScorer().score(still_stats)

        assert score.is_sufficient
        assert score.combined == 0.0

    def test_variance_dominates_small_change(self) -> None:
        """A small late change is picked up through the weighted variance."""
        stats = make_stats([10.0, 10.0, 10.0, 10.0, 10.0, 12.0])

        score = MotionScorer().score(stats)

        assert score.brightness_shift == pytest.approx(1.0)
        assert score.variance == pytest.approx(8.0 / 9.0)
        assert score.rate_of_change == pytest.approx(2.0)
        assert score.combined == pytest.approx(40.0 / 9.0)

    def test_edge_shift_is_weighted_down(self) -> None:
        """Edge change alone counts at half weight."""
        stats = make_stats([50.0] * 6, edges=[5.0, 5.0, 5.0, 5.0, 25.0, 25.0])

        score = MotionScorer().score(stats)

        assert score.edge_shift == pytest.approx(20.0)
        assert score.combined == pytest.approx(10.0)

    def test_component_indicators(self) -> None:
        """Each indicator follows its own window."""
        stats = make_stats([50.0, 50.0, 50.0, 50.0, 80.0, 50.0])

        score = MotionScorer().score(stats)

        assert score.brightness_shift == pytest.approx(15.0)
        assert score.variance == pytest.approx(200.0)
        assert score.rate_of_change == pytest.approx(30.0)
        assert score.combined == pytest.approx(1000.0)

    def test_compares_against_fixed_earlier_window(self) -> None:
        """Only entries 4-6 back are the baseline; older change is ignored."""
        stats = make_stats([0.0] * 4 + [100.0] * 6)

        score = MotionScorer().score(stats)

        assert score.combined == 0.0

    def test_accepts_frame_history(self) -> None:
        """Scoring a FrameHistory matches scoring its snapshot."""
        stats = make_stats([50.0, 52.0, 49.0, 60.0, 75.0, 90.0, 88.0])
        history = FrameHistory()
        for stat in stats:
            history.update(stat, stat.timestamp)

        scorer = MotionScorer()

        assert scorer.score(history) == scorer.score(stats)

    def test_deterministic(self) -> None:
        """Same history gives the same score."""
        stats = make_stats([40.0, 70.0, 45.0, 90.0, 20.0, 65.0, 30.0])
        scorer = MotionScorer()

        assert scorer.score(stats) == scorer.score(list(stats))

    def test_score_is_non_negative(self) -> None:
        """Falling brightness still scores as positive motion."""
        stats = make_stats([200.0, 200.0, 200.0, 200.0, 100.0, 100.0])

        score = MotionScorer().score(stats)

        assert score.combined > 0
        assert score.brightness_shift == pytest.approx(100.0)

    def test_rejects_small_min_history(self) -> None:
        """The indicator windows need at least 6 entries."""
        with pytest.raises(ValueError):
            MotionScorer(min_history=5)

    def test_larger_min_history(self) -> None:
        """A larger minimum delays scoring."""
        scorer = MotionScorer(min_history=8)

        assert not scorer.score(make_stats([10.0] * 7)).is_sufficient
        assert scorer.score(make_stats([10.0] * 8)).is_sufficient


class TestMaxConsecutiveDelta:
    """Tests for the rate-of-change indicator on its own."""

    @pytest.mark.parametrize("count", range(4))
    def test_fewer_than_four_entries_contributes_zero(self, count: int) -> None:
        """Three pairs need four entries; shorter input gives 0."""
        assert _max_consecutive_delta(make_stats([0.0, 90.0, 10.0][:count])) == 0.0

    def test_only_last_three_pairs_count(self) -> None:
        """Older deltas are ignored; the largest recent one wins."""
        stats = make_stats([0.0, 200.0, 100.0, 104.0, 97.0, 99.0])

        assert _max_consecutive_delta(stats) == pytest.approx(7.0)
