import matplotlib.pyplot as plt
import pytest

from minestake import analysis
from minestake.placement import PlacementStrategy


def test_single_test_constraint_strategy():
    out = analysis.run_placement_single_test(6, 6, PlacementStrategy.CONSTRAINT_BACKTRACKING, seed=1)
    assert out["mines_placed"] == 6
    assert out["constraint_ok"] is True
    assert out["fell_back"] is False
    assert out["strategy"] == "n_queens"
    assert out["min_pairwise_distance"] >= 3


def test_single_test_shows_board(capsys):
    analysis.run_placement_single_test(4, 2, PlacementStrategy.RANDOM, seed=1, show_board=True)
    assert "Strategy: Random Placement" in capsys.readouterr().out


def test_many_tests_random_strategy():
    stats = analysis.run_placement_many_tests(5, 5, 8, PlacementStrategy.RANDOM, seed=3)
    assert stats["exact_count_rate"] == 1.0
    assert stats["fallback_rate"] == 0.0
    assert stats["constraint_rate"] == 1.0
    assert stats["avg_min_pairwise_distance"] >= 1.0


def test_many_tests_reports_constraint_fallback():
    stats = analysis.run_placement_many_tests(3, 3, 4, PlacementStrategy.CONSTRAINT_BACKTRACKING)
    assert stats["fallback_rate"] == 1.0
    assert stats["exact_count_rate"] == 1.0


def test_many_tests_needs_runs():
    with pytest.raises(ValueError):
        analysis.run_placement_many_tests(4, 4, 0, PlacementStrategy.RANDOM)


def test_cash_out_policy_without_mines():
    sim = analysis.simulate_cash_out_policy(5, 0, 3, 20, seed=0)
    assert sim["win_rate"] == 1.0
    assert sim["mean_return"] == pytest.approx(0.75)
    assert sim["std_return"] == pytest.approx(0.0)
    assert sim["cash_out_multiplier"] == 1.75


def test_cash_out_policy_full_board_always_loses():
    sim = analysis.simulate_cash_out_policy(3, 8, 1, 10, strategy=PlacementStrategy.RANDOM, seed=0)
    assert 0.0 <= sim["win_rate"] <= 1.0
    assert sim["mean_return"] == pytest.approx(sim["win_rate"] * 1.25 - 1.0)


def test_cash_out_policy_rejects_too_many_reveals():
    with pytest.raises(ValueError):
        analysis.simulate_cash_out_policy(3, 5, 5, 10)


def test_size_analysis_plots(monkeypatch):
    monkeypatch.setattr(analysis.plt, "show", lambda: None)
    results = analysis.run_placement_size_analysis(2, sizes=(4, 5), seed=0)
    assert set(results) == {4, 5}
    assert set(results[4]) == {s.value for s in PlacementStrategy}
    plt.close("all")
