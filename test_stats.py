"""
Tests for the stat model: clamping, percentage growth, floors and repair.
"""

import pytest

from config import DEFAULT_STATS
from stats import apply_delta, apply_effects, clean_effects, normalize_stats, round_half_up


class TestApplyDelta:
    """Single stat updates."""

    def test_bounded_stat_moves_by_points(self):
        assert apply_delta("happiness", 50, 10) == 60

    def test_bounded_stat_clamped_high_and_low(self):
        assert apply_delta("economy", 95, 20) == 100
        assert apply_delta("crime", 3, -10) == 0

    def test_population_is_percentage_growth(self):
        assert apply_delta("population", 1000000, 10) == 1100000
        assert apply_delta("gdp", 25000, -3) == 24250

    def test_population_and_gdp_never_drop_below_floor(self):
        assert apply_delta("population", 1500, -90) == 1000
        assert apply_delta("gdp", 600, -99) == 500

    def test_unknown_stat_is_noop(self):
        assert apply_delta("morale", 42, 10) == 42

    def test_non_numeric_delta_is_noop(self):
        assert apply_delta("happiness", 50, "lots") == 50
        assert apply_delta("happiness", 50, None) == 50
        assert apply_delta("happiness", 50, True) == 50


class TestApplyEffects:

    def test_returns_new_stats_and_changes(self):
        stats = dict(DEFAULT_STATS)
        new_stats, changes = apply_effects(stats, {"happiness": 10, "crime": -5})
        assert new_stats["happiness"] == 60
        assert new_stats["crime"] == 45
        assert changes == {"happiness": 10, "crime": -5}
        assert stats["happiness"] == 50, "input must not be modified"

    def test_unknown_keys_ignored(self):
        new_stats, changes = apply_effects(dict(DEFAULT_STATS), {"dragons": 40})
        assert new_stats == DEFAULT_STATS
        assert changes == {}

    def test_clamped_change_reports_realized_delta(self):
        stats = dict(DEFAULT_STATS, happiness=95)
        new_stats, changes = apply_effects(stats, {"happiness": 20})
        assert new_stats["happiness"] == 100
        assert changes["happiness"] == 5

    @pytest.mark.parametrize("effects", [
        {"economy": 500, "crime": -500, "population": -500, "gdp": -500},
        {"economy": -500, "crime": 500, "population": 500, "gdp": 500},
    ])
    def test_bounds_hold_for_extreme_effects(self, effects):
        new_stats, _ = apply_effects(dict(DEFAULT_STATS), effects)
        for key in ("economy", "crime"):
            assert 0 <= new_stats[key] <= 100
        assert new_stats["population"] >= 1000
        assert new_stats["gdp"] >= 500


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(1.49) == 1


def test_clean_effects_drops_unknown_and_non_numeric():
    assert clean_effects({"economy": 5, "mana": 3, "crime": "high", "gdp": 2.5}) == {"economy": 5, "gdp": 2.5}
    assert clean_effects(None) == {}


def test_normalize_stats_repairs_stored_values():
    stats = normalize_stats({"economy": 140, "crime": -3, "population": 10, "happiness": "n/a"})
    assert stats["economy"] == 100
    assert stats["crime"] == 0
    assert stats["population"] == 1000
    assert stats["happiness"] == 50
    assert stats["technology"] == 0
