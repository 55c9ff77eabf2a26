"""
Session-level tests: slot lifecycle, the decision loop, locking and a long
offline autoplay run.
"""

import random

import pytest

from config import GameConfig, BOUNDED_STATS
from crisis import CrisisArc
from game import GameSession, NoNationLoaded, DecisionInFlight
from generator import GenerationError
from resolution import InvalidDecision
from storage import InMemoryNationStore


class InterpretingGenerator:
    """Generator that cannot write issues but does interpret decrees."""

    def __init__(self):
        self.interpreted = []

    def generate(self, request):
        raise GenerationError("offline")

    def interpret(self, request):
        self.interpreted.append(request)
        return {"text": "The wall is built", "effects": {"economy": -3, "crime": -2}}


def make_arc():
    return CrisisArc(
        "arc-institution-economy-00c0ffee", "infrastructure", "high", "Infrastructure Decay", "institution",
        "economy", "Treasury weakened to 15", 85, 3, 3, 0, "r-highlands", "Highland Reach", "highlands", 28.0, 34.0)


@pytest.fixture
def session():
    session = GameSession(GameConfig(), rng=random.Random(42))
    session.create_nation("tester", 1, "Testland")
    return session


class TestSlots:

    def test_create_and_reload(self):
        store = InMemoryNationStore()
        first = GameSession(store=store)
        created = first.create_nation("tester", 2, "Slotland", game_mode="Eras")
        assert created.id == "tester-slot-2"
        second = GameSession(store=store)
        loaded = second.load_nation("tester", 2)
        assert loaded.to_dict() == created.to_dict()
        assert second.load_nation("tester", 3) is None

    def test_list_and_delete(self, session):
        session.create_nation("tester", 3, "Thirdland")
        names = [s["name"] for s in session.list_slots("tester")]
        assert names == ["Testland", None, "Thirdland"]
        assert session.delete_slot("tester", 3)
        assert session.nation is None
        assert [s["name"] for s in session.list_slots("tester")] == ["Testland", None, None]

    def test_operations_need_a_nation(self):
        session = GameSession()
        with pytest.raises(NoNationLoaded):
            session.generate_issue()
        with pytest.raises(NoNationLoaded):
            session.map_crises()


class TestDecisionLoop:

    def test_issue_is_stable_until_answered(self, session):
        issue = session.generate_issue()
        assert session.generate_issue() is issue
        report = session.select_option(issue.options[0].id)
        assert report.issue_title == issue.title
        assert session.nation.issues_resolved == 1
        assert session.nation.current_issue is None
        assert session.generate_issue() is not issue

    def test_invalid_option_changes_nothing(self, session):
        session.generate_issue()
        before = session.nation.to_dict()
        with pytest.raises(InvalidDecision):
            session.select_option("not-an-option")
        assert session.nation.to_dict() == before

    def test_busy_nation_rejects_player_operations(self, session):
        lock = session.arena.state(session.nation.id).lock
        lock.acquire()
        try:
            with pytest.raises(DecisionInFlight):
                session.generate_issue()
        finally:
            lock.release()
        assert session.generate_issue() is not None

    def test_offline_decree_has_no_effects(self, session):
        issue = session.generate_issue()
        stats = dict(session.nation.stats)
        report = session.respond("Build a wall")
        assert report.option_id == f"{issue.id}-decree"
        assert report.option_text == "Build a wall"
        assert session.nation.stats == stats
        assert session.nation.decision_history[-1]["optionText"] == "Build a wall"

    def test_interpreted_decree(self):
        generator = InterpretingGenerator()
        session = GameSession(GameConfig(), generator=generator, rng=random.Random(1))
        session.create_nation("tester", 1, "Testland")
        session.generate_issue()
        report = session.respond("Build a wall")
        assert generator.interpreted[0]["userResponse"] == "Build a wall"
        assert report.option_text == "The wall is built"
        assert session.nation.stats["economy"] == 47
        assert session.nation.stats["crime"] == 48

    def test_respond_without_issue(self, session):
        with pytest.raises(InvalidDecision):
            session.respond("Anything")


class TestCrises:

    def test_open_surfaced_crisis(self, session):
        arc = make_arc()
        session.nation.crisis_arcs = [arc]
        assert [a.id for a in session.map_crises()] == [arc.id]
        issue = session.crisis_issue(arc.id)
        assert issue.title == "System Stress: Infrastructure Decay in Highland Reach"
        assert session.nation.current_issue is issue
        session.select_option(issue.options[0].id)
        assert arc.id not in [a.id for a in session.nation.crisis_arcs]
        assert "System Stress: Infrastructure Decay in Highland Reach" not in session.nation.used_issue_titles

    def test_unknown_crisis(self, session):
        assert session.crisis_issue("arc-missing") is None
        assert session.nation.current_issue is None


class TestBackground:

    def test_tick_and_flush(self, session):
        session.generate_issue()
        assert session.tick() == []
        assert session.flush() == 1
        stored = session.store.load("tester", 1)
        assert stored.current_issue.title == session.nation.current_issue.title

    def test_long_autoplay_keeps_invariants(self):
        config = GameConfig(crisis_every_ticks=2)
        session = GameSession(config, rng=random.Random(2024))
        session.create_nation("tester", 1, "Marathon", government_type="Authoritarian State")
        rng = random.Random(7)
        for _ in range(25):
            issue = session.generate_issue()
            assert 3 <= len(issue.options) <= 5
            session.select_option(rng.choice(issue.options).id)
            session.tick()
            nation = session.nation
            for stat in BOUNDED_STATS:
                assert 0 <= nation.stats[stat] <= 100
            assert nation.stats["population"] >= 1000
            assert nation.stats["gdp"] >= 500
            assert all(0 <= v <= 100 for v in nation.institutions.values())
            assert all(0 <= v <= 100 for v in nation.factions.values())
            assert len(nation.crisis_arcs) <= config.crisis_arcs_cap
            assert all(1 <= a.stage <= a.max_stage for a in nation.crisis_arcs)
            assert len(session.map_crises()) <= config.map_crises_cap
            assert len(nation.history_log) <= config.history_log_cap
            assert len(nation.recent_issue_keys) <= config.recent_issue_keys_cap
            assert len(nation.active_policies) <= config.active_policies_cap
        assert session.nation.issues_resolved == 25
        assert session.nation.decision_history[-1]["turn"] == 25
