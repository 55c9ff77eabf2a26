"""
Tests for decision resolution: stat application, era transitions, bookkeeping,
regional effects and the crisis step of a decision.
"""

import pytest

from config import GameConfig
from crisis import CrisisArc, severity_for_stage
from geography import find_region, Specialization
from issues import Consequence, Issue, IssueOption
from nation import create_nation, PolicyCard
from resolution import InvalidDecision, resolve_decision, decree_option, with_decree


def make_issue(*options, title="The Granary Question", metadata=None, is_map_event=False):
    options = options or (IssueOption("issue-1-1", "Do nothing", "Elder", {}),)
    return Issue("issue-1", title, "A question of grain.", "Economy", list(options),
                 is_map_event=is_map_event, metadata=metadata or {})


def peaked_arc(**overrides):
    data = dict(
        id="arc-peaked", type="unrest", severity="high", label="Civil Unrest", source="faction",
        origin="citizens", reason="Citizens' Assembly discontent at 20", pressure=80, stage=3,
        max_stage=3, tick=2, region_id="r-coast", region_name="Coastal March",
        region_terrain="coastal", x=70.0, y=45.0,
    )
    data.update(overrides)
    data["severity"] = severity_for_stage(data["stage"], data["max_stage"])
    return CrisisArc(**data)


@pytest.fixture
def nation():
    return create_nation("tester", 1, "Testland")


@pytest.fixture
def eras_nation():
    return create_nation("tester", 2, "Oldland", game_mode="Eras")


class TestStatsAndPolitics:

    def test_happiness_and_crime_decision(self, nation):
        option = IssueOption("issue-1-1", "Hold a festival", "Citizens", {"happiness": 10, "crime": -5})
        new, report = resolve_decision(nation, "issue-1-1", make_issue(option))
        assert new.stats["happiness"] == 60
        assert new.stats["crime"] == 45
        assert new.institutions["welfare"] > nation.institutions["welfare"]
        assert new.factions["citizens"] > nation.factions["citizens"]
        assert report.stat_changes == {"happiness": 10, "crime": -5}

    def test_bounded_stats_clamp(self, nation):
        nation.stats["economy"] = 97
        option = IssueOption("issue-1-1", "Boom", "", {"economy": 10, "population": 10})
        new, _ = resolve_decision(nation, "issue-1-1", make_issue(option))
        assert new.stats["economy"] == 100
        assert new.stats["population"] == 5500000

    def test_input_nation_is_not_mutated(self, nation):
        option = IssueOption("issue-1-1", "Boom", "", {"economy": 10})
        before = nation.to_dict()
        new, _ = resolve_decision(nation, "issue-1-1", make_issue(option))
        assert nation.to_dict() == before
        assert new is not nation
        assert new.regions is not nation.regions


class TestInvalidDecisions:

    def test_unknown_option(self, nation):
        nation.current_issue = make_issue()
        before = nation.to_dict()
        with pytest.raises(InvalidDecision):
            resolve_decision(nation, "issue-1-99")
        assert nation.to_dict() == before

    def test_no_issue(self, nation):
        with pytest.raises(InvalidDecision):
            resolve_decision(nation, "issue-1-1")


class TestBookkeeping:

    def test_decision_is_recorded(self, nation):
        nation.current_issue = make_issue()
        new, _ = resolve_decision(nation, "issue-1-1")
        assert new.issues_resolved == 1
        assert new.current_issue is None
        entry = new.decision_history[-1]
        assert entry["turn"] == 1
        assert entry["issueTitle"] == "The Granary Question"
        assert entry["optionId"] == "issue-1-1"
        assert new.history_log[-1] == "Turn 1: The Granary Question: Do nothing"
        assert new.used_issue_titles[-1] == "The Granary Question"
        assert new.recent_issue_keys[-1] == "issue:economy:granary"
        policy = new.active_policies[-1]
        assert (policy.id, policy.title, policy.option_text, policy.turn) == (
            "policy-1", "The Granary Question", "Do nothing", 1)

    def test_consequence_is_queued(self, nation):
        consequence = Consequence("Smugglers move in", 0.4, "downside", {"crime": 5})
        option = IssueOption("issue-1-1", "Open the borders", "Merchants", {"economy": 3}, consequence)
        new, report = resolve_decision(nation, "issue-1-1", make_issue(option))
        assert report.consequence_queued
        pending = new.pending_consequences[-1]
        assert pending.consequence == consequence
        assert pending.issue_title == "The Granary Question"
        assert pending.option_text == "Open the borders"

    def test_bounded_memories_keep_newest(self, nation):
        config = GameConfig()
        nation.active_policies = [PolicyCard(f"policy-{i}", f"Old {i}", "x", "Economy", "Iron Age", i)
                                  for i in range(config.active_policies_cap)]
        nation.history_log = [f"line {i}" for i in range(config.history_log_cap)]
        nation.recent_issue_keys = [f"issue:x:{i}" for i in range(config.recent_issue_keys_cap)]
        new, _ = resolve_decision(nation, "issue-1-1", make_issue(), config)
        assert len(new.active_policies) == config.active_policies_cap
        assert new.active_policies[0].title == "Old 1"
        assert new.active_policies[-1].title == "The Granary Question"
        assert len(new.history_log) == config.history_log_cap
        assert new.history_log[-1].startswith("Turn 1:")
        assert len(new.recent_issue_keys) == config.recent_issue_keys_cap
        assert "issue:x:0" not in new.recent_issue_keys

    def test_map_events_do_not_use_up_titles(self, nation):
        arc = peaked_arc(stage=1, tick=0, max_stage=3)
        nation.crisis_arcs = [arc]
        issue = make_issue(title="System Stress: Civil Unrest in Coastal March", is_map_event=True,
                           metadata={"source": "crisis", "crisisType": "unrest", "crisisId": arc.id,
                                     "regionId": "r-coast"})
        new, _ = resolve_decision(nation, "issue-1-1", issue)
        assert new.used_issue_titles == []
        assert new.recent_issue_keys[-1] == "crisis:unrest:r-coast"
        assert new.crisis_arcs == []


class TestEras:

    def test_technology_breakthrough_advances_era(self, eras_nation):
        eras_nation.stats["technology"] = 92
        option = IssueOption("issue-1-1", "Smelt bronze", "Smith", {"technology": 10})
        new, report = resolve_decision(eras_nation, "issue-1-1", make_issue(option))
        assert new.era == "Bronze Age"
        assert new.stats["technology"] == 0
        assert report.era_change == ("Stone Age", "Bronze Age")
        assert "Oldland enters the Bronze Age." in new.history_log

    def test_eternal_mode_never_advances(self, nation):
        nation.stats["technology"] = 95
        option = IssueOption("issue-1-1", "Research", "", {"technology": 10})
        new, report = resolve_decision(nation, "issue-1-1", make_issue(option))
        assert new.era == "Information Age"
        assert new.stats["technology"] == 100
        assert report.era_change is None

    def test_information_age_waits_for_a_path(self, eras_nation):
        eras_nation.era = "Information Age"
        eras_nation.stats["technology"] = 100
        new, report = resolve_decision(eras_nation, "issue-1-1", make_issue())
        assert new.era == "Information Age"
        assert report.era_change is None

    def test_chosen_path_sets_final_era(self, eras_nation):
        eras_nation.era = "Information Age"
        eras_nation.stats["technology"] = 100
        option = IssueOption("path-space", "Turn to the stars", "Admiral", {"happiness": 10})
        new, report = resolve_decision(eras_nation, "path-space", make_issue(option))
        assert new.era == "Intergalactic Empire"
        assert new.stats["technology"] == 0
        assert report.era_change == ("Information Age", "Intergalactic Empire")


class TestRegions:

    def test_specialization_targets_region(self, nation):
        option = IssueOption("spec-scholarly", "Found academies", "Scholars", {})
        issue = make_issue(option, title="Regional Charter: Frontier Marches",
                           metadata={"projectType": "specialization", "regionId": "r-frontier"})
        new, _ = resolve_decision(nation, "spec-scholarly", issue)
        frontier = find_region(new.regions, "r-frontier")
        assert frontier.specialization == Specialization.SCHOLARLY
        assert frontier.stability == find_region(nation.regions, "r-frontier").stability + 3
        assert frontier.development == find_region(nation.regions, "r-frontier").development + 2
        assert find_region(new.regions, "r-coast").specialization == Specialization.TRADE

    def test_happiness_raises_region_stability(self, nation):
        option = IssueOption("issue-1-1", "Festival", "", {"happiness": 10})
        new, _ = resolve_decision(nation, "issue-1-1", make_issue(option))
        for before, after in zip(nation.regions, new.regions):
            assert after.stability == before.stability + 3


class TestCrisisStep:

    def test_neglected_peak_arc_breaks_down(self, nation):
        nation.crisis_arcs = [peaked_arc()]
        new, report = resolve_decision(nation, "issue-1-1", make_issue())
        assert new.crisis_arcs == []
        assert len(report.breakdowns) == 1
        assert any(line.startswith("[CRISIS BREAKDOWN]") for line in new.history_log)
        assert find_region(new.regions, "r-coast").stability == find_region(nation.regions, "r-coast").stability - 10

    def test_good_news_deescalates(self, nation):
        nation.crisis_arcs = [peaked_arc(tick=0)]
        option = IssueOption("issue-1-1", "Festival", "", {"happiness": 10, "crime": -2})
        new, report = resolve_decision(nation, "issue-1-1", make_issue(option))
        assert report.breakdowns == []
        arc = new.crisis_arcs[0]
        assert (arc.stage, arc.tick, arc.severity) == (2, 1, "medium")

    def test_targeted_crisis_is_removed(self, nation):
        nation.crisis_arcs = [peaked_arc()]
        issue = make_issue(metadata={"crisisId": "arc-peaked", "regionId": "r-coast"}, is_map_event=True)
        new, report = resolve_decision(nation, "issue-1-1", issue)
        assert new.crisis_arcs == []
        assert report.breakdowns == []


class TestDecrees:

    def test_uninterpreted_decree(self):
        option = decree_option("issue-3", "  Build a wall  ")
        assert option.id == "issue-3-decree"
        assert option.text == "Build a wall"
        assert option.supporter == "Head of State"
        assert option.effects == {}

    def test_interpreted_decree(self, nation):
        option = decree_option("issue-1", "Tax the merchants", {
            "text": "Merchant levy enacted", "impact": {"economy": 4, "happiness": -2, "luck": 3}})
        assert option.effects == {"economy": 4, "happiness": -2}
        issue = with_decree(make_issue(), option)
        assert len(issue.options) == 2
        new, report = resolve_decision(nation, option.id, issue)
        assert new.stats["economy"] == 54
        assert report.option_text == "Merchant levy enacted"
