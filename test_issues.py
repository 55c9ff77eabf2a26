"""
Tests for issue text rules: repeat keys, option normalization, era flavoring,
the anachronism guard and the local content tables.
"""

import pytest

from config import ERAS, ANACHRONISM_ERAS
from issues import (
    Issue, IssueOption, Consequence, issue_from_payload, normalize_options, classify_theme,
    normalize_title, repeat_key, flavor_text, flavor_issue, is_anachronistic,
)
import content


def make_options(*texts):
    return [IssueOption(id=f"o{i}", text=t, effects={"economy": 1}) for i, t in enumerate(texts)]


class TestRepeatKeys:

    def test_title_normalization(self):
        assert normalize_title("The Grain Debate (Part II)") == "grain"
        assert normalize_title("A Charter for the Guilds!") == "charter-guilds"

    def test_issue_key_uses_category_and_title(self):
        issue = Issue("i", "The Grain Debate (Part II)", "", "Economy", [])
        assert repeat_key(issue) == "issue:economy:grain"

    def test_near_duplicates_share_a_key(self):
        a = Issue("a", "The Surveillance Question", "", "Security", [])
        b = Issue("b", "Surveillance Crisis", "", "Security", [])
        assert repeat_key(a) == repeat_key(b)

    def test_crisis_key(self):
        issue = Issue("i", "System Stress: Civil Unrest in Heartland", "", "Civil Rights", [],
                      is_map_event=True,
                      metadata={"source": "crisis", "crisisType": "unrest", "regionId": "r-heartland"})
        assert repeat_key(issue) == "crisis:unrest:r-heartland"


class TestOptionNormalization:

    def test_pads_to_desired_count(self):
        options = normalize_options(make_options("Build a new road"), 5, "Road Repairs", "Infrastructure",
                                    "Information Age", "i1")
        assert len(options) == 5
        assert len({o.text.lower() for o in options}) == 5
        assert options[1].id == "i1-extra-1"

    def test_drops_case_insensitive_duplicates(self):
        options = normalize_options(make_options("Tax the rich", "tax the RICH", "Cut spending"), 3,
                                    "Budget", "Economy", "Information Age")
        texts = [o.text.lower() for o in options]
        assert texts.count("tax the rich") == 1
        assert len(options) == 3

    def test_trims_to_five(self):
        options = normalize_options(make_options(*[f"Choice {i}" for i in range(8)]), 5, "Many", "Governance",
                                    "Information Age")
        assert [o.text for o in options] == [f"Choice {i}" for i in range(5)]

    def test_trims_to_desired(self):
        options = normalize_options(make_options("A", "B", "C", "D"), 3, "Many", "Governance", "Information Age")
        assert [o.text for o in options] == ["A", "B", "C"]

    @pytest.mark.parametrize("given", [0, 2, 4, 6, 9])
    @pytest.mark.parametrize("desired", [1, 2, 3, 4, 5, 7])
    def test_count_bounds(self, desired, given):
        supplied = make_options(*[f"Choice {i}" for i in range(given)])
        options = normalize_options(supplied, desired, "Harvest Failure", "Food", "Bronze Age")
        assert min(desired, 3) <= len(options) <= min(desired, 5)
        kept = [o.text for o in options if o.text.startswith("Choice")]
        assert kept == [f"Choice {i}" for i in range(min(given, len(options)))]

    def test_duplicates_after_era_flavoring(self):
        supplied = make_options("Invest in technology", "Invest in craft knowledge", "Raise a levy")
        options = normalize_options(supplied, 3, "Smithing", "Economy", "Bronze Age", "i2")
        shown = [flavor_text(o.text, "Bronze Age").lower() for o in options]
        assert len(options) == 3
        assert shown.count("invest in craft knowledge") == 1
        assert len(set(shown)) == 3
        assert options[-1].id == "i2-extra-1"

    def test_flavor_duplicates_kept_in_modern_eras(self):
        supplied = make_options("Invest in technology", "Invest in craft knowledge", "Raise a levy")
        options = normalize_options(supplied, 3, "Smithing", "Economy", "Information Age")
        assert [o.text for o in options] == ["Invest in technology", "Invest in craft knowledge", "Raise a levy"]

    def test_ancient_phrasing_before_industry(self):
        options = normalize_options([], 3, "Plague in the Market", "Healthcare", "Bronze Age")
        assert options[0].text == content.THEME_OPTIONS["health"]["ancient"][0][0]
        options = normalize_options([], 3, "Plague in the Market", "Healthcare", "Atomic Age")
        assert options[0].text == content.THEME_OPTIONS["health"]["modern"][0][0]

    def test_theme_classification(self):
        assert classify_theme("Raiders at the Border", "Security", []) == "security"
        assert classify_theme("The Harvest Fails", "Agriculture", ["Ration the grain"]) == "food"
        assert classify_theme("Something Odd", "Misc", []) == "governance"


class TestEraFlavoring:

    def test_substitution_preserves_case(self):
        text = flavor_text("Technology will fix the economy and our infrastructure.", "Stone Age")
        assert text == "Craft knowledge will fix the trade and our roads and granaries."

    def test_modern_eras_untouched(self):
        text = "Technology will fix the economy."
        assert flavor_text(text, "Industrial Revolution") == text
        assert flavor_text(text, "Information Age") == text

    def test_longer_forms_first(self):
        assert flavor_text("technological progress", "Iron Age") == "artisanal progress"
        assert flavor_text("hospitals", "Medieval Era") == "houses of healing"

    def test_flavor_issue_rewrites_options(self):
        issue = Issue("i", "Hospital Funding", "The government must decide.", "Healthcare",
                      [IssueOption("i-1", "Fund the hospital", "Health Minister", {"healthcare": 5})])
        flavored = flavor_issue(issue, "Classical Era")
        assert flavored.title == "House of healing Funding"
        assert flavored.description == "The court must decide."
        assert flavored.options[0].text == "Fund the house of healing"
        assert issue.title == "Hospital Funding", "original issue is unchanged"


class TestAnachronismGuard:

    @pytest.fixture
    def robot_issue(self):
        return Issue("i", "The Robot Uprising", "Automation threatens jobs.", "Technology",
                     make_options("Ban robots", "Tax robots", "Ignore it"))

    def test_rejected_in_early_eras(self, robot_issue):
        for era in ANACHRONISM_ERAS:
            assert is_anachronistic(robot_issue, era)

    def test_allowed_from_renaissance(self, robot_issue):
        assert not is_anachronistic(robot_issue, "Renaissance")
        assert not is_anachronistic(robot_issue, "Cyberpunk Era")

    def test_whole_words_only(self):
        issue = Issue("i", "The Chain of Command", "Paint the training grounds.", "Security",
                      make_options("Maintain order", "Raise taxes", "Wait"))
        assert not is_anachronistic(issue, "Stone Age")

    def test_supporter_names_are_checked(self):
        issue = Issue("i", "Advisors", "", "Governance",
                      [IssueOption("i-1", "Listen", "AI Oracle"), IssueOption("i-2", "Ignore", "Elder"),
                       IssueOption("i-3", "Wait", "Elder")])
        assert is_anachronistic(issue, "Bronze Age")


class TestPayloads:

    def test_impact_alias_and_ids(self):
        issue = issue_from_payload({
            "title": "Flood",
            "description": "The river rises.",
            "category": "Environment",
            "options": [
                {"text": "Build levees", "impact": {"economy": -3, "mana": 5}},
                {"text": "Evacuate", "effects": {"happiness": -2},
                 "consequence": {"text": "Looting", "chance": 3, "statEffects": {"crime": 4}}},
                "not an option",
            ],
        }, "issue-7")
        assert [o.id for o in issue.options] == ["issue-7-1", "issue-7-2"]
        assert issue.options[0].effects == {"economy": -3}
        assert issue.options[1].consequence == Consequence("Looting", 1.0, "downside", {"crime": 4})

    def test_issue_round_trip(self):
        issue = Issue("i", "T", "D", "Economy", make_options("a", "b", "c"), is_map_event=True,
                      metadata={"regionId": "r-coast"})
        assert Issue.from_dict(issue.to_dict()) == issue
        assert issue.target_region_id == "r-coast"


class TestContentTables:

    def test_every_era_has_samples(self):
        for era in ERAS:
            samples = content.SAMPLE_ISSUES[era]
            assert len(samples) >= 3
            assert all(len(s["options"]) >= 3 for s in samples)

    def test_early_samples_pass_the_guard(self):
        for era in ANACHRONISM_ERAS:
            for payload in content.SAMPLE_ISSUES[era]:
                assert not is_anachronistic(issue_from_payload(payload, "x"), era), payload["title"]

    def test_dedupe_by_title(self):
        items = [{"title": "Same"}, {"title": "same "}, {"title": "Other"}]
        assert [i["title"] for i in content.dedupe_by_title(items)] == ["Same", "Other"]

    def test_canned_tables_cover_all_themes(self):
        for theme in ("infrastructure", "security", "health", "culture", "economy",
                      "governance", "innovation", "food"):
            assert len(content.THEME_OPTIONS[theme]["ancient"]) == 3
            assert len(content.THEME_OPTIONS[theme]["modern"]) == 3

