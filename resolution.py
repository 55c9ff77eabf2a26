"""
Decision resolution: turns a chosen option into the nation's next state.

Works on a deep copy so a failed or abandoned resolution leaves the caller's
nation untouched; the caller commits the returned nation.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Tuple
import copy

from config import GameConfig, ERAS, era_index
from crisis import resolve_arcs
from geography import apply_region_deltas, set_specialization, should_evolve_shapes, evolve_region_shapes
from issues import Consequence, Issue, IssueOption, repeat_key
from logger import get_logger
from nation import Nation, PendingConsequence, PolicyCard, push_capped
from politics import derive_political_shift
from stats import apply_effects, clean_effects

logger = get_logger()

LAST_ADVANCING_ERA = ERAS.index("Information Age")
ENDING_ERAS = {
    "path-cyberpunk": "Cyberpunk Era",
    "path-space": "Intergalactic Empire",
}


class InvalidDecision(Exception):
    """The selected option does not belong to the issue being resolved."""


@dataclass
class ResolutionReport:
    issue_title: str
    option_id: str
    option_text: str
    stat_changes: Dict[str, float] = field(default_factory=dict)
    era_change: Optional[Tuple[str, str]] = None
    breakdowns: List[str] = field(default_factory=list)
    consequence_queued: bool = False


def _era_transition(nation: Nation, option_id: str) -> Optional[Tuple[str, str]]:
    old = nation.era
    if option_id in ENDING_ERAS:
        nation.era = ENDING_ERAS[option_id]
    elif (nation.game_mode == "Eras"
          and nation.stats.get("technology", 0) >= 100
          and era_index(nation.era) < LAST_ADVANCING_ERA):
        nation.era = ERAS[era_index(nation.era) + 1]
    else:
        return None
    nation.stats["technology"] = 0
    return old, nation.era


def resolve_decision(
    nation: Nation,
    option_id: str,
    issue: Optional[Issue] = None,
    config: Optional[GameConfig] = None,
) -> Tuple[Nation, ResolutionReport]:
    """
    Resolve `option_id` on `issue` (default: the nation's current issue).
    Returns (new_nation, report); raises InvalidDecision before touching anything.
    """
    config = config or GameConfig()
    issue = issue or nation.current_issue
    if issue is None:
        raise InvalidDecision("there is no issue to resolve")
    option = issue.option(option_id)
    if option is None:
        raise InvalidDecision(f"option {option_id!r} is not part of '{issue.title}'")

    new = copy.deepcopy(nation)
    effects = dict(option.effects)
    turn = new.issues_resolved + 1

    new.stats, changes = apply_effects(new.stats, effects)

    era_change = _era_transition(new, option.id)
    if era_change:
        new.add_log(f"{new.name} enters the {era_change[1]}.", config.history_log_cap)
        logger.info(f"{new.name}: {era_change[0]} -> {era_change[1]}")

    push_capped(new.decision_history, {
        "turn": turn,
        "issueId": issue.id,
        "issueTitle": issue.title,
        "category": issue.category,
        "optionId": option.id,
        "optionText": option.text,
        "effects": effects,
        "era": new.era,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }, config.decision_history_cap)
    new.add_log(f"Turn {turn}: {issue.title}: {option.text}", config.history_log_cap)
    if not issue.is_map_event:
        new.remember_title(issue.title, config.used_titles_cap)
    new.remember_key(repeat_key(issue), config.recent_issue_keys_cap)

    if option.consequence is not None:
        new.pending_consequences.append(PendingConsequence(issue.title, option.text, option.consequence))

    new.institutions, new.factions = derive_political_shift(
        new.institutions, new.factions, effects, new.government_type)

    push_capped(new.active_policies, PolicyCard(
        id=f"policy-{turn}",
        title=issue.title,
        option_text=option.text,
        category=issue.category,
        era=new.era,
        turn=turn,
        effects=effects,
    ), config.active_policies_cap)

    target = issue.target_region_id
    new.regions = apply_region_deltas(new.regions, effects, target)
    if option.id.startswith("spec-"):
        new.regions = set_specialization(new.regions, target, option.id[len("spec-"):])

    if should_evolve_shapes(new.issues_resolved, option.id, config.shape_cadence(new.game_mode)):
        new.regions = evolve_region_shapes(new.id, new.regions, new.issues_resolved, new.era,
                                           option.id, effects, target)

    breakdowns = resolve_arcs(new, effects, issue.metadata.get("crisisId"), config)

    new.issues_resolved = turn
    new.current_issue = None

    report = ResolutionReport(
        issue_title=issue.title,
        option_id=option.id,
        option_text=option.text,
        stat_changes=changes,
        era_change=era_change,
        breakdowns=breakdowns,
        consequence_queued=option.consequence is not None,
    )
    return new, report


def decree_option(issue_id: str, user_response: str, payload: Optional[Mapping] = None) -> IssueOption:
    """
    Option standing for a free-text decree. Without an interpretation the
    decree is recorded with no effects.
    """
    payload = payload or {}
    text = str(payload.get("text") or user_response).strip() or "Decree issued."
    return IssueOption(
        id=f"{issue_id}-decree",
        text=text,
        supporter="Head of State",
        effects=clean_effects(payload.get("effects", payload.get("impact"))),
        consequence=Consequence.from_dict(payload.get("consequence")),
    )


def with_decree(issue: Issue, option: IssueOption) -> Issue:
    return replace(issue, options=list(issue.options) + [option])
