"""
Nation aggregate: identity, stats, political scalars, regions, crisis arcs
and the bounded memories (history, used titles, repeat keys) that steer
issue generation.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from config import GameConfig, ERAS, GAME_MODES, DEFAULT_STATS, FLAG_COLORS, GOVERNMENT_TYPES, INSTITUTIONS, FACTIONS
from crisis import CrisisArc, normalize_arcs
from geography import Region, default_regions, normalize_regions, hash_seed
from issues import Consequence, Issue
from logger import get_logger
from politics import normalize_scalars
from stats import normalize_stats, clean_effects

logger = get_logger()

SLOTS = (1, 2, 3)
DEFAULT_GOVERNMENT = "Democratic Republic"


def push_capped(items: List, item, cap: int) -> None:
    """Append and drop the oldest entries beyond `cap` (FIFO)."""
    items.append(item)
    if cap > 0 and len(items) > cap:
        del items[:len(items) - cap]


def clamp_slot(slot) -> int:
    try:
        value = int(slot)
    except (TypeError, ValueError):
        return SLOTS[0]
    return max(SLOTS[0], min(SLOTS[-1], value))


def nation_id(user_id: str, slot) -> str:
    return f"{user_id}-slot-{clamp_slot(slot)}"


def normalize_game_mode(mode) -> str:
    if mode == "Chronological":
        return "Eras"
    return mode if mode in GAME_MODES else "Eternal"


def default_era(game_mode: str) -> str:
    return "Stone Age" if game_mode == "Eras" else "Information Age"


@dataclass
class PolicyCard:
    """A decision kept on the table as an active policy."""
    id: str
    title: str
    option_text: str
    category: str
    era: str
    turn: int
    effects: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "optionText": self.option_text,
            "category": self.category,
            "era": self.era,
            "turn": self.turn,
            "effects": dict(self.effects),
        }

    @classmethod
    def from_dict(cls, data) -> Optional["PolicyCard"]:
        if not isinstance(data, Mapping) or not data.get("title"):
            return None
        turn = data.get("turn")
        return cls(
            id=str(data.get("id") or "policy"),
            title=str(data["title"]),
            option_text=str(data.get("optionText") or ""),
            category=str(data.get("category") or ""),
            era=str(data.get("era") or ""),
            turn=turn if isinstance(turn, int) and not isinstance(turn, bool) else 0,
            effects=clean_effects(data.get("effects")),
        )


@dataclass
class PendingConsequence:
    issue_title: str
    option_text: str
    consequence: Consequence

    def to_dict(self) -> Dict:
        return {
            "issueTitle": self.issue_title,
            "optionText": self.option_text,
            "consequence": self.consequence.to_dict(),
        }

    @classmethod
    def from_dict(cls, data) -> Optional["PendingConsequence"]:
        if not isinstance(data, Mapping):
            return None
        consequence = Consequence.from_dict(data.get("consequence"))
        if consequence is None:
            return None
        return cls(
            issue_title=str(data.get("issueTitle") or ""),
            option_text=str(data.get("optionText") or ""),
            consequence=consequence,
        )


@dataclass
class Nation:
    id: str
    user_id: str
    slot: int
    name: str
    motto: str = ""
    flag: Dict[str, str] = field(default_factory=lambda: dict(FLAG_COLORS[0]))
    government_type: str = DEFAULT_GOVERNMENT
    currency: str = "Credits"
    capital: str = ""
    leader: str = ""
    era: str = "Information Age"
    game_mode: str = "Eternal"
    stats: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_STATS))
    institutions: Dict[str, float] = field(default_factory=lambda: {k: 50 for k in INSTITUTIONS})
    factions: Dict[str, float] = field(default_factory=lambda: {k: 50 for k in FACTIONS})
    regions: List[Region] = field(default_factory=default_regions)
    crisis_arcs: List[CrisisArc] = field(default_factory=list)
    active_policies: List[PolicyCard] = field(default_factory=list)
    pending_consequences: List[PendingConsequence] = field(default_factory=list)
    decision_history: List[Dict] = field(default_factory=list)
    history_log: List[str] = field(default_factory=list)
    used_issue_titles: List[str] = field(default_factory=list)
    recent_issue_keys: List[str] = field(default_factory=list)
    issues_resolved: int = 0
    founded: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    borders: List = field(default_factory=list)
    current_issue: Optional[Issue] = None

    def add_log(self, line: str, cap: int = 30) -> None:
        push_capped(self.history_log, line, cap)

    def remember_key(self, key: str, cap: int = 18) -> None:
        push_capped(self.recent_issue_keys, key, cap)

    def remember_title(self, title: str, cap: int = 200) -> None:
        push_capped(self.used_issue_titles, title, cap)

    def forbidden_titles(self, window: int = 40) -> List[str]:
        return self.used_issue_titles[-window:] if window > 0 else []

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "slot": self.slot,
            "name": self.name,
            "motto": self.motto,
            "flag": dict(self.flag),
            "governmentType": self.government_type,
            "currency": self.currency,
            "capital": self.capital,
            "leader": self.leader,
            "era": self.era,
            "gameMode": self.game_mode,
            "stats": dict(self.stats),
            "institutions": dict(self.institutions),
            "factions": dict(self.factions),
            "regions": [r.to_dict() for r in self.regions],
            "crisisArcs": [a.to_dict() for a in self.crisis_arcs],
            "activePolicies": [p.to_dict() for p in self.active_policies],
            "pendingConsequences": [c.to_dict() for c in self.pending_consequences],
            "decisionHistory": [dict(d) for d in self.decision_history],
            "historyLog": list(self.history_log),
            "usedIssueTitles": list(self.used_issue_titles),
            "recentIssueKeys": list(self.recent_issue_keys),
            "issuesResolved": self.issues_resolved,
            "founded": self.founded.isoformat(),
            "borders": list(self.borders),
            "currentIssue": self.current_issue.to_dict() if self.current_issue else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping, config: Optional[GameConfig] = None) -> "Nation":
        """Rebuild a nation from stored data, repairing missing or malformed fields."""
        config = config or GameConfig()
        user_id = str(data.get("userId") or "player")
        slot = clamp_slot(data.get("slot", 1))
        game_mode = normalize_game_mode(data.get("gameMode"))
        era = data.get("era") if data.get("era") in ERAS else default_era(game_mode)
        government = data.get("governmentType")
        if government not in GOVERNMENT_TYPES:
            government = DEFAULT_GOVERNMENT
        resolved = data.get("issuesResolved")
        flag = data.get("flag")

        return cls(
            id=nation_id(user_id, slot),
            user_id=user_id,
            slot=slot,
            name=str(data.get("name") or "Unnamed Nation"),
            motto=str(data.get("motto") or ""),
            flag=dict(flag) if isinstance(flag, Mapping) else dict(FLAG_COLORS[0]),
            government_type=government,
            currency=str(data.get("currency") or "Credits"),
            capital=str(data.get("capital") or ""),
            leader=str(data.get("leader") or ""),
            era=era,
            game_mode=game_mode,
            stats=normalize_stats(data.get("stats")),
            institutions=normalize_scalars(data.get("institutions"), INSTITUTIONS),
            factions=normalize_scalars(data.get("factions"), FACTIONS),
            regions=normalize_regions(data.get("regions")),
            crisis_arcs=normalize_arcs(data.get("crisisArcs"))[:config.crisis_arcs_cap],
            active_policies=_tail(_parse_list(data.get("activePolicies"), PolicyCard.from_dict),
                                  config.active_policies_cap),
            pending_consequences=_parse_list(data.get("pendingConsequences"), PendingConsequence.from_dict),
            decision_history=_tail([d for d in _as_list(data.get("decisionHistory")) if isinstance(d, Mapping)],
                                   config.decision_history_cap),
            history_log=_tail(_strings(data.get("historyLog")), config.history_log_cap),
            used_issue_titles=_tail(_strings(data.get("usedIssueTitles")), config.used_titles_cap),
            recent_issue_keys=_tail(_strings(data.get("recentIssueKeys")), config.recent_issue_keys_cap),
            issues_resolved=resolved if isinstance(resolved, int) and not isinstance(resolved, bool) and resolved >= 0 else 0,
            founded=_parse_datetime(data.get("founded")),
            borders=_as_list(data.get("borders")),
            current_issue=Issue.from_dict(data.get("currentIssue")),
        )


def _as_list(value) -> List:
    return list(value) if isinstance(value, list) else []


def _strings(value) -> List[str]:
    return [str(v) for v in _as_list(value) if isinstance(v, str)]


def _tail(items: List, cap: int) -> List:
    return items[-cap:] if cap > 0 else items


def _parse_list(value, parser) -> List:
    parsed = (parser(item) for item in _as_list(value))
    return [p for p in parsed if p is not None]


def _parse_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.warning(f"Unreadable founding date {value!r}; using now")
    return datetime.now(timezone.utc)


def create_nation(
    user_id: str,
    slot: int,
    name: str,
    game_mode: str = "Eternal",
    era: Optional[str] = None,
    government_type: str = DEFAULT_GOVERNMENT,
    motto: str = "",
    leader: str = "",
    capital: str = "",
    currency: str = "Credits",
) -> Nation:
    """A fresh nation with default stats, political scalars and regions."""
    game_mode = normalize_game_mode(game_mode)
    if era not in ERAS:
        era = default_era(game_mode)
    if government_type not in GOVERNMENT_TYPES:
        government_type = DEFAULT_GOVERNMENT
    slot = clamp_slot(slot)
    nation = Nation(
        id=nation_id(user_id, slot),
        user_id=user_id,
        slot=slot,
        name=name or "Unnamed Nation",
        motto=motto,
        flag=dict(FLAG_COLORS[hash_seed(name or "") % len(FLAG_COLORS)]),
        government_type=government_type,
        currency=currency,
        capital=capital,
        leader=leader,
        era=era,
        game_mode=game_mode,
    )
    nation.add_log(f"{nation.name} was founded in the {era} as a {government_type}.")
    logger.info(f"Founded {nation.name} ({nation.id}, {game_mode}, {era})")
    return nation
