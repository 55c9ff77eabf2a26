"""
Crisis arc engine.

Arcs are long-running regional crises born from political pressure
(polarized factions, weakened institutions, a divisive latest policy). They
escalate on a two-tick cadence, de-escalate when a decision lifts morale and
break down with a stat penalty when left at their peak for too long.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Sequence, Tuple
import re

from config import GameConfig
from geography import (
    Region, hash_seed, seeded_offset, pick_region, degrade_region,
)
from issues import Issue, IssueOption
from logger import get_logger
from politics import FACTION_NAMES, INSTITUTION_NAMES
from stats import apply_effects
import content

if TYPE_CHECKING:
    from nation import Nation

logger = get_logger()

CRISIS_TYPES = ["unrest", "corruption", "infrastructure", "health", "security", "innovation"]
SEVERITIES = ["low", "medium", "high"]
SEVERITY_RANK = {"low": 0, "medium": 1, "high": 2}

FACTION_CRISIS_TYPES = {
    "citizens": "unrest",
    "traditionalists": "unrest",
    "elites": "corruption",
    "innovators": "innovation",
    "securityCouncil": "security",
}

INSTITUTION_CRISIS_TYPES = {
    "governance": "corruption",
    "economy": "infrastructure",
    "welfare": "health",
    "security": "security",
    "knowledge": "innovation",
}

# Stat penalty when an arc sits at its peak too long; population/gdp are percentages
BREAKDOWN_PENALTIES = {
    "security": {"crime": 6, "politicalFreedom": -4},
    "health": {"healthcare": -6, "population": -2},
    "infrastructure": {"economy": -6, "gdp": -3},
    "innovation": {"technology": -5, "education": -4},
}
DEFAULT_BREAKDOWN_PENALTY = {"economy": -4, "happiness": -5, "crime": 4}
BREAKDOWN_STABILITY_LOSS = 10
BREAKDOWN_DEVELOPMENT_LOSS = 6

ESCALATION_TICKS = 2


@dataclass
class CrisisArc:
    id: str
    type: str
    severity: str
    label: str
    source: str  # faction | institution | policy
    origin: str
    reason: str
    pressure: int
    stage: int
    max_stage: int
    tick: int
    region_id: str
    region_name: str
    region_terrain: str
    x: float
    y: float

    @property
    def key(self) -> str:
        """Repeat key shared with the crisis issue built from this arc."""
        return crisis_key(self.type, self.region_id)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "regionId": self.region_id,
            "regionName": self.region_name,
            "regionTerrain": self.region_terrain,
            "type": self.type,
            "severity": self.severity,
            "label": self.label,
            "source": self.source,
            "origin": self.origin,
            "reason": self.reason,
            "pressure": self.pressure,
            "stage": self.stage,
            "maxStage": self.max_stage,
            "tick": self.tick,
        }

    @classmethod
    def from_dict(cls, data) -> Optional["CrisisArc"]:
        """Repair a stored arc; returns None when it cannot be salvaged."""
        if not isinstance(data, Mapping) or not data.get("id"):
            return None
        kind = data.get("type") if data.get("type") in CRISIS_TYPES else "unrest"
        max_stage = data.get("maxStage") if data.get("maxStage") in (2, 3) else 3
        stage = _int(data.get("stage"), 1)
        stage = max(1, min(max_stage, stage))
        return cls(
            id=str(data["id"]),
            type=kind,
            severity=severity_for_stage(stage, max_stage),
            label=str(data.get("label") or content.CRISIS_LABELS[kind]),
            source=str(data.get("source") or "policy"),
            origin=str(data.get("origin") or ""),
            reason=str(data.get("reason") or ""),
            pressure=_int(data.get("pressure"), 0),
            stage=stage,
            max_stage=max_stage,
            tick=max(0, _int(data.get("tick"), 0)),
            region_id=str(data.get("regionId") or ""),
            region_name=str(data.get("regionName") or ""),
            region_terrain=str(data.get("regionTerrain") or ""),
            x=_float(data.get("x"), 50.0),
            y=_float(data.get("y"), 50.0),
        )


def _int(value, default: int) -> int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    return default


def _float(value, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


def crisis_key(crisis_type: str, region_id: Optional[str]) -> str:
    return f"crisis:{crisis_type}:{region_id or 'national'}"


def severity_for_stage(stage: int, max_stage: int) -> str:
    if max_stage <= 2:
        return "low" if stage <= 1 else "medium"
    return SEVERITIES[max(1, min(3, stage)) - 1]


def severity_for_pressure(pressure: float) -> str:
    if pressure >= 75:
        return "high"
    if pressure >= 60:
        return "medium"
    return "low"


def normalize_arcs(raw) -> List[CrisisArc]:
    if not isinstance(raw, list):
        return []
    arcs = []
    for item in raw:
        arc = item if isinstance(item, CrisisArc) else CrisisArc.from_dict(item)
        if arc is not None:
            arcs.append(arc)
    return arcs


# --- lifecycle ---

def advance_arcs(arcs: Sequence[CrisisArc]) -> List[CrisisArc]:
    """Age every arc by one tick, escalating those that have waited long enough."""
    advanced = []
    for arc in arcs:
        tick = arc.tick + 1
        stage = arc.stage
        if tick >= ESCALATION_TICKS and stage < arc.max_stage:
            stage += 1
            tick = 0
        advanced.append(replace(arc, tick=tick, stage=stage,
                                severity=severity_for_stage(stage, arc.max_stage)))
    return advanced


def relieve_arcs(arcs: Sequence[CrisisArc]) -> List[CrisisArc]:
    return [
        replace(a, stage=max(1, a.stage - 1), tick=0,
                severity=severity_for_stage(max(1, a.stage - 1), a.max_stage))
        for a in arcs
    ]


def _policy_crisis_type(effects: Mapping[str, float]) -> str:
    if (effects.get("crime", 0) or 0) > 0:
        return "security"
    if (effects.get("politicalFreedom", 0) or 0) < 0:
        return "unrest"
    if (effects.get("economy", 0) or 0) < 0:
        return "infrastructure"
    return "corruption"


def _policy_field(policy, name, default=None):
    if isinstance(policy, Mapping):
        return policy.get(name, default)
    return getattr(policy, name, default)


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", str(text).lower()).strip("-") or "none"


def _new_arc(
    nation_id: str,
    regions: Sequence[Region],
    source: str,
    origin: str,
    crisis_type: str,
    pressure: float,
    reason: str,
    turn: int,
) -> CrisisArc:
    region = pick_region(regions, f"{nation_id}:{source}:{origin}")
    severity = severity_for_pressure(pressure)
    max_stage = 2 if severity == "low" else 3
    stage = SEVERITY_RANK[severity] + 1
    arc_id = f"arc-{source}-{_slug(origin)}-{hash_seed(f'{nation_id}:{source}:{origin}:{turn}'):08x}"
    cx, cy = region.centroid()
    return CrisisArc(
        id=arc_id,
        type=crisis_type,
        severity=severity,
        label=content.CRISIS_LABELS[crisis_type],
        source=source,
        origin=origin,
        reason=reason,
        pressure=int(round(pressure)),
        stage=stage,
        max_stage=max_stage,
        tick=0,
        region_id=region.id,
        region_name=region.name,
        region_terrain=region.terrain.value,
        x=round(cx + seeded_offset(f"{arc_id}:x", 3), 2),
        y=round(cy + seeded_offset(f"{arc_id}:y", 3), 2),
    )


def crisis_candidates(
    nation_id: str,
    factions: Mapping[str, float],
    institutions: Mapping[str, float],
    active_policies: Sequence,
    regions: Sequence[Region],
    recent_keys: Sequence[str],
    turn: int = 0,
    config: Optional[GameConfig] = None,
) -> List[CrisisArc]:
    """New arcs implied by the current political pressure."""
    config = config or GameConfig()
    if not regions:
        return []
    candidates = []

    for name, crisis_type in FACTION_CRISIS_TYPES.items():
        value = factions.get(name, 50)
        if abs(value - 50) >= config.faction_pressure_threshold:
            mood = "agitation" if value > 50 else "discontent"
            candidates.append(_new_arc(
                nation_id, regions, "faction", name, crisis_type, 2 * abs(value - 50),
                f"{FACTION_NAMES[name]} {mood} at {value:g}", turn))

    for name, crisis_type in INSTITUTION_CRISIS_TYPES.items():
        value = institutions.get(name, 50)
        if 100 - value >= config.institution_pressure_threshold:
            candidates.append(_new_arc(
                nation_id, regions, "institution", name, crisis_type, 100 - value,
                f"{INSTITUTION_NAMES[name]} weakened to {value:g}", turn))

    if active_policies:
        latest = active_policies[-1]
        effects = _policy_field(latest, "effects", {}) or {}
        pressure = min(95, 30 + abs(effects.get("politicalFreedom", 0) or 0) + abs(effects.get("economy", 0) or 0))
        if pressure >= config.policy_pressure_threshold:
            title = str(_policy_field(latest, "title", "policy"))
            candidates.append(_new_arc(
                nation_id, regions, "policy", title, _policy_crisis_type(effects), pressure,
                f"Backlash over '{title}'", turn))

    recent = set(recent_keys)
    return [c for c in candidates if c.key not in recent]


def merge_arcs(existing: Sequence[CrisisArc], candidates: Sequence[CrisisArc], cap: int = 8) -> List[CrisisArc]:
    """Existing arcs win over candidates sharing (source, type, region)."""
    merged = []
    seen = set()
    for arc in list(existing) + list(candidates):
        ident = (arc.source, arc.type, arc.region_id)
        if ident in seen:
            continue
        seen.add(ident)
        merged.append(arc)
    merged.sort(key=lambda a: (-SEVERITY_RANK[a.severity], -a.pressure))
    return merged[:cap]


def apply_breakdowns(
    nation: "Nation",
    arcs: Sequence[CrisisArc],
    config: Optional[GameConfig] = None,
) -> Tuple[List[CrisisArc], List[str]]:
    """
    Break down arcs left at their peak for too long.

    Applies the type's stat penalty and the region damage to `nation` in
    place. Returns (surviving arcs, breakdown log lines).
    """
    config = config or GameConfig()
    remaining = []
    lines = []
    for arc in arcs:
        if arc.stage < arc.max_stage or arc.tick < ESCALATION_TICKS:
            remaining.append(arc)
            continue
        penalty = BREAKDOWN_PENALTIES.get(arc.type, DEFAULT_BREAKDOWN_PENALTY)
        nation.stats, _ = apply_effects(nation.stats, penalty)
        nation.regions = degrade_region(nation.regions, arc.region_id,
                                        BREAKDOWN_STABILITY_LOSS, BREAKDOWN_DEVELOPMENT_LOSS)
        line = f"[CRISIS BREAKDOWN] {arc.label} in {arc.region_name or 'the nation'} spiraled out of control."
        nation.add_log(line, config.history_log_cap)
        lines.append(line)
        nation.remember_key(arc.key, config.recent_issue_keys_cap)
        logger.warning(f"{nation.name}: {arc.label} broke down in {arc.region_name} ({arc.reason})")
    return remaining, lines


def _refresh(nation: "Nation", arcs: Sequence[CrisisArc], config: GameConfig) -> List[CrisisArc]:
    candidates = crisis_candidates(
        nation.id, nation.factions, nation.institutions, nation.active_policies,
        nation.regions, nation.recent_issue_keys, nation.issues_resolved, config)
    return merge_arcs(arcs, candidates, config.crisis_arcs_cap)


def resolve_arcs(
    nation: "Nation",
    effects: Mapping[str, float],
    crisis_id: Optional[str] = None,
    config: Optional[GameConfig] = None,
) -> List[str]:
    """
    Crisis step of a decision: removal, relief, advance, breakdowns, new
    candidates. Returns the breakdown log lines.
    """
    config = config or GameConfig()
    arcs = [a for a in nation.crisis_arcs if a.id != crisis_id]
    relief = (effects.get("happiness", 0) or 0) - (effects.get("crime", 0) or 0)
    if relief >= config.stability_relief_threshold:
        arcs = relieve_arcs(arcs)
    arcs = advance_arcs(arcs)
    arcs, lines = apply_breakdowns(nation, arcs, config)
    nation.crisis_arcs = _refresh(nation, arcs, config)
    return lines


def timer_pass(nation: "Nation", config: Optional[GameConfig] = None) -> None:
    """Periodic background escalation; breakdowns are left to the next decision."""
    config = config or GameConfig()
    nation.crisis_arcs = _refresh(nation, advance_arcs(nation.crisis_arcs), config)


def build_map_crises(arcs: Sequence[CrisisArc], cap: int = 5) -> List[CrisisArc]:
    """The arcs surfaced on the map, most severe first."""
    visible = [a for a in arcs if a.stage <= a.max_stage]
    visible.sort(key=lambda a: (-SEVERITY_RANK[a.severity], -a.pressure))
    return visible[:cap]


def crisis_title(arc: CrisisArc) -> str:
    return f"System Stress: {arc.label} in {arc.region_name or 'the Nation'}"


def crisis_to_issue(arc: CrisisArc, issue_id: str) -> Issue:
    """Map-event issue confronting one crisis arc."""
    region = arc.region_name or "the nation"
    options = [
        IssueOption(id=f"{issue_id}-{i + 1}", text=text.format(region=region),
                    supporter=supporter, effects=dict(effects))
        for i, (text, supporter, effects) in enumerate(content.CRISIS_RESPONSES[arc.type])
    ]
    description = (
        f"{arc.reason}. The {arc.label.lower()} in {region} has reached stage "
        f"{arc.stage} of {arc.max_stage} and is rated {arc.severity}."
    )
    return Issue(
        id=issue_id,
        title=crisis_title(arc),
        description=description,
        category=content.CRISIS_CATEGORIES[arc.type],
        options=options,
        is_map_event=True,
        metadata={
            "source": "crisis",
            "crisisType": arc.type,
            "severity": arc.severity,
            "crisisId": arc.id,
            "regionId": arc.region_id,
            "regionName": arc.region_name,
            "stage": arc.stage,
        },
    )

