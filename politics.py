"""
Institutions and factions: two 0-100 scalar systems that drift with every
decision according to which stats the chosen option moved.
"""

from typing import Dict, Mapping, Tuple

from config import INSTITUTIONS, FACTIONS, GOVERNMENT_TYPES
from stats import round_half_up, clamp

# Linear weights: derived delta = sum(weight * stat delta)
INSTITUTION_WEIGHTS: Dict[str, Dict[str, float]] = {
    "governance": {"politicalFreedom": 0.5, "civilRights": 0.3, "crime": -0.2},
    "economy": {"economy": 0.6, "technology": 0.2, "gdp": 0.1},
    "welfare": {"happiness": 0.4, "healthcare": 0.4, "education": 0.2},
    "security": {"crime": -0.6, "civilRights": -0.1},
    "knowledge": {"education": 0.5, "technology": 0.4},
}

FACTION_WEIGHTS: Dict[str, Dict[str, float]] = {
    "citizens": {"happiness": 0.4, "politicalFreedom": 0.4, "civilRights": 0.2},
    "elites": {"economy": 0.35, "politicalFreedom": -0.35, "gdp": 0.1},
    "innovators": {"technology": 0.45, "education": 0.25, "politicalFreedom": 0.1},
    "traditionalists": {"technology": -0.3, "civilRights": -0.25, "environment": 0.2},
    "securityCouncil": {"crime": -0.5, "politicalFreedom": -0.2},
}

FACTION_NAMES = {
    "citizens": "Citizens' Assembly",
    "elites": "Merchant Elites",
    "innovators": "Innovators' Circle",
    "traditionalists": "Traditionalist Front",
    "securityCouncil": "Security Council",
}

INSTITUTION_NAMES = {
    "governance": "Governance",
    "economy": "Treasury & Commerce",
    "welfare": "Public Welfare",
    "security": "Public Security",
    "knowledge": "Academies & Archives",
}


def _weighted(weights: Mapping[str, float], effects: Mapping[str, float]) -> int:
    total = 0.0
    for stat, weight in weights.items():
        delta = effects.get(stat, 0) or 0
        total += weight * delta
    return round_half_up(total)


def institution_deltas(effects: Mapping[str, float]) -> Dict[str, int]:
    """Per-institution integer deltas for an option's effects map."""
    return {name: _weighted(INSTITUTION_WEIGHTS[name], effects) for name in INSTITUTIONS}


def faction_deltas(effects: Mapping[str, float], government_type: str) -> Dict[str, int]:
    """Per-faction integer deltas, including the government type's standing bias."""
    deltas = {name: _weighted(FACTION_WEIGHTS[name], effects) for name in FACTIONS}
    modifiers = GOVERNMENT_TYPES.get(government_type, {})
    for faction, bonus in modifiers.items():
        if faction in deltas:
            deltas[faction] += bonus
    return deltas


def normalize_scalars(raw, keys) -> Dict[str, float]:
    """Default every key to 50 and clamp stored values into [0, 100]."""
    values = {key: 50 for key in keys}
    if isinstance(raw, Mapping):
        for key in keys:
            value = raw.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                values[key] = clamp(value, 0, 100)
    return values


def apply_scalar_deltas(current: Mapping[str, float], deltas: Mapping[str, int]) -> Dict[str, float]:
    updated = dict(current)
    for key, delta in deltas.items():
        updated[key] = clamp(updated.get(key, 50) + delta, 0, 100)
    return updated


def derive_political_shift(
    institutions: Mapping[str, float],
    factions: Mapping[str, float],
    effects: Mapping[str, float],
    government_type: str,
) -> Tuple[Dict[str, float], Dict[str, float]]:
    """
    Apply one decision's effects to institutions and factions.
    Returns (new_institutions, new_factions).
    """
    new_institutions = apply_scalar_deltas(institutions, institution_deltas(effects))
    new_factions = apply_scalar_deltas(factions, faction_deltas(effects, government_type))
    return new_institutions, new_factions
