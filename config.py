"""
Configuration and constants for the nation simulation engine.
Tunable thresholds live on GameConfig; fixed game tables are module constants.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass
class GameConfig:
    """Engine configuration with gameplay-calibrated parameters."""

    # External text generator (None runs fully offline on local content)
    generator_endpoint: Optional[str] = None
    generation_timeout: float = 15.0  # seconds, wall clock, no retry

    # Persistence
    data_dir: Path = field(default_factory=lambda: Path("saves"))
    output_dir: Path = field(default_factory=lambda: Path("output"))
    save_debounce_seconds: float = 2.0

    # Background timer (one tick per minute while a nation is active)
    tick_seconds: int = 60
    consequence_every_ticks: int = 2
    crisis_every_ticks: int = 5  # 0 disables timer crisis passes

    # Bounded memories (FIFO)
    recent_issue_keys_cap: int = 18
    active_policies_cap: int = 12
    decision_history_cap: int = 100
    history_log_cap: int = 30
    used_titles_cap: int = 200
    forbidden_window: int = 40

    # Crisis engine
    crisis_arcs_cap: int = 8
    map_crises_cap: int = 5
    faction_pressure_threshold: int = 18
    institution_pressure_threshold: int = 60  # 100 - value; fires at 40 and below
    policy_pressure_threshold: int = 45
    stability_relief_threshold: int = 8

    # Issue cadence
    specialization_cadence: int = 6
    era_project_cadence: int = 4

    def shape_cadence(self, game_mode: str) -> int:
        """Decisions between region geometry ticks for a game mode."""
        return 3 if game_mode == "Eras" else 6


ERAS: List[str] = [
    "Stone Age",
    "Bronze Age",
    "Iron Age",
    "Classical Era",
    "Medieval Era",
    "Renaissance",
    "Industrial Revolution",
    "Atomic Age",
    "Information Age",
    "Cyberpunk Era",
    "Intergalactic Empire",
]

# Stone Age through Renaissance get archaic phrasing
PRE_INDUSTRIAL_ERAS = ERAS[:6]
# Stone Age through Medieval reject modern vocabulary outright
ANACHRONISM_ERAS = ERAS[:5]

GAME_MODES = ("Eternal", "Eras")

BOUNDED_STATS = [
    "economy", "civilRights", "politicalFreedom", "environment", "happiness",
    "crime", "education", "healthcare", "technology",
]
STAT_FLOORS = {"population": 1000, "gdp": 500}

DEFAULT_STATS: Dict[str, float] = {
    "economy": 50,
    "civilRights": 50,
    "politicalFreedom": 50,
    "population": 5000000,
    "environment": 50,
    "gdp": 25000,
    "happiness": 50,
    "crime": 50,
    "education": 50,
    "healthcare": 50,
    "technology": 0,
}

INSTITUTIONS = ["governance", "economy", "welfare", "security", "knowledge"]
FACTIONS = ["citizens", "elites", "innovators", "traditionalists", "securityCouncil"]

# Per-decision faction modifiers by government type
GOVERNMENT_TYPES = {
    "Democratic Republic": {"securityCouncil": 0, "citizens": 0},
    "Constitutional Monarchy": {"securityCouncil": 0, "citizens": 0},
    "Federal Republic": {"securityCouncil": 0, "citizens": 0},
    "Parliamentary Democracy": {"securityCouncil": 0, "citizens": 0},
    "Socialist Republic": {"securityCouncil": 0, "citizens": 0},
    "Libertarian Utopia": {"securityCouncil": 0, "citizens": 0},
    "Authoritarian State": {"securityCouncil": 3, "citizens": -2},
    "Theocracy": {"securityCouncil": 3, "citizens": -2},
    "Corporate State": {"securityCouncil": 0, "citizens": 0},
    "Anarchy": {"securityCouncil": 0, "citizens": 0},
}

FLAG_COLORS = [
    {"name": "Crimson", "primary": "#DC2626", "secondary": "#1F2937"},
    {"name": "Royal Blue", "primary": "#2563EB", "secondary": "#F3F4F6"},
    {"name": "Forest Green", "primary": "#16A34A", "secondary": "#FBBF24"},
    {"name": "Imperial Gold", "primary": "#EAB308", "secondary": "#1F2937"},
    {"name": "Deep Purple", "primary": "#7C3AED", "secondary": "#F3F4F6"},
    {"name": "Ocean Teal", "primary": "#0D9488", "secondary": "#F97316"},
]

STAT_LABELS = {
    "economy": "Economy",
    "civilRights": "Civil Rights",
    "politicalFreedom": "Political Freedom",
    "population": "Population",
    "environment": "Environment",
    "gdp": "GDP per Capita",
    "happiness": "Happiness",
    "crime": "Crime Rate",
    "education": "Education",
    "healthcare": "Healthcare",
    "technology": "Technology",
}

# Era-specific names for the same underlying stat
ERA_STAT_LABELS = {
    "Stone Age": {"economy": "Calories", "environment": "Warmth",
                  "education": "Ancestral Wisdom", "healthcare": "Herbalism"},
    "Industrial Revolution": {"economy": "Industrial Output", "environment": "Ecological Impact"},
    "Atomic Age": {"economy": "Industrial Output", "environment": "Ecological Impact"},
    "Cyberpunk Era": {"economy": "Compute Power", "environment": "Neural Stability",
                      "education": "Data Uplink", "healthcare": "Biomodification"},
    "Intergalactic Empire": {"economy": "Compute Power", "environment": "Neural Stability",
                             "education": "Data Uplink", "healthcare": "Biomodification"},
}


def stat_label(stat: str, era: Optional[str] = None) -> str:
    """Display name of a stat, using the era's vocabulary where it has one."""
    era_labels = ERA_STAT_LABELS.get(era or "", {})
    return era_labels.get(stat, STAT_LABELS.get(stat, stat))


def era_index(era: str) -> int:
    """Position of an era in ERAS; unknown eras count as the first."""
    try:
        return ERAS.index(era)
    except ValueError:
        return 0
