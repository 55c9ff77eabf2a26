"""
Regions of the nation: named sub-territories with a polygon outline on a
0-100 map canvas, development/stability scalars and a long-term specialization.

Outline changes are driven by a string-seeded hash rather than a stateful PRNG
so that replaying a history reproduces the same map.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
import math

import numpy as np

from config import era_index
from stats import clamp, round_half_up

MAP_MIN = 8.0
MAP_MAX = 92.0

Point = Tuple[float, float]


class TerrainType(Enum):
    PLAINS = "plains"
    HIGHLANDS = "highlands"
    COASTAL = "coastal"
    RIVERLAND = "riverland"
    INDUSTRIAL = "industrial"
    FRONTIER = "frontier"


class Specialization(Enum):
    AGRARIAN = "agrarian"
    INDUSTRIAL = "industrial"
    TRADE = "trade"
    FORTRESS = "fortress"
    SCHOLARLY = "scholarly"


@dataclass
class Region:
    id: str
    name: str
    terrain: TerrainType
    specialization: Specialization
    shape: List[Point]
    development: float = 50.0
    stability: float = 50.0
    population_share: float = 0.25

    def centroid(self) -> Point:
        return polygon_centroid(self.shape)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "terrain": self.terrain.value,
            "specialization": self.specialization.value,
            "shape": [{"x": x, "y": y} for x, y in self.shape],
            "development": self.development,
            "stability": self.stability,
            "populationShare": self.population_share,
        }

    @classmethod
    def from_dict(cls, data: Mapping, fallback: Optional["Region"] = None) -> "Region":
        """Build a region from stored data, repairing anything out of range."""
        base = fallback or DEFAULT_REGIONS[0]
        shape = _parse_shape(data.get("shape"))
        if len(shape) < 3:
            shape = list(base.shape)
        return cls(
            id=str(data.get("id") or base.id),
            name=str(data.get("name") or base.name),
            terrain=_parse_enum(TerrainType, data.get("terrain"), base.terrain),
            specialization=_parse_enum(Specialization, data.get("specialization"), base.specialization),
            shape=shape,
            development=clamp(_number(data.get("development"), base.development), 0, 100),
            stability=clamp(_number(data.get("stability"), base.stability), 0, 100),
            population_share=_number(data.get("populationShare"), base.population_share),
        )


DEFAULT_REGIONS: List[Region] = [
    Region("r-heartland", "Heartland", TerrainType.PLAINS, Specialization.AGRARIAN,
           [(40, 40), (58, 38), (62, 52), (50, 60), (38, 52)],
           development=55, stability=62, population_share=0.34),
    Region("r-coast", "Coastal March", TerrainType.COASTAL, Specialization.TRADE,
           [(60, 30), (78, 36), (82, 52), (68, 58), (58, 48)],
           development=58, stability=55, population_share=0.26),
    Region("r-highlands", "Highland Reach", TerrainType.HIGHLANDS, Specialization.FORTRESS,
           [(20, 24), (38, 28), (34, 44), (18, 42)],
           development=42, stability=58, population_share=0.18),
    Region("r-frontier", "Frontier Marches", TerrainType.FRONTIER, Specialization.AGRARIAN,
           [(22, 56), (38, 54), (46, 74), (30, 84), (16, 72)],
           development=35, stability=48, population_share=0.22),
]


def _number(value, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return value
    return default


def _parse_enum(enum_cls, value, default):
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return default


def _parse_shape(raw) -> List[Point]:
    points: List[Point] = []
    if not isinstance(raw, (list, tuple)):
        return points
    for p in raw:
        if isinstance(p, Mapping):
            x, y = p.get("x"), p.get("y")
        elif isinstance(p, (list, tuple)) and len(p) == 2:
            x, y = p
        else:
            continue
        if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
            continue
        points.append((clamp(x, MAP_MIN, MAP_MAX), clamp(y, MAP_MIN, MAP_MAX)))
    return points


def default_regions() -> List[Region]:
    return [replace(r, shape=list(r.shape)) for r in DEFAULT_REGIONS]


def normalize_regions(raw) -> List[Region]:
    """Regions from stored data; seeds the defaults when none are stored."""
    if not isinstance(raw, list) or not raw:
        return default_regions()
    regions = []
    for idx, item in enumerate(raw):
        if isinstance(item, Region):
            regions.append(item)
        elif isinstance(item, Mapping):
            fallback = DEFAULT_REGIONS[idx % len(DEFAULT_REGIONS)]
            regions.append(Region.from_dict(item, fallback))
    return regions or default_regions()


def hash_seed(seed: str) -> int:
    """32-bit FNV-1a hash of a string; the only randomness source for geometry."""
    h = 0x811C9DC5
    for byte in seed.encode("utf-8"):
        h ^= byte
        h = (h * 0x01000193) & 0xFFFFFFFF
    return h


def seeded_offset(seed: str, amplitude: int) -> int:
    """Integer in [-amplitude, amplitude] determined by the seed."""
    return hash_seed(seed) % (2 * amplitude + 1) - amplitude


def polygon_centroid(shape: Sequence[Point]) -> Point:
    pts = np.asarray(shape, dtype=float)
    c = pts.mean(axis=0)
    return float(c[0]), float(c[1])


def find_region(regions: Sequence[Region], region_id: Optional[str]) -> Optional[Region]:
    for region in regions:
        if region.id == region_id:
            return region
    return None


def pick_region(regions: Sequence[Region], seed: str) -> Region:
    return regions[hash_seed(seed) % len(regions)]


def weakest_region(regions: Sequence[Region]) -> Region:
    """Region with the lowest development + stability (first one on ties)."""
    return min(regions, key=lambda r: r.development + r.stability)


def shape_amplitude(era: str) -> int:
    return int(clamp(math.floor(era_index(era) / 3) + 1, 1, 4))


def _sign(value) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def policy_shape_bias(region: Region, effects: Mapping[str, float], targeted: bool) -> Tuple[float, float, float]:
    """
    Directional drift and scale for one region's outline.
    Returns (dx, dy, scale).
    """
    dx = dy = 0.0
    grow = 0.0

    if region.specialization == Specialization.TRADE:
        dx += 0.8
    elif region.specialization == Specialization.FORTRESS:
        grow += 0.02
    elif region.specialization == Specialization.INDUSTRIAL:
        dy += 0.8
    elif region.specialization == Specialization.SCHOLARLY:
        dy -= 0.8

    dx += 0.6 * _sign(effects.get("economy", 0) or 0)
    dy += 0.6 * -_sign(effects.get("environment", 0) or 0)
    grow += 0.01 * _sign((effects.get("technology", 0) or 0) + (effects.get("education", 0) or 0))

    weight = 1.8 if targeted else 0.6
    scale = clamp(1.0 + grow * weight, 0.94, 1.08)
    return dx * weight, dy * weight, scale


def should_evolve_shapes(issues_resolved: int, option_id: str, cadence: int) -> bool:
    if str(option_id).startswith("spec-"):
        return True
    return cadence > 0 and issues_resolved % cadence == 0


def evolve_shape(
    nation_id: str,
    region: Region,
    issues_resolved: int,
    era: str,
    option_id: str,
    effects: Mapping[str, float],
    targeted: bool = False,
) -> List[Point]:
    """New outline for one region; a pure function of its arguments."""
    amplitude = shape_amplitude(era)
    base = f"{nation_id}:{region.id}:{issues_resolved}:{era}:{option_id}"

    pts = np.asarray(region.shape, dtype=float)
    jitter = np.array([
        (seeded_offset(f"{base}:{i}:x", amplitude), seeded_offset(f"{base}:{i}:y", amplitude))
        for i in range(len(pts))
    ], dtype=float)
    pts = pts + jitter

    dx, dy, scale = policy_shape_bias(region, effects, targeted)
    center = pts.mean(axis=0)
    out = center + (pts - center) * scale + np.array([dx, dy])
    out = np.clip(out, MAP_MIN, MAP_MAX)
    return [(round(float(x), 2), round(float(y), 2)) for x, y in out]


def evolve_region_shapes(
    nation_id: str,
    regions: Sequence[Region],
    issues_resolved: int,
    era: str,
    option_id: str,
    effects: Mapping[str, float],
    target_region_id: Optional[str] = None,
) -> List[Region]:
    return [
        replace(r, shape=evolve_shape(nation_id, r, issues_resolved, era, option_id, effects,
                                      targeted=(r.id == target_region_id)))
        for r in regions
    ]


def apply_region_deltas(
    regions: Sequence[Region],
    effects: Mapping[str, float],
    target_region_id: Optional[str] = None,
) -> List[Region]:
    """Shift every region's stability/development with a decision's effects."""
    happiness = effects.get("happiness", 0) or 0
    economy = effects.get("economy", 0) or 0
    crime = effects.get("crime", 0) or 0
    education = effects.get("education", 0) or 0
    technology = effects.get("technology", 0) or 0

    stability_delta = round_half_up(0.3 * happiness + 0.2 * economy - 0.3 * crime)
    development_delta = round_half_up(0.3 * economy + 0.25 * education + 0.25 * technology)

    updated = []
    for r in regions:
        s, d = stability_delta, development_delta
        if r.id == target_region_id:
            s += 3
            d += 2
        updated.append(replace(
            r,
            stability=clamp(r.stability + s, 0, 100),
            development=clamp(r.development + d, 0, 100),
        ))
    return updated


def degrade_region(regions: Sequence[Region], region_id: Optional[str], stability: float, development: float) -> List[Region]:
    return [
        replace(r,
                stability=clamp(r.stability - stability, 0, 100),
                development=clamp(r.development - development, 0, 100))
        if r.id == region_id else r
        for r in regions
    ]


def set_specialization(regions: Sequence[Region], region_id: Optional[str], specialization: str) -> List[Region]:
    spec = _parse_enum(Specialization, specialization, None)
    if spec is None:
        return list(regions)
    return [replace(r, specialization=spec) if r.id == region_id else r for r in regions]
