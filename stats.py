"""
Stat model: bounded 0-100 indicators and percentage-growth quantities.
"""

import math
from numbers import Number
from typing import Dict, Mapping, Tuple

from config import BOUNDED_STATS, STAT_FLOORS, DEFAULT_STATS


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value, low, high):
    return max(low, min(high, value))


def _is_number(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool) and math.isfinite(value)


def apply_delta(stat: str, current, delta):
    """
    Apply one effect to one stat.

    Bounded stats move by `delta` points and are clamped to [0, 100].
    Population and GDP treat `delta` as a percentage change and never drop
    below their floor. Unknown stats and non-numeric deltas are a no-op.
    """
    if not _is_number(delta):
        return current
    if stat in BOUNDED_STATS:
        return clamp(current + delta, 0, 100)
    if stat in STAT_FLOORS:
        return max(STAT_FLOORS[stat], round_half_up(current * (1 + delta / 100.0)))
    return current


def apply_effects(stats: Mapping[str, float], effects: Mapping[str, float]) -> Tuple[Dict[str, float], Dict[str, float]]:
    """
    Apply an effects map to a stats dict.
    Returns (new_stats, realized_changes); the input dict is not modified.
    """
    new_stats = dict(stats)
    changes: Dict[str, float] = {}
    for stat, delta in (effects or {}).items():
        if stat not in new_stats:
            continue
        before = new_stats[stat]
        after = apply_delta(stat, before, delta)
        if after != before:
            changes[stat] = after - before
        new_stats[stat] = after
    return new_stats, changes


def clean_effects(effects) -> Dict[str, float]:
    """Keep only known stats with numeric deltas."""
    if not isinstance(effects, Mapping):
        return {}
    known = set(BOUNDED_STATS) | set(STAT_FLOORS)
    return {k: v for k, v in effects.items() if k in known and _is_number(v)}


def normalize_stats(raw) -> Dict[str, float]:
    """Fill missing stats with defaults and pull stored values back into range."""
    stats = dict(DEFAULT_STATS)
    if isinstance(raw, Mapping):
        for key, value in raw.items():
            if key in stats and _is_number(value):
                stats[key] = value
    for key in BOUNDED_STATS:
        stats[key] = clamp(stats[key], 0, 100)
    for key, floor in STAT_FLOORS.items():
        stats[key] = max(floor, stats[key])
    return stats
