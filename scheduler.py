"""
Per-nation background scheduling.

Each active nation has a SchedulerState in the arena: its operation lock,
its timer tick counter and the crises already forced on it this session.
A timer tick fires delayed consequences every second tick and a crisis
escalation pass every few ticks.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set
import random
import threading

from config import GameConfig
from crisis import timer_pass
from logger import get_logger
from nation import Nation
from stats import apply_effects

logger = get_logger()


@dataclass
class SchedulerState:
    nation_id: str
    lock: threading.Lock = field(default_factory=threading.Lock)
    ticks: int = 0
    seen_forced: Set[str] = field(default_factory=set)


def process_consequences(nation: Nation, rng: random.Random, config: Optional[GameConfig] = None) -> Optional[str]:
    """
    Roll one randomly picked pending consequence.

    On success its stat effects apply and it leaves the queue; on failure the
    queue is left as it was. Returns the log line when one fired.
    """
    config = config or GameConfig()
    if not nation.pending_consequences:
        return None
    idx = rng.randrange(len(nation.pending_consequences))
    pending = nation.pending_consequences[idx]
    if rng.random() >= pending.consequence.chance:
        return None

    nation.stats, _ = apply_effects(nation.stats, pending.consequence.stat_effects)
    del nation.pending_consequences[idx]
    line = f"[CONSEQUENCE] {pending.consequence.text} (after '{pending.issue_title}')"
    nation.add_log(line, config.history_log_cap)
    logger.info(f"{nation.name}: {line}")
    return line


class SchedulerArena:
    """Scheduler states keyed by nation id."""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.states: Dict[str, SchedulerState] = {}

    def state(self, nation_id: str) -> SchedulerState:
        if nation_id not in self.states:
            self.states[nation_id] = SchedulerState(nation_id)
        return self.states[nation_id]

    def drop(self, nation_id: str) -> None:
        self.states.pop(nation_id, None)

    def tick(self, nation: Nation) -> List[str]:
        """
        Advance the nation's timer by one tick. The caller holds the nation's
        lock; `nation` is updated in place. Returns new log lines.
        """
        state = self.state(nation.id)
        state.ticks += 1
        lines = []

        every = self.config.consequence_every_ticks
        if every > 0 and state.ticks % every == 0:
            line = process_consequences(nation, self.rng, self.config)
            if line:
                lines.append(line)

        every = self.config.crisis_every_ticks
        if every > 0 and state.ticks % every == 0:
            timer_pass(nation, self.config)
            logger.debug(f"{nation.name}: timer crisis pass, {len(nation.crisis_arcs)} active arcs")

        return lines
