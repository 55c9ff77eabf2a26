"""
Game session: the single entry point used by runners and tests.

The session owns the active nation, the issue pipeline, the scheduler arena
and the debounced saver. Player operations take the nation's lock without
waiting and fail fast with DecisionInFlight; timer ticks wait for it.
"""

from contextlib import contextmanager
from typing import Dict, List, Optional
import random

from config import GameConfig
from crisis import build_map_crises, crisis_to_issue, CrisisArc
from generator import ContentGenerator, GenerationError, build_interpret_request
from issues import Issue, flavor_issue
from logger import get_logger
from nation import Nation, create_nation, nation_id
from pipeline import IssuePipeline
from resolution import InvalidDecision, ResolutionReport, resolve_decision, decree_option, with_decree
from scheduler import SchedulerArena
from storage import DebouncedSaver, InMemoryNationStore, NationStore

logger = get_logger()


class NoNationLoaded(Exception):
    """An operation needs an active nation and none is loaded."""


class DecisionInFlight(Exception):
    """Another operation on the same nation has not finished yet."""


class GameSession:

    def __init__(self, config: Optional[GameConfig] = None, store: Optional[NationStore] = None,
                 generator=None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.store = store if store is not None else InMemoryNationStore(self.config)
        if generator is None and self.config.generator_endpoint:
            generator = ContentGenerator(self.config.generator_endpoint, self.config.generation_timeout)
        self.generator = generator
        self.rng = rng or random.Random()
        self.pipeline = IssuePipeline(self.config, generator, self.rng)
        self.arena = SchedulerArena(self.config, self.rng)
        self.saver = DebouncedSaver(self.store, self.config.save_debounce_seconds)
        self.nation: Optional[Nation] = None

    # --- slots ---

    def create_nation(self, user_id: str, slot: int, name: str, **identity) -> Nation:
        nation = create_nation(user_id, slot, name, **identity)
        self._activate(nation)
        self.store.save(nation)
        return nation

    def load_nation(self, user_id: str, slot: int) -> Optional[Nation]:
        nation = self.store.load(user_id, slot)
        if nation is not None:
            self._activate(nation)
        return nation

    def delete_slot(self, user_id: str, slot: int) -> bool:
        key = nation_id(user_id, slot)
        self.saver.pending.pop(key, None)
        self.arena.drop(key)
        if self.nation is not None and self.nation.id == key:
            self.nation = None
        return self.store.delete(user_id, slot)

    def list_slots(self, user_id: str) -> List[Dict]:
        return self.store.list_slots(user_id)

    def _activate(self, nation: Nation) -> None:
        self.nation = nation
        self.arena.state(nation.id)

    def _require(self) -> Nation:
        if self.nation is None:
            raise NoNationLoaded("create or load a nation first")
        return self.nation

    @contextmanager
    def _exclusive(self, wait: bool = False):
        nation = self._require()
        lock = self.arena.state(nation.id).lock
        if not lock.acquire(blocking=wait):
            raise DecisionInFlight(f"{nation.name} is busy with another decision")
        try:
            yield nation
        finally:
            lock.release()

    def _commit(self, nation: Nation) -> None:
        self.nation = nation
        self.saver.schedule(nation)

    # --- player operations ---

    def generate_issue(self) -> Issue:
        """The pending issue, or a fresh one from the pipeline."""
        with self._exclusive() as nation:
            if nation.current_issue is not None:
                return nation.current_issue
            seen = self.arena.state(nation.id).seen_forced
            nation.current_issue = self.pipeline.next_issue(nation, seen)
            self._commit(nation)
            return nation.current_issue

    def select_option(self, option_id: str) -> ResolutionReport:
        with self._exclusive() as nation:
            new, report = resolve_decision(nation, option_id, config=self.config)
            self._commit(new)
            return report

    def respond(self, user_response: str) -> ResolutionReport:
        """Resolve the current issue with a free-text decree."""
        with self._exclusive() as nation:
            issue = nation.current_issue
            if issue is None:
                raise InvalidDecision("there is no issue awaiting a response")
            payload = None
            if self.generator is not None:
                request = build_interpret_request(nation, user_response, f"{issue.title}: {issue.description}")
                try:
                    payload = self.generator.interpret(request)
                except GenerationError as exc:
                    logger.warning(f"Could not interpret decree, recording it without effects: {exc}")
            option = decree_option(issue.id, user_response, payload)
            new, report = resolve_decision(nation, option.id, issue=with_decree(issue, option), config=self.config)
            self._commit(new)
            return report

    def map_crises(self) -> List[CrisisArc]:
        return build_map_crises(self._require().crisis_arcs, self.config.map_crises_cap)

    def crisis_issue(self, crisis_id: str) -> Optional[Issue]:
        """Open a surfaced crisis as the current issue; None if it is not on the map."""
        with self._exclusive() as nation:
            for arc in build_map_crises(nation.crisis_arcs, self.config.map_crises_cap):
                if arc.id == crisis_id:
                    issue_id = f"issue-{nation.issues_resolved + 1}-{arc.id}"
                    nation.current_issue = flavor_issue(crisis_to_issue(arc, issue_id), nation.era)
                    self._commit(nation)
                    return nation.current_issue
            return None

    # --- background ---

    def tick(self) -> List[str]:
        """One timer tick for the active nation; waits for any in-flight decision."""
        with self._exclusive(wait=True) as nation:
            lines = self.arena.tick(nation)
            self._commit(nation)
            self.saver.flush_due()
            return lines

    def flush(self) -> int:
        return self.saver.flush()
