"""
Issue generation pipeline.

An ordered list of strategies is tried until one produces an issue:
branching ending, forced crisis, regional specialization project, era
project, external generation, local fallback. The local fallback never
fails, so the pipeline always returns an issue.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set
import random

from config import GameConfig, ERAS, era_index
from crisis import build_map_crises, crisis_to_issue
from generator import GenerationError, build_generation_request
from geography import weakest_region
from issues import (
    Issue, IssueOption, issue_from_payload, normalize_options, flavor_issue, flavor_text,
    is_anachronistic, repeat_key, MIN_OPTIONS,
)
from logger import get_logger
from nation import Nation
import content

logger = get_logger()

DESIRED_OPTIONS = {"low": 3, "medium": 4, "high": 5}
LAST_PROJECT_ERA = ERAS.index("Information Age")


def complexity_for(issues_resolved: int) -> str:
    if issues_resolved < 10:
        return "low"
    if issues_resolved < 30:
        return "medium"
    return "high"


@dataclass
class GenerationContext:
    """What the strategies must avoid for one generation cycle."""
    forbidden: List[str]
    recent_keys: Set[str]
    seen_forced: Set[str] = field(default_factory=set)

    def is_forbidden(self, title: str) -> bool:
        lowered = title.strip().lower()
        return any(lowered == t.strip().lower() for t in self.forbidden)

    def is_recent(self, issue: Issue) -> bool:
        return repeat_key(issue) in self.recent_keys

    def collides(self, issue: Issue, era: str) -> bool:
        """True when the issue repeats a used title or key, as written or as shown in `era`."""
        for candidate in (issue, flavor_issue(issue, era)):
            if self.is_forbidden(candidate.title) or self.is_recent(candidate):
                return True
        return False


def _fixed_issue(payload: Dict, issue_id: str, metadata: Dict) -> Issue:
    """Issue whose option ids carry meaning (spec-*, path-*) and must be kept."""
    return Issue(
        id=issue_id,
        title=payload["title"],
        description=payload["description"],
        category=payload["category"],
        options=[IssueOption.from_dict(o, f"{issue_id}-{i + 1}") for i, o in enumerate(payload["options"])],
        metadata=metadata,
    )


class IssuePipeline:
    """Produces the next issue for a nation."""

    def __init__(self, config: Optional[GameConfig] = None, generator=None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.generator = generator
        self.rng = rng or random.Random()
        self.strategies: List[Callable[[Nation, GenerationContext], Optional[Issue]]] = [
            self.branching_ending,
            self.forced_crisis,
            self.specialization_project,
            self.era_project,
            self.external_issue,
            self.local_fallback,
        ]

    def _new_id(self, nation: Nation) -> str:
        return f"issue-{nation.issues_resolved + 1}-{self.rng.randrange(16 ** 6):06x}"

    def next_issue(self, nation: Nation, seen_forced: Optional[Set[str]] = None) -> Issue:
        """Run the strategies in order; the winner's title is recorded as used."""
        context = GenerationContext(
            forbidden=nation.forbidden_titles(self.config.forbidden_window),
            recent_keys=set(nation.recent_issue_keys),
            seen_forced=seen_forced if seen_forced is not None else set(),
        )
        for strategy in self.strategies:
            issue = strategy(nation, context)
            if issue is not None:
                nation.remember_title(issue.title, self.config.used_titles_cap)
                logger.debug(f"{nation.name}: '{issue.title}' from {strategy.__name__}")
                return issue
        raise RuntimeError("no issue strategy produced an issue")

    # --- strategies, in priority order ---

    def branching_ending(self, nation: Nation, context: GenerationContext) -> Optional[Issue]:
        if nation.game_mode != "Eras" or nation.era != "Information Age":
            return None
        if nation.stats.get("technology", 0) < 100:
            return None
        return _fixed_issue(content.GREAT_DIVERGENCE, self._new_id(nation), {"projectType": "divergence"})

    def forced_crisis(self, nation: Nation, context: GenerationContext) -> Optional[Issue]:
        for arc in build_map_crises(nation.crisis_arcs, self.config.map_crises_cap):
            if arc.severity != "high" or arc.id in context.seen_forced:
                continue
            issue = crisis_to_issue(arc, self._new_id(nation))
            if context.collides(issue, nation.era):
                continue
            context.seen_forced.add(arc.id)
            return flavor_issue(issue, nation.era)
        return None

    def specialization_project(self, nation: Nation, context: GenerationContext) -> Optional[Issue]:
        cadence = self.config.specialization_cadence
        if nation.issues_resolved <= 0 or nation.issues_resolved % cadence != 0 or not nation.regions:
            return None
        region = weakest_region(nation.regions)
        issue = _fixed_issue(
            content.specialization_project(region.name), self._new_id(nation),
            {"projectType": "specialization", "regionId": region.id, "regionName": region.name},
        )
        if context.collides(issue, nation.era):
            return None
        return flavor_issue(issue, nation.era)

    def era_project(self, nation: Nation, context: GenerationContext) -> Optional[Issue]:
        cadence = self.config.era_project_cadence
        if nation.game_mode != "Eras" or era_index(nation.era) >= LAST_PROJECT_ERA:
            return None
        if nation.stats.get("technology", 0) >= 100:
            return None
        if nation.issues_resolved <= 0 or nation.issues_resolved % cadence != 0:
            return None
        issue = issue_from_payload(content.era_project(nation.era), self._new_id(nation))
        issue.metadata = {"projectType": "era"}
        if context.collides(issue, nation.era):
            return None
        return flavor_issue(issue, nation.era)

    def _call_generator(self, request: Dict) -> Dict:
        """Generator call bounded by the wall-clock budget; a late answer is abandoned."""
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(self.generator.generate, request)
            return future.result(timeout=self.config.generation_timeout)
        except FuturesTimeout:
            raise GenerationError(f"no answer within {self.config.generation_timeout:g}s")
        finally:
            executor.shutdown(wait=False)

    def external_issue(self, nation: Nation, context: GenerationContext) -> Optional[Issue]:
        if self.generator is None:
            return None
        complexity = complexity_for(nation.issues_resolved)
        desired = DESIRED_OPTIONS[complexity]
        request = build_generation_request(nation, complexity, desired, context.forbidden)
        try:
            payload = self._call_generator(request)
        except GenerationError as exc:
            logger.warning(f"Generator failed for {nation.name}, using local content: {exc}")
            return None

        issue = issue_from_payload(payload, self._new_id(nation))
        if not issue.title or len(issue.options) < MIN_OPTIONS:
            logger.warning(f"Discarded generated issue with {len(issue.options)} usable options")
            return None
        if is_anachronistic(issue, nation.era):
            logger.warning(f"Discarded anachronistic issue '{issue.title}' for the {nation.era}")
            return None
        if context.collides(issue, nation.era):
            logger.info(f"Discarded repeated issue '{issue.title}'")
            return None

        issue.options = normalize_options(issue.options, desired, issue.title, issue.category,
                                          nation.era, issue.id)
        return flavor_issue(issue, nation.era)

    def local_fallback(self, nation: Nation, context: GenerationContext) -> Optional[Issue]:
        samples = content.SAMPLE_ISSUES.get(nation.era) or content.SAMPLE_ISSUES["Information Age"]
        available = [
            s for s in samples
            if not context.is_forbidden(s["title"]) and not context.is_forbidden(flavor_text(s["title"], nation.era))
        ] or samples
        payload = self.rng.choice(available)
        issue = issue_from_payload(payload, self._new_id(nation))
        desired = DESIRED_OPTIONS[complexity_for(nation.issues_resolved)]
        issue.options = normalize_options(issue.options, desired, issue.title, issue.category,
                                          nation.era, issue.id)
        return flavor_issue(issue, nation.era)
