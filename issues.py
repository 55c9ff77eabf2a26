"""
Issues: the decision points put to the player.

Besides the data model this module owns the text-level rules every issue goes
through before it is shown: repeat keys for short-term de-duplication, option
count normalization, era flavoring and the anachronism guard.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Sequence
import re

from config import PRE_INDUSTRIAL_ERAS, ANACHRONISM_ERAS
from stats import clean_effects
import content

MAX_OPTIONS = 5
MIN_OPTIONS = 3


@dataclass
class Consequence:
    """Delayed, probabilistic follow-up attached to an option."""
    text: str
    chance: float
    type: str = "downside"  # "benefit" or "downside"
    stat_effects: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "text": self.text,
            "chance": self.chance,
            "type": self.type,
            "statEffects": dict(self.stat_effects),
        }

    @classmethod
    def from_dict(cls, data) -> Optional["Consequence"]:
        if not isinstance(data, Mapping) or not data.get("text"):
            return None
        chance = data.get("chance", 0.5)
        if not isinstance(chance, (int, float)) or isinstance(chance, bool):
            chance = 0.5
        kind = data.get("type") if data.get("type") in ("benefit", "downside") else "downside"
        return cls(
            text=str(data["text"]),
            chance=max(0.0, min(1.0, float(chance))),
            type=kind,
            stat_effects=clean_effects(data.get("statEffects")),
        )


@dataclass
class IssueOption:
    id: str
    text: str
    supporter: str = ""
    effects: Dict[str, float] = field(default_factory=dict)
    consequence: Optional[Consequence] = None

    def to_dict(self) -> Dict:
        data = {
            "id": self.id,
            "text": self.text,
            "supporter": self.supporter,
            "effects": dict(self.effects),
        }
        if self.consequence is not None:
            data["consequence"] = self.consequence.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping, fallback_id: str = "opt") -> "IssueOption":
        return cls(
            id=str(data.get("id") or fallback_id),
            text=str(data.get("text") or "").strip(),
            supporter=str(data.get("supporter") or ""),
            effects=clean_effects(data.get("effects", data.get("impact"))),
            consequence=Consequence.from_dict(data.get("consequence")),
        )


@dataclass
class Issue:
    id: str
    title: str
    description: str
    category: str
    options: List[IssueOption]
    is_map_event: bool = False
    metadata: Dict = field(default_factory=dict)

    def option(self, option_id: str) -> Optional[IssueOption]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None

    @property
    def target_region_id(self) -> Optional[str]:
        return self.metadata.get("regionId")

    def to_dict(self) -> Dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "options": [o.to_dict() for o in self.options],
        }
        if self.is_map_event:
            data["isMapEvent"] = True
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data

    @classmethod
    def from_dict(cls, data) -> Optional["Issue"]:
        if not isinstance(data, Mapping) or not data.get("title"):
            return None
        issue_id = str(data.get("id") or "issue")
        options = [
            IssueOption.from_dict(o, f"{issue_id}-{i + 1}")
            for i, o in enumerate(data.get("options") or [])
            if isinstance(o, Mapping)
        ]
        metadata = data.get("metadata")
        return cls(
            id=issue_id,
            title=str(data["title"]),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or "Governance"),
            options=[o for o in options if o.text],
            is_map_event=bool(data.get("isMapEvent", False)),
            metadata=dict(metadata) if isinstance(metadata, Mapping) else {},
        )


def issue_from_payload(payload: Mapping, issue_id: str) -> Issue:
    """Build an issue from a generator-shaped dict (title/description/category/options)."""
    options = []
    for i, raw in enumerate(payload.get("options") or []):
        if not isinstance(raw, Mapping):
            continue
        opt = IssueOption.from_dict(raw, f"{issue_id}-{i + 1}")
        opt.id = f"{issue_id}-{i + 1}"
        if opt.text:
            options.append(opt)
    return Issue(
        id=issue_id,
        title=str(payload.get("title") or "").strip(),
        description=str(payload.get("description") or "").strip(),
        category=str(payload.get("category") or "Governance").strip(),
        options=options,
    )


# --- repeat keys ---

BOILERPLATE_WORDS = {
    "the", "a", "an", "of", "and", "or", "in", "on", "for", "to", "with", "at", "by",
    "our", "new", "great", "crisis", "debate", "question", "issue", "dilemma", "affair",
    "matter", "proposal", "problem", "controversy", "system", "stress",
}


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def normalize_title(title: str) -> str:
    """Title reduced to its distinctive words: 'The Grain Debate (Part II)' -> 'grain'."""
    text = re.sub(r"\([^)]*\)", " ", title.lower())
    words = [w for w in re.split(r"[^a-z0-9]+", text) if w and w not in BOILERPLATE_WORDS]
    return "-".join(words) or "untitled"


def repeat_key(issue: Issue) -> str:
    """Identity used by the short-term memory that blocks near-duplicate issues."""
    meta = issue.metadata or {}
    if meta.get("source") == "crisis" and meta.get("crisisType"):
        return f"crisis:{meta['crisisType']}:{meta.get('regionId') or 'national'}"
    return f"issue:{_slug(issue.category) or 'general'}:{normalize_title(issue.title)}"


# --- option count normalization ---

THEME_KEYWORDS = {
    "infrastructure": ["road", "bridge", "canal", "rail", "transit", "infrastructure",
                       "granar", "aqueduct", "port", "harbor", "wall", "housing"],
    "security": ["crime", "police", "guard", "army", "war", "border", "security",
                 "raid", "bandit", "surveillance", "militia", "legion"],
    "health": ["plague", "health", "disease", "hospital", "medic", "herb", "sick",
               "epidemic", "sanitation", "healer"],
    "culture": ["art", "festival", "religio", "temple", "culture", "faith", "ritual",
                "heritage", "shrine", "monument"],
    "economy": ["trade", "tax", "market", "econom", "coin", "tariff", "merchant",
                "industr", "tribute", "bank", "labor", "wage"],
    "governance": ["law", "council", "election", "court", "governance", "rights",
                   "vote", "freedom", "assembly", "succession", "civil"],
    "innovation": ["technolog", "research", "science", "invent", "innovation", "craft",
                   "universit", "education", "school", "scholar", "knowledge"],
    "food": ["food", "harvest", "farm", "grain", "hunt", "famine", "crop", "herd",
             "fishing", "irrigation"],
}


def classify_theme(title: str, category: str, option_texts: Sequence[str]) -> str:
    """Most-mentioned theme across title, category and options; ties go to declared order."""
    text = " ".join([title, category] + list(option_texts)).lower()
    best, best_count = "governance", 0
    for theme, keywords in THEME_KEYWORDS.items():
        count = sum(len(re.findall(r"\b" + re.escape(kw), text)) for kw in keywords)
        if count > best_count:
            best, best_count = theme, count
    return best


def _phrasing(era: str) -> str:
    return "ancient" if era in PRE_INDUSTRIAL_ERAS else "modern"


def _shown_key(text: str, era: str) -> str:
    """Option text as the player will read it in `era`, for duplicate checks."""
    return flavor_text(text, era).strip().lower()


def normalize_options(
    options: Sequence[IssueOption],
    desired: int,
    title: str,
    category: str,
    era: str,
    issue_id: str = "issue",
) -> List[IssueOption]:
    """
    Give an issue between min(desired, 3) and min(desired, 5) distinct choices.

    Duplicate texts are dropped (compared after era flavoring), the list is
    trimmed to min(5, desired), then canned options for the issue's theme and
    era (and after those, generic ones) are appended until that many exist.
    """
    target = min(MAX_OPTIONS, desired)
    seen = set()
    result: List[IssueOption] = []
    for opt in options:
        key = _shown_key(opt.text, era)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(opt)
    result = result[:target]
    if len(result) >= target:
        return result

    theme = classify_theme(title, category, [o.text for o in result])
    phrasing = _phrasing(era)
    pool = list(content.THEME_OPTIONS[theme][phrasing]) + list(content.GENERIC_OPTIONS[phrasing])

    extra = 0
    for text, supporter, effects in pool:
        if len(result) >= target:
            break
        key = _shown_key(text, era)
        if key in seen:
            continue
        seen.add(key)
        extra += 1
        result.append(IssueOption(
            id=f"{issue_id}-extra-{extra}",
            text=text,
            supporter=supporter,
            effects=dict(effects),
        ))
    return result


# --- era flavoring and anachronism guard ---

# Applied in order; longer forms come before the words they contain.
ERA_SUBSTITUTIONS = [
    (r"\btechnologies\b", "crafts"),
    (r"\btechnological\b", "artisanal"),
    (r"\btechnology\b", "craft knowledge"),
    (r"\binfrastructure\b", "roads and granaries"),
    (r"\bcyber", "signal"),
    (r"\binternet\b", "messenger network"),
    (r"\bdigital\b", "written"),
    (r"\beconomic\b", "mercantile"),
    (r"\beconomy\b", "trade"),
    (r"\bhealthcare\b", "healing"),
    (r"\bhospitals\b", "houses of healing"),
    (r"\bhospital\b", "house of healing"),
    (r"\bpolice\b", "watchmen"),
    (r"\bgovernment\b", "court"),
    (r"\bcitizens\b", "subjects"),
    (r"\bmedia\b", "town criers"),
    (r"\bbudget\b", "treasury"),
    (r"\bdata\b", "records"),
    (r"\bfactories\b", "workshops"),
    (r"\bfactory\b", "workshop"),
    (r"\bindustrial\b", "artisan"),
    (r"\bindustry\b", "craft guilds"),
    (r"\bpollution\b", "soot"),
    (r"\bvaccines\b", "remedies"),
    (r"\bvaccine\b", "remedy"),
    (r"\belectricity\b", "firelight"),
    (r"\bcorporations\b", "merchant houses"),
    (r"\bcorporation\b", "merchant house"),
]

BANNED_TERMS = re.compile(
    r"\b(ai|robot\w*|cyber\w*|nuclear|satellite\w*|internet|digital|genetic\w*|deepfake\w*|automation)\b",
    re.IGNORECASE,
)


def _match_case(original: str, replacement: str) -> str:
    if len(original) > 1 and original.isupper():
        return replacement.upper()
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def flavor_text(text: str, era: str) -> str:
    """Rewrite modern vocabulary into period phrasing for pre-industrial eras."""
    if era not in PRE_INDUSTRIAL_ERAS or not text:
        return text
    for pattern, replacement in ERA_SUBSTITUTIONS:
        text = re.sub(pattern, lambda m, r=replacement: _match_case(m.group(0), r), text, flags=re.IGNORECASE)
    return text


def flavor_issue(issue: Issue, era: str) -> Issue:
    if era not in PRE_INDUSTRIAL_ERAS:
        return issue
    return replace(
        issue,
        title=flavor_text(issue.title, era),
        description=flavor_text(issue.description, era),
        options=[
            replace(o, text=flavor_text(o.text, era), supporter=flavor_text(o.supporter, era))
            for o in issue.options
        ],
    )


def issue_text(issue: Issue) -> str:
    parts = [issue.title, issue.description] + [o.text for o in issue.options] + [o.supporter for o in issue.options]
    return " ".join(p for p in parts if p)


def is_anachronistic(issue: Issue, era: str) -> bool:
    """True when an early-era issue mentions technology that cannot exist yet."""
    if era not in ANACHRONISM_ERAS:
        return False
    return BANNED_TERMS.search(issue_text(issue)) is not None
