"""
Client for the external issue generator.

The generator is a single HTTP endpoint that writes issues (mode "generate")
and interprets free-text decrees (mode "interpret"). Any failure surfaces as
GenerationError; callers recover with local content.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional
import json

import requests

from logger import get_logger

if TYPE_CHECKING:
    from nation import Nation

logger = get_logger()

MIN_GENERATED_OPTIONS = 3


class GenerationError(Exception):
    """The generator failed, timed out or returned something unusable."""


def extract_json(text: str) -> Dict[str, Any]:
    """Parse a JSON object, tolerating code fences and chatter around it."""
    if not text or not text.strip():
        raise GenerationError("empty response body")
    out = text.strip().replace("```json", "```")
    if out.startswith("```"):
        out = out.strip("`").strip()
    try:
        data = json.loads(out)
    except ValueError:
        start, end = out.find("{"), out.rfind("}")
        if start == -1 or end <= start:
            raise GenerationError("no JSON object in response")
        try:
            data = json.loads(out[start:end + 1])
        except ValueError as exc:
            raise GenerationError(f"unparseable response: {exc}") from exc
    if not isinstance(data, dict):
        raise GenerationError("response is not a JSON object")
    return data


def _recent_history(nation: "Nation", count: int = 5) -> List[Dict]:
    return [
        {"title": d.get("issueTitle"), "choice": d.get("optionText"), "effects": d.get("effects", {})}
        for d in nation.decision_history[-count:]
    ]


def build_generation_request(
    nation: "Nation",
    complexity: str,
    desired_option_count: int,
    forbidden: List[str],
) -> Dict[str, Any]:
    return {
        "mode": "generate",
        "era": nation.era,
        "stats": dict(nation.stats),
        "history": _recent_history(nation),
        "historyLog": list(nation.history_log[-10:]),
        "institutions": dict(nation.institutions),
        "factions": dict(nation.factions),
        "activePolicies": [p.to_dict() for p in nation.active_policies[-5:]],
        "complexity": complexity,
        "desiredOptionCount": desired_option_count,
        "forbidden": list(forbidden),
        "nationName": nation.name,
        "motto": nation.motto,
        "leader": nation.leader,
        "governmentType": nation.government_type,
    }


def build_interpret_request(nation: "Nation", user_response: str, crisis_context: str) -> Dict[str, Any]:
    return {
        "mode": "interpret",
        "nationName": nation.name,
        "governmentType": nation.government_type,
        "era": nation.era,
        "stats": dict(nation.stats),
        "crisisContext": crisis_context,
        "userResponse": user_response,
    }


class ContentGenerator:
    """HTTP client for the generator endpoint."""

    def __init__(self, endpoint: str, timeout: float = 15.0, session: Optional[Any] = None):
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            r = self.session.post(
                self.endpoint,
                json=payload,
                timeout=(3, max(4, int(self.timeout))),
            )
            r.raise_for_status()
        except requests.RequestException as exc:
            raise GenerationError(f"{payload.get('mode')} request failed: {exc}") from exc
        return extract_json(r.text)

    def generate(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Issue payload: {title, description, category, options}."""
        data = self._post(request)
        options = data.get("options")
        if not data.get("title") or not isinstance(options, list):
            raise GenerationError("response is missing title or options")
        if len(options) < MIN_GENERATED_OPTIONS:
            raise GenerationError(f"only {len(options)} options generated")
        return data

    def interpret(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Decree payload: {text, effects, consequence?}."""
        data = self._post(request)
        if not isinstance(data.get("effects", data.get("impact")), dict):
            raise GenerationError("interpretation has no effects")
        return data
