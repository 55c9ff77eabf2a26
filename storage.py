"""
Nation persistence.

A nation is stored as one flat record per (user, slot): scalar columns plus
JSON-string blobs for the structured fields. Stores hold records; the
DebouncedSaver coalesces bursts of writes into one write per window.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
import json
import os
import time

from config import GameConfig
from logger import get_logger
from nation import Nation, SLOTS, nation_id

logger = get_logger()

BLOB_FIELDS = [
    "flag", "stats", "institutions", "factions", "regions", "crisisArcs", "activePolicies",
    "historyLog", "decisionHistory", "usedIssueTitles", "recentIssueKeys",
    "pendingConsequences", "borders", "currentIssue",
]


def serialize_nation(nation: Nation) -> Dict[str, Any]:
    data = nation.to_dict()
    record = {k: v for k, v in data.items() if k not in BLOB_FIELDS}
    for name in BLOB_FIELDS:
        record[name] = json.dumps(data[name])
    return record


def deserialize_nation(record: Dict[str, Any], config: Optional[GameConfig] = None) -> Nation:
    """Record to Nation; an unreadable blob falls back to that field's default."""
    data = {k: v for k, v in record.items() if k not in BLOB_FIELDS}
    for name in BLOB_FIELDS:
        raw = record.get(name)
        if raw is None:
            continue
        try:
            data[name] = json.loads(raw) if isinstance(raw, str) else raw
        except ValueError:
            logger.warning(f"Corrupt '{name}' blob in record {record.get('id')}; using defaults")
    return Nation.from_dict(data, config)


class NationStore:
    """Key-value store of nation records keyed by '{userId}-slot-{slot}'."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def _read(self, record_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def _write(self, record_id: str, record: Dict[str, Any]) -> None:
        raise NotImplementedError

    def _remove(self, record_id: str) -> bool:
        raise NotImplementedError

    def save(self, nation: Nation) -> None:
        self._write(nation.id, serialize_nation(nation))

    def load(self, user_id: str, slot: int) -> Optional[Nation]:
        record = self._read(nation_id(user_id, slot))
        if record is None:
            return None
        return deserialize_nation(record, self.config)

    def delete(self, user_id: str, slot: int) -> bool:
        return self._remove(nation_id(user_id, slot))

    def list_slots(self, user_id: str) -> List[Dict[str, Any]]:
        """One summary per slot; empty slots have name None."""
        summaries = []
        for slot in SLOTS:
            record = self._read(nation_id(user_id, slot))
            summaries.append({
                "slot": slot,
                "name": record.get("name") if record else None,
                "era": record.get("era") if record else None,
                "issuesResolved": record.get("issuesResolved", 0) if record else 0,
            })
        return summaries


class InMemoryNationStore(NationStore):

    def __init__(self, config: Optional[GameConfig] = None):
        super().__init__(config)
        self.records: Dict[str, Dict[str, Any]] = {}

    def _read(self, record_id):
        record = self.records.get(record_id)
        return dict(record) if record is not None else None

    def _write(self, record_id, record):
        self.records[record_id] = dict(record)

    def _remove(self, record_id):
        return self.records.pop(record_id, None) is not None


class JsonFileNationStore(NationStore):
    """One JSON file per record, replaced atomically on every write."""

    def __init__(self, directory: Path, config: Optional[GameConfig] = None):
        super().__init__(config)
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, record_id: str) -> Path:
        return self.directory / f"{record_id}.json"

    def _read(self, record_id):
        path = self._path(record_id)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                record = json.load(f)
        except ValueError:
            logger.error(f"Save file {path} is not valid JSON")
            return None
        return record if isinstance(record, dict) else None

    def _write(self, record_id, record):
        path = self._path(record_id)
        tmp = path.with_suffix(".json.tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)
        os.replace(tmp, path)

    def _remove(self, record_id):
        path = self._path(record_id)
        if not path.exists():
            return False
        path.unlink()
        return True


class DebouncedSaver:
    """
    Coalesces saves: the first schedule() of a burst sets the nation's write
    `window` seconds out, later calls only swap in the newer state. A steady
    stream of changes is therefore still written once per window.
    """

    def __init__(self, store: NationStore, window: float = 2.0, clock: Callable[[], float] = time.monotonic):
        self.store = store
        self.window = window
        self.clock = clock
        self.pending: Dict[str, Tuple[Nation, float]] = {}

    def schedule(self, nation: Nation) -> None:
        if nation.id in self.pending:
            _, due = self.pending[nation.id]
        else:
            due = self.clock() + self.window
        self.pending[nation.id] = (nation, due)

    def _write(self, key: str, nation: Nation) -> bool:
        try:
            self.store.save(nation)
        except OSError as exc:
            logger.error(f"Saving {key} failed, retrying in {self.window:g}s: {exc}")
            self.pending[key] = (nation, self.clock() + self.window)
            return False
        # a newer schedule may have replaced the entry while writing
        if self.pending.get(key, (None,))[0] is nation:
            del self.pending[key]
        return True

    def flush_due(self) -> int:
        """Write every nation whose window has elapsed. Returns the number written."""
        now = self.clock()
        due = [(key, n) for key, (n, at) in list(self.pending.items()) if at <= now]
        return sum(1 for key, n in due if self._write(key, n))

    def flush(self) -> int:
        """Write everything pending regardless of the window."""
        return sum(1 for key, (n, _) in list(self.pending.items()) if self._write(key, n))
