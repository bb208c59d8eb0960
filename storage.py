import json
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional

import config
from models import CalculationResult, HistoryEntry, InstitutionalSettings

DATA_DIR = config.DATA_DIR

# guards read-modify-write of history.json across threadpool workers
_history_lock = threading.Lock()


def _ensure_data_dir():
    os.makedirs(DATA_DIR, exist_ok=True)


def _history_path() -> str:
    return os.path.join(DATA_DIR, "history.json")


def save_settings(settings: dict):
    _ensure_data_dir()
    with open(os.path.join(DATA_DIR, "settings.json"), "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def load_settings() -> Optional[dict]:
    path = os.path.join(DATA_DIR, "settings.json")
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def default_settings() -> InstitutionalSettings:
    """Stored institutional settings, or the built-in defaults."""
    data = load_settings()
    if data is None:
        return InstitutionalSettings()
    return InstitutionalSettings(**data)


def _save_history(entries: list):
    _ensure_data_dir()
    with open(_history_path(), "w", encoding="utf-8") as f:
        json.dump(entries, f, indent=2)


def _load_history_raw() -> list:
    path = _history_path()
    if not os.path.exists(path):
        return []
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def append_history(results: CalculationResult, grading_scale: str,
                   student_name: Optional[str] = None) -> HistoryEntry:
    entry = HistoryEntry(
        id=uuid.uuid4().hex,
        created_at=datetime.now(timezone.utc).isoformat(),
        student_name=student_name,
        grading_scale=grading_scale,
        results=results,
    )
    with _history_lock:
        entries = _load_history_raw()
        entries.append(entry.model_dump(by_alias=True))
        _save_history(entries)
    return entry


def load_history() -> List[HistoryEntry]:
    return [HistoryEntry(**e) for e in _load_history_raw()]


def get_history_entry(entry_id: str) -> Optional[HistoryEntry]:
    for e in _load_history_raw():
        if e.get("id") == entry_id:
            return HistoryEntry(**e)
    return None


def delete_history_entry(entry_id: str) -> bool:
    with _history_lock:
        entries = _load_history_raw()
        updated = [e for e in entries if e.get("id") != entry_id]
        if len(updated) == len(entries):
            return False
        _save_history(updated)
    return True


def clear_history():
    with _history_lock:
        _save_history([])
