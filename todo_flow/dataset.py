"""Sample and file-based task datasets used to populate a fresh store."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional

from .task_store import TaskStore

logger = logging.getLogger(__name__)


def fetch_stubbed_tasks() -> List[Dict[str, Any]]:
    """Return a deterministic list of placeholder task payloads."""

    return [
        {"text": "Buy milk", "priority": "low", "category": "Home"},
        {"text": "Prepare quarterly report", "priority": "high", "category": "Work"},
        {"text": "Call Bob about the weekend", "priority": "medium"},
        {"text": "Renew library card", "completed": True, "priority": "low", "category": "Errands"},
        {"text": "Review pull requests", "priority": "high", "category": "Work"},
    ]


def load_seed_file(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON array of task payloads.

    Raises:
        ValueError: if the file is not a JSON array of objects.
    """
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError(f"{path} must contain a JSON array of task objects")
    return data


def seed_store(store: TaskStore, items: Iterable[Dict[str, Any]]) -> int:
    """Insert payloads in order; returns how many tasks were created."""
    created = 0
    for item in items:
        store.create_task_from_dict(item)
        created += 1
    logger.info("Seeded %s tasks", created)
    return created


def build_store(
    *,
    source: Literal["stub", "file", "empty"] = "stub",
    seed_file: Optional[Path] = None,
    enforce_unique_usernames: bool = False,
) -> TaskStore:
    """Create a store and populate it from the chosen source."""
    store = TaskStore(enforce_unique_usernames=enforce_unique_usernames)
    if source == "stub":
        seed_store(store, fetch_stubbed_tasks())
    elif source == "file":
        if seed_file is None:
            raise ValueError("seed_file is required when source='file'")
        seed_store(store, load_seed_file(seed_file))
    elif source != "empty":
        raise ValueError(f"Unknown dataset source: {source}")
    return store
