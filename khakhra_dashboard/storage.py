"""
storage.py — The durable blob: the whole AppState in one JSON file.

Read once at startup, overwritten wholesale after every change.
"""

import json
import logging
import os

from khakhra_dashboard.models import AppState

logger = logging.getLogger(__name__)


def load_state(path: str):
    """Return the stored AppState, or None if the file is missing or unreadable."""
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return AppState.from_dict(json.load(f))
    except (OSError, ValueError, TypeError, KeyError):
        logger.exception("Failed to load stored app state from %s", path)
        return None


def save_state(path: str, state: AppState) -> None:
    """Write the state atomically (temp file + replace)."""
    tmp = path + ".tmp"
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(state.to_dict(), f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)
