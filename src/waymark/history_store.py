"""Persisted history ring state."""

import json
import logging
import os
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

# Thread lock for history writes
_write_lock = threading.Lock()


def load_history(path: Path, capacity: int) -> list[str]:
    """Load the saved history keys, most recent first.

    Missing or unreadable files yield an empty history.
    """
    if not path.exists():
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        entries = data.get("history", [])
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, AttributeError) as e:
        logger.warning("Ignoring unreadable history file %s: %s", path, e)
        return []

    if not isinstance(entries, list):
        return []

    return [e for e in entries if isinstance(e, str) and e][:capacity]


def save_history(path: Path, entries: list[str], capacity: int) -> None:
    """Save history keys with atomic write."""
    with _write_lock:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(".json.tmp")
        temp_path.write_text(
            json.dumps({"history": list(entries)[:capacity]}, indent=2),
            encoding="utf-8",
        )
        os.replace(temp_path, path)
