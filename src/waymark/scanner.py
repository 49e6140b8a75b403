"""Discovery of bookmark files on disk."""

import json
from pathlib import Path

SUPPORTED_EXTENSIONS = {".bmk", ".bookmarks"}


def is_bookmark_file(path: Path) -> bool:
    """Check that path has a bookmark-file suffix and a bookmarks list."""
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS or not path.is_file():
        return False
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return False
    return isinstance(data, dict) and isinstance(data.get("bookmarks"), list)


def find_bookmark_files(directory: Path) -> list[Path]:
    """Recursively find bookmark files in a directory."""
    if not directory.exists():
        return []

    files = []
    try:
        for path in directory.rglob("*"):
            if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS:
                files.append(path)
    except PermissionError:
        pass

    return sorted(files)
