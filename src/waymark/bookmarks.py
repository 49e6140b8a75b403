"""JSON bookmark files and the in-memory store of the current one."""

import json
import logging
import os
import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

# Current on-disk format version
FORMAT_VERSION = 1

# Handler for bookmarks that point at another bookmark file
LINK_HANDLER = "bookmark-file"
FILE_HANDLER = "file"


class BookmarkFileError(Exception):
    """Raised when a bookmark file cannot be read or parsed."""


@dataclass
class Bookmark:
    """A named bookmark."""

    name: str
    filename: str
    handler: str = FILE_HANDLER
    position: int = 0
    annotation: str = ""
    created: str = field(default_factory=lambda: datetime.now().isoformat(timespec="seconds"))

    @property
    def is_link(self) -> bool:
        """True if this bookmark points at another bookmark file."""
        return self.handler == LINK_HANDLER

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Bookmark":
        """Build a bookmark from its JSON form, ignoring unknown keys."""
        try:
            name = data["name"]
            filename = data["filename"]
        except (KeyError, TypeError) as e:
            raise BookmarkFileError(f"Bookmark record missing field: {e}") from e
        try:
            position = int(data.get("position", 0) or 0)
        except (TypeError, ValueError):
            position = 0
        return cls(
            name=str(name),
            filename=str(filename),
            handler=str(data.get("handler", FILE_HANDLER)),
            position=position,
            annotation=str(data.get("annotation", "") or ""),
            created=str(data.get("created", "")),
        )


def read_bookmark_file(path: Path) -> list[Bookmark]:
    """Read and parse a bookmark file.

    Raises:
        BookmarkFileError: the file is missing, unreadable or malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise BookmarkFileError(f"No such bookmark file: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise BookmarkFileError(f"Cannot read bookmark file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise BookmarkFileError(f"Not a bookmark file: {path} ({e.msg})") from e

    if not isinstance(data, dict) or not isinstance(data.get("bookmarks"), list):
        raise BookmarkFileError(f"Not a bookmark file: {path}")

    return [Bookmark.from_dict(item) for item in data["bookmarks"]]


def write_bookmark_file(path: Path, bookmarks: list[Bookmark]) -> None:
    """Write bookmarks to path with an atomic replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "version": FORMAT_VERSION,
        "bookmarks": [b.to_dict() for b in bookmarks],
    }
    temp_path = path.with_suffix(path.suffix + ".tmp")
    temp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    os.replace(temp_path, path)


class BookmarkStore:
    """The bookmarks of the currently loaded bookmark file.

    Modifications are counted; save_if_due() writes the file once
    autosave_every modifications have accumulated (0 disables autosave).
    Subscribers registered with subscribe() are called after every save.
    """

    def __init__(self, path: Path | None = None, autosave_every: int = 1) -> None:
        self.path = path
        self.autosave_every = autosave_every
        self._bookmarks: dict[str, Bookmark] = {}
        self._modifications = 0
        self._subscribers: list[Callable[[Path], None]] = []
        self._write_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._bookmarks)

    @property
    def is_dirty(self) -> bool:
        """True if there are unsaved modifications."""
        return self._modifications > 0

    @property
    def autosave_enabled(self) -> bool:
        return self.autosave_every > 0

    def subscribe(self, callback: Callable[[Path], None]) -> None:
        """Register a callback invoked with the path after each save."""
        self._subscribers.append(callback)

    def load(self, path: Path, overwrite: bool = True) -> int:
        """Load a bookmark file.

        Args:
            path: Bookmark file to read.
            overwrite: Replace the current bookmarks and make path the
                current file. When False, merge the file's bookmarks into
                the current set; existing names are kept.

        Returns:
            Number of bookmarks loaded (or added, when merging).
        """
        loaded = read_bookmark_file(path)

        if overwrite:
            self._bookmarks = {b.name: b for b in loaded}
            self.path = path
            self._modifications = 0
            logger.info("Loaded %d bookmarks from %s", len(loaded), path)
            return len(loaded)

        added = 0
        for bookmark in loaded:
            if bookmark.name not in self._bookmarks:
                self._bookmarks[bookmark.name] = bookmark
                added += 1
        if added:
            self._modifications += 1
        logger.info("Added %d bookmarks from %s", added, path)
        return added

    def save(self, path: Path | None = None) -> Path:
        """Write the bookmarks to path (default: the current file)."""
        target = path or self.path
        if target is None:
            raise BookmarkFileError("No bookmark file to save to")

        with self._write_lock:
            write_bookmark_file(target, list(self._bookmarks.values()))
            self._modifications = 0
        logger.info("Saved %d bookmarks to %s", len(self._bookmarks), target)

        for callback in self._subscribers:
            callback(target)
        return target

    def save_if_due(self) -> None:
        """Save when the autosave threshold has been reached."""
        if not self.autosave_enabled or self.path is None:
            return
        if self._modifications >= self.autosave_every:
            self.save()

    def get(self, name: str) -> Bookmark | None:
        return self._bookmarks.get(name)

    def bookmarks(self) -> list[Bookmark]:
        """All bookmarks, in insertion order."""
        return list(self._bookmarks.values())

    def links(self) -> list[Bookmark]:
        """Bookmarks that point at other bookmark files."""
        return [b for b in self._bookmarks.values() if b.is_link]

    def set_bookmark(self, bookmark: Bookmark) -> None:
        """Add a bookmark, replacing any with the same name."""
        self._bookmarks[bookmark.name] = bookmark
        self._modifications += 1

    def remove_bookmark(self, name: str) -> bool:
        """Remove a bookmark by name. Returns True if it existed."""
        if name not in self._bookmarks:
            return False
        del self._bookmarks[name]
        self._modifications += 1
        return True
