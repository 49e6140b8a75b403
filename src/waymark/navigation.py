"""Bookmark-file navigation backend for the jump coordinator."""

import logging
from pathlib import Path
from typing import Callable, Literal

from .bookmarks import (
    LINK_HANDLER,
    Bookmark,
    BookmarkFileError,
    BookmarkStore,
    write_bookmark_file,
)
from .jump import JumpCoordinator, LoadFailure, RedundantJump
from .paths import normalize

logger = logging.getLogger(__name__)

JumpMode = Literal["switch", "add"]


def link_name(target: str | Path) -> str:
    """Default bookmark name for a link to a bookmark file."""
    return f"Bookmark file: {Path(target).name}"


def make_link(store: BookmarkStore, target: str | Path, name: str | None = None) -> Bookmark:
    """Create a bookmark in store that points at the bookmark file target."""
    bookmark = Bookmark(
        name=name or link_name(target),
        filename=normalize(target),
        handler=LINK_HANDLER,
    )
    store.set_bookmark(bookmark)
    logger.info("Created link %r -> %s", bookmark.name, bookmark.filename)
    return bookmark


class BookmarkFileBackend:
    """Loads bookmark files into a BookmarkStore."""

    def __init__(self, store: BookmarkStore, mode: JumpMode = "switch") -> None:
        self.store = store
        self.mode = mode

    def build_identity(self, key: str) -> Bookmark:
        """Build the link record for a history key."""
        return Bookmark(name=link_name(key), filename=key, handler=LINK_HANDLER)

    def navigate(self, record: Bookmark) -> None:
        """Load the bookmark file named by record.

        Raises:
            LoadFailure: the file is missing or not a bookmark file, or the
                pending edits of the current file could not be saved.
        """
        path = Path(record.filename).expanduser()

        if (
            self.mode == "switch"
            and self.store.path is not None
            and self.store.is_dirty
            and self.store.autosave_enabled
        ):
            # Unsaved edits would be lost by the switch
            try:
                self.store.save()
            except (BookmarkFileError, OSError) as e:
                raise LoadFailure(f"Cannot save {self.store.path}: {e}") from e

        try:
            self.store.load(path, overwrite=(self.mode == "switch"))
        except BookmarkFileError as e:
            raise LoadFailure(str(e)) from e


def open_startup_file(
    coordinator: JumpCoordinator,
    default_file: Path,
    on_failure: Callable[[LoadFailure], None] | None = None,
) -> str:
    """Open the most recent bookmark file, falling back to default_file.

    The head of a non-empty history is reopened without being recorded
    again. If that fails, or there is no history, default_file is created
    when missing and jumped to.

    Returns:
        The key of the file that was opened.

    Raises:
        LoadFailure: default_file could not be loaded either.
    """
    ring = coordinator.ring
    if not ring.is_empty():
        try:
            coordinator.jump(ring.head, suppress_insert=True)
            return ring.head
        except LoadFailure as e:
            if on_failure is not None:
                on_failure(e)

    if not default_file.exists():
        write_bookmark_file(default_file, [])
        logger.info("Created default bookmark file %s", default_file)

    try:
        coordinator.jump(str(default_file))
    except RedundantJump:
        # The head already is the default file
        coordinator.jump(str(default_file), suppress_insert=True)
    return ring.head
