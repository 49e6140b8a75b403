"""Bookmark action handlers for WaymarkApp."""

from __future__ import annotations

import logging
from pathlib import Path

from ..bookmarks import BookmarkFileError, write_bookmark_file
from ..navigation import make_link
from ..scanner import is_bookmark_file
from ..widgets import BookmarkList, LinkModal

logger = logging.getLogger(__name__)


class BookmarkActionsMixin:
    """Mixin providing bookmark actions (link, delete, save)."""

    def action_create_link(self) -> None:
        """Ask for a bookmark file, link it from the current file and jump to it."""
        self.push_screen(
            LinkModal(self.config.bookmark_directory),
            self._on_link_dismissed,
        )

    def _on_link_dismissed(self, result) -> None:
        if result is None:
            return

        target, name = result
        target = Path(target)

        if target.exists() and not is_bookmark_file(target):
            self.notify(f"Not a bookmark file: {target}", severity="error")
            return

        if not target.exists():
            try:
                write_bookmark_file(target, [])
            except OSError as e:
                self.notify(f"Cannot create {target}: {e}", severity="error")
                return
            self.notify(f"Created bookmark file {target.name}")
            self._scan_bookmark_files()

        bookmark = make_link(self.store, target, name or None)
        self._explicit_jump(bookmark.filename)

    def action_delete_bookmark(self) -> None:
        """Delete the highlighted bookmark after confirmation."""
        bookmark_list = self.query_one("#bookmark-list", BookmarkList)
        bookmark = bookmark_list.get_selected_bookmark()
        if bookmark is None:
            self.notify("No bookmark selected", severity="warning")
            return

        if getattr(self, "_pending_delete", None) == bookmark.name:
            # Second press: confirmed
            self._pending_delete = None
            self.store.remove_bookmark(bookmark.name)
            self.notify(f"Deleted {bookmark.name}")
            try:
                self.store.save_if_due()
            except (BookmarkFileError, OSError) as e:
                logger.warning("Save failed: %s", e)
                self.notify(f"Save failed: {e}", severity="error")
            self._refresh_bookmarks()
        else:
            self._pending_delete = bookmark.name
            self.notify(
                f"Press d again to delete {bookmark.name}",
                severity="warning",
                timeout=3,
            )

    def action_save(self) -> None:
        """Save the current bookmark file."""
        try:
            path = self.store.save()
        except (BookmarkFileError, OSError) as e:
            logger.warning("Save failed: %s", e)
            self.notify(f"Save failed: {e}", severity="error")
            return
        self.notify(f"Saved {path.name}")
