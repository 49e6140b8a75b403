"""Main Textual application for Waymark."""

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header
from textual.worker import Worker

from .actions import BookmarkActionsMixin, NavigationActionsMixin
from .bookmarks import BookmarkFileError, BookmarkStore
from .config import Config
from .history_store import load_history, save_history
from .jump import EmptyHistory, JumpCoordinator, LoadFailure, RedundantJump
from .navigation import BookmarkFileBackend, open_startup_file
from .ring import HistoryRing
from .scanner import find_bookmark_files
from .watcher import BookmarkDirectoryWatcher
from .widgets import BookmarkDetail, BookmarkFileList, BookmarkList, HistoryList

logger = logging.getLogger(__name__)


class WaymarkApp(NavigationActionsMixin, BookmarkActionsMixin, App):
    """Waymark - Bookmark File Navigator TUI."""

    TITLE = "Waymark"
    SUB_TITLE = "Bookmark File Navigator"

    CSS = """
    #main-container {
        width: 100%;
        height: 1fr;
    }

    #left-panel {
        width: 35%;
        height: 100%;
    }

    #history-list {
        height: 50%;
        border: solid $accent;
    }

    #history-list:focus-within {
        border: solid cyan;
    }

    #file-list {
        height: 50%;
        border: solid $warning;
    }

    #file-list:focus-within {
        border: solid yellow;
    }

    #right-panel {
        width: 65%;
        height: 100%;
    }

    #bookmark-list {
        height: 45%;
        border: solid $primary;
    }

    #bookmark-list:focus-within {
        border: solid magenta;
    }

    #detail {
        height: 55%;
        border: solid $success;
    }

    #detail:focus-within {
        border: solid green;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("]", "cycle_next", "Next File"),
        Binding("[", "cycle_previous", "Prev File"),
        Binding("j", "jump_to_selected", "Jump"),
        Binding("l", "create_link", "Link"),
        Binding("d", "delete_bookmark", "Delete"),
        Binding("s", "save", "Save"),
        Binding("tab", "focus_next", "Next Panel", show=False),
        Binding("shift+tab", "focus_previous", "Prev Panel", show=False),
        Binding("?", "help", "Help"),
    ]

    # Focus order: history -> bookmarks -> detail -> files (clockwise)
    FOCUS_ORDER = [
        "history-list-view",
        "bookmark-list-view",
        "detail",
        "files-list-view",
    ]

    def __init__(self, config: Config) -> None:
        super().__init__()
        self.config = config
        self._watcher: BookmarkDirectoryWatcher | None = None
        self._pending_delete: str | None = None
        self._closing = False

        self.store = BookmarkStore(autosave_every=config.autosave_every)
        self.store.subscribe(self._on_store_saved)

        entries: list[str] = []
        if config.history.persist:
            entries = load_history(config.get_history_path(), config.history.capacity)

        self.coordinator = JumpCoordinator(
            BookmarkFileBackend(self.store, mode=config.jump_mode),
            persistence=self.store,
            ring=HistoryRing(config.history.capacity, entries),
            notify=self._status,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-container"):
            with Vertical(id="left-panel"):
                yield HistoryList(id="history-list", classes="panel")
                yield BookmarkFileList(
                    root=self.config.bookmark_directory,
                    id="file-list",
                    classes="panel",
                )
            with Vertical(id="right-panel"):
                yield BookmarkList(id="bookmark-list", classes="panel")
                yield BookmarkDetail(id="detail", classes="panel")
        yield Footer()

    def on_mount(self) -> None:
        """Load the starting bookmark file and start watching for changes."""
        self._open_initial_file()
        self._refresh_views()

        self.query_one("#bookmark-list", BookmarkList).list_view.focus()

        self._watcher = BookmarkDirectoryWatcher(self.config, self._on_files_changed)
        self._watcher.start()

        self._scan_bookmark_files()

    def _open_initial_file(self) -> None:
        """Reopen the most recent bookmark file, else the default one."""
        try:
            open_startup_file(
                self.coordinator,
                self.config.get_default_bookmark_file(),
                on_failure=lambda e: self.notify(str(e), severity="error"),
            )
        except LoadFailure as e:
            self.notify(str(e), severity="error")
        except (BookmarkFileError, OSError) as e:
            logger.warning("Cannot open default bookmark file: %s", e)
            self.notify(f"Cannot open default bookmark file: {e}", severity="error")

    async def on_unmount(self) -> None:
        """Persist history and pending bookmark changes."""
        self._closing = True
        if self._watcher:
            self._watcher.stop()

        if self.config.history.persist:
            save_history(
                self.config.get_history_path(),
                list(self.coordinator.ring.entries),
                self.config.history.capacity,
            )

        if self.store.is_dirty and self.store.autosave_enabled and self.store.path:
            try:
                self.store.save()
            except (BookmarkFileError, OSError) as e:
                logger.warning("Save on exit failed: %s", e)

    def _status(self, message: str) -> None:
        logger.info(message)
        self.notify(message)

    def _explicit_jump(self, target: str) -> None:
        """Jump to target, recording history, and report failures."""
        try:
            self.coordinator.jump(target)
        except RedundantJump as e:
            self.notify(str(e), severity="warning")
        except LoadFailure as e:
            self.notify(str(e), severity="error")
        except (BookmarkFileError, OSError) as e:
            self._report_save_failure(e)
        self._refresh_views()

    def _cycle(self, direction: int) -> None:
        try:
            self.coordinator.cycle(direction)
        except EmptyHistory as e:
            self.notify(str(e), severity="warning")
        except LoadFailure as e:
            self.notify(str(e), severity="error")
        except (BookmarkFileError, OSError) as e:
            self._report_save_failure(e)
        self._refresh_views()

    def _report_save_failure(self, error: Exception) -> None:
        logger.warning("Save failed: %s", error)
        self.notify(f"Save failed: {error}", severity="error")

    def _refresh_views(self) -> None:
        self._refresh_history()
        self._refresh_bookmarks()

    def _refresh_history(self) -> None:
        history_list = self.query_one("#history-list", HistoryList)
        history_list.update_history(self.coordinator.ring.entries, self.coordinator.current)

    def _refresh_bookmarks(self) -> None:
        bookmark_list = self.query_one("#bookmark-list", BookmarkList)
        bookmark_list.update_bookmarks(
            self.store.bookmarks(),
            source=self.store.path,
            dirty=self.store.is_dirty,
        )
        if not len(self.store):
            self.query_one("#detail", BookmarkDetail).show_bookmark(None)

    def _on_store_saved(self, path: Path) -> None:
        """Refresh the bookmark header after the store is written."""
        if self._closing:
            return
        self.call_later(self._refresh_bookmarks)

    def _scan_bookmark_files(self) -> None:
        self.run_worker(self._background_scan, exclusive=True, thread=True)

    def _background_scan(self) -> list[Path]:
        """Find bookmark files in a background thread."""
        return find_bookmark_files(self.config.bookmark_directory)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Handle background scan completion."""
        if event.worker.name != "_background_scan":
            return

        if event.state.name == "ERROR":
            self.notify(f"Scan failed: {event.worker.error}", severity="error")
            return

        if event.state.name == "SUCCESS" and event.worker.result is not None:
            file_list = self.query_one("#file-list", BookmarkFileList)
            file_list.update_files(event.worker.result)

    def _on_files_changed(self, paths: list[Path]) -> None:
        """Handle bookmark directory changes (called from watcher thread)."""
        self.call_from_thread(self._scan_bookmark_files)


def run_app(config: Config) -> None:
    """Run the Waymark application."""
    app = WaymarkApp(config)
    app.run()
