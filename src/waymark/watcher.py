"""File system watcher for bookmark-file changes."""

import logging
import threading
import time
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .config import Config
from .scanner import SUPPORTED_EXTENSIONS

logger = logging.getLogger(__name__)


class BookmarkEventHandler(FileSystemEventHandler):
    """Handler for bookmark file changes with debouncing."""

    def __init__(
        self,
        on_change: Callable[[list[Path]], None],
        debounce_seconds: float = 0.5,
    ):
        super().__init__()
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._pending_paths: dict[str, float] = {}
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def _is_bookmark_file(self, path: str) -> bool:
        return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS

    def _schedule_update(self, path: str) -> None:
        """Schedule a debounced update for the given path."""
        logger.debug("Bookmark file change detected: %s", path)
        with self._lock:
            self._pending_paths[path] = time.time()

            if self._timer:
                self._timer.cancel()

            self._timer = threading.Timer(
                self.debounce_seconds,
                self._process_pending,
            )
            self._timer.daemon = True
            self._timer.start()

    def _process_pending(self) -> None:
        """Report all pending changes in one notification."""
        with self._lock:
            paths = [Path(p) for p in self._pending_paths]
            self._pending_paths.clear()
            self._timer = None

        if not paths:
            return

        logger.info("Processing %d bookmark file change(s)", len(paths))
        self.on_change(paths)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_bookmark_file(event.src_path):
            self._schedule_update(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_bookmark_file(event.src_path):
            self._schedule_update(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_bookmark_file(event.src_path):
            self._schedule_update(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        """Handle file move/rename."""
        if not event.is_directory:
            if self._is_bookmark_file(event.src_path):
                self._schedule_update(event.src_path)
            if hasattr(event, "dest_path") and self._is_bookmark_file(event.dest_path):
                self._schedule_update(event.dest_path)


class BookmarkDirectoryWatcher:
    """Watches the bookmark directory for bookmark file changes."""

    def __init__(
        self,
        config: Config,
        on_change: Callable[[list[Path]], None],
    ):
        self.config = config
        self.on_change = on_change
        self._observer: Observer | None = None
        self._handler: BookmarkEventHandler | None = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        """Start watching the configured directory."""
        if self._observer is not None:
            return  # Already running

        directory = self.config.bookmark_directory
        directory.mkdir(parents=True, exist_ok=True)

        self._handler = BookmarkEventHandler(self.on_change)
        self._observer = Observer()
        self._observer.schedule(self._handler, str(directory), recursive=True)
        self._observer.daemon = True
        self._observer.start()
        logger.info("Bookmark watcher started: %s", directory)

    def stop(self) -> None:
        """Stop watching."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=1.0)
            self._observer = None
            self._handler = None

    def __enter__(self) -> "BookmarkDirectoryWatcher":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()
