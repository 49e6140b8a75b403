"""Jump coordination between the history ring, cursor and navigation backend."""

import logging
from typing import Any, Callable, Protocol, runtime_checkable

from .paths import normalize as normalize_path
from .ring import HistoryRing, JumpOutcome
from .tracker import next_index

logger = logging.getLogger(__name__)


class JumpError(Exception):
    """Base class for jump failures reported to the user."""


class RedundantJump(JumpError):
    """Raised when the jump target is already the current location."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Already at {key}")
        self.key = key


class EmptyHistory(JumpError):
    """Raised when cycling with no recorded history."""

    def __init__(self) -> None:
        super().__init__("No bookmark-file history yet")


class LoadFailure(JumpError):
    """Raised by navigation backends when a location cannot be loaded."""


@runtime_checkable
class NavigationBackend(Protocol):
    """Loads a location on behalf of the coordinator."""

    def build_identity(self, key: str) -> Any: ...
    def navigate(self, record: Any) -> None: ...


@runtime_checkable
class Persistence(Protocol):
    """Offers an opportunistic save after successful jumps."""

    def save_if_due(self) -> None: ...


def _log_status(message: str) -> None:
    logger.info(message)


class JumpCoordinator:
    """Owns one history ring and its cycle cursor.

    Explicit jumps record history and reset the cursor; cycle jumps walk
    the existing history without reordering it. All ring and cursor
    updates are committed before the backend is called, so a backend
    that triggers another jump observes the new state.
    """

    def __init__(
        self,
        backend: NavigationBackend,
        persistence: Persistence | None = None,
        ring: HistoryRing | None = None,
        normalize: Callable[[str], str] = normalize_path,
        notify: Callable[[str], None] = _log_status,
    ) -> None:
        self.backend = backend
        self.persistence = persistence
        self.ring = ring if ring is not None else HistoryRing()
        self._normalize = normalize
        self._notify = notify
        self._cursor: int | None = None

    @property
    def cursor(self) -> int | None:
        """Current cycle position, or None after an explicit jump."""
        return self._cursor

    @property
    def current(self) -> str | None:
        """Key of the active location: the cursor entry, else the ring head."""
        if self.ring.is_empty():
            return None
        if self._cursor is None:
            return self.ring.head
        position = min(max(self._cursor, 0), len(self.ring) - 1)
        return self.ring.entry_at(position)

    def jump(self, target: str, suppress_insert: bool = False) -> JumpOutcome | None:
        """Jump to target, recording it in the history.

        With suppress_insert the ring and cursor are left untouched; cycle
        jumps use this to load an entry they already point at.

        Returns:
            The ring outcome, or None for a suppressed insert.

        Raises:
            RedundantJump: target is already the most recent entry.
            LoadFailure: the backend could not load target. The history
                keeps the entry; it records the attempt, not its success.
        """
        key = self._normalize(target)
        outcome: JumpOutcome | None = None

        if not suppress_insert:
            outcome = self.ring.insert(key)
            if outcome is JumpOutcome.NO_OP:
                logger.warning("Redundant jump to %s", key)
                raise RedundantJump(key)
            self._cursor = None
            logger.info("Jump to %s (%s)", key, outcome.value)

        record = self.backend.build_identity(key)
        try:
            self.backend.navigate(record)
        except LoadFailure as e:
            logger.warning("Failed to load %s: %s", key, e)
            raise

        if outcome is not None:
            self._notify(f"Switched to bookmark file {key}")

        if self.persistence is not None:
            self.persistence.save_if_due()

        return outcome

    def cycle(self, direction: int) -> str:
        """Step through the history and load the entry reached.

        Returns:
            The key that was loaded.

        Raises:
            EmptyHistory: nothing has been recorded yet.
            LoadFailure: the backend could not load the entry.
        """
        position = next_index(self._cursor, direction, len(self.ring))
        if position is None:
            logger.warning("Cycle requested on empty history")
            raise EmptyHistory()

        key = self.ring.entry_at(position)
        self._cursor = position
        logger.info("Cycle %+d to position %d: %s", direction, position, key)

        self.jump(key, suppress_insert=True)
        self._notify(f"Bookmark file {position + 1}/{len(self.ring)}: {key}")
        return key

    def cycle_next(self) -> str:
        """Move toward older history entries."""
        return self.cycle(1)

    def cycle_previous(self) -> str:
        """Move toward newer history entries."""
        return self.cycle(-1)
