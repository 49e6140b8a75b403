"""Bounded, most-recent-first history of bookmark-file keys."""

from collections import deque
from enum import Enum
from typing import Callable, Iterable, Iterator

from .paths import equivalent as path_equivalent

# Default number of bookmark files remembered
DEFAULT_CAPACITY = 65


class JumpOutcome(Enum):
    """Result of inserting a key into the ring."""

    FIRST_INSERT = "first-insert"
    INSERTED = "inserted"
    PROMOTED = "promoted"
    NO_OP = "no-op"

    @property
    def changed(self) -> bool:
        """True when the insert altered the ring."""
        return self is not JumpOutcome.NO_OP


class HistoryRing:
    """Fixed-capacity ring of unique keys with move-to-front on reinsert.

    Position 0 is the most recent entry. Keys are compared with the
    supplied equivalence predicate, not string equality, so two spellings
    of the same path occupy a single slot.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        entries: Iterable[str] = (),
        equivalent: Callable[[str, str], bool] = path_equivalent,
    ) -> None:
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 1:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._equivalent = equivalent
        self._entries: deque[str] = deque(maxlen=capacity)

        # Seed entries arrive most-recent-first; keep the first of any duplicates
        for key in entries:
            if len(self._entries) == capacity:
                break
            if self.index_of(key) is None:
                self._entries.append(key)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> tuple[str, ...]:
        """Snapshot of the keys, most recent first."""
        return tuple(self._entries)

    @property
    def head(self) -> str | None:
        """The most recent key, or None if the ring is empty."""
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))

    def is_empty(self) -> bool:
        return len(self._entries) == 0

    def entry_at(self, position: int) -> str:
        """Return the key at position (0 = most recent)."""
        if not 0 <= position < len(self._entries):
            raise IndexError(f"history position {position} out of range")
        return self._entries[position]

    def index_of(self, key: str) -> int | None:
        """Find the position of a key equivalent to key."""
        for i, entry in enumerate(self._entries):
            if self._equivalent(key, entry):
                return i
        return None

    def insert(self, key: str) -> JumpOutcome:
        """Record key as the most recent entry.

        Returns:
            FIRST_INSERT if the ring was empty, NO_OP if key is already the
            head, PROMOTED if key was elsewhere in the ring, INSERTED
            otherwise. INSERTED on a full ring evicts the oldest entry.
        """
        if not self._entries:
            self._entries.append(key)
            return JumpOutcome.FIRST_INSERT

        if self._equivalent(key, self._entries[0]):
            return JumpOutcome.NO_OP

        index = self.index_of(key)
        if index is not None:
            # Keep the stored spelling of the promoted key
            existing = self._entries[index]
            del self._entries[index]
            self._entries.appendleft(existing)
            return JumpOutcome.PROMOTED

        # deque(maxlen=...) drops the right-hand (oldest) end on overflow
        self._entries.appendleft(key)
        return JumpOutcome.INSERTED

    def __repr__(self) -> str:
        return f"HistoryRing(capacity={self._capacity}, entries={list(self._entries)!r})"
