"""Tests for waymark.jump module."""

import pytest

from waymark.jump import (
    EmptyHistory,
    JumpCoordinator,
    JumpError,
    LoadFailure,
    NavigationBackend,
    Persistence,
    RedundantJump,
)
from waymark.ring import HistoryRing, JumpOutcome


def _identity(key: str) -> str:
    return key


@pytest.fixture
def messages():
    return []


@pytest.fixture
def make_coordinator(backend, persistence, string_equal, messages):
    def make(entries=(), capacity=3):
        return JumpCoordinator(
            backend,
            persistence=persistence,
            ring=HistoryRing(capacity, entries, equivalent=string_equal),
            normalize=_identity,
            notify=messages.append,
        )
    return make


class TestExplicitJump:
    def test_first_jump_loads_target(self, make_coordinator, backend):
        coordinator = make_coordinator()
        assert coordinator.jump("a") is JumpOutcome.FIRST_INSERT
        assert backend.loaded == ["a"]
        assert coordinator.ring.entries == ("a",)

    def test_insert_and_promote(self, make_coordinator, backend):
        coordinator = make_coordinator()
        coordinator.jump("a")
        assert coordinator.jump("b") is JumpOutcome.INSERTED
        assert coordinator.jump("a") is JumpOutcome.PROMOTED
        assert coordinator.ring.entries == ("a", "b")
        assert backend.loaded == ["a", "b", "a"]

    def test_redundant_jump(self, make_coordinator, backend, persistence):
        coordinator = make_coordinator(["d"])
        with pytest.raises(RedundantJump) as excinfo:
            coordinator.jump("d")
        assert excinfo.value.key == "d"
        assert coordinator.ring.entries == ("d",)
        assert backend.loaded == []
        assert persistence.calls == 0

    def test_redundant_jump_keeps_cursor(self, make_coordinator):
        coordinator = make_coordinator(["d", "c", "a"])
        coordinator.cycle_next()
        with pytest.raises(RedundantJump):
            coordinator.jump("d")
        assert coordinator.cursor == 0

    def test_jump_resets_cursor(self, make_coordinator):
        coordinator = make_coordinator(["d", "c", "a"])
        coordinator.cycle_next()
        coordinator.cycle_next()
        assert coordinator.cursor == 1

        coordinator.jump("a")
        assert coordinator.cursor is None
        assert coordinator.ring.entries == ("a", "d", "c")

    def test_notifies_and_offers_save(self, make_coordinator, persistence, messages):
        coordinator = make_coordinator()
        coordinator.jump("a")
        assert persistence.calls == 1
        assert messages == ["Switched to bookmark file a"]

    def test_target_is_normalized(self, backend, string_equal):
        coordinator = JumpCoordinator(
            backend,
            ring=HistoryRing(3, equivalent=string_equal),
            normalize=str.lower,
            notify=lambda message: None,
        )
        coordinator.jump("WORK.bmk")
        assert coordinator.ring.entries == ("work.bmk",)
        assert backend.loaded == ["work.bmk"]

    def test_works_without_persistence(self, backend, string_equal):
        coordinator = JumpCoordinator(
            backend,
            ring=HistoryRing(3, equivalent=string_equal),
            normalize=_identity,
        )
        assert coordinator.jump("a") is JumpOutcome.FIRST_INSERT

    def test_suppressed_jump_leaves_ring_alone(self, make_coordinator, backend):
        coordinator = make_coordinator(["b", "a"])
        assert coordinator.jump("a", suppress_insert=True) is None
        assert coordinator.ring.entries == ("b", "a")
        assert backend.loaded == ["a"]

    def test_suppressed_jump_to_head_is_not_redundant(self, make_coordinator, backend):
        coordinator = make_coordinator(["b", "a"])
        coordinator.jump("b", suppress_insert=True)
        assert backend.loaded == ["b"]


class TestLoadFailure:
    def test_propagates_unmodified(self, make_coordinator, backend):
        backend.failing.add("missing")
        coordinator = make_coordinator(["a"])
        with pytest.raises(LoadFailure, match="No such bookmark file: missing"):
            coordinator.jump("missing")

    def test_history_keeps_failed_target(self, make_coordinator, backend, persistence):
        backend.failing.add("missing")
        coordinator = make_coordinator(["a"])
        coordinator.cycle_next()
        saves_before = persistence.calls

        with pytest.raises(LoadFailure):
            coordinator.jump("missing")

        assert coordinator.ring.entries == ("missing", "a")
        assert coordinator.cursor is None
        assert persistence.calls == saves_before

    def test_coordinator_usable_after_failure(self, make_coordinator, backend):
        backend.failing.add("missing")
        coordinator = make_coordinator(["a"])
        with pytest.raises(LoadFailure):
            coordinator.jump("missing")
        assert coordinator.jump("a") is JumpOutcome.PROMOTED

    def test_cycle_failure_keeps_cursor(self, make_coordinator, backend):
        backend.failing.add("c")
        coordinator = make_coordinator(["d", "c", "a"])
        coordinator.cycle_next()
        with pytest.raises(LoadFailure):
            coordinator.cycle_next()
        assert coordinator.cursor == 1
        assert coordinator.ring.entries == ("d", "c", "a")


class TestCycle:
    def test_forward_backward_sequence(self, make_coordinator, backend):
        coordinator = make_coordinator(["d", "c", "a"])

        assert coordinator.cycle_next() == "d"
        assert coordinator.cursor == 0
        assert coordinator.cycle_next() == "c"
        assert coordinator.cursor == 1
        assert coordinator.cycle_previous() == "d"
        assert coordinator.cursor == 0
        assert backend.loaded == ["d", "c", "d"]

    def test_backward_from_unset_starts_at_oldest(self, make_coordinator):
        coordinator = make_coordinator(["d", "c", "a"])
        assert coordinator.cycle_previous() == "a"
        assert coordinator.cursor == 2

    def test_wraps_both_ways(self, make_coordinator):
        coordinator = make_coordinator(["d", "c", "a"])
        coordinator.cycle_previous()
        assert coordinator.cycle_next() == "d"
        assert coordinator.cycle_previous() == "a"

    def test_stale_cursor_clamps(self, make_coordinator):
        coordinator = make_coordinator(["d", "c", "a"])
        coordinator._cursor = 5

        assert coordinator.cycle_next() == "a"
        assert coordinator.cursor == 2

    def test_empty_history(self, make_coordinator, backend, persistence):
        coordinator = make_coordinator()
        with pytest.raises(EmptyHistory):
            coordinator.cycle_next()
        assert coordinator.cursor is None
        assert coordinator.ring.is_empty()
        assert backend.loaded == []
        assert persistence.calls == 0

    def test_cycle_never_mutates_ring_or_clears_cursor(self, make_coordinator):
        coordinator = make_coordinator(["d", "c", "a"])
        directions = [1, 1, -1, 1, 1, 1, -1, -1, -1, -1]
        for direction in directions:
            coordinator.cycle(direction)
            assert coordinator.ring.entries == ("d", "c", "a")
            assert coordinator.cursor is not None

    def test_cycle_offers_save(self, make_coordinator, persistence):
        coordinator = make_coordinator(["d", "c"])
        coordinator.cycle_next()
        assert persistence.calls == 1

    def test_cycle_notifies_position(self, make_coordinator, messages):
        coordinator = make_coordinator(["d", "c", "a"])
        coordinator.cycle_next()
        assert messages == ["Bookmark file 1/3: d"]


class TestCurrent:
    def test_empty(self, make_coordinator):
        assert make_coordinator().current is None

    def test_head_when_cursor_unset(self, make_coordinator):
        assert make_coordinator(["d", "c"]).current == "d"

    def test_follows_cursor(self, make_coordinator):
        coordinator = make_coordinator(["d", "c", "a"])
        coordinator.cycle_previous()
        assert coordinator.current == "a"

    def test_clamps_stale_cursor(self, make_coordinator):
        coordinator = make_coordinator(["d", "c"])
        coordinator._cursor = 9
        assert coordinator.current == "c"


class TestReentrancy:
    def test_backend_observes_committed_state(self, make_coordinator, backend):
        coordinator = make_coordinator(["b", "a"])
        seen = []
        backend.on_navigate = lambda key: seen.append(
            (key, coordinator.ring.entries, coordinator.cursor)
        )

        coordinator.cycle_next()
        coordinator.jump("c")

        assert seen == [
            ("b", ("b", "a"), 0),
            ("c", ("c", "b", "a"), None),
        ]

    def test_nested_jump_from_backend(self, make_coordinator, backend):
        coordinator = make_coordinator()

        def redirect(key):
            if key == "old":
                backend.on_navigate = None
                coordinator.jump("new")

        backend.on_navigate = redirect
        coordinator.jump("old")

        assert coordinator.ring.entries == ("new", "old")
        assert backend.loaded == ["new", "old"]


class TestProtocols:
    def test_fakes_satisfy_protocols(self, backend, persistence):
        assert isinstance(backend, NavigationBackend)
        assert isinstance(persistence, Persistence)

    def test_errors_share_base(self):
        assert issubclass(RedundantJump, JumpError)
        assert issubclass(EmptyHistory, JumpError)
        assert issubclass(LoadFailure, JumpError)
