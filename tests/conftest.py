"""Shared fixtures for waymark tests."""

import json
from pathlib import Path

import pytest

from waymark.jump import LoadFailure


def _string_equal(a: str, b: str) -> bool:
    return a == b


@pytest.fixture
def string_equal():
    """Plain string equality, for ring tests that do not touch the filesystem."""
    return _string_equal


class FakeBackend:
    """Navigation backend that records loads and fails on request."""

    def __init__(self) -> None:
        self.loaded: list[str] = []
        self.failing: set[str] = set()
        self.on_navigate = None

    def build_identity(self, key: str) -> dict:
        return {"filename": key}

    def navigate(self, record: dict) -> None:
        key = record["filename"]
        if self.on_navigate is not None:
            self.on_navigate(key)
        if key in self.failing:
            raise LoadFailure(f"No such bookmark file: {key}")
        self.loaded.append(key)


class FakePersistence:
    """Counts save opportunities."""

    def __init__(self) -> None:
        self.calls = 0

    def save_if_due(self) -> None:
        self.calls += 1


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def persistence():
    return FakePersistence()


def write_bookmarks(path: Path, bookmarks: list[dict]) -> Path:
    """Write a bookmark file in the on-disk format."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"version": 1, "bookmarks": bookmarks}))
    return path


@pytest.fixture
def make_bookmark_file():
    return write_bookmarks


@pytest.fixture
def bookmark_dir(tmp_path):
    """Create a directory with two linked bookmark files and some noise."""
    root = tmp_path / "bookmarks"
    work = root / "work.bmk"
    home = root / "home.bmk"

    write_bookmarks(work, [
        {"name": "notes", "filename": "/tmp/notes.md", "position": 120},
        {"name": "Bookmark file: home.bmk", "filename": str(home), "handler": "bookmark-file"},
    ])
    write_bookmarks(home, [
        {"name": "todo", "filename": "/tmp/todo.md"},
        {"name": "Bookmark file: work.bmk", "filename": str(work), "handler": "bookmark-file"},
    ])
    write_bookmarks(root / "archive" / "old.bookmarks", [])

    (root / "readme.md").write_text("# not a bookmark file\n")
    (root / "broken.bmk").write_text("not json{{{")

    return root


@pytest.fixture
def sample_config(tmp_path, bookmark_dir):
    """Create a Config pointing at bookmark_dir."""
    from waymark.config import Config, HistoryConfig

    return Config(
        bookmark_directory=bookmark_dir,
        data_directory=tmp_path / "data",
        history=HistoryConfig(capacity=5),
    )
