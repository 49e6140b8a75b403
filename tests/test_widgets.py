"""Tests for the pure helpers in waymark.widgets."""

from waymark.bookmarks import Bookmark
from rich.text import Text

from waymark.widgets import (
    active_position,
    format_bookmark,
    get_path_completions,
    render_bookmark,
)


class TestGetPathCompletions:
    def test_empty_input(self):
        assert get_path_completions("") == []

    def test_lists_directory_contents(self, bookmark_dir):
        names = [p.name for p in get_path_completions(f"{bookmark_dir}/")]
        # Directories first, then bookmark files; other files are skipped
        assert names == ["archive", "broken.bmk", "home.bmk", "work.bmk"]

    def test_prefix_match(self, bookmark_dir):
        names = [p.name for p in get_path_completions(str(bookmark_dir / "ho"))]
        assert names == ["home.bmk"]

    def test_prefix_case_insensitive(self, bookmark_dir):
        names = [p.name for p in get_path_completions(str(bookmark_dir / "WO"))]
        assert names == ["work.bmk"]

    def test_missing_parent(self, tmp_path):
        assert get_path_completions(str(tmp_path / "nope" / "x")) == []

    def test_hidden_skipped(self, tmp_path):
        (tmp_path / ".hidden.bmk").write_text("{}")
        assert get_path_completions(f"{tmp_path}/") == []


class TestFormatBookmark:
    def test_file_bookmark(self):
        text = format_bookmark(Bookmark("notes", "/tmp/notes.md", position=12, created=""))
        assert "Name:      notes" in text
        assert "Type:      file" in text
        assert "Position:  12" in text
        assert "Created" not in text

    def test_link_bookmark(self):
        bookmark = Bookmark("Work", "~/work.bmk", handler="bookmark-file", annotation="daily")
        text = format_bookmark(bookmark)
        assert "Type:      bookmark file" in text
        assert "Target:    ~/work.bmk" in text
        assert "Position" not in text
        assert "daily" in text
        assert "jump" in text


class TestRenderBookmark:
    def test_brackets_kept_without_highlighting(self):
        bookmark = Bookmark("[draft] notes", "/notes/[wip].md", annotation="see [bold]this[/bold]")
        rendered = render_bookmark(bookmark)
        assert isinstance(rendered, Text)
        assert "[draft] notes" in rendered.plain
        assert "/notes/[wip].md" in rendered.plain
        assert "see [bold]this[/bold]" in rendered.plain
        assert rendered.spans == []

    def test_brackets_kept_with_empty_history(self):
        bookmark = Bookmark("[x]", "/a.md")
        rendered = render_bookmark(bookmark, (), "bold yellow")
        assert "Name:      [x]" in rendered.plain

    def test_highlights_known_keys(self):
        bookmark = Bookmark("home", "/b/home.bmk", handler="bookmark-file")
        rendered = render_bookmark(bookmark, ("/b/home.bmk",), "bold yellow")
        start = rendered.plain.index("/b/home.bmk")
        assert [(s.start, s.end) for s in rendered.spans] == [(start, start + len("/b/home.bmk"))]


class TestActivePosition:
    def test_marks_current_entry(self):
        assert active_position(("d", "c", "a"), "c") == 1

    def test_head_when_unknown(self):
        assert active_position(("d", "c", "a"), None) == 0
        assert active_position(("d", "c", "a"), "z") == 0
