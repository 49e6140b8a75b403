"""Bookmark detail widget with highlighting of known bookmark files."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Static

from ..bookmarks import Bookmark
from ..highlight import highlight_text


def format_bookmark(bookmark: Bookmark) -> str:
    """Render a bookmark as plain text lines."""
    kind = "bookmark file" if bookmark.is_link else "file"
    lines = [
        f"Name:      {bookmark.name}",
        f"Type:      {kind}",
        f"Target:    {bookmark.filename}",
    ]
    if not bookmark.is_link:
        lines.append(f"Position:  {bookmark.position}")
    if bookmark.created:
        lines.append(f"Created:   {bookmark.created}")
    if bookmark.annotation:
        lines.extend(["", bookmark.annotation])
    if bookmark.is_link:
        lines.extend(["", "Press Enter or j to jump to this bookmark file."])
    return "\n".join(lines)


def render_bookmark(
    bookmark: Bookmark, known_keys: list[str] | tuple[str, ...] = (), style: str | None = None
) -> Text:
    """Render a bookmark as Rich text, highlighting known_keys when a style is given.

    The result is never parsed as markup, so brackets in names show verbatim.
    """
    text = format_bookmark(bookmark)
    if known_keys and style:
        return highlight_text(text, known_keys, style)
    return Text(text)


class BookmarkDetail(Vertical):
    """Widget displaying details of the highlighted bookmark."""

    DEFAULT_CSS = """
    BookmarkDetail {
        width: 1fr;
        height: 1fr;
    }

    BookmarkDetail > #detail-header {
        background: $primary-background;
        color: $success;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    BookmarkDetail > VerticalScroll {
        height: 1fr;
    }

    BookmarkDetail #detail-content {
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._bookmark: Bookmark | None = None

    def compose(self) -> ComposeResult:
        yield Static("DETAIL", id="detail-header")
        with VerticalScroll(id="detail-scroll"):
            yield Static("", id="detail-content")

    @property
    def scroll_view(self) -> VerticalScroll:
        return self.query_one("#detail-scroll", VerticalScroll)

    def show_bookmark(
        self,
        bookmark: Bookmark | None,
        known_keys: list[str] | None = None,
        style: str | None = None,
    ) -> None:
        """Display a bookmark, highlighting mentions of known_keys with style."""
        self._bookmark = bookmark
        header = self.query_one("#detail-header", Static)
        content = self.query_one("#detail-content", Static)

        if bookmark is None:
            header.update("DETAIL")
            content.update("")
            return

        header.update(f"DETAIL - {bookmark.name}")
        content.update(render_bookmark(bookmark, known_keys, style))

    def get_current_bookmark(self) -> Bookmark | None:
        return self._bookmark
