"""Bookmark list widget for the currently loaded bookmark file."""

from pathlib import Path

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

from ..bookmarks import Bookmark

LINK_MARKER = "⇢"


class BookmarkItem(ListItem):
    """A list item representing a bookmark."""

    def __init__(self, bookmark: Bookmark) -> None:
        super().__init__()
        self.bookmark = bookmark

    def compose(self) -> ComposeResult:
        if self.bookmark.is_link:
            yield Label(f"{LINK_MARKER} {self.bookmark.name}")
        else:
            yield Label(f"  {self.bookmark.name}")


class BookmarkList(Vertical):
    """Widget displaying the bookmarks of the current bookmark file."""

    DEFAULT_CSS = """
    BookmarkList {
        width: 1fr;
        height: 1fr;
    }

    BookmarkList > #bookmark-header {
        background: $primary-background;
        color: $accent;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    BookmarkList > #bookmark-list-view {
        height: 1fr;
    }

    BookmarkList ListItem {
        padding: 0 1;
    }

    BookmarkList ListItem:hover {
        background: $boost;
    }

    BookmarkList ListItem.--highlight {
        background: $accent;
    }
    """

    class BookmarkHighlighted(Message):
        """Message emitted when the cursor moves to a bookmark."""

        def __init__(self, bookmark: Bookmark) -> None:
            super().__init__()
            self.bookmark = bookmark

    class BookmarkSelected(Message):
        """Message emitted when a bookmark is selected (Enter or click)."""

        def __init__(self, bookmark: Bookmark) -> None:
            super().__init__()
            self.bookmark = bookmark

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._bookmarks: list[Bookmark] = []
        self._source: Path | None = None

    def compose(self) -> ComposeResult:
        yield Static("BOOKMARKS", id="bookmark-header")
        yield ListView(id="bookmark-list-view")

    @property
    def list_view(self) -> ListView:
        return self.query_one("#bookmark-list-view", ListView)

    def update_bookmarks(
        self,
        bookmarks: list[Bookmark],
        source: Path | None = None,
        dirty: bool = False,
    ) -> None:
        """Update the list of bookmarks.

        Args:
            bookmarks: Bookmarks to display
            source: Bookmark file they were loaded from (used for the header)
            dirty: Whether the store has unsaved changes
        """
        self._bookmarks = bookmarks
        self._source = source
        list_view = self.list_view
        list_view.clear()

        header = self.query_one("#bookmark-header", Static)
        title = f"BOOKMARKS ({source.name})" if source else "BOOKMARKS"
        header.update(f"{title} *" if dirty else title)

        for bookmark in bookmarks:
            list_view.append(BookmarkItem(bookmark))

        if bookmarks:
            list_view.index = 0
            self.post_message(self.BookmarkHighlighted(bookmarks[0]))

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        if event.item is not None and isinstance(event.item, BookmarkItem):
            self.post_message(self.BookmarkHighlighted(event.item.bookmark))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if event.item is not None and isinstance(event.item, BookmarkItem):
            self.post_message(self.BookmarkSelected(event.item.bookmark))

    def get_selected_bookmark(self) -> Bookmark | None:
        """Get the currently highlighted bookmark."""
        item = self.list_view.highlighted_child
        if isinstance(item, BookmarkItem):
            return item.bookmark
        return None
