"""History list widget showing the bookmark-file ring."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

CURSOR_MARKER = "▶"


def active_position(entries: tuple[str, ...], current: str | None) -> int:
    """Row to mark as active: the row of current, else the head."""
    if current in entries:
        return entries.index(current)
    return 0


class HistoryItem(ListItem):
    """A list item representing one history entry."""

    def __init__(self, key: str, position: int, is_cursor: bool = False) -> None:
        super().__init__()
        self.key = key
        self.position = position
        self.is_cursor = is_cursor

    def compose(self) -> ComposeResult:
        marker = CURSOR_MARKER if self.is_cursor else " "
        yield Label(f"{marker} {self.position + 1:>2}  {self.key}")


class HistoryList(Vertical):
    """Widget displaying the bookmark-file history, most recent first."""

    DEFAULT_CSS = """
    HistoryList {
        width: 1fr;
        height: 1fr;
    }

    HistoryList > #history-header {
        background: $primary-background;
        color: $accent;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    HistoryList > #history-list-view {
        height: 1fr;
    }

    HistoryList > #history-status {
        padding: 1 2;
        color: $text-muted;
    }

    HistoryList ListItem {
        padding: 0 1;
    }

    HistoryList ListItem.--highlight {
        background: $accent;
    }
    """

    class HistorySelected(Message):
        """Message emitted when a history entry is chosen."""

        def __init__(self, key: str) -> None:
            super().__init__()
            self.key = key

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._entries: tuple[str, ...] = ()

    def compose(self) -> ComposeResult:
        yield Static("HISTORY", id="history-header")
        yield ListView(id="history-list-view")
        yield Static("", id="history-status")

    @property
    def list_view(self) -> ListView:
        return self.query_one("#history-list-view", ListView)

    @property
    def status_label(self) -> Static:
        return self.query_one("#history-status", Static)

    def update_history(self, entries: tuple[str, ...], current: str | None) -> None:
        """Redraw the ring, marking the active entry (head when unknown)."""
        self._entries = entries
        list_view = self.list_view
        list_view.clear()

        header = self.query_one("#history-header", Static)
        header.update(f"HISTORY ({len(entries)})")

        if not entries:
            self.status_label.update("No bookmark files visited yet")
            return

        self.status_label.update("")
        active = active_position(entries, current)
        for position, key in enumerate(entries):
            list_view.append(HistoryItem(key, position, is_cursor=(position == active)))
        list_view.index = active

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if event.item is not None and isinstance(event.item, HistoryItem):
            self.post_message(self.HistorySelected(event.item.key))
