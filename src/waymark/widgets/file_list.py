"""List of bookmark files found in the bookmark directory."""

from pathlib import Path

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

from ..paths import abbreviate

# Maximum files to display before truncating
MAX_DISPLAY_FILES = 500


class BookmarkFileItem(ListItem):
    """A list item representing a bookmark file."""

    def __init__(self, file_path: Path, root: Path | None = None) -> None:
        super().__init__()
        self.file_path = file_path
        self.root = root

    def compose(self) -> ComposeResult:
        if self.root is not None and self.file_path.is_relative_to(self.root):
            yield Label(str(self.file_path.relative_to(self.root)))
        else:
            yield Label(abbreviate(self.file_path))


class BookmarkFileList(Vertical):
    """Widget displaying the bookmark files available to jump to."""

    DEFAULT_CSS = """
    BookmarkFileList {
        width: 1fr;
        height: 1fr;
    }

    BookmarkFileList > #files-header {
        background: $primary-background;
        color: $warning;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    BookmarkFileList > #files-list-view {
        height: 1fr;
    }

    BookmarkFileList ListItem {
        padding: 0 1;
    }

    BookmarkFileList ListItem.--highlight {
        background: $accent;
    }
    """

    class FileSelected(Message):
        """Message emitted when a bookmark file is selected."""

        def __init__(self, file_path: Path) -> None:
            super().__init__()
            self.file_path = file_path

    def __init__(self, root: Path | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.root = root
        self._files: list[Path] = []

    def compose(self) -> ComposeResult:
        yield Static("BOOKMARK FILES", id="files-header")
        yield ListView(id="files-list-view")

    @property
    def list_view(self) -> ListView:
        return self.query_one("#files-list-view", ListView)

    def update_files(self, files: list[Path]) -> None:
        """Update the list of bookmark files, keeping the highlighted one if present."""
        selected = self.get_selected_file()
        self._files = files[:MAX_DISPLAY_FILES]

        list_view = self.list_view
        list_view.clear()
        header = self.query_one("#files-header", Static)
        header.update(f"BOOKMARK FILES ({len(files)})")

        for file_path in self._files:
            list_view.append(BookmarkFileItem(file_path, self.root))

        if selected in self._files:
            list_view.index = self._files.index(selected)
        elif self._files:
            list_view.index = 0

    def get_selected_file(self) -> Path | None:
        """Get the currently highlighted bookmark file."""
        item = self.list_view.highlighted_child
        if isinstance(item, BookmarkFileItem):
            return item.file_path
        return None

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if event.item is not None and isinstance(event.item, BookmarkFileItem):
            self.post_message(self.FileSelected(event.item.file_path))
