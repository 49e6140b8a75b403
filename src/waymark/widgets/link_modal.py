"""Modal for creating a link to a bookmark file."""

from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, OptionList, Static
from textual.widgets.option_list import Option

from ..scanner import SUPPORTED_EXTENSIONS

# Maximum completions shown
MAX_COMPLETIONS = 20


def get_path_completions(partial_path: str) -> list[Path]:
    """Complete a partial path to directories and bookmark files.

    Args:
        partial_path: The partial path to complete

    Returns:
        Matching directories and bookmark files, directories first
    """
    if not partial_path:
        return []

    expanded = Path(partial_path).expanduser()

    if partial_path.endswith("/") or partial_path.endswith("\\"):
        parent, prefix = expanded, ""
    else:
        parent, prefix = expanded.parent, expanded.name.lower()

    if not parent.is_dir():
        return []

    try:
        candidates = [
            p for p in parent.iterdir()
            if p.name.lower().startswith(prefix)
            and not p.name.startswith(".")
            and (p.is_dir() or p.suffix.lower() in SUPPORTED_EXTENSIONS)
        ]
    except PermissionError:
        return []

    candidates.sort(key=lambda p: (not p.is_dir(), p.name.lower()))
    return candidates[:MAX_COMPLETIONS]


class LinkModal(ModalScreen):
    """Ask for a bookmark file to link to and an optional bookmark name.

    Dismisses with (path, name) where name may be empty, or None on cancel.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    CSS = """
    LinkModal {
        align: center middle;
    }

    #link-container {
        width: 70;
        height: auto;
        max-height: 30;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    #link-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    .info-label {
        margin-top: 1;
        color: $text-muted;
    }

    .input-row {
        height: 3;
    }

    .input-row Input {
        width: 1fr;
    }

    #completion-list {
        height: auto;
        max-height: 8;
        display: none;
        background: $surface-darken-1;
        border: solid $primary-darken-1;
    }

    #completion-list.visible {
        display: block;
    }

    #button-row {
        margin-top: 1;
        height: 3;
        align: center middle;
    }

    #button-row Button {
        margin: 0 1;
        min-width: 12;
    }
    """

    def __init__(self, start_directory: Path) -> None:
        super().__init__()
        self.start_directory = start_directory
        self._completion_visible = False

    def compose(self) -> ComposeResult:
        with Vertical(id="link-container"):
            yield Static("LINK TO BOOKMARK FILE", id="link-title")

            yield Label("Bookmark file (Tab to complete):", classes="info-label")
            with Horizontal(classes="input-row"):
                yield Input(
                    value=f"{self.start_directory}/",
                    id="path-input",
                    placeholder="Path to a .bmk file",
                )
            yield OptionList(id="completion-list")

            yield Label("Bookmark name (optional):", classes="info-label")
            with Horizontal(classes="input-row"):
                yield Input(id="name-input", placeholder="Bookmark file: <name>")

            with Horizontal(id="button-row"):
                yield Button("Link", id="link-btn", variant="primary")
                yield Button("Cancel", id="cancel-btn")

    def on_mount(self) -> None:
        self.query_one("#path-input", Input).focus()

    def action_cancel(self) -> None:
        if self._completion_visible:
            self._hide_completions()
        else:
            self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel-btn":
            self.dismiss(None)
        elif event.button.id == "link-btn":
            self._submit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "path-input" and self._completion_visible:
            self._select_current_completion()
        else:
            self._submit()

    def on_key(self, event) -> None:
        """Tab completion for the path input."""
        path_input = self.query_one("#path-input", Input)
        completion_list = self.query_one("#completion-list", OptionList)

        if self.focused not in (path_input, completion_list):
            return

        if event.key == "tab":
            event.stop()
            event.prevent_default()
            if self._completion_visible:
                if completion_list.option_count == 1:
                    self._select_current_completion()
                else:
                    if completion_list.highlighted is not None:
                        next_idx = (completion_list.highlighted + 1) % completion_list.option_count
                        completion_list.highlighted = next_idx
                    completion_list.focus()
            else:
                self._show_completions()

        elif event.key == "down" and self._completion_visible:
            event.stop()
            event.prevent_default()
            completion_list.focus()
            if completion_list.highlighted is None and completion_list.option_count > 0:
                completion_list.highlighted = 0

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id == "completion-list":
            self._apply_completion(str(event.option.prompt))

    def _show_completions(self) -> None:
        path_input = self.query_one("#path-input", Input)
        completion_list = self.query_one("#completion-list", OptionList)

        completions = get_path_completions(path_input.value)
        completion_list.clear_options()

        if not completions:
            self.app.notify("No matching bookmark files", severity="warning")
            return

        if len(completions) == 1:
            self._apply_completion(str(completions[0]))
            return

        for path in completions:
            completion_list.add_option(Option(str(path)))

        completion_list.add_class("visible")
        completion_list.highlighted = 0
        self._completion_visible = True

    def _hide_completions(self) -> None:
        completion_list = self.query_one("#completion-list", OptionList)
        completion_list.remove_class("visible")
        completion_list.clear_options()
        self._completion_visible = False

    def _select_current_completion(self) -> None:
        completion_list = self.query_one("#completion-list", OptionList)
        if completion_list.highlighted is not None:
            option = completion_list.get_option_at_index(completion_list.highlighted)
            self._apply_completion(str(option.prompt))

    def _apply_completion(self, value: str) -> None:
        path_input = self.query_one("#path-input", Input)
        if Path(value).is_dir():
            value = value.rstrip("/") + "/"
        path_input.value = value
        path_input.cursor_position = len(value)
        self._hide_completions()
        path_input.focus()

    def _submit(self) -> None:
        raw_path = self.query_one("#path-input", Input).value.strip()
        name = self.query_one("#name-input", Input).value.strip()

        if not raw_path or raw_path.endswith("/"):
            self.app.notify("Enter a bookmark file path", severity="warning")
            return

        self.dismiss((Path(raw_path).expanduser(), name))
