"""Navigation action handlers for WaymarkApp."""

from __future__ import annotations

from ..widgets import BookmarkDetail, BookmarkFileList, BookmarkList, HistoryList


class NavigationActionsMixin:
    """Mixin providing navigation actions (cycle, jump, focus, help)."""

    def action_cycle_next(self) -> None:
        """Cycle to the next (older) bookmark file in history."""
        self._cycle(1)

    def action_cycle_previous(self) -> None:
        """Cycle to the previous (newer) bookmark file in history."""
        self._cycle(-1)

    def action_jump_to_selected(self) -> None:
        """Jump to the highlighted bookmark if it links to a bookmark file."""
        bookmark_list = self.query_one("#bookmark-list", BookmarkList)
        bookmark = bookmark_list.get_selected_bookmark()
        if bookmark is None:
            self.notify("No bookmark selected", severity="warning")
            return
        self._jump_to_bookmark(bookmark)

    def on_bookmark_list_bookmark_selected(
        self, event: BookmarkList.BookmarkSelected
    ) -> None:
        self._jump_to_bookmark(event.bookmark)

    def on_bookmark_list_bookmark_highlighted(
        self, event: BookmarkList.BookmarkHighlighted
    ) -> None:
        """Show the highlighted bookmark in the detail panel."""
        detail = self.query_one("#detail", BookmarkDetail)
        if self.config.highlight.enabled:
            detail.show_bookmark(
                event.bookmark,
                known_keys=list(self.coordinator.ring.entries),
                style=self.config.highlight.style,
            )
        else:
            detail.show_bookmark(event.bookmark)

    def on_history_list_history_selected(
        self, event: HistoryList.HistorySelected
    ) -> None:
        self._explicit_jump(event.key)

    def on_bookmark_file_list_file_selected(
        self, event: BookmarkFileList.FileSelected
    ) -> None:
        self._explicit_jump(str(event.file_path))

    def _jump_to_bookmark(self, bookmark) -> None:
        if not bookmark.is_link:
            self.notify(
                f"'{bookmark.name}' is a file bookmark: {bookmark.filename}",
                severity="information",
            )
            return
        self._explicit_jump(bookmark.filename)

    def _get_focus_widget(self, widget_id: str):
        """Get a focusable widget by ID."""
        if widget_id == "history-list-view":
            return self.query_one("#history-list", HistoryList).list_view
        elif widget_id == "files-list-view":
            return self.query_one("#file-list", BookmarkFileList).list_view
        elif widget_id == "bookmark-list-view":
            return self.query_one("#bookmark-list", BookmarkList).list_view
        elif widget_id == "detail":
            return self.query_one("#detail", BookmarkDetail).scroll_view
        return None

    def _get_current_focus_index(self) -> int:
        """Get the index of the currently focused widget in FOCUS_ORDER."""
        focused = self.focused
        if focused is None:
            return -1
        for index, widget_id in enumerate(self.FOCUS_ORDER):
            if self._get_focus_widget(widget_id) is focused:
                return index
        return -1

    def action_focus_next(self) -> None:
        """Focus the next panel in clockwise order."""
        current = self._get_current_focus_index()
        next_index = (current + 1) % len(self.FOCUS_ORDER)
        widget = self._get_focus_widget(self.FOCUS_ORDER[next_index])
        if widget:
            widget.focus()

    def action_focus_previous(self) -> None:
        """Focus the previous panel in counter-clockwise order."""
        current = self._get_current_focus_index()
        prev_index = (current - 1) % len(self.FOCUS_ORDER)
        widget = self._get_focus_widget(self.FOCUS_ORDER[prev_index])
        if widget:
            widget.focus()

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "]=Next file, [=Previous file, j/Enter=Jump, l=Link, d=Delete, s=Save, Tab=Panel, q=Quit",
            timeout=5,
        )
