"""Waymark widgets."""

from .bookmark_list import BookmarkList
from .detail import BookmarkDetail, format_bookmark, render_bookmark
from .file_list import BookmarkFileList
from .history_list import HistoryList, active_position
from .link_modal import LinkModal, get_path_completions

__all__ = [
    "BookmarkList",
    "BookmarkDetail",
    "format_bookmark",
    "render_bookmark",
    "BookmarkFileList",
    "HistoryList",
    "active_position",
    "LinkModal",
    "get_path_completions",
]
