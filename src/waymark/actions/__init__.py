"""Action handler mixins for WaymarkApp."""

from .bookmark_actions import BookmarkActionsMixin
from .navigation_actions import NavigationActionsMixin

__all__ = [
    "BookmarkActionsMixin",
    "NavigationActionsMixin",
]
