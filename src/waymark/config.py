"""Configuration loading and defaults for Waymark."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .ring import DEFAULT_CAPACITY

logger = logging.getLogger(__name__)

JUMP_MODES = ("switch", "add")


def get_config_dir() -> Path:
    """Get the waymark config directory (XDG-style)."""
    return Path.home() / ".config" / "waymark"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


def get_default_data_dir() -> Path:
    """Get the default data directory for history and logs."""
    return Path.home() / ".local" / "share" / "waymark"


def get_default_bookmark_dir() -> Path:
    return get_default_data_dir() / "bookmarks"


@dataclass
class HistoryConfig:
    """Bookmark-file history configuration."""

    capacity: int = DEFAULT_CAPACITY
    persist: bool = True


@dataclass
class HighlightConfig:
    """Highlighting of known bookmark files in the detail view."""

    enabled: bool = True
    style: str = "bold yellow"


@dataclass
class Config:
    """Application configuration."""

    bookmark_directory: Path = field(default_factory=lambda: get_default_bookmark_dir())
    default_bookmark_file: Path | None = None
    data_directory: Path = field(default_factory=lambda: get_default_data_dir())
    autosave_every: int = 1
    jump_mode: Literal["switch", "add"] = "switch"
    history: HistoryConfig = field(default_factory=HistoryConfig)
    highlight: HighlightConfig = field(default_factory=HighlightConfig)

    def get_default_bookmark_file(self) -> Path:
        """Bookmark file loaded at startup."""
        if self.default_bookmark_file is not None:
            return self.default_bookmark_file
        return self.bookmark_directory / "default.bmk"

    def get_history_path(self) -> Path:
        """Get the persisted history file path."""
        return self.data_directory / "history.json"

    def get_log_path(self) -> Path:
        return self.data_directory / "waymark.log"

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file or create defaults."""
        config_path = get_config_path()

        # Ensure config directory exists
        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        if not config_path.exists():
            default_config = cls()
            default_config.data_directory.mkdir(parents=True, exist_ok=True)
            default_config.save()
            return default_config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        bookmark_dir = data.get("bookmark_directory", str(get_default_bookmark_dir()))
        bookmark_directory = Path(bookmark_dir).expanduser()

        default_file = data.get("default_bookmark_file", "")
        default_bookmark_file = Path(default_file).expanduser() if default_file else None

        data_dir = data.get("data_directory", str(get_default_data_dir()))
        data_directory = Path(data_dir).expanduser()

        autosave_every = data.get("autosave_every", 1)
        if not isinstance(autosave_every, int) or autosave_every < 0:
            logger.warning("Invalid autosave_every %r, using 1", autosave_every)
            autosave_every = 1

        jump_mode = data.get("jump_mode", "switch")
        if jump_mode not in JUMP_MODES:
            logger.warning("Invalid jump_mode %r, using 'switch'", jump_mode)
            jump_mode = "switch"

        # Parse history config
        history_data = data.get("history", {})
        capacity = history_data.get("capacity", DEFAULT_CAPACITY)
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 1:
            logger.warning("Invalid history capacity %r, using %d", capacity, DEFAULT_CAPACITY)
            capacity = DEFAULT_CAPACITY
        history = HistoryConfig(
            capacity=capacity,
            persist=history_data.get("persist", True),
        )

        # Parse highlight config
        hl_data = data.get("highlight", {})
        highlight = HighlightConfig(
            enabled=hl_data.get("enabled", True),
            style=hl_data.get("style", "bold yellow"),
        )

        config = cls(
            bookmark_directory=bookmark_directory,
            default_bookmark_file=default_bookmark_file,
            data_directory=data_directory,
            autosave_every=autosave_every,
            jump_mode=jump_mode,
            history=history,
            highlight=highlight,
        )

        # Ensure data directory exists
        config.data_directory.mkdir(parents=True, exist_ok=True)

        return config

    def save(self) -> None:
        """Save configuration to file."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        default_file = str(self.default_bookmark_file) if self.default_bookmark_file else ""

        # Build TOML content manually (tomllib is read-only)
        lines = [
            '# Waymark Configuration',
            '',
            '# Directory searched for bookmark files (.bmk, .bookmarks)',
            f'bookmark_directory = "{self.bookmark_directory}"',
            '',
            '# Bookmark file loaded at startup',
            '# Empty = <bookmark_directory>/default.bmk',
            f'default_bookmark_file = "{default_file}"',
            '',
            '# Directory for history and log files',
            '# Default: ~/.local/share/waymark',
            f'data_directory = "{self.data_directory}"',
            '',
            '# Save the current bookmark file after this many changes (0 = only on request)',
            f'autosave_every = {self.autosave_every}',
            '',
            '# Jumping to a bookmark file: "switch" replaces bookmarks, "add" merges them',
            f'jump_mode = "{self.jump_mode}"',
            '',
            '[history]',
            f'capacity = {self.history.capacity}',
            f'persist = {str(self.history.persist).lower()}',
            '',
            '# Highlight known bookmark files in the detail view',
            '[highlight]',
            f'enabled = {str(self.highlight.enabled).lower()}',
            f'style = "{self.highlight.style}"',
        ]

        config_path.write_text("\n".join(lines) + "\n")
