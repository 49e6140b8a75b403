"""Path normalization and equivalence for bookmark-file keys."""

import os
import sys
from pathlib import Path

# Filesystems on these platforms are case-insensitive by default
CASE_INSENSITIVE = sys.platform in ("darwin", "win32")


def _expand(raw: str | os.PathLike) -> Path:
    """Expand ~ and make the path absolute, resolving symlinks where possible."""
    path = Path(os.fspath(raw)).expanduser()
    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        # Symlink loops and unreadable parents: fall back to a lexical absolute path
        return Path(os.path.abspath(path))


def abbreviate(path: str | os.PathLike) -> str:
    """Replace a leading home directory with ~."""
    text = os.fspath(path)
    home = str(Path.home())
    if text == home:
        return "~"
    if text.startswith(home + os.sep):
        return "~" + text[len(home):]
    return text


def normalize(raw: str | os.PathLike) -> str:
    """Produce the canonical key stored in the history ring.

    The key is an absolute, symlink-resolved path with the home directory
    abbreviated to ~, e.g. "~/bookmarks/work.bmk".
    """
    return abbreviate(_expand(raw))


def _canonical(raw: str | os.PathLike) -> str:
    text = os.path.normcase(str(_expand(raw)))
    if CASE_INSENSITIVE:
        text = text.casefold()
    return text


def equivalent(a: str | os.PathLike, b: str | os.PathLike) -> bool:
    """Check whether two path-like keys name the same location."""
    if os.fspath(a) == os.fspath(b):
        return True
    if _canonical(a) == _canonical(b):
        return True
    try:
        return os.path.samefile(_expand(a), _expand(b))
    except OSError:
        return False
