"""Highlight known bookmark-file keys in rendered text."""

import os
from typing import Iterable

from rich.text import Text


def _variants(key: str) -> set[str]:
    variants = {key}
    if key.startswith("~"):
        variants.add(os.path.expanduser(key))
    return variants


def find_highlight_spans(keys: Iterable[str], text: str) -> list[tuple[int, int]]:
    """Find the spans of text that mention any of keys.

    Both the stored form of a key and its ~-expanded form match.

    Returns:
        Sorted, non-overlapping (start, end) offsets. Overlapping and
        touching matches are merged.
    """
    needles: set[str] = set()
    for key in keys:
        if key:
            needles |= _variants(key)

    spans: list[tuple[int, int]] = []
    for needle in needles:
        start = text.find(needle)
        while start != -1:
            spans.append((start, start + len(needle)))
            start = text.find(needle, start + 1)

    spans.sort()
    merged: list[tuple[int, int]] = []
    for start, end in spans:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def highlight_text(text: str, keys: Iterable[str], style: str = "bold yellow") -> Text:
    """Render text as Rich Text with key mentions styled."""
    rendered = Text(text)
    for start, end in find_highlight_spans(keys, text):
        rendered.stylize(style, start, end)
    return rendered
