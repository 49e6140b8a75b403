"""Waymark - bookmark file navigator with a recency-ordered history."""

__version__ = "0.1.0"
