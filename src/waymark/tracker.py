"""Cyclic cursor arithmetic over the history ring."""


def next_index(current: int | None, direction: int, ring_length: int) -> int | None:
    """Compute the next cursor position for a cycle step.

    Args:
        current: The stored cursor, or None if unset.
        direction: Positive or zero steps toward older entries, negative
            toward newer ones.
        ring_length: Number of entries currently in the ring.

    Returns:
        The new position, or None when the ring is empty. An unset cursor
        seeds at the newest entry (direction >= 0) or the oldest
        (direction < 0). A cursor beyond the ring length means entries
        disappeared since it was set; it snaps to the last entry and the
        direction is not applied on that call.
    """
    if ring_length <= 0:
        return None

    if current is None:
        return 0 if direction >= 0 else ring_length - 1

    if current > ring_length:
        return ring_length - 1

    step = 1 if direction > 0 else -1
    return (current + step) % ring_length
