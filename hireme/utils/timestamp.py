"""Timestamp formatting and identifier utilities."""

import time
from datetime import datetime
from typing import Iterable


def now() -> str:
    """Timestamp for directory names, e.g. "20251114_123456"."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> str:
    """Date for default export file names, e.g. "2025-11-14"."""
    return datetime.now().strftime("%Y-%m-%d")


def new_item_id(existing_ids: Iterable[str] = ()) -> str:
    """
    Create a timestamp-derived identifier for a new list item.

    Identifiers are milliseconds since the epoch as a string. If that value is
    already taken in the target list (two items added within the same
    millisecond), it is bumped until it is free.

    Args:
        existing_ids: Identifiers already present in the target list

    Returns:
        Identifier string unique within existing_ids

    Example:
        item_id = new_item_id(item.id for item in data.experience)
        # Current epoch milliseconds, bumped past any id already taken
    """
    taken = set(existing_ids)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)
