"""
Utility helpers for insertion-ordered, duplicate-free collections.

Builders stage attributes and child elements in plain lists; these helpers
keep those lists free of duplicates while preserving the order in which
items were added.

Responsibility: Ordered deduplication by value equality or by key
"""

from __future__ import annotations

from typing import Callable, Hashable, List, TypeVar

T = TypeVar("T")


def append_unique(items: List[T], item: T) -> bool:
    """
    Append an item unless a value-equal item is already present.

    Membership uses equality rather than hashing, so unhashable
    elements are accepted.

    Args:
        items: Staging list, modified in place.
        item: Candidate to append.

    Returns:
        True if the item was appended, False if it was a duplicate.
    """
    if item in items:
        return False
    items.append(item)
    return True


def put_unique(items: List[T], item: T, key: Callable[[T], Hashable]) -> bool:
    """
    Append an item, or replace the item sharing its key in place.

    The last item added for a key wins; the position is the one where the
    key first appeared.

    Args:
        items: Staging list, modified in place.
        item: Candidate to store.
        key: Identity of an item within the list.

    Returns:
        True if the item was appended, False if it replaced an existing one.
    """
    item_key = key(item)
    for index, existing in enumerate(items):
        if key(existing) == item_key:
            items[index] = item
            return False
    items.append(item)
    return True
