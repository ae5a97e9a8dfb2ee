"""Utilities for deduplicating extracted records."""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, TypeVar

T = TypeVar("T")


def dedupe_by_key(
    items: Iterable[T],
    key: Callable[[T], Hashable],
) -> List[T]:
    """Deduplicate items by `key`, keeping the first occurrence and the input order."""
    seen: set[Hashable] = set()
    unique_items: List[T] = []
    for item in items:
        marker = key(item)
        if marker in seen:
            continue
        seen.add(marker)
        unique_items.append(item)
    return unique_items
