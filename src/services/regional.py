from __future__ import annotations

from typing import Callable, Dict, Iterable, List, TypeVar

T = TypeVar("T")


def group_by_region(items: Iterable[T], region_of: Callable[[T], str]) -> Dict[str, List[T]]:
    """Group items by region label, keeping first-seen order for regions and items."""
    groups: dict[str, list[T]] = {}
    for item in items:
        groups.setdefault(region_of(item), []).append(item)
    return groups
