"""In-place insertion sort and median-of-three quicksort."""

from __future__ import annotations

import operator
from typing import Callable, List, MutableSequence, Optional, Tuple, TypeVar

T = TypeVar("T")
Less = Callable[[T, T], bool]

INSERTION_SORT_LIMIT = 25


def _resolve(less: Optional[Less]) -> Less:
    return operator.lt if less is None else less


def _insertion_sort_range(
    items: MutableSequence[T], lo: int, n: int, less: Less
) -> None:
    for i in range(lo, lo + n):
        value = items[i]
        j = i - 1
        while j >= lo and less(value, items[j]):
            items[j + 1] = items[j]
            j -= 1
        items[j + 1] = value


def insertion_sort(items: MutableSequence[T], less: Optional[Less] = None) -> None:
    """Sort ``items`` in place, stably, by the strict ordering ``less``."""
    _insertion_sort_range(items, 0, len(items), _resolve(less))


def median(a: T, b: T, c: T, less: Optional[Less] = None) -> T:
    """Return the median of three values under ``less``."""
    less = _resolve(less)
    if less(a, b):
        if less(b, c):
            return b
        return c if less(a, c) else a
    if less(a, c):
        return a
    return c if less(b, c) else b


def _partition(
    items: MutableSequence[T], lo: int, n: int, less: Less
) -> Tuple[int, int]:
    pivot = median(
        items[lo + n // 4], items[lo + n // 2], items[lo + (3 * n) // 4], less
    )
    left = mid = lo
    right = lo + n - 1
    while True:
        while not less(pivot, items[mid]):
            if less(items[mid], pivot):
                items[mid], items[left] = items[left], items[mid]
                left += 1
            if mid >= right:
                break
            mid += 1
        while less(pivot, items[right]):
            right -= 1
        if mid >= right:
            break
        items[mid], items[right] = items[right], items[mid]
        right -= 1
        if less(items[mid], pivot):
            items[mid], items[left] = items[left], items[mid]
            left += 1
        mid += 1
    return left, mid


def quick_sort(items: MutableSequence[T], less: Optional[Less] = None) -> None:
    """Sort ``items`` in place by ``less``.

    Uses a three-way partition around a median-of-three pivot and falls back
    to insertion sort for short ranges.
    """
    less = _resolve(less)
    pending: List[Tuple[int, int]] = [(0, len(items))]
    while pending:
        lo, n = pending.pop()
        if n < INSERTION_SORT_LIMIT:
            _insertion_sort_range(items, lo, n, less)
            continue
        left, mid = _partition(items, lo, n, less)
        pending.append((lo, left - lo))
        pending.append((mid, lo + n - mid))