"""
Range Merger - closed integer intervals on a single sensor row

Merges the per-sensor coverage intervals of one row into maximal covering
intervals. Two intervals are glued when they overlap or sit next to each
other with no missing integer in between; a gap of exactly one missing
integer is kept open, since that single column is what the distress beacon
search looks for.
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable, Iterator, List, Optional, Tuple


def range_order(r):
    """Sort key: start ascending, end descending on ties."""
    return (r.first, -r.last)


@total_ordering
@dataclass(frozen=True)
class Range:
    """Closed interval [first, last] with first <= last."""

    first: int
    last: int

    def __post_init__(self):
        if self.first > self.last:
            raise ValueError(f"empty range [{self.first}, {self.last}]")

    @classmethod
    def between(cls, first: int, last: int) -> Optional["Range"]:
        """Build [first, last], or None when first > last."""
        if first > last:
            return None
        return cls(first, last)

    def __lt__(self, other):
        if not isinstance(other, Range):
            return NotImplemented
        return range_order(self) < range_order(other)

    def __len__(self):
        return self.last - self.first + 1

    def contains(self, value: int) -> bool:
        return self.first <= value <= self.last

    def clamp(self, lo: int, hi: int) -> Optional["Range"]:
        """Intersect with [lo, hi]; None when nothing is left."""
        return Range.between(max(self.first, lo), min(self.last, hi))

    def join(self, other: "Range") -> Tuple["Range", Optional["Range"]]:
        """
        Glue other onto this range.

        Returns (merged, None) when the two touch, otherwise (self, other)
        unchanged. other must not sort before self.
        """
        if not touches(self, other):
            return self, other
        return Range(self.first, max(self.last, other.last)), None


def touches(current: Range, nxt: Range) -> bool:
    """True when nxt overlaps current or starts right after it."""
    return current.last + 1 >= nxt.first


def join_all(sorted_ranges: Iterable[Range]) -> Iterator[Range]:
    """
    Fold already-sorted ranges into maximal intervals in a single pass.

    Args:
        sorted_ranges: Ranges ordered by range_order

    Yields:
        Range: Merged ranges, ascending, each separated from the next by
               at least one missing integer
    """
    accum = None
    for current in sorted_ranges:
        if accum is None:
            accum = current
            continue

        accum, finished = accum.join(current)
        if finished is not None:
            # No contact: the accumulated range is complete
            yield accum
            accum = finished

    if accum is not None:
        yield accum


def merge_all_ranges(ranges: Iterable[Range]) -> List[Range]:
    """
    Merge all overlapping or adjacent ranges.

    Args:
        ranges: Ranges in any order

    Returns:
        list: Maximal disjoint ranges sorted by start position

    Algorithm:
        1. Sort ranges by range_order (start asc, end desc)
        2. Walk the sorted ranges keeping one accumulator
        3. If the next range touches the accumulator, extend it
        4. Otherwise emit the accumulator and start over from the next range

    Time Complexity: O(n log n) where n is the number of ranges
    Space Complexity: O(n) for the sorted copy
    """
    return list(join_all(sorted(ranges, key=range_order)))


def calculate_total_coverage(ranges: Iterable[Range]) -> int:
    """
    Calculate total number of integers covered by disjoint ranges.

    Args:
        ranges: Disjoint ranges (e.g. the output of merge_all_ranges)

    Returns:
        int: Sum of the range lengths
    """
    return sum(len(r) for r in ranges)
