"""Source ranges and an ordered interval index for containment queries."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class SourceRange:
    """Half-open ``[start, end)`` character offsets into the source text."""

    start: int
    end: int

    def contains(self, other: SourceRange) -> bool:
        """True if ``other`` lies inside this range (equal ranges included)."""
        return self.start <= other.start and other.end <= self.end

    def strictly_contains(self, other: SourceRange) -> bool:
        """True if ``other`` lies inside this range and is not the same range."""
        return self.contains(other) and self != other

    def slice(self, source: str) -> str:
        return source[self.start:self.end]


class RangeIndex(Generic[T]):
    """Items keyed by range, sorted by start offset.

    ``within(outer)`` bisects to the first item starting at ``outer.start``
    and walks forward until items start past ``outer.end``, so a query costs
    O(log n + k) instead of a scan over every item.
    """

    def __init__(self, items: Iterable[tuple[SourceRange, T]] = ()):
        self._entries = sorted(items, key=lambda entry: (entry[0].start, -entry[0].end))
        self._starts = [entry[0].start for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def within(self, outer: SourceRange, *, strict: bool = True) -> Iterator[T]:
        """Yield items whose range lies inside ``outer``, in source order."""
        i = bisect_left(self._starts, outer.start)
        while i < len(self._entries):
            rng, item = self._entries[i]
            if rng.start >= outer.end:
                break
            if outer.strictly_contains(rng) if strict else outer.contains(rng):
                yield item
            i += 1
