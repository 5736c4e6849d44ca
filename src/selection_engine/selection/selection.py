"""Ordered, merge-preserving region sets with value semantics."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

from .region import Region


@dataclass(frozen=True, slots=True)
class Selection:
    """Immutable set of regions sorted by their lower bound.

    Every edit returns a new ``Selection``; regions that overlap after an
    insert are merged into one.
    """

    regions: tuple[Region, ...] = ()

    @classmethod
    def from_region(cls, region: Region) -> "Selection":
        return cls((region,))

    @classmethod
    def from_regions(cls, regions: Iterable[Region]) -> "Selection":
        """Build a normalized selection by inserting ``regions`` one by one."""

        selection = cls()
        for region in regions:
            selection = selection.with_region(region)
        return selection

    def __len__(self) -> int:
        return len(self.regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self.regions)

    def __getitem__(self, index: int) -> Region:
        return self.regions[index]

    def last(self) -> Optional[Region]:
        return self.regions[-1] if self.regions else None

    def ranges(self) -> list[tuple[int, int]]:
        return [region.as_tuple() for region in self.regions]

    def search(self, offset: int) -> int:
        """Index of the first region whose upper bound is ``>= offset``."""

        if not self.regions or offset > self.regions[-1].max:
            return len(self.regions)
        return bisect_left([region.max for region in self.regions], offset)

    def regions_in_range(self, start: int, end: int) -> Sequence[Region]:
        """Regions overlapping or touching ``[start, end]``."""

        first = self.search(start)
        last = self.search(end)
        if last < len(self.regions) and self.regions[last].min <= end:
            last += 1
        return self.regions[first:last]

    def with_region(self, region: Region) -> "Selection":
        """Return a copy with ``region`` inserted, merging any overlaps."""

        regions = list(self.regions)
        ix = self.search(region.min)
        if ix == len(regions):
            return Selection(tuple(regions) + (region,))

        end_ix = ix
        if regions[ix].min <= region.min:
            if regions[ix].should_merge(region):
                region = region.merge_with(regions[ix])
            else:
                ix += 1
            end_ix += 1
        while end_ix < len(regions) and region.should_merge(regions[end_ix]):
            region = region.merge_with(regions[end_ix])
            end_ix += 1

        regions[ix:end_ix] = [region]
        return Selection(tuple(regions))

    def without_range(
        self, start: int, end: int, delete_adjacent: bool
    ) -> "Selection":
        """Return a copy without the regions intersecting ``[start, end]``.

        With ``delete_adjacent`` regions merely touching the range go too.
        """

        first = self.search(start)
        last = self.search(end)
        if first >= len(self.regions):
            return self
        if not delete_adjacent and self.regions[first].max == start:
            first += 1
        if last < len(self.regions):
            bound = self.regions[last].min
            if (delete_adjacent and bound <= end) or (
                not delete_adjacent and bound < end
            ):
                last += 1
        if first >= last:
            return self
        return Selection(self.regions[:first] + self.regions[last:])


__all__ = ["Selection"]
