"""Directional selection regions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True, slots=True)
class Region:
    """A span of the buffer with an anchor (``start``) and caret (``end``).

    ``end`` may sit before ``start``: extending a selection leftwards keeps
    the anchor fixed and produces a backward region. ``horiz`` remembers the
    column used for vertical caret movement.
    """

    start: int
    end: int
    horiz: Optional[int] = None

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0:
            raise ValueError("region offsets cannot be negative")

    @classmethod
    def caret(cls, offset: int) -> "Region":
        return cls(offset, offset)

    @property
    def min(self) -> int:
        return min(self.start, self.end)

    @property
    def max(self) -> int:
        return max(self.start, self.end)

    @property
    def is_caret(self) -> bool:
        return self.start == self.end

    @property
    def is_forward(self) -> bool:
        return self.end >= self.start

    def with_horiz(self, horiz: Optional[int]) -> "Region":
        return replace(self, horiz=horiz)

    def should_merge(self, other: "Region") -> bool:
        """Whether ``other``, which starts at or after ``self``, overlaps it.

        Touching ranges stay separate unless one of them is a caret.
        """

        return other.min < self.max or (
            (self.is_caret or other.is_caret) and other.min == self.max
        )

    def merge_with(self, other: "Region") -> "Region":
        low = min(self.min, other.min)
        high = max(self.max, other.max)
        if self.is_forward:
            return Region(low, high)
        return Region(high, low)

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


__all__ = ["Region"]
