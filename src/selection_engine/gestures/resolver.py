"""Expansion of a pointer offset into a region at a given granularity."""

from __future__ import annotations

from typing import Tuple, Union

from selection_engine.buffer import TextDocument, WordCursor
from selection_engine.selection import Region

from .models import Granularity

AnchorSpan = Union[Region, Tuple[int, int]]


def region_for_gesture(
    text: TextDocument, offset: int, granularity: Granularity
) -> Region:
    if granularity is Granularity.POINT:
        return Region.caret(offset)
    if granularity is Granularity.WORD:
        start, end = WordCursor(text, offset).select_word()
        return Region(start, end)
    if granularity is Granularity.LINE:
        line = text.line_of_offset(offset)
        return Region(text.offset_of_line(line), text.offset_of_line(line + 1))
    raise ValueError(f"Unknown granularity '{granularity}'")


def region_extending_region(
    text: TextDocument,
    anchor: AnchorSpan,
    offset: int,
    granularity: Granularity,
) -> Region:
    """Region produced by extending ``anchor`` (shift-click or drag) to ``offset``.

    Moving forward takes the far edge of the word/line under the pointer;
    moving back takes its near edge.
    """

    anchor_start = anchor.start if isinstance(anchor, Region) else anchor[0]
    extension = region_for_gesture(text, offset, granularity)
    if offset >= anchor_start:
        return Region(anchor_start, extension.end)
    return Region(anchor_start, extension.start)


__all__ = ["region_for_gesture", "region_extending_region"]
