"""Stateful resolution of gestures into selections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from selection_engine.buffer import TextDocument
from selection_engine.runtime.telemetry import span
from selection_engine.selection import Region, Selection

from .models import Drag, Gesture, Granularity, Select, SelectExtend, UnsupportedGestureError
from .resolver import region_extending_region, region_for_gesture


@dataclass(frozen=True, slots=True)
class DragState:
    """What a drag needs to resolve every subsequent move event."""

    # selection other than the region being dragged
    base_sel: Selection
    # bounds of the region selected when the drag started
    min: int
    max: int
    granularity: Granularity


@dataclass(slots=True)
class DragSlot:
    """Caller-owned holder for the in-progress drag, if any."""

    state: Optional[DragState] = None

    def clear(self) -> None:
        self.state = None


class GestureContext:
    """Resolves one gesture against a text and selection snapshot.

    ``text`` and ``sel`` are only read. ``drag_slot`` is written on
    ``Select``/``SelectExtend`` and read on ``Drag``.
    """

    def __init__(
        self,
        text: TextDocument,
        sel: Selection,
        drag_slot: DragSlot,
        *,
        logger_name: str | None = None,
    ) -> None:
        self.text = text
        self.sel = sel
        self.drag_slot = drag_slot
        self._logger_name = logger_name

    def selection_for_gesture(self, offset: int, gesture: Gesture) -> Selection:
        with span(
            f"gestures::{type(gesture).__name__.lower()}",
            logger_name=self._logger_name,
            component="gestures",
            metadata={"offset": offset, "gesture": gesture, "regions": len(self.sel)},
        ) as handle:
            new_sel = self._resolve(offset, gesture)
            handle.add_metadata("result", new_sel.ranges())
            return new_sel

    def _resolve(self, offset: int, gesture: Gesture) -> Selection:
        if (
            isinstance(gesture, Select)
            and gesture.granularity is Granularity.POINT
            and gesture.multi
        ):
            # toggling the last remaining region off is not allowed
            if self.sel.regions_in_range(offset, offset) and len(self.sel) > 1:
                return self.sel.without_range(offset, offset, True)

        if isinstance(gesture, Select):
            return self._select(offset, gesture)
        if isinstance(gesture, SelectExtend):
            return self._select_extend(offset, gesture)
        if isinstance(gesture, Drag):
            return self._drag(offset)
        raise UnsupportedGestureError(gesture)

    def _select(self, offset: int, gesture: Select) -> Selection:
        new_region = region_for_gesture(self.text, offset, gesture.granularity)
        if gesture.multi:
            new_sel = self.sel.with_region(new_region)
        else:
            new_sel = Selection.from_region(new_region)

        self.drag_slot.state = DragState(
            base_sel=new_sel,
            min=new_region.start,
            max=new_region.end,
            granularity=gesture.granularity,
        )
        return new_sel

    def _select_extend(self, offset: int, gesture: SelectExtend) -> Selection:
        active = self.sel.last()
        if active is None:
            return self.sel

        new_region = region_for_gesture(self.text, offset, gesture.granularity)
        if offset >= new_region.start:
            merged = Region(active.start, new_region.end)
        else:
            merged = Region(active.start, new_region.start)
        new_sel = self.sel.with_region(merged)

        self.drag_slot.state = DragState(
            base_sel=new_sel,
            min=new_region.start,
            max=new_region.end,
            granularity=gesture.granularity,
        )
        return new_sel

    def _drag(self, offset: int) -> Selection:
        state = self.drag_slot.state
        if state is None:
            return self.sel

        new_region = region_extending_region(
            self.text, (state.min, state.max), offset, state.granularity
        )
        return state.base_sel.with_region(new_region.with_horiz(None))


__all__ = ["DragSlot", "DragState", "GestureContext"]
