"""Interaction-layer owner of the current selection and drag state."""

from __future__ import annotations

from typing import Callable, List, Optional

from selection_engine.buffer import TextDocument, ensure_offset
from selection_engine.runtime import telemetry
from selection_engine.selection import Region, Selection

from .context import DragSlot, GestureContext
from .models import Gesture

SelectionListener = Callable[[Selection], None]


class GestureSession:
    """Feeds serialized pointer events through a ``GestureContext``.

    The session holds the authoritative selection and the one drag slot;
    every ``handle`` call installs the resolved selection as current.
    """

    def __init__(
        self,
        document: TextDocument,
        selection: Optional[Selection] = None,
        *,
        logger_name: str | None = "selection_engine.gestures",
    ) -> None:
        self.document = document
        if selection is None:
            selection = Selection.from_region(Region.caret(0))
        self.selection = selection
        self.drag_slot = DragSlot()
        self._logger_name = logger_name
        self._listeners: List[SelectionListener] = []

    @property
    def dragging(self) -> bool:
        return self.drag_slot.state is not None

    def subscribe(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    def handle(self, offset: int, gesture: Gesture) -> Selection:
        ensure_offset(self.document, offset)
        context = GestureContext(
            self.document,
            self.selection,
            self.drag_slot,
            logger_name=self._logger_name,
        )
        self.selection = context.selection_for_gesture(offset, gesture)
        for listener in self._listeners:
            listener(self.selection)
        return self.selection

    def release(self) -> None:
        """Pointer released: the next ``Drag`` is a no-op until a new click."""

        if self.drag_slot.state is not None:
            telemetry.record_event(
                "gesture.session.release",
                level="debug",
                data={"selection": self.selection.ranges()},
                logger_name=self._logger_name,
            )
        self.drag_slot.clear()

    def set_document(
        self, document: TextDocument, selection: Optional[Selection] = None
    ) -> None:
        self.document = document
        self.drag_slot.clear()
        if selection is None:
            selection = self.selection
            if selection.regions and selection.regions[-1].max > len(document):
                # stale offsets would anchor the next extend outside the text
                selection = Selection.from_region(Region.caret(0))
        self.selection = selection
        telemetry.record_event(
            "gesture.session.document",
            data={"version": document.version, "length": len(document)},
            logger_name=self._logger_name,
        )


__all__ = ["GestureSession", "SelectionListener"]
