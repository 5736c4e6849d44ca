from __future__ import annotations

from typing import List

import pytest

from selection_engine.buffer import BufferValidationError, TextDocument
from selection_engine.gestures import Drag, GestureSession, Granularity, Select, SelectExtend
from selection_engine.selection import Region, Selection

TEXT = "hello world\nfoo bar\n"


def make_session(selection: Selection | None = None) -> GestureSession:
    return GestureSession(TextDocument.from_text(TEXT), selection)


def test_session_starts_with_caret_at_origin() -> None:
    session = make_session()

    assert session.selection.ranges() == [(0, 0)]
    assert session.dragging is False


def test_session_keeps_explicit_empty_selection() -> None:
    session = make_session(Selection())

    result = session.handle(3, SelectExtend(Granularity.WORD))

    assert len(result) == 0


def test_click_then_drag_installs_each_result() -> None:
    session = make_session()
    seen: List[Selection] = []
    session.subscribe(seen.append)

    session.handle(2, Select(Granularity.WORD))
    assert session.dragging is True
    session.handle(8, Drag())

    assert session.selection.ranges() == [(0, 11)]
    assert [sel.ranges() for sel in seen] == [[(0, 5)], [(0, 11)]]


def test_release_turns_drag_into_noop() -> None:
    session = make_session()
    session.handle(2, Select(Granularity.WORD))

    session.release()
    result = session.handle(8, Drag())

    assert session.dragging is False
    assert result.ranges() == [(0, 5)]


def test_shift_click_then_drag_follows_extension() -> None:
    session = make_session(Selection.from_region(Region(0, 5)))

    session.handle(13, SelectExtend(Granularity.WORD))
    assert session.selection.ranges() == [(0, 15)]

    session.handle(17, Drag())
    assert session.selection.ranges() == [(0, 19)]


def test_offset_outside_document_is_rejected() -> None:
    session = make_session()

    with pytest.raises(BufferValidationError):
        session.handle(len(TEXT) + 1, Select())


def test_set_document_drops_drag_state() -> None:
    session = make_session()
    session.handle(2, Select(Granularity.WORD))
    document = session.document.replace(0, 0, "> ")

    session.set_document(document, Selection.from_region(Region.caret(0)))

    assert session.dragging is False
    assert session.document.version == 1
    assert session.selection.ranges() == [(0, 0)]


def test_shorter_document_resets_out_of_range_selection() -> None:
    session = GestureSession(
        TextDocument.from_text("x" * 60), Selection.from_region(Region(50, 55))
    )

    session.set_document(TextDocument.from_text("abc"))
    result = session.handle(1, SelectExtend(Granularity.POINT))

    assert session.dragging is True
    assert result.ranges() == [(0, 1)]
    assert all(region.max <= 3 for region in result)


def test_set_document_keeps_selection_that_still_fits() -> None:
    session = make_session(Selection.from_region(Region(0, 5)))

    session.set_document(session.document.replace(6, 11, "there"))

    assert session.selection.ranges() == [(0, 5)]
