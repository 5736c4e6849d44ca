from __future__ import annotations

import pytest

from selection_engine.buffer import TextDocument
from selection_engine.gestures import (
    Drag,
    DragSlot,
    DragState,
    GestureContext,
    Granularity,
    Select,
    SelectExtend,
    UnsupportedGestureError,
)
from selection_engine.selection import Region, Selection

TEXT = "hello world\nfoo bar\n"
# "ijklmnopqr" occupies [10, 20)
ANCHOR_TEXT = "abc defgh ijklmnopqr stuvwx"


def make_selection(*ranges: tuple[int, int]) -> Selection:
    return Selection(tuple(Region(start, end) for start, end in ranges))


def resolve(
    sel: Selection,
    slot: DragSlot,
    offset: int,
    gesture: object,
    *,
    text: str = TEXT,
) -> Selection:
    context = GestureContext(TextDocument.from_text(text), sel, slot)
    return context.selection_for_gesture(offset, gesture)  # type: ignore[arg-type]


def test_word_select_records_drag_state() -> None:
    slot = DragSlot()

    result = resolve(Selection(), slot, 2, Select(Granularity.WORD))

    assert result.ranges() == [(0, 5)]
    assert slot.state == DragState(
        base_sel=result, min=0, max=5, granularity=Granularity.WORD
    )


def test_drag_extends_to_end_of_word_under_pointer() -> None:
    slot = DragSlot()
    selected = resolve(Selection(), slot, 2, Select(Granularity.WORD))
    state = slot.state

    dragged = resolve(selected, slot, 8, Drag())

    assert dragged.ranges() == [(0, 11)]
    assert slot.state is state


def test_drag_without_movement_is_idempotent() -> None:
    slot = DragSlot()
    selected = resolve(Selection(), slot, 2, Select(Granularity.WORD))

    first = resolve(selected, slot, 8, Drag())
    second = resolve(first, slot, 8, Drag())

    assert first == second


def test_drag_backwards_uses_near_edge() -> None:
    slot = DragSlot()
    selected = resolve(
        Selection(), slot, 12, Select(Granularity.WORD), text=ANCHOR_TEXT
    )

    forward = resolve(selected, slot, 25, Drag(), text=ANCHOR_TEXT)
    backward = resolve(forward, slot, 5, Drag(), text=ANCHOR_TEXT)

    assert forward.ranges() == [(10, 27)]
    # computed from the frozen base, not from the previous drag result
    assert backward.ranges() == [(10, 4), (10, 20)]


def test_drag_by_line() -> None:
    slot = DragSlot()
    selected = resolve(Selection(), slot, 2, Select(Granularity.LINE))

    dragged = resolve(selected, slot, 14, Drag())

    assert selected.ranges() == [(0, 12)]
    assert dragged.ranges() == [(0, 20)]


def test_drag_clears_horizontal_hint() -> None:
    slot = DragSlot()
    base = Selection.from_region(Region(0, 5, horiz=3))
    slot.state = DragState(base_sel=base, min=0, max=5, granularity=Granularity.POINT)

    dragged = resolve(base, slot, 5, Drag())

    assert [region.horiz for region in dragged] == [None]


def test_drag_without_state_returns_current_selection() -> None:
    selection = make_selection((0, 5))
    slot = DragSlot()

    assert resolve(selection, slot, 8, Drag()) is selection
    assert slot.state is None


def test_toggle_off_removes_clicked_region() -> None:
    selection = make_selection((0, 5), (6, 11))
    slot = DragSlot()

    result = resolve(selection, slot, 8, Select(Granularity.POINT, multi=True))

    assert result.ranges() == [(0, 5)]
    assert len(result) < len(selection)
    assert slot.state is None


def test_toggle_off_never_removes_last_region() -> None:
    selection = make_selection((0, 5))
    slot = DragSlot()

    result = resolve(selection, slot, 2, Select(Granularity.POINT, multi=True))

    # falls through to the multi select path; the caret merges into [0, 5)
    assert result.ranges() == [(0, 5)]
    assert slot.state is not None
    assert (slot.state.min, slot.state.max) == (2, 2)


def test_multi_select_adds_region() -> None:
    slot = DragSlot()

    result = resolve(make_selection((0, 5)), slot, 13, Select(Granularity.WORD, multi=True))

    assert result.ranges() == [(0, 5), (12, 15)]
    assert slot.state is not None
    assert slot.state.base_sel == result


def test_plain_select_replaces_all_regions() -> None:
    slot = DragSlot()

    result = resolve(make_selection((0, 5), (6, 11)), slot, 14, Select())

    assert result.ranges() == [(14, 14)]


def test_select_extend_on_empty_selection_is_noop() -> None:
    selection = Selection()
    slot = DragSlot()

    assert resolve(selection, slot, 3, SelectExtend(Granularity.WORD)) is selection
    assert slot.state is None


def test_select_extend_keeps_anchor_start_in_both_directions() -> None:
    anchored = make_selection((10, 20))

    right_slot = DragSlot()
    right = resolve(
        anchored, right_slot, 25, SelectExtend(Granularity.WORD), text=ANCHOR_TEXT
    )
    left_slot = DragSlot()
    left = resolve(
        anchored, left_slot, 5, SelectExtend(Granularity.WORD), text=ANCHOR_TEXT
    )

    assert right[0].start == 10
    assert left[0].start == 10
    assert right.ranges() == [(10, 27)]
    assert left.ranges() == [(10, 9), (10, 20)]


def test_select_extend_records_drag_state_from_new_region() -> None:
    slot = DragSlot()

    result = resolve(
        make_selection((10, 20)), slot, 25, SelectExtend(Granularity.WORD), text=ANCHOR_TEXT
    )

    assert slot.state == DragState(
        base_sel=result, min=21, max=27, granularity=Granularity.WORD
    )


def test_select_extend_uses_last_region_as_anchor() -> None:
    slot = DragSlot()
    selection = make_selection((0, 2), (12, 15))

    result = resolve(selection, slot, 18, SelectExtend(Granularity.POINT))

    assert result.ranges() == [(0, 2), (12, 18)]


@pytest.mark.parametrize("gesture", [object(), "drag", None])
def test_unsupported_gesture_fails_loudly(gesture: object) -> None:
    slot = DragSlot()

    with pytest.raises(UnsupportedGestureError) as excinfo:
        resolve(make_selection((0, 5)), slot, 2, gesture)

    assert excinfo.value.gesture is gesture
    assert slot.state is None
