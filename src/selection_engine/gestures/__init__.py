"""Gesture vocabulary, region resolution, and drag tracking."""

from .models import (
    Drag,
    Gesture,
    Granularity,
    Select,
    SelectExtend,
    UnsupportedGestureError,
    gesture_from_payload,
)
from .resolver import region_extending_region, region_for_gesture
from .context import DragSlot, DragState, GestureContext
from .session import GestureSession

__all__ = [
    "Drag",
    "Gesture",
    "Granularity",
    "Select",
    "SelectExtend",
    "UnsupportedGestureError",
    "gesture_from_payload",
    "region_for_gesture",
    "region_extending_region",
    "DragSlot",
    "DragState",
    "GestureContext",
    "GestureSession",
]
