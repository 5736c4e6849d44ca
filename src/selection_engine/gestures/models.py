"""Gesture vocabulary consumed by the gesture context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union


class Granularity(str, Enum):
    """How far a single pointer offset expands."""

    POINT = "point"
    WORD = "word"
    LINE = "line"

    @classmethod
    def parse(cls, value: "str | Granularity") -> "Granularity":
        if isinstance(value, Granularity):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown granularity '{value}'") from exc


@dataclass(frozen=True, slots=True)
class Select:
    """Click (or multi-click) that starts a fresh selection."""

    granularity: Granularity = Granularity.POINT
    multi: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "granularity", Granularity.parse(self.granularity))


@dataclass(frozen=True, slots=True)
class SelectExtend:
    """Shift-click extending the most recent region."""

    granularity: Granularity = Granularity.POINT

    def __post_init__(self) -> None:
        object.__setattr__(self, "granularity", Granularity.parse(self.granularity))


@dataclass(frozen=True, slots=True)
class Drag:
    """Pointer movement while the button is held."""


Gesture = Union[Select, SelectExtend, Drag]


class UnsupportedGestureError(RuntimeError):
    """Raised when something outside the gesture vocabulary is dispatched."""

    def __init__(self, gesture: object) -> None:
        super().__init__(f"unexpected gesture type {gesture!r}")
        self.gesture = gesture


def gesture_from_payload(payload: Any) -> Gesture:
    """Decode the RPC shape of a gesture.

    Accepted forms are ``"drag"``, ``{"drag": {}}``,
    ``{"select": {"granularity": "word", "multi": false}}`` and
    ``{"select_extend": {"granularity": "line"}}``.
    """

    if payload == "drag":
        return Drag()
    if not isinstance(payload, Mapping) or len(payload) != 1:
        raise UnsupportedGestureError(payload)

    (kind, params), = payload.items()
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise UnsupportedGestureError(payload)

    try:
        if kind == "drag":
            return Drag()
        if kind == "select":
            return Select(
                granularity=params.get("granularity", Granularity.POINT),
                multi=bool(params.get("multi", False)),
            )
        if kind == "select_extend":
            return SelectExtend(granularity=params.get("granularity", Granularity.POINT))
    except ValueError as exc:
        raise UnsupportedGestureError(payload) from exc
    raise UnsupportedGestureError(payload)


__all__ = [
    "Drag",
    "Gesture",
    "Granularity",
    "Select",
    "SelectExtend",
    "UnsupportedGestureError",
    "gesture_from_payload",
]
