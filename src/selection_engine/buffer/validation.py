"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import TextDocument


class BufferValidationError(RuntimeError):
    """Raised when callers provide out-of-bounds offsets or lines."""

    def __init__(
        self, message: str, *, offset: int | None = None, line: int | None = None
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.line = line


def ensure_offset(document: "TextDocument", offset: int) -> int:
    if offset < 0 or offset > len(document):
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_line(document: "TextDocument", line: int) -> int:
    # one past the last line is allowed; it resolves to the end of the text
    if line < 0 or line > document.line_count:
        raise BufferValidationError("Line out of range", line=line)
    return line
