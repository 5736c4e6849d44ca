"""Immutable text storage with line/offset queries."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from .validation import BufferValidationError, ensure_line, ensure_offset


def _line_starts(text: str) -> tuple[int, ...]:
    starts = [0]
    index = text.find("\n")
    while index != -1:
        starts.append(index + 1)
        index = text.find("\n", index + 1)
    return tuple(starts)


@dataclass(frozen=True, slots=True)
class TextDocument:
    """Versioned, immutable text addressed by character offsets.

    Line starts are computed once per version so ``line_of_offset`` is a
    binary search. Edits never mutate a document; ``replace`` returns the
    next version instead.
    """

    text: str = ""
    version: int = 0
    _starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_starts", _line_starts(self.text))

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(text=text)

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        """Number of lines; a trailing newline opens an empty last line."""

        return len(self._starts)

    def char_at(self, offset: int) -> str:
        ensure_offset(self, offset)
        if offset == len(self.text):
            return ""
        return self.text[offset]

    def slice(self, start: int, end: int) -> str:
        ensure_offset(self, start)
        ensure_offset(self, end)
        if start > end:
            start, end = end, start
        return self.text[start:end]

    def line_of_offset(self, offset: int) -> int:
        ensure_offset(self, offset)
        return bisect_right(self._starts, offset) - 1

    def offset_of_line(self, line: int) -> int:
        ensure_line(self, line)
        if line == self.line_count:
            return len(self.text)
        return self._starts[line]

    def get_line(self, line: int) -> str:
        """Return the text of ``line`` including its newline, if any."""

        if line < 0 or line >= self.line_count:
            raise BufferValidationError("Line out of range", line=line)
        start = self.offset_of_line(line)
        end = self.offset_of_line(line + 1)
        return self.text[start:end]

    def replace(self, start: int, end: int, text: str) -> "TextDocument":
        """Return the next version with ``[start:end]`` replaced by ``text``."""

        ensure_offset(self, start)
        ensure_offset(self, end)
        if start > end:
            start, end = end, start
        updated = self.text[:start] + text + self.text[end:]
        return TextDocument(text=updated, version=self.version + 1)
