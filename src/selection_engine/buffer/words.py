"""Word-boundary classification and the cursor used for word selection."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .document import TextDocument
from .validation import ensure_offset

_PUNCTUATION = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^`{|}~")


class WordProperty(Enum):
    CR = "cr"
    LF = "lf"
    SPACE = "space"
    PUNCTUATION = "punctuation"
    OTHER = "other"


class WordBoundary(Enum):
    INTERIOR = "interior"
    START = "start"
    END = "end"
    BOTH = "both"

    @property
    def is_start(self) -> bool:
        return self in (WordBoundary.START, WordBoundary.BOTH)

    @property
    def is_end(self) -> bool:
        return self in (WordBoundary.END, WordBoundary.BOTH)

    @property
    def is_boundary(self) -> bool:
        return self is not WordBoundary.INTERIOR


def word_property(char: str) -> WordProperty:
    if char <= " ":
        if char == "\r":
            return WordProperty.CR
        if char == "\n":
            return WordProperty.LF
        return WordProperty.SPACE
    if char in _PUNCTUATION:
        return WordProperty.PUNCTUATION
    return WordProperty.OTHER


_CR = WordProperty.CR
_LF = WordProperty.LF
_SPACE = WordProperty.SPACE
_PUNCT = WordProperty.PUNCTUATION
_OTHER = WordProperty.OTHER


def classify_boundary(prev: WordProperty, next_: WordProperty) -> WordBoundary:
    """Classify the gap between two adjacent characters."""

    if prev is _LF and next_ is _LF:
        return WordBoundary.START
    if (prev, next_) in {(_LF, _SPACE), (_CR, _LF), (_SPACE, _LF), (_SPACE, _SPACE)}:
        return WordBoundary.INTERIOR
    if next_ is _SPACE:
        return WordBoundary.END
    if prev in (_SPACE, _LF):
        return WordBoundary.START
    if next_ in (_CR, _LF):
        return WordBoundary.END
    if (prev, next_) in {(_PUNCT, _OTHER), (_OTHER, _PUNCT)}:
        return WordBoundary.BOTH
    return WordBoundary.INTERIOR


_INITIAL_OVERRIDES = {
    (_LF, _OTHER): WordBoundary.START,
    (_OTHER, _LF): WordBoundary.END,
    (_LF, _SPACE): WordBoundary.INTERIOR,
    (_LF, _PUNCT): WordBoundary.INTERIOR,
    (_SPACE, _LF): WordBoundary.INTERIOR,
    (_PUNCT, _LF): WordBoundary.INTERIOR,
    (_SPACE, _PUNCT): WordBoundary.INTERIOR,
    (_PUNCT, _SPACE): WordBoundary.INTERIOR,
}


def classify_initial_boundary(prev: WordProperty, next_: WordProperty) -> WordBoundary:
    """Like ``classify_boundary`` but tuned for the gap under the pointer.

    Clicking between a word and a line break, or between whitespace and
    punctuation, should grab the run on the other side instead of stopping
    immediately.
    """

    return _INITIAL_OVERRIDES.get((prev, next_)) or classify_boundary(prev, next_)


class WordCursor:
    """Cursor over a document that finds word boundaries around an offset."""

    def __init__(self, document: TextDocument, offset: int) -> None:
        self.document = document
        self.pos = ensure_offset(document, offset)

    def _prop(self, index: int) -> WordProperty:
        return word_property(self.document.text[index])

    def prev_boundary(self) -> Optional[int]:
        """Move to the previous word start and return it, or None at 0."""

        if self.pos == 0:
            return None
        candidate = self.pos - 1
        prop = self._prop(candidate)
        while candidate > 0:
            prev = self._prop(candidate - 1)
            if classify_boundary(prev, prop).is_start:
                break
            prop = prev
            candidate -= 1
        self.pos = candidate
        return candidate

    def next_boundary(self) -> Optional[int]:
        """Move to the next word end and return it, or None at the end."""

        length = len(self.document)
        if self.pos == length:
            return None
        candidate = self.pos + 1
        prop = self._prop(self.pos)
        while candidate < length:
            nxt = self._prop(candidate)
            if classify_boundary(prop, nxt).is_end:
                break
            prop = nxt
            candidate += 1
        self.pos = candidate
        return candidate

    def select_word(self) -> tuple[int, int]:
        """Return the word (or whitespace/punctuation run) touching the cursor.

        The cursor is left at the end of the returned range.
        """

        initial = self.pos
        length = len(self.document)
        if 0 < initial < length:
            boundary = classify_initial_boundary(
                self._prop(initial - 1), self._prop(initial)
            )
        else:
            boundary = WordBoundary.BOTH

        start = initial - 1 if initial == length and initial > 0 else initial
        while 0 < start < length:
            if start == initial:
                if boundary.is_start:
                    break
            elif classify_boundary(self._prop(start - 1), self._prop(start)).is_boundary:
                break
            start -= 1

        end = 1 if initial == 0 and length > 0 else initial
        while 0 < end < length:
            if end == initial:
                if boundary.is_end:
                    break
            elif classify_boundary(self._prop(end - 1), self._prop(end)).is_boundary:
                break
            end += 1

        self.pos = end
        return start, end


__all__ = [
    "WordBoundary",
    "WordCursor",
    "WordProperty",
    "classify_boundary",
    "classify_initial_boundary",
    "word_property",
]
