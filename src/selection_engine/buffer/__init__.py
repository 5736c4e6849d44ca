"""Text documents, word boundaries, and offset validation."""

from .document import TextDocument
from .validation import BufferValidationError, ensure_line, ensure_offset
from .words import WordBoundary, WordCursor, WordProperty

__all__ = [
    "TextDocument",
    "BufferValidationError",
    "ensure_offset",
    "ensure_line",
    "WordCursor",
    "WordBoundary",
    "WordProperty",
]
