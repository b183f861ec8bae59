"""Text snapshots, selections, motions and edit descriptions."""

from .chars import CharCategory, categorize_char, char_is_word
from .document import Document, DocumentId, SavePoint, ViewId, ViewPosition
from .movement import move_next_word_end, move_prev_word_start
from .selection import Range, Selection
from .snapshot import BufferSnapshot
from .transaction import BufferValidationError, Change, Transaction

__all__ = [
    "BufferSnapshot",
    "BufferValidationError",
    "Change",
    "CharCategory",
    "Document",
    "DocumentId",
    "Range",
    "SavePoint",
    "Selection",
    "Transaction",
    "ViewId",
    "ViewPosition",
    "categorize_char",
    "char_is_word",
    "move_next_word_end",
    "move_prev_word_start",
]
