"""Mining distinct words from the visible parts of documents."""

from __future__ import annotations

from itertools import islice
from typing import Mapping, Optional, Set, Tuple

from completion_engine.buffer import BufferSnapshot, DocumentId, Range
from completion_engine.buffer.chars import (
    char_is_whitespace,
    char_is_word,
    grapheme_is_word,
)
from completion_engine.buffer.movement import move_next_word_end

from .ranges import DocumentRanges, Span, spans_overlap


def _ends_word_run(text: BufferSnapshot, head: int, min_len: int) -> bool:
    count = 0
    for grapheme in islice(text.graphemes_rev(head), min_len):
        if not grapheme_is_word(grapheme):
            return False
        count += 1
    return count == min_len


def _skip_non_word(text: BufferSnapshot, anchor: int, head: int) -> int:
    while anchor < head:
        ch = text.get_char(anchor)
        if ch is None or char_is_word(ch):
            break
        anchor += 1
    return anchor


def scan_span(
    text: BufferSnapshot,
    lines: Span,
    typed_word: Optional[Span],
    min_len: int,
    words: Set[str],
) -> None:
    """Add every qualifying word inside ``lines`` to ``words``."""

    start = text.line_to_char(lines.start)
    end = text.line_to_char(lines.end)
    cursor = Range.point(start)

    # Only jump to the end of the first word when the span opens exactly on
    # its first character.
    first = text.get_char(start)
    if first is not None and not char_is_whitespace(first):
        word_end = move_next_word_end(text, cursor, 1)
        if word_end.anchor == start:
            cursor = word_end

    while cursor.head < end:
        if _ends_word_run(text, cursor.head, min_len):
            anchor = _skip_non_word(text, cursor.anchor, cursor.head)
            cursor = Range(anchor, cursor.head)
            word_range = Span(anchor, cursor.head)
            if typed_word is None or not spans_overlap(typed_word, word_range):
                words.add(text.slice(word_range.start, word_range.end))
        moved = move_next_word_end(text, cursor, 1)
        if moved.head <= cursor.head:
            break
        cursor = moved


def scan_words(
    ranges: Mapping[DocumentId, DocumentRanges],
    typed_word: Span,
    min_len: int,
    *,
    doc_id: Optional[DocumentId] = None,
) -> Tuple[str, ...]:
    """Distinct words across all collected spans, in code point order.

    ``typed_word`` holds offsets into document ``doc_id``; words there whose
    range overlaps it are left out. With no ``doc_id`` the exclusion applies
    to every document.
    """

    words: Set[str] = set()
    for entry_id, entry in ranges.items():
        excluded = typed_word if doc_id in (None, entry_id) else None
        for lines in entry.spans:
            scan_span(entry.text, lines, excluded, min_len, words)
    return tuple(sorted(words))


__all__ = ["scan_span", "scan_words"]
