"""Locating the word fragment already typed before the cursor."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import Optional

from completion_engine.buffer import BufferSnapshot, Range, move_prev_word_start
from completion_engine.buffer.chars import char_is_whitespace, grapheme_is_word

from .ranges import Span
from .trigger import TriggerKind


@dataclass(frozen=True, slots=True)
class TypedWord:
    """The fragment being typed and how many characters a completion erases."""

    span: Span
    edit_diff: int


def word_run_length(text: BufferSnapshot, start: int, limit: int) -> int:
    """Count leading word graphemes from ``start``, stopping at ``limit``."""

    count = 0
    for grapheme in islice(text.graphemes(start), limit):
        if not grapheme_is_word(grapheme):
            break
        count += 1
    return count


def locate_prefix(
    text: BufferSnapshot, pos: int, kind: TriggerKind, min_len: int
) -> Optional[TypedWord]:
    pos = text.clamp(pos)
    cursor = move_prev_word_start(text, Range.point(pos), 1)
    if cursor.head == pos:
        return None

    if kind is not TriggerKind.MANUAL and (
        word_run_length(text, cursor.head, min_len) != min_len
    ):
        return None

    span = Span(cursor.head, pos)
    typed = text.slice(span.start, span.end)
    if typed and char_is_whitespace(typed[-1]):
        edit_diff = 0
    else:
        edit_diff = len(typed)
    return TypedWord(span=span, edit_diff=edit_diff)


__all__ = ["TypedWord", "locate_prefix", "word_run_length"]
