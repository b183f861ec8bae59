"""Word motions with block-cursor semantics.

Only the two motions the completion engine relies on are provided:
``move_prev_word_start`` (``b``) and ``move_next_word_end`` (``e``).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .chars import categorize_char, char_is_line_ending, char_is_whitespace
from .selection import Range
from .snapshot import BufferSnapshot


class WordMotionTarget(Enum):
    NEXT_WORD_END = "next_word_end"
    PREV_WORD_START = "prev_word_start"


def move_next_word_end(text: BufferSnapshot, origin: Range, count: int = 1) -> Range:
    return word_move(text, origin, count, WordMotionTarget.NEXT_WORD_END)


def move_prev_word_start(
    text: BufferSnapshot, origin: Range, count: int = 1
) -> Range:
    return word_move(text, origin, count, WordMotionTarget.PREV_WORD_START)


def word_move(
    text: BufferSnapshot, origin: Range, count: int, target: WordMotionTarget
) -> Range:
    is_prev = target is WordMotionTarget.PREV_WORD_START

    if (is_prev and origin.head == 0) or (
        not is_prev and origin.head >= text.len_chars
    ):
        return origin

    # Normalise to a one-grapheme block cursor pointing in the motion
    # direction; the incoming anchor does not influence the result.
    if is_prev:
        if origin.anchor < origin.head:
            current = Range(origin.head, text.prev_grapheme_boundary(origin.head))
        else:
            current = Range(text.next_grapheme_boundary(origin.head), origin.head)
    else:
        if origin.anchor < origin.head:
            current = Range(text.prev_grapheme_boundary(origin.head), origin.head)
        else:
            current = Range(origin.head, text.next_grapheme_boundary(origin.head))

    for _ in range(max(count, 0)):
        moved = _range_to_target(text, target, current)
        if moved == current:
            break
        current = moved
    return current


def is_word_boundary(a: str, b: str) -> bool:
    return categorize_char(a) is not categorize_char(b)


def reached_word_end(prev_ch: str, next_ch: str) -> bool:
    # Shared by both targets: the previous word start is the next word end
    # walked in reverse.
    return is_word_boundary(prev_ch, next_ch) and (
        not char_is_whitespace(prev_ch) or char_is_line_ending(next_ch)
    )


def _range_to_target(
    text: BufferSnapshot, target: WordMotionTarget, origin: Range
) -> Range:
    is_prev = target is WordMotionTarget.PREV_WORD_START
    source = text.text
    length = len(source)
    step = -1 if is_prev else 1

    anchor = origin.anchor
    head = origin.head
    if is_prev:
        pos = head - 1
        prev_ch: Optional[str] = source[head] if head < length else None
    else:
        pos = head
        prev_ch = source[head - 1] if head > 0 else None

    def advance(index: int) -> int:
        return max(index - 1, 0) if is_prev else index + 1

    while 0 <= pos < length and char_is_line_ending(source[pos]):
        prev_ch = source[pos]
        head = advance(head)
        pos += step
    if prev_ch is not None and char_is_line_ending(prev_ch):
        anchor = head

    head_start = head
    while 0 <= pos < length:
        next_ch = source[pos]
        pos += step
        if prev_ch is None or reached_word_end(prev_ch, next_ch):
            if head == head_start:
                anchor = head
            else:
                break
        prev_ch = next_ch
        head = advance(head)

    return Range(anchor, head)


__all__ = [
    "WordMotionTarget",
    "move_next_word_end",
    "move_prev_word_start",
    "word_move",
]
