from __future__ import annotations

from completion_engine.buffer import BufferSnapshot
from completion_engine.completion import Span, TriggerKind, TypedWord, locate_prefix


def test_manual_prefix_covers_typed_fragment() -> None:
    text = BufferSnapshot("hello wo")

    typed = locate_prefix(text, 8, TriggerKind.MANUAL, 2)

    assert typed == TypedWord(span=Span(6, 8), edit_diff=2)


def test_no_prefix_at_buffer_start() -> None:
    text = BufferSnapshot("hello")

    assert locate_prefix(text, 0, TriggerKind.MANUAL, 2) is None
    assert locate_prefix(text, -7, TriggerKind.MANUAL, 2) is None


def test_automatic_trigger_needs_long_word_run() -> None:
    text = BufferSnapshot("hello wo")

    assert locate_prefix(text, 8, TriggerKind.AUTO, 8) is None
    assert locate_prefix(text, 8, TriggerKind.TRIGGER_CHAR, 8) is None


def test_automatic_trigger_accepts_long_prefix() -> None:
    text = BufferSnapshot("hello internat")

    typed = locate_prefix(text, 14, TriggerKind.AUTO, 8)

    assert typed == TypedWord(span=Span(6, 14), edit_diff=8)


def test_trailing_whitespace_means_nothing_to_erase() -> None:
    text = BufferSnapshot("foo ")

    typed = locate_prefix(text, 4, TriggerKind.MANUAL, 2)

    assert typed is not None
    assert typed.span == Span(0, 4)
    assert typed.edit_diff == 0


def test_out_of_range_position_is_clamped() -> None:
    text = BufferSnapshot("hello wo")

    assert locate_prefix(text, 99, TriggerKind.MANUAL, 2) == TypedWord(
        span=Span(6, 8), edit_diff=2
    )
