from __future__ import annotations

import pytest

from completion_engine.buffer import (
    BufferSnapshot,
    BufferValidationError,
    Document,
    Range,
    Selection,
    Transaction,
)


def test_apply_replaces_ranges_in_order() -> None:
    text = BufferSnapshot("hello wo")
    transaction = Transaction.change(text, [(0, 1, "J"), (6, 8, "world")])

    assert str(transaction.apply(text)) == "Jello world"


def test_map_pos_moves_positions_after_insertions() -> None:
    text = BufferSnapshot("hello wo")
    transaction = Transaction.change(text, [(6, 8, "world")])

    assert transaction.map_pos(2) == 2
    assert transaction.map_pos(7) == 11
    assert transaction.map_pos(8) == 11


def test_overlapping_changes_are_rejected() -> None:
    text = BufferSnapshot("abcdef")

    with pytest.raises(BufferValidationError):
        Transaction.change(text, [(0, 3, "x"), (2, 4, "y")])

    with pytest.raises(BufferValidationError):
        Transaction.change(text, [(5, 9, None)])


def test_apply_to_different_text_is_rejected() -> None:
    transaction = Transaction.change(BufferSnapshot("abc"), [(0, 1, "x")])

    with pytest.raises(BufferValidationError):
        transaction.apply(BufferSnapshot("abcd"))


def test_change_by_selection_clamps_colliding_deletions() -> None:
    text = BufferSnapshot("abcd")
    selection = Selection((Range.point(1), Range.point(2)))

    transaction = Transaction.change_by_selection(
        text, selection, lambda r: (r.head - 2, r.head, "X")
    )

    assert str(transaction.apply(text)) == "XXcd"


def test_document_apply_bumps_revision_and_maps_cursors() -> None:
    doc = Document(1, "hello wo")
    doc.set_selection(7, Selection.point(8))
    before = doc.savepoint()

    changed = doc.apply(Transaction.change(doc.text(), [(6, 8, "world")]), 7)

    assert changed
    assert str(doc.text()) == "hello world"
    assert doc.selection(7).primary() == Range.point(11)
    assert doc.savepoint() != before
    assert not doc.apply(Transaction.change(doc.text(), []), 7)
