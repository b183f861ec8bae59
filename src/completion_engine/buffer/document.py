"""Open documents: current text plus per-view cursor and scroll state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional

from .selection import Selection
from .snapshot import BufferSnapshot
from .transaction import Transaction

DocumentId = int
ViewId = int


@dataclass(frozen=True, slots=True)
class SavePoint:
    """Opaque marker for the document revision a response was computed on."""

    doc_id: DocumentId
    revision: int


@dataclass(frozen=True, slots=True)
class ViewPosition:
    """Scroll state of a view; ``anchor`` is the first visible character."""

    anchor: int = 0


class Document:
    """Text storage for one open file.

    The text itself is an immutable ``BufferSnapshot``; edits swap in a new
    snapshot so handles taken earlier stay valid.
    """

    def __init__(
        self,
        doc_id: DocumentId,
        text: BufferSnapshot | str = "",
        *,
        name: str = "scratch",
    ) -> None:
        self.id = doc_id
        self.name = name
        self._text = text if isinstance(text, BufferSnapshot) else BufferSnapshot(text)
        self.revision = 0
        self._selections: Dict[ViewId, Selection] = {}
        self._view_offsets: Dict[ViewId, ViewPosition] = {}

    def text(self) -> BufferSnapshot:
        return self._text

    def selection(self, view_id: ViewId) -> Selection:
        return self._selections.get(view_id) or Selection.point(0)

    def set_selection(self, view_id: ViewId, selection: Selection) -> None:
        self._selections[view_id] = selection.map(self._text.clamp)

    def view_offset(self, view_id: ViewId) -> ViewPosition:
        return self._view_offsets.get(view_id) or ViewPosition()

    def set_view_offset(self, view_id: ViewId, offset: ViewPosition) -> None:
        self._view_offsets[view_id] = replace(
            offset, anchor=self._text.clamp(offset.anchor)
        )

    def scroll_to_line(self, view_id: ViewId, line: int) -> None:
        current = self.view_offset(view_id)
        self.set_view_offset(
            view_id, replace(current, anchor=self._text.line_to_char(line))
        )

    def ensure_view_init(self, view_id: ViewId) -> None:
        self._selections.setdefault(view_id, Selection.point(0))
        self._view_offsets.setdefault(view_id, ViewPosition())

    def savepoint(self) -> SavePoint:
        return SavePoint(doc_id=self.id, revision=self.revision)

    def apply(self, transaction: Transaction, view_id: Optional[ViewId] = None) -> bool:
        """Apply ``transaction`` and remap every view's cursors and scroll anchor.

        ``view_id`` names the view the edit originated from; it is registered
        if the document has not seen it yet.
        """

        if view_id is not None:
            self.ensure_view_init(view_id)
        if transaction.is_empty():
            return False

        self._text = transaction.apply(self._text)
        self._selections = {
            vid: selection.map(transaction.map_pos)
            for vid, selection in self._selections.items()
        }
        self._view_offsets = {
            vid: replace(
                offset,
                anchor=self._text.line_to_char(
                    self._text.char_to_line(transaction.map_pos(offset.anchor))
                ),
            )
            for vid, offset in self._view_offsets.items()
        }
        self.revision += 1
        return True


__all__ = [
    "Document",
    "DocumentId",
    "SavePoint",
    "ViewId",
    "ViewPosition",
]
