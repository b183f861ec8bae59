"""Viewports onto open documents."""

from __future__ import annotations

from dataclasses import dataclass

from completion_engine.buffer import Document, DocumentId, ViewId


@dataclass(slots=True)
class View:
    id: ViewId
    doc: DocumentId
    height: int = 24

    def inner_height(self) -> int:
        return max(self.height, 0)

    def estimate_last_doc_line(self, doc: Document) -> int:
        """Last document line likely on screen, ignoring soft wrap."""

        text = doc.text()
        line = text.char_to_line(doc.view_offset(self.id).anchor)
        return max(min(line + self.inner_height(), text.len_lines) - 1, 0)


__all__ = ["View"]
