"""Registry of open documents and the views showing them."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from completion_engine.buffer import Document, DocumentId, ViewId
from completion_engine.runtime import telemetry
from completion_engine.runtime.config import WordCompletionConfig

from .view import View


class Editor:
    """Owns documents, views and focus.

    Views are kept in the order they were opened, which is also the order
    ``views()`` walks them in.
    """

    def __init__(self, *, config: Optional[WordCompletionConfig] = None) -> None:
        self.config = config or WordCompletionConfig.from_env()
        self.documents: Dict[DocumentId, Document] = {}
        self._views: Dict[ViewId, View] = {}
        self._focused: Optional[ViewId] = None
        self._next_doc_id = 1
        self._next_view_id = 1

    def open_document(self, text: str = "", *, name: str = "scratch") -> Document:
        doc = Document(self._next_doc_id, text, name=name)
        self._next_doc_id += 1
        self.documents[doc.id] = doc
        return doc

    def open_view(self, doc_id: DocumentId, *, height: int = 24) -> View:
        doc = self.document(doc_id)
        view = View(id=self._next_view_id, doc=doc.id, height=height)
        self._next_view_id += 1
        self._views[view.id] = view
        doc.ensure_view_init(view.id)
        if self._focused is None:
            self._focused = view.id
        telemetry.record_event(
            "editor.view_open", data={"view": view.id, "doc": doc.id}
        )
        return view

    def focus(self, view_id: ViewId) -> None:
        if view_id not in self._views:
            raise KeyError(f"Unknown view '{view_id}'")
        self._focused = view_id

    def document(self, doc_id: DocumentId) -> Document:
        try:
            return self.documents[doc_id]
        except KeyError:
            raise KeyError(f"Unknown document '{doc_id}'") from None

    def view(self, view_id: ViewId) -> View:
        try:
            return self._views[view_id]
        except KeyError:
            raise KeyError(f"Unknown view '{view_id}'") from None

    def views(self) -> Iterator[Tuple[View, bool]]:
        for view in list(self._views.values()):
            yield view, view.id == self._focused

    def current(self) -> Tuple[View, Document]:
        if self._focused is None:
            raise RuntimeError("No view is open")
        view = self._views[self._focused]
        return view, self.documents[view.doc]


__all__ = ["Editor"]
