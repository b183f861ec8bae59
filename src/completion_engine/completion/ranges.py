"""Visible-line collection across every open view, merged per document."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from completion_engine.buffer import BufferSnapshot, DocumentId
from completion_engine.host import Editor


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` interval of lines or characters."""

    start: int
    end: int

    def __len__(self) -> int:
        return max(self.end - self.start, 0)


@dataclass(frozen=True, slots=True)
class DocumentRanges:
    text: BufferSnapshot
    spans: Tuple[Span, ...]


def spans_overlap(a: Span, b: Span) -> bool:
    # Equal starts always overlap, even when both are empty. Spans that only
    # touch (a.end == b.start) do not.
    return a.start == b.start or (a.end > b.start and b.end > a.start)


def span_union(a: Span, b: Span) -> Span:
    return Span(min(a.start, b.start), max(a.end, b.end))


def merge_span(spans: Iterable[Span], span: Span) -> Tuple[Span, ...]:
    """Insert ``span`` keeping the result free of overlapping pairs.

    A merged span can grow into neighbours it did not touch before, so
    merging repeats until nothing else overlaps. The result is sorted by start.
    """

    pending = span
    rest = list(spans)
    merged = True
    while merged:
        merged = False
        for index, existing in enumerate(rest):
            if spans_overlap(pending, existing):
                pending = span_union(pending, rest.pop(index))
                merged = True
                break
    rest.append(pending)
    return tuple(sorted(rest, key=lambda s: (s.start, s.end)))


def collect_visible_ranges(editor: Editor) -> Mapping[DocumentId, DocumentRanges]:
    """Fold the visible line span of every view into per-document span sets.

    Focus is irrelevant: background views and splits onto other documents
    contribute too.
    """

    collected: Dict[DocumentId, DocumentRanges] = {}
    for view, _is_focused in editor.views():
        doc = editor.document(view.doc)
        text = doc.text()
        start = text.char_to_line(doc.view_offset(view.id).anchor)
        end = view.estimate_last_doc_line(doc) + 1
        line_span = Span(start, end)

        existing = collected.get(doc.id)
        if existing is None:
            collected[doc.id] = DocumentRanges(text=text, spans=(line_span,))
        else:
            collected[doc.id] = DocumentRanges(
                text=existing.text, spans=merge_span(existing.spans, line_span)
            )
    return MappingProxyType(collected)


__all__ = [
    "DocumentRanges",
    "Span",
    "collect_visible_ranges",
    "merge_span",
    "span_union",
    "spans_overlap",
]
