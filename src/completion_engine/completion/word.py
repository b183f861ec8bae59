"""Word completion mined from the text visible in every open view.

``completion`` runs the cheap part of a request inline (prefix lookup and
viewport collection) and returns a ``WordCompletionTask`` holding nothing but
immutable snapshots. The task does the scanning when called and can run on any
thread. ``retain_valid_completions`` prunes word items once the user has typed
past the word.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple

from completion_engine.buffer import (
    BufferSnapshot,
    Document,
    DocumentId,
    Range,
    Selection,
    Transaction,
)
from completion_engine.buffer.chars import char_is_whitespace
from completion_engine.host import CancelQuery, Editor, View
from completion_engine.runtime import telemetry

from .item import (
    WORD_COMPLETION_KIND,
    CompletionItem,
    CompletionProvider,
    CompletionResponse,
    ResponseContext,
)
from .prefix import TypedWord, locate_prefix
from .ranges import DocumentRanges, collect_visible_ranges
from .scanner import scan_words
from .trigger import Trigger, TriggerKind, min_word_len

LOGGER_NAME = "completion_engine.completion"


@dataclass(frozen=True, slots=True)
class WordCompletionTask:
    """Deferred scan over captured snapshots; calling it twice is harmless."""

    ranges: Mapping[DocumentId, DocumentRanges]
    text: BufferSnapshot
    selection: Selection
    doc_id: DocumentId
    typed_word: TypedWord
    min_word_len: int
    priority: int
    savepoint: object

    def run(self) -> CompletionResponse:
        with telemetry.span(
            "completion::word_scan",
            logger_name=LOGGER_NAME,
            component="completion",
            metadata={"documents": len(self.ranges), "min_len": self.min_word_len},
        ) as handle:
            words = scan_words(
                self.ranges,
                self.typed_word.span,
                self.min_word_len,
                doc_id=self.doc_id,
            )
            items = build_items(
                words, self.text, self.selection, self.typed_word.edit_diff
            )
            handle.add_metadata("items", len(items))

        return CompletionResponse(
            items=items,
            provider=CompletionProvider.WORD,
            context=ResponseContext(
                is_incomplete=False,
                priority=self.priority,
                savepoint=self.savepoint,
            ),
        )

    def __call__(self) -> CompletionResponse:
        return self.run()


def build_items(
    words: Iterable[str],
    text: BufferSnapshot,
    selection: Selection,
    edit_diff: int,
) -> Tuple[CompletionItem, ...]:
    """One item per word; each replaces the typed fragment at every cursor."""

    items = []
    for word in words:

        def replace_fragment(selected: Range, word: str = word):
            cursor = selected.cursor(text)
            return (max(cursor - edit_diff, 0), cursor, word)

        transaction = Transaction.change_by_selection(
            text, selection, replace_fragment
        )
        items.append(
            CompletionItem(
                label=word,
                transaction=transaction,
                kind=WORD_COMPLETION_KIND,
                provider=CompletionProvider.WORD,
                documentation=None,
            )
        )
    return tuple(items)


def completion(
    editor: Editor,
    trigger: Trigger,
    handle: CancelQuery,
    savepoint: object = None,
) -> Optional[WordCompletionTask]:
    """Prepare a word completion for the focused view.

    Returns ``None`` when no completion should be offered: word completion is
    disabled, there is no usable prefix before the cursor, or ``handle`` was
    canceled while collecting the visible ranges.

    Occurrences overlapping the typed fragment are skipped only in the focused
    document. The same offsets in other documents are unrelated text, so
    their words are still offered.
    """

    config = editor.config
    if not config.enable:
        telemetry.record_event(
            "completion.word.skip",
            data={"reason": "disabled"},
            logger_name=LOGGER_NAME,
        )
        return None

    view, doc = editor.current()
    min_len = min_word_len(trigger.kind, config)
    text = doc.text()
    selection = doc.selection(view.id)
    pos = selection.primary().cursor(text)

    with telemetry.span(
        "completion::word",
        logger_name=LOGGER_NAME,
        component="completion",
        metadata={"trigger": trigger.kind.value, "doc": doc.id, "pos": pos},
    ) as span_handle:
        typed_word = locate_prefix(text, pos, trigger.kind, min_len)
        if typed_word is None:
            span_handle.cancel("no_prefix")
            telemetry.record_event(
                "completion.word.skip",
                data={"reason": "no_prefix", "doc": doc.id},
                logger_name=LOGGER_NAME,
            )
            return None
        ranges = collect_visible_ranges(editor)
        span_handle.add_metadata("documents", len(ranges))

    if handle.is_canceled():
        telemetry.record_event(
            "completion.word.canceled",
            data={"doc": doc.id},
            logger_name=LOGGER_NAME,
        )
        return None

    return WordCompletionTask(
        ranges=ranges,
        text=text,
        selection=selection,
        doc_id=doc.id,
        typed_word=typed_word,
        min_word_len=min_len,
        priority=config.priority,
        savepoint=doc.savepoint() if savepoint is None else savepoint,
    )


def retain_valid_completions(
    trigger: Trigger,
    doc: Document,
    view: View,
    items: List[CompletionItem],
) -> None:
    """Drop word items in place once whitespace follows an automatic trigger."""

    if trigger.kind is TriggerKind.MANUAL:
        return

    text = doc.text()
    cursor = doc.selection(view.id).primary().cursor(text)
    if char_is_whitespace(text.char(max(cursor - 1, 0))):
        items[:] = [item for item in items if not item.is_word]


__all__ = [
    "WordCompletionTask",
    "build_items",
    "completion",
    "retain_valid_completions",
]
