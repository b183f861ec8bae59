"""Buffer-word completion provider."""

from .item import (
    WORD_COMPLETION_KIND,
    CompletionItem,
    CompletionProvider,
    CompletionResponse,
    ResponseContext,
)
from .prefix import TypedWord, locate_prefix
from .ranges import (
    DocumentRanges,
    Span,
    collect_visible_ranges,
    merge_span,
    span_union,
    spans_overlap,
)
from .request import request_word_completion
from .scanner import scan_words
from .trigger import Trigger, TriggerKind, min_word_len
from .word import (
    WordCompletionTask,
    build_items,
    completion,
    retain_valid_completions,
)

__all__ = [
    "CompletionItem",
    "CompletionProvider",
    "CompletionResponse",
    "DocumentRanges",
    "ResponseContext",
    "Span",
    "Trigger",
    "TriggerKind",
    "TypedWord",
    "WORD_COMPLETION_KIND",
    "WordCompletionTask",
    "build_items",
    "collect_visible_ranges",
    "completion",
    "locate_prefix",
    "merge_span",
    "min_word_len",
    "request_word_completion",
    "retain_valid_completions",
    "scan_words",
    "span_union",
    "spans_overlap",
]
