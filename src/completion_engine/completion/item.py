"""Completion items and responses shared by every provider."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from completion_engine.buffer import Transaction

WORD_COMPLETION_KIND = "word"


class CompletionProvider(Enum):
    LSP = "lsp"
    PATH = "path"
    WORD = "word"


@dataclass(frozen=True, slots=True)
class CompletionItem:
    """A ready-to-apply suggestion.

    ``kind`` is the short tag shown next to the label; ``provider`` says which
    source produced the item.
    """

    label: str
    transaction: Transaction
    kind: str
    provider: CompletionProvider
    documentation: Optional[str] = None

    @property
    def is_word(self) -> bool:
        return (
            self.provider is CompletionProvider.WORD
            and self.kind == WORD_COMPLETION_KIND
        )


@dataclass(frozen=True, slots=True)
class ResponseContext:
    is_incomplete: bool
    priority: int
    savepoint: object


@dataclass(frozen=True, slots=True)
class CompletionResponse:
    items: Tuple[CompletionItem, ...]
    provider: CompletionProvider
    context: ResponseContext


__all__ = [
    "CompletionItem",
    "CompletionProvider",
    "CompletionResponse",
    "ResponseContext",
    "WORD_COMPLETION_KIND",
]
