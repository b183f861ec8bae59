"""Completion triggers and the word-length policy derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from completion_engine.buffer import DocumentId, ViewId
from completion_engine.runtime.config import WordCompletionConfig


class TriggerKind(Enum):
    AUTO = "auto"
    TRIGGER_CHAR = "trigger_char"
    MANUAL = "manual"


@dataclass(frozen=True, slots=True)
class Trigger:
    pos: int
    view_id: ViewId
    doc_id: DocumentId
    kind: TriggerKind


def min_word_len(
    kind: TriggerKind, config: Optional[WordCompletionConfig] = None
) -> int:
    """Minimum number of grapheme clusters a suggested word must have."""

    config = config or WordCompletionConfig()
    if kind is TriggerKind.MANUAL:
        return config.manual_trigger_length
    return config.trigger_length


__all__ = ["Trigger", "TriggerKind", "min_word_len"]
