"""Widget-free adapter wiring editor keystrokes to word completion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from completion_engine.buffer import Transaction
from completion_engine.buffer.chars import char_is_word
from completion_engine.completion import (
    CompletionItem,
    CompletionResponse,
    Trigger,
    TriggerKind,
    completion,
    retain_valid_completions,
)
from completion_engine.host import Editor, TaskController


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    show_completions: Callable[[Sequence[CompletionItem]], None]
    update_buffer: Callable[[str, int], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualCompletionAdapter:
    """Feeds keystrokes into the focused document and keeps a suggestion list.

    Typing a word character requests an automatic completion; ``request``
    performs a manual one. After every edit the displayed list is pruned with
    ``retain_valid_completions`` and, if anything is left, recomputed against
    the new text so accepted edits always match the current revision.
    """

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self.controller = TaskController()
        self.items: List[CompletionItem] = []
        self.trigger: Optional[Trigger] = None
        self._savepoint: object = None
        self._refresh_buffer()

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Apply a key press; returns ``True`` when it changed the document."""

        self._log_state("key ->", key=key, text=text)
        if key in {"escape", "ESC"}:
            self.dismiss()
            return False
        if key == "backspace":
            changed = self._edit_before_cursor(1, "")
        elif text:
            changed = self._edit_before_cursor(0, text)
        else:
            return False

        self._refresh_buffer()
        if self.items and self.trigger is not None:
            view, doc = self.editor.current()
            retain_valid_completions(self.trigger, doc, view, self.items)
            if self.items:
                self.request(self.trigger.kind)
            else:
                self.dismiss()
        elif text and char_is_word(text[-1]):
            self.request(TriggerKind.AUTO)
        return changed

    def request(
        self, kind: TriggerKind = TriggerKind.MANUAL
    ) -> Optional[CompletionResponse]:
        view, doc = self.editor.current()
        text = doc.text()
        trigger = Trigger(
            pos=doc.selection(view.id).primary().cursor(text),
            view_id=view.id,
            doc_id=doc.id,
            kind=kind,
        )
        handle = self.controller.restart()
        task = completion(self.editor, trigger, handle)
        if task is None:
            self._show([], None)
            return None

        response = task()
        if handle.is_canceled():
            return None
        self._savepoint = response.context.savepoint
        self._show(list(response.items), trigger)
        self.hooks.update_status(f"word:{len(response.items)}")
        return response

    def accept(self, index: int = 0) -> bool:
        """Apply the edit of the ``index``-th suggestion to the focused view."""

        if not 0 <= index < len(self.items):
            return False
        view, doc = self.editor.current()
        if doc.savepoint() != self._savepoint:
            self.hooks.update_status("word:stale")
            self.dismiss()
            return False
        item = self.items[index]
        doc.apply(item.transaction, view.id)
        self._log_state("accept <-", label=item.label)
        self.dismiss()
        self._refresh_buffer()
        return True

    def dismiss(self) -> None:
        self.controller.cancel()
        self._savepoint = None
        self._show([], None)

    def _show(self, items: List[CompletionItem], trigger: Optional[Trigger]) -> None:
        self.items = items
        self.trigger = trigger if items else None
        self.hooks.show_completions(tuple(items))

    def _edit_before_cursor(self, erase: int, insert: str) -> bool:
        view, doc = self.editor.current()
        text = doc.text()

        def edit(selected):
            cursor = selected.cursor(text)
            return (max(cursor - erase, 0), cursor, insert or None)

        transaction = Transaction.change_by_selection(
            text, doc.selection(view.id), edit
        )
        return doc.apply(transaction, view.id)

    def _refresh_buffer(self) -> None:
        view, doc = self.editor.current()
        text = doc.text()
        self.hooks.update_buffer(
            str(text), doc.selection(view.id).primary().cursor(text)
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        view, doc = self.editor.current()
        return {
            "view": view.id,
            "doc": doc.id,
            "revision": doc.revision,
            "items": len(self.items),
            "trigger": self.trigger.kind.value if self.trigger else None,
        }


__all__ = ["TextualCompletionAdapter", "TextualUIHooks"]
