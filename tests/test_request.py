from __future__ import annotations

import asyncio
from concurrent.futures import Executor, Future

from completion_engine.buffer import Selection
from completion_engine.completion import (
    Trigger,
    TriggerKind,
    request_word_completion,
)
from completion_engine.host import Editor, TaskController
from completion_engine.runtime.config import WordCompletionConfig


class InlineExecutor(Executor):
    """Runs work immediately; optionally restarts a controller afterwards."""

    def __init__(self, controller: TaskController | None = None) -> None:
        self.controller = controller

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        future.set_result(fn(*args, **kwargs))
        if self.controller is not None:
            self.controller.restart()
        return future


def make_request(text: str, cursor: int) -> tuple[Editor, Trigger]:
    editor = Editor(config=WordCompletionConfig())
    doc = editor.open_document(text)
    view = editor.open_view(doc.id)
    doc.set_selection(view.id, Selection.point(cursor))
    trigger = Trigger(
        pos=cursor, view_id=view.id, doc_id=doc.id, kind=TriggerKind.MANUAL
    )
    return editor, trigger


def test_request_runs_scan_on_executor() -> None:
    editor, trigger = make_request("lantern\nla", 10)
    controller = TaskController()

    response = asyncio.run(
        request_word_completion(
            editor, trigger, controller, executor=InlineExecutor()
        )
    )

    assert response is not None
    assert [item.label for item in response.items] == ["lantern"]


def test_superseded_request_is_dropped() -> None:
    editor, trigger = make_request("lantern\nla", 10)
    controller = TaskController()

    response = asyncio.run(
        request_word_completion(
            editor, trigger, controller, executor=InlineExecutor(controller)
        )
    )

    assert response is None


def test_request_without_prefix_returns_none() -> None:
    editor, trigger = make_request("lantern\n", 0)

    response = asyncio.run(
        request_word_completion(editor, trigger, TaskController())
    )

    assert response is None
