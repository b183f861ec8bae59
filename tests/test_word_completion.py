from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest

from completion_engine.buffer import Range, Selection
from completion_engine.completion import (
    WORD_COMPLETION_KIND,
    CompletionProvider,
    Trigger,
    TriggerKind,
    completion,
)
from completion_engine.host import Editor, TaskController
from completion_engine.runtime import telemetry
from completion_engine.runtime.config import WordCompletionConfig


def make_editor(*texts: str, config: WordCompletionConfig | None = None) -> Editor:
    editor = Editor(config=config or WordCompletionConfig())
    for text in texts:
        doc = editor.open_document(text)
        editor.open_view(doc.id, height=10)
    return editor


def place_cursor(editor: Editor, *positions: int) -> None:
    view, doc = editor.current()
    doc.set_selection(
        view.id, Selection(tuple(Range.point(pos) for pos in positions))
    )


def make_trigger(editor: Editor, kind: TriggerKind = TriggerKind.MANUAL) -> Trigger:
    view, doc = editor.current()
    pos = doc.selection(view.id).primary().cursor(doc.text())
    return Trigger(pos=pos, view_id=view.id, doc_id=doc.id, kind=kind)


def live_handle():
    return TaskController().restart()


def record_events(
    monkeypatch: pytest.MonkeyPatch,
) -> List[Tuple[str, Dict[str, Any]]]:
    events: List[Tuple[str, Dict[str, Any]]] = []

    def capture(name: str, **kwargs: Any) -> None:
        events.append((name, dict(kwargs.get("data") or {})))

    monkeypatch.setattr(telemetry, "record_event", capture)
    return events


def test_accepting_a_word_replaces_the_typed_fragment() -> None:
    editor = make_editor("hello wo", "world peace\n")
    place_cursor(editor, 8)

    task = completion(editor, make_trigger(editor), live_handle())
    assert task is not None
    response = task()

    assert [item.label for item in response.items] == ["hello", "peace", "world"]
    world = next(item for item in response.items if item.label == "world")
    view, doc = editor.current()
    doc.apply(world.transaction, view.id)
    assert str(doc.text()) == "hello world"
    assert doc.selection(view.id).primary() == Range.point(11)


def test_items_carry_word_metadata_and_context() -> None:
    config = WordCompletionConfig(priority=5)
    editor = make_editor("alpha al\n", config=config)
    place_cursor(editor, 8)
    token = object()

    task = completion(editor, make_trigger(editor), live_handle(), token)
    assert task is not None
    response = task()

    assert response.provider is CompletionProvider.WORD
    assert response.context.is_incomplete is False
    assert response.context.priority == 5
    assert response.context.savepoint is token
    (item,) = response.items
    assert item.label == "alpha"
    assert item.kind == WORD_COMPLETION_KIND
    assert item.documentation is None
    assert item.is_word


def test_default_savepoint_tracks_document_revision() -> None:
    editor = make_editor("alpha al\n")
    place_cursor(editor, 8)
    _view, doc = editor.current()

    task = completion(editor, make_trigger(editor), live_handle())

    assert task is not None
    assert task().context.savepoint == doc.savepoint()


def test_no_completion_without_prefix() -> None:
    editor = make_editor("hello world\n")
    place_cursor(editor, 0)

    assert completion(editor, make_trigger(editor), live_handle()) is None


def test_automatic_trigger_requires_eight_word_graphemes() -> None:
    editor = make_editor("configuration configu")
    place_cursor(editor, 21)

    trigger = make_trigger(editor, TriggerKind.AUTO)
    assert completion(editor, trigger, live_handle()) is None


def test_automatic_trigger_with_long_prefix() -> None:
    editor = make_editor("configuration configur")
    place_cursor(editor, 22)

    task = completion(editor, make_trigger(editor, TriggerKind.AUTO), live_handle())
    assert task is not None
    (item,) = task().items

    view, doc = editor.current()
    doc.apply(item.transaction, view.id)
    assert str(doc.text()) == "configuration configuration"


def test_canceled_handle_yields_nothing() -> None:
    editor = make_editor("hello he\n")
    place_cursor(editor, 8)
    controller = TaskController()
    handle = controller.restart()
    controller.cancel()

    assert completion(editor, make_trigger(editor), handle) is None


def test_superseded_handle_yields_nothing() -> None:
    editor = make_editor("hello he\n")
    place_cursor(editor, 8)
    controller = TaskController()
    stale = controller.restart()
    controller.restart()

    assert completion(editor, make_trigger(editor), stale) is None


def test_disabled_word_completion_yields_nothing() -> None:
    editor = make_editor("hello he\n", config=WordCompletionConfig(enable=False))
    place_cursor(editor, 8)

    assert completion(editor, make_trigger(editor), live_handle()) is None


def test_empty_candidate_set_still_produces_a_response() -> None:
    editor = make_editor("xy")
    place_cursor(editor, 2)

    task = completion(editor, make_trigger(editor), live_handle())
    assert task is not None
    response = task()

    assert response.items == ()
    assert response.provider is CompletionProvider.WORD


def test_words_from_other_documents_are_offered() -> None:
    editor = make_editor("x ba", "banana\n", "bandana\n")
    place_cursor(editor, 4)

    task = completion(editor, make_trigger(editor), live_handle())
    assert task is not None

    assert [item.label for item in task().items] == ["banana", "bandana"]


def test_multi_cursor_edit_replaces_fragment_at_every_cursor() -> None:
    editor = make_editor("fo\nfo\nfoobar\n")
    place_cursor(editor, 2, 5)

    task = completion(editor, make_trigger(editor), live_handle())
    assert task is not None
    items = {item.label: item for item in task().items}

    assert sorted(items) == ["fo", "foobar"]
    view, doc = editor.current()
    doc.apply(items["foobar"].transaction, view.id)
    assert str(doc.text()) == "foobar\nfoobar\nfoobar\n"


def test_running_the_task_twice_is_deterministic() -> None:
    editor = make_editor("gamma alpha beta al\n", "delta alpine\n")
    place_cursor(editor, 19)

    task = completion(editor, make_trigger(editor), live_handle())
    assert task is not None
    first = task()
    second = task.run()

    assert first.items == second.items
    assert [item.label for item in first.items] == [
        "alpha",
        "alpine",
        "beta",
        "delta",
        "gamma",
    ]


def test_skipped_requests_record_the_reason(monkeypatch: pytest.MonkeyPatch) -> None:
    disabled = make_editor("hello he\n", config=WordCompletionConfig(enable=False))
    no_prefix = make_editor("hello world\n")
    place_cursor(no_prefix, 0)
    events = record_events(monkeypatch)

    completion(disabled, make_trigger(disabled), live_handle())
    completion(no_prefix, make_trigger(no_prefix), live_handle())

    assert [(name, data["reason"]) for name, data in events] == [
        ("completion.word.skip", "disabled"),
        ("completion.word.skip", "no_prefix"),
    ]


def test_canceled_request_is_recorded(monkeypatch: pytest.MonkeyPatch) -> None:
    editor = make_editor("hello he\n")
    place_cursor(editor, 8)
    controller = TaskController()
    handle = controller.restart()
    controller.cancel()
    events = record_events(monkeypatch)

    assert completion(editor, make_trigger(editor), handle) is None

    _view, doc = editor.current()
    assert events == [("completion.word.canceled", {"doc": doc.id})]
