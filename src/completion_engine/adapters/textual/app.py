"""Executable Textual demo: two buffers side by side sharing word completion."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use completion_engine.adapters.textual.app"
    ) from exc

from completion_engine.buffer import Selection
from completion_engine.completion import CompletionItem
from completion_engine.host import Editor, View

from .controller import TextualCompletionAdapter, TextualUIHooks

SAMPLE_LEFT = """\
def render_viewport(snapshot, viewport_height):
    visible_lines = snapshot.lines[:viewport_height]
    return visible_lines
"""

SAMPLE_RIGHT = """\
Notes: completion candidates come from every visible viewport,
including buffers that are not focused.
"""

MAX_SUGGESTIONS = 8


def create_default_editor(
    left: str = SAMPLE_LEFT, right: str = SAMPLE_RIGHT
) -> tuple[Editor, View, View]:
    """Build an editor with two documents, each shown in its own view."""

    editor = Editor()
    left_doc = editor.open_document(left, name="left")
    right_doc = editor.open_document(right, name="right")
    left_view = editor.open_view(left_doc.id)
    right_view = editor.open_view(right_doc.id)
    left_doc.set_selection(left_view.id, Selection.point(left_doc.text().len_chars))
    return editor, left_view, right_view


class CompletionDemoApp(App[None]):
    """Minimal Textual UI around ``TextualCompletionAdapter``."""

    CSS = """
	Screen {
		layout: vertical;
	}

	.buffer-view {
		width: 1fr;
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#completion-menu {
		height: auto;
		max-height: 10;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+n", "complete", "Complete"),
        ("ctrl+y", "accept", "Accept"),
        ("ctrl+w", "switch_view", "Switch buffer"),
    ]

    def __init__(self, *, left: str = SAMPLE_LEFT, right: str = SAMPLE_RIGHT) -> None:
        super().__init__()
        self.editor, self._left, self._right = create_default_editor(left, right)
        self.adapter: TextualCompletionAdapter | None = None
        self._panes: dict[int, Static] = {}
        self._menu: Static | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            for view in (self._left, self._right):
                pane = Static("", classes="buffer-view")
                self._panes[view.id] = pane
                yield pane
        self._menu = Static("", id="completion-menu")
        self._status = Static("", id="status-line")
        yield self._menu
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            show_completions=self._show_completions,
            update_buffer=self._update_buffer,
            update_status=self._update_status,
        )
        self.adapter = TextualCompletionAdapter(self.editor, hooks)
        self._render_all()
        self.call_after_refresh(self._sync_heights)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self.call_after_refresh(self._sync_heights)

    def _sync_heights(self) -> None:
        for view_id, pane in self._panes.items():
            self.editor.view(view_id).height = max(pane.size.height, 1)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if event.key in {"escape", "backspace"}:
            self.adapter.handle_textual_key(event.key)
        elif event.key == "enter":
            self.adapter.handle_textual_key("enter", text="\n")
        elif event.is_printable and event.character:
            self.adapter.handle_textual_key(event.key, text=event.character)
        else:
            return
        event.stop()

    def action_complete(self) -> None:
        if self.adapter:
            self.adapter.request()

    def action_accept(self) -> None:
        if self.adapter:
            self.adapter.accept(0)

    def action_switch_view(self) -> None:
        if not self.adapter:
            return
        self.adapter.dismiss()
        current, _doc = self.editor.current()
        target = self._right if current.id == self._left.id else self._left
        self.editor.focus(target.id)
        self._render_all()

    def _render_all(self) -> None:
        focused, _doc = self.editor.current()
        for view, _is_focused in self.editor.views():
            doc = self.editor.document(view.doc)
            text = doc.text()
            cursor = doc.selection(view.id).primary().cursor(text)
            self._render_pane(view.id, str(text), cursor, view.id == focused.id)

    def _render_pane(self, view_id: int, text: str, cursor: int, focused: bool) -> None:
        pane = self._panes.get(view_id)
        if pane is None:
            return
        rendered = Text(text[:cursor])
        under = text[cursor : cursor + 1]
        if not focused:
            rendered.append(text[cursor:])
        elif under and under != "\n":
            rendered.append(under, style="reverse")
            rendered.append(text[cursor + 1 :])
        else:
            rendered.append(" ", style="reverse")
            rendered.append(text[cursor:])
        pane.update(rendered)

    def _update_buffer(self, text: str, cursor: int) -> None:
        view, _doc = self.editor.current()
        self._render_pane(view.id, text, cursor, True)

    def _show_completions(self, items: Sequence[CompletionItem]) -> None:
        if self._menu is None:
            return
        lines = [f"{item.label}  [{item.kind}]" for item in items[:MAX_SUGGESTIONS]]
        self._menu.update(Text("\n".join(lines)))

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(Text(status))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the word-completion Textual demo."
    )
    parser.add_argument("left", nargs="?", help="File shown in the left buffer")
    parser.add_argument("right", nargs="?", help="File shown in the right buffer")
    return parser.parse_args(argv)


def _read(path: Optional[str], fallback: str) -> str:
    if not path:
        return fallback
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = CompletionDemoApp(
        left=_read(args.left, SAMPLE_LEFT), right=_read(args.right, SAMPLE_RIGHT)
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
