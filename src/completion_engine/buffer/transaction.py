"""Edit descriptions: ordered replacement sets applied to a snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from completion_engine.runtime import telemetry

from .selection import Range, Selection
from .snapshot import BufferSnapshot

ChangeSpec = Tuple[int, int, Optional[str]]


class BufferValidationError(RuntimeError):
    """Raised when a transaction does not fit the text it is applied to."""

    def __init__(self, message: str, *, change: "Change | None" = None) -> None:
        super().__init__(message)
        self.change = change


@dataclass(frozen=True, slots=True)
class Change:
    """Replace ``[start, end)`` with ``insert`` (``None`` deletes)."""

    start: int
    end: int
    insert: Optional[str] = None

    @property
    def delta(self) -> int:
        return len(self.insert or "") - (self.end - self.start)


@dataclass(frozen=True, slots=True)
class Transaction:
    changes: Tuple[Change, ...]
    len_before: int

    def __post_init__(self) -> None:
        last_end = 0
        for change in self.changes:
            if change.start > change.end:
                raise BufferValidationError("Change start after end", change=change)
            if change.start < last_end:
                raise BufferValidationError("Changes overlap", change=change)
            if change.end > self.len_before:
                raise BufferValidationError("Change out of range", change=change)
            last_end = change.end

    @classmethod
    def change(
        cls, text: BufferSnapshot, changes: Iterable[ChangeSpec]
    ) -> "Transaction":
        built = tuple(Change(start, end, insert) for start, end, insert in changes)
        return cls(changes=built, len_before=text.len_chars)

    @classmethod
    def change_by_selection(
        cls,
        text: BufferSnapshot,
        selection: Selection,
        fn: Callable[[Range], ChangeSpec],
    ) -> "Transaction":
        """Build one change per selection range, in selection order.

        Starts are clamped to the previous change's end so neighbouring
        cursors deleting back over each other still produce a valid set.
        """

        changes = []
        last_end = 0
        for selected in selection:
            start, end, insert = fn(selected)
            start = max(text.clamp(start), last_end)
            end = max(text.clamp(end), start)
            changes.append(Change(start, end, insert))
            last_end = end
        return cls(changes=tuple(changes), len_before=text.len_chars)

    def is_empty(self) -> bool:
        return all(c.start == c.end and not c.insert for c in self.changes)

    def apply(self, text: BufferSnapshot) -> BufferSnapshot:
        if text.len_chars != self.len_before:
            raise BufferValidationError("Transaction built for a different text")
        with telemetry.span(
            "buffer::apply",
            component="buffer",
            metadata={"changes": len(self.changes)},
        ):
            source = text.text
            pieces = []
            cursor = 0
            for change in self.changes:
                pieces.append(source[cursor : change.start])
                if change.insert:
                    pieces.append(change.insert)
                cursor = change.end
            pieces.append(source[cursor:])
        return BufferSnapshot("".join(pieces))

    def map_pos(self, pos: int) -> int:
        """Map a pre-edit offset to the post-edit text.

        Positions inside or at the end of a replaced span land after the
        inserted text.
        """

        offset = 0
        for change in self.changes:
            if pos < change.start:
                break
            if pos <= change.end:
                return change.start + offset + len(change.insert or "")
            offset += change.delta
        return pos + offset


__all__ = ["BufferValidationError", "Change", "ChangeSpec", "Transaction"]
