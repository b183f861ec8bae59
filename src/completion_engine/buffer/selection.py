"""Cursor ranges and multi-cursor selections over character offsets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, Tuple

if TYPE_CHECKING:
    from .snapshot import BufferSnapshot


@dataclass(frozen=True, slots=True)
class Range:
    """A selection range; ``head`` is the moving end, ``anchor`` the fixed end."""

    anchor: int
    head: int

    @classmethod
    def point(cls, head: int) -> "Range":
        return cls(head, head)

    @property
    def from_(self) -> int:
        return min(self.anchor, self.head)

    @property
    def to(self) -> int:
        return max(self.anchor, self.head)

    def is_empty(self) -> bool:
        return self.anchor == self.head

    def cursor(self, text: "BufferSnapshot") -> int:
        """Offset of the block cursor drawn for this range."""

        if self.head > self.anchor:
            return text.prev_grapheme_boundary(self.head)
        return text.clamp(self.head)

    def map(self, fn: Callable[[int], int]) -> "Range":
        return Range(fn(self.anchor), fn(self.head))


@dataclass(frozen=True, slots=True)
class Selection:
    """Ordered, non-empty set of ranges with one primary range."""

    ranges: Tuple[Range, ...]
    primary_index: int = 0

    def __post_init__(self) -> None:
        if not self.ranges:
            raise ValueError("Selection requires at least one range")
        if not 0 <= self.primary_index < len(self.ranges):
            raise ValueError("primary_index out of range")

    @classmethod
    def point(cls, pos: int) -> "Selection":
        return cls((Range.point(pos),))

    def primary(self) -> Range:
        return self.ranges[self.primary_index]

    def map(self, fn: Callable[[int], int]) -> "Selection":
        return Selection(
            tuple(r.map(fn) for r in self.ranges), self.primary_index
        )

    def __iter__(self) -> Iterator[Range]:
        return iter(self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)


__all__ = ["Range", "Selection"]
