"""Immutable text snapshots with line and grapheme-cluster navigation."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import regex

LINE_BREAK = regex.compile(r"\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]")
GRAPHEME = regex.compile(r"\X")

# Characters of context segmented on each side of a position when looking for
# the nearest grapheme boundary. Segmentation resynchronises well within this.
_GRAPHEME_WINDOW = 32


@dataclass(frozen=True, slots=True)
class BufferSnapshot:
    """Read-only view over a document's text.

    All indices are character (code point) offsets. Accessors clamp their
    arguments to the snapshot bounds instead of raising, so callers working
    with stale or malformed positions degrade to empty results.
    """

    text: str = ""
    _line_starts: Tuple[int, ...] = field(
        init=False, repr=False, compare=False, default=()
    )

    def __post_init__(self) -> None:
        starts = [0]
        starts.extend(match.end() for match in LINE_BREAK.finditer(self.text))
        object.__setattr__(self, "_line_starts", tuple(starts))

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)

    @property
    def len_chars(self) -> int:
        return len(self.text)

    @property
    def len_lines(self) -> int:
        return len(self._line_starts)

    def clamp(self, index: int) -> int:
        return min(max(index, 0), len(self.text))

    def get_char(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.text):
            return self.text[index]
        return None

    def char(self, index: int) -> str:
        """Character at ``index`` clamped into the snapshot ("" when empty)."""

        if not self.text:
            return ""
        return self.text[min(max(index, 0), len(self.text) - 1)]

    def slice(self, start: int = 0, end: Optional[int] = None) -> str:
        start, end = self._bounds(start, end)
        return self.text[start:end]

    def chars_at(self, index: int) -> Iterator[str]:
        return iter(self.text[self.clamp(index) :])

    def line_to_char(self, line: int) -> int:
        if line <= 0:
            return 0
        if line >= len(self._line_starts):
            return len(self.text)
        return self._line_starts[line]

    def char_to_line(self, index: int) -> int:
        return bisect_right(self._line_starts, self.clamp(index)) - 1

    def graphemes(self, start: int = 0, end: Optional[int] = None) -> Iterator[str]:
        """Yield grapheme clusters of ``[start, end)`` front to back."""

        start, end = self._bounds(start, end)
        for match in GRAPHEME.finditer(self.text, start, end):
            yield match.group()

    def graphemes_rev(
        self, end: Optional[int] = None, start: int = 0
    ) -> Iterator[str]:
        """Yield grapheme clusters of ``[start, end)`` back to front.

        Text is segmented in windows ending at ``end`` so that taking a few
        clusters off the end of a large buffer stays cheap.
        """

        start, end = self._bounds(start, end)
        window = _GRAPHEME_WINDOW
        while end > start:
            lo = max(start, end - window)
            spans = [m.span() for m in GRAPHEME.finditer(self.text, lo, end)]
            if lo > start:
                if len(spans) < 2:
                    window *= 2
                    continue
                # The first cluster may be cut by the window edge.
                spans = spans[1:]
            for span_start, span_end in reversed(spans):
                yield self.text[span_start:span_end]
            end = spans[0][0]

    def prev_grapheme_boundary(self, index: int) -> int:
        index = self.clamp(index)
        if index == 0:
            return 0
        lo = max(0, index - _GRAPHEME_WINDOW)
        hi = min(len(self.text), index + _GRAPHEME_WINDOW)
        candidates = [b for b in self._boundaries(lo, hi) if b < index]
        return candidates[-1] if candidates else index - 1

    def next_grapheme_boundary(self, index: int) -> int:
        index = self.clamp(index)
        if index == len(self.text):
            return index
        lo = max(0, index - _GRAPHEME_WINDOW)
        hi = min(len(self.text), index + _GRAPHEME_WINDOW)
        candidates = [b for b in self._boundaries(lo, hi) if b > index]
        return candidates[0] if candidates else index + 1

    def _boundaries(self, lo: int, hi: int) -> List[int]:
        spans = [m.span() for m in GRAPHEME.finditer(self.text, lo, hi)]
        boundaries = [start for start, _ in spans]
        if lo > 0 and boundaries:
            boundaries = boundaries[1:]
        if hi == len(self.text):
            boundaries.append(hi)
        return boundaries

    def _bounds(self, start: int, end: Optional[int]) -> Tuple[int, int]:
        start = self.clamp(start)
        end = len(self.text) if end is None else self.clamp(end)
        return start, max(start, end)


__all__ = ["BufferSnapshot", "GRAPHEME", "LINE_BREAK"]
