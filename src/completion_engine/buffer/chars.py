"""Character classification used by word motions and word mining."""

from __future__ import annotations

import unicodedata
from enum import Enum

import regex

LINE_ENDINGS = frozenset("\n\r\u000b\u000c\u0085\u2028\u2029")

_PUNCTUATION_CATEGORIES = frozenset(
    {"Pc", "Pd", "Ps", "Pe", "Pi", "Pf", "Po", "Sm", "Sc", "Sk"}
)
_WHITESPACE = regex.compile(r"\p{White_Space}")
_WORD = regex.compile(r"[\p{Alphabetic}\p{N}_]")


class CharCategory(Enum):
    WHITESPACE = "whitespace"
    EOL = "eol"
    WORD = "word"
    PUNCTUATION = "punctuation"
    UNKNOWN = "unknown"


def char_is_line_ending(ch: str) -> bool:
    return ch in LINE_ENDINGS


def char_is_whitespace(ch: str) -> bool:
    return _WHITESPACE.fullmatch(ch) is not None


def char_is_word(ch: str) -> bool:
    """Alphabetic (combining vowel signs included), numeric, or ``_``."""

    return _WORD.fullmatch(ch) is not None


def char_is_punctuation(ch: str) -> bool:
    return unicodedata.category(ch) in _PUNCTUATION_CATEGORIES


def categorize_char(ch: str) -> CharCategory:
    if char_is_line_ending(ch):
        return CharCategory.EOL
    if char_is_whitespace(ch):
        return CharCategory.WHITESPACE
    if char_is_word(ch):
        return CharCategory.WORD
    if char_is_punctuation(ch):
        return CharCategory.PUNCTUATION
    return CharCategory.UNKNOWN


def grapheme_is_word(grapheme: str) -> bool:
    return bool(grapheme) and all(char_is_word(ch) for ch in grapheme)


__all__ = [
    "CharCategory",
    "LINE_ENDINGS",
    "categorize_char",
    "char_is_line_ending",
    "char_is_punctuation",
    "char_is_whitespace",
    "char_is_word",
    "grapheme_is_word",
]
