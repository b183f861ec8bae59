from __future__ import annotations

from completion_engine.buffer import CharCategory, categorize_char
from completion_engine.buffer.chars import (
    char_is_whitespace,
    char_is_word,
    grapheme_is_word,
)


def test_combining_vowel_signs_are_word_characters() -> None:
    for ch in "\u0941\u093f\u093e":
        assert char_is_word(ch)
    assert grapheme_is_word("दु")
    assert char_is_word("_")
    assert char_is_word("\u0663")
    assert not char_is_word("-")


def test_whitespace_follows_unicode_white_space() -> None:
    assert char_is_whitespace(" ")
    assert char_is_whitespace("\u3000")
    for ch in "\x1c\x1d\x1e\x1f":
        assert not char_is_whitespace(ch)


def test_categories() -> None:
    assert categorize_char("\n") is CharCategory.EOL
    assert categorize_char("\t") is CharCategory.WHITESPACE
    assert categorize_char("\u093f") is CharCategory.WORD
    assert categorize_char(".") is CharCategory.PUNCTUATION
    assert categorize_char("\x1c") is CharCategory.UNKNOWN
