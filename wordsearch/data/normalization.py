"""Shared helpers for word and alphabet normalization."""

from __future__ import annotations

from typing import Iterable, List


def clean_word(text: str, uppercase: bool = False) -> str:
    """Return ``text`` without surrounding whitespace, optionally uppercased."""

    if not text:
        return ""
    word = text.strip()
    return word.upper() if uppercase else word


def clean_words(entries: Iterable[str], uppercase: bool = False) -> List[str]:
    """Clean every entry and drop the ones that end up blank."""

    cleaned = (clean_word(entry, uppercase) for entry in entries)
    return [word for word in cleaned if word]


def parse_letters(text: str, uppercase: bool = False) -> List[str]:
    """Split an alphabet given as ``"A B C"`` or ``"ABC"`` into single letters.

    Whitespace separates nothing on its own: every non-blank character is one
    fill letter, and repeated letters are kept so they weigh more in the draw.
    """

    letters = [char for char in text if not char.isspace()]
    return [letter.upper() for letter in letters] if uppercase else letters


__all__ = ["clean_word", "clean_words", "parse_letters"]
