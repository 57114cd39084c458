"""Corpus model: word units as symbol sequences with occurrence counts."""

from collections import Counter
from collections.abc import Iterable
from typing import Final

from .types import Corpus, Word

START_TOKEN: Final[str] = "<|startoftext|>"
END_TOKEN: Final[str] = "<|endoftext|>"


def build_alphabet(text: str) -> set[str]:
    """Return the distinct characters of ``text`` plus the start/end markers."""
    alphabet = set(text)
    alphabet.add(START_TOKEN)
    alphabet.add(END_TOKEN)
    return alphabet


def count_characters(text: str) -> int:
    """Return the number of distinct characters in ``text`` (markers excluded)."""
    return len(build_alphabet(text)) - 2


def split_word(unit: str) -> Word:
    """Split a word unit into one symbol per character."""
    return tuple(unit)


def build_corpus(units: Iterable[str]) -> Corpus:
    """
    Count word units as character-level symbol sequences.

    Units with identical spelling share one entry; the counts sum to the
    number of units given.
    """
    return Counter(split_word(unit) for unit in units)


__all__ = [
    "START_TOKEN",
    "END_TOKEN",
    "build_alphabet",
    "count_characters",
    "split_word",
    "build_corpus",
]
