"""Punctuation-delimited pre-tokenization of raw text into word units."""

from collections.abc import Iterable
from functools import lru_cache
from typing import Final

import regex as re

from .errors import PatternError

PUNCTUATION: Final[frozenset[str]] = frozenset({" ", ".", ",", "!", "?", "\n"})


def _char_class(punctuation: frozenset[str]) -> str:
    """Return the body of a character class matching ``punctuation``."""
    # \UXXXXXXXX escapes keep whitespace and class metacharacters literal
    return "".join(f"\\U{ord(c):08x}" for c in sorted(punctuation))


@lru_cache(maxsize=16)
def _compile(punctuation: frozenset[str]) -> "re.Pattern[str]":
    body = _char_class(punctuation)
    # leading run without punctuation, then one punctuation char plus its tail
    return re.compile(rf"\A[^{body}]+|[{body}][^{body}]*")


def build_split_pattern(punctuation: Iterable[str] = PUNCTUATION) -> "re.Pattern[str]":
    """
    Compile the word-unit split pattern for a punctuation set.

    :param punctuation: Characters that start a new word unit.
    :returns: Compiled pattern whose matches cover the text exactly once.
    :raises PatternError: If the set is empty or holds anything but single characters.
    """
    punct = frozenset(punctuation)
    if not punct:
        raise PatternError("punctuation set must not be empty")
    if any(not isinstance(c, str) or len(c) != 1 for c in punct):
        raise PatternError(
            "punctuation must be single characters", punctuation=punct
        )
    return _compile(punct)


def pre_tokenize(text: str, punctuation: Iterable[str] = PUNCTUATION) -> list[str]:
    """
    Split text into punctuation-delimited word units.

    A punctuation character closes the current unit and opens the next one,
    which then absorbs every following non-punctuation character. Two
    punctuation characters in a row yield a single-character unit. Joining
    the result gives back ``text`` unchanged; empty input yields ``[""]``.

    >>> pre_tokenize("a test? yes.")
    ['a', ' test', '?', ' yes', '.']
    """
    pattern = build_split_pattern(punctuation)
    units: list[str] = pattern.findall(text)
    return units or [""]


__all__ = ["PUNCTUATION", "build_split_pattern", "pre_tokenize"]
