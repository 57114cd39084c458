"""
Core Byte Pair Encoding (BPE) operations over a word-frequency corpus.
"""

from collections import Counter

from .types import Corpus, SymbolPair, Word


def pair_frequencies(corpus: Corpus) -> Counter[SymbolPair]:
    """Count adjacent symbol pairs, weighting each by its word's frequency."""
    freqs: Counter[SymbolPair] = Counter()
    for word, count in corpus.items():
        for pair in zip(word, word[1:]):
            freqs[pair] += count
    return freqs


def most_frequent_pair(corpus: Corpus) -> tuple[SymbolPair | None, int]:
    """
    Find the most frequent adjacent symbol pair in a single pass.

    Ties are settled as they are discovered in favour of the pair that is
    lexicographically greater (first symbol, then second). The result does
    not depend on the iteration order of ``corpus``.

    :param corpus: Word -> occurrence count mapping.
    :returns: ``(pair, frequency)``, or ``(None, 0)`` if no word has two symbols.
    """
    freqs: Counter[SymbolPair] = Counter()
    best: SymbolPair | None = None
    highest = 0

    for word, count in corpus.items():
        for pair in zip(word, word[1:]):
            freqs[pair] += count
            freq = freqs[pair]
            if freq > highest:
                highest = freq
                best = pair
            elif freq == highest and best is not None and pair > best:
                best = pair

    return best, highest


def merge_word(word: Word, pair: SymbolPair) -> Word:
    """
    Replace every non-overlapping occurrence of ``pair`` in ``word``.

    The scan runs left to right and skips past each merged pair, so three
    identical symbols ``a a a`` merged on ``(a, a)`` give ``aa a``.
    """
    if len(word) < 2:
        return word

    merged = pair[0] + pair[1]
    new_word: list[str] = []

    i = 0
    n = len(word)
    while i < n:
        # check if we can form a pair and it matches the target
        if i < n - 1 and word[i] == pair[0] and word[i + 1] == pair[1]:
            new_word.append(merged)
            i += 2
        else:
            new_word.append(word[i])
            i += 1

    return tuple(new_word)


def merge_pair(corpus: Corpus, pair: SymbolPair) -> Corpus:
    """
    Return a new corpus with ``pair`` merged inside every word.

    Words that become identical after the merge are coalesced and their
    counts summed. The input corpus is left untouched.
    """
    new_corpus: Corpus = Counter()
    for word, count in corpus.items():
        new_corpus[merge_word(word, pair)] += count
    return new_corpus


__all__ = ["pair_frequencies", "most_frequent_pair", "merge_word", "merge_pair"]
