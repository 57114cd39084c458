"""Unit tests for pre-tokenization, corpus building, pair analysis and merging."""

from collections import Counter

import pytest

from wordbpe._bpe import merge_pair, merge_word, most_frequent_pair, pair_frequencies
from wordbpe.corpus import build_alphabet, build_corpus, count_characters
from wordbpe.errors import PatternError
from wordbpe.pretokenize import build_split_pattern, pre_tokenize

TEXT = "a test? yes, a test."


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def corpus():
    """Return the character-level corpus of TEXT."""
    return build_corpus(pre_tokenize(TEXT))


# Pre-tokenization
# ---------------------------------------------------------------------------


def test_pre_tokenize_splits_on_punctuation():
    assert pre_tokenize(TEXT) == ["a", " test", "?", " yes", ",", " a", " test", "."]


def test_pre_tokenize_empty_string():
    """Empty input yields a single empty word unit."""
    assert pre_tokenize("") == [""]


def test_pre_tokenize_consecutive_punctuation():
    """Punctuation followed by punctuation becomes its own unit."""
    assert pre_tokenize("hi!! you") == ["hi", "!", "!", " you"]


def test_pre_tokenize_leading_punctuation():
    assert pre_tokenize(" x") == [" x"]
    assert pre_tokenize("\n\nab") == ["\n", "\nab"]


def test_pre_tokenize_does_not_normalize():
    """Case, tabs and repeated spaces pass through untouched."""
    assert pre_tokenize("A\tB  c") == ["A\tB", " ", " c"]


@pytest.mark.parametrize(
    "text",
    [
        TEXT,
        "",
        "...",
        "no punctuation at all",
        "line one\nline two\n",
        "café naïve 日本語! \U0001f389?",
        "  leading and trailing  ",
    ],
)
def test_pre_tokenize_reconstructs_text(text):
    """Joining the units gives back the original text."""
    assert "".join(pre_tokenize(text)) == text


def test_pre_tokenize_custom_punctuation():
    assert pre_tokenize("a-b c", punctuation={"-"}) == ["a", "-b c"]


def test_pre_tokenize_escapes_class_metacharacters():
    """Characters like ] and ^ are treated literally."""
    assert pre_tokenize("a]b^c", punctuation={"]", "^"}) == ["a", "]b", "^c"]


def test_empty_punctuation_raises():
    with pytest.raises(PatternError):
        build_split_pattern(set())


def test_multichar_punctuation_raises():
    with pytest.raises(PatternError):
        build_split_pattern({"ab"})


# Corpus model
# ---------------------------------------------------------------------------


def test_build_alphabet_returns_unique_characters():
    expected = [
        " ",
        ",",
        ".",
        "<|endoftext|>",
        "<|startoftext|>",
        "?",
        "a",
        "e",
        "s",
        "t",
        "y",
    ]
    assert sorted(build_alphabet(TEXT)) == expected


def test_count_characters_excludes_markers():
    assert count_characters(TEXT) == 9


def test_build_corpus_counts_words(corpus):
    expected = {
        ("a",): 1,
        (" ", "t", "e", "s", "t"): 2,
        ("?",): 1,
        (" ", "y", "e", "s"): 1,
        (",",): 1,
        (" ", "a"): 1,
        (".",): 1,
    }
    assert dict(corpus) == expected


def test_corpus_counts_sum_to_word_units(corpus):
    assert sum(corpus.values()) == len(pre_tokenize(TEXT))


# Pair frequencies
# ---------------------------------------------------------------------------


def test_most_frequent_pair(corpus):
    assert most_frequent_pair(corpus) == (("e", "s"), 3)


def test_pair_frequencies_weight_by_word_count(corpus):
    freqs = pair_frequencies(corpus)
    assert freqs[(" ", "t")] == 2
    assert freqs[("t", "e")] == 2
    assert freqs[("e", "s")] == 3
    assert freqs[(" ", "a")] == 1


def test_most_frequent_pair_tie_prefers_greater_pair():
    corpus = Counter({("a", "b"): 1, ("c", "d"): 1, ("b", "z"): 1})
    assert most_frequent_pair(corpus) == (("c", "d"), 1)


def test_most_frequent_pair_tie_compares_second_symbol():
    corpus = Counter({("x", "a"): 2, ("x", "b"): 2})
    assert most_frequent_pair(corpus) == (("x", "b"), 2)


def test_most_frequent_pair_independent_of_insertion_order():
    words = [(("q", "r"), 2), (("a", "b"), 1), (("z", "y"), 2), (("a", "b", "c"), 1)]
    forward = Counter(dict(words))
    backward = Counter(dict(reversed(words)))
    assert most_frequent_pair(forward) == most_frequent_pair(backward) == (("z", "y"), 2)


def test_most_frequent_pair_counts_repeats_within_word():
    corpus = Counter({("a", "b", "a", "b"): 2, ("x", "y"): 3})
    assert most_frequent_pair(corpus) == (("a", "b"), 4)


def test_most_frequent_pair_without_pairs():
    corpus = Counter({("a",): 4, ("token",): 1})
    assert most_frequent_pair(corpus) == (None, 0)


# Merging
# ---------------------------------------------------------------------------


def test_merge_pair_returns_new_corpus(corpus):
    expected = {
        ("a",): 1,
        (" ", "t", "es", "t"): 2,
        ("?",): 1,
        (" ", "y", "es"): 1,
        (",",): 1,
        (" ", "a"): 1,
        (".",): 1,
    }
    merged = merge_pair(corpus, ("e", "s"))
    assert dict(merged) == expected
    # input left untouched
    assert (" ", "t", "e", "s", "t") in corpus


def test_merge_absent_pair_is_noop(corpus):
    assert merge_pair(corpus, ("q", "z")) == corpus


def test_merge_word_three_identical_symbols():
    """Only the first of two overlapping matches is merged in one pass."""
    assert merge_word(("a", "a", "a"), ("a", "a")) == ("aa", "a")


def test_merge_word_four_identical_symbols():
    assert merge_word(("a", "a", "a", "a"), ("a", "a")) == ("aa", "aa")


def test_merge_word_single_symbol():
    assert merge_word(("a",), ("a", "a")) == ("a",)


def test_merge_coalesces_identical_words():
    corpus = Counter({("ab", "c"): 2, ("a", "b", "c"): 3})
    assert merge_pair(corpus, ("a", "b")) == Counter({("ab", "c"): 5})


def test_default_split_pattern_matches_whitespace_punctuation():
    """Space and newline compile into the split pattern as literals."""
    pattern = build_split_pattern()
    assert pattern.findall("a b\nc.d") == ["a", " b", "\nc", ".d"]
