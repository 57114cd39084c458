"""Standalone BPE training module."""

from collections.abc import Iterable
from dataclasses import dataclass, field
import logging

from ._bpe import merge_pair, most_frequent_pair
from ._progress import _progress_bar
from .corpus import build_corpus, count_characters
from .errors import VocabularyError
from .pretokenize import PUNCTUATION, pre_tokenize
from .types import Corpus, SymbolPair, TokenizerDictionary

log = logging.getLogger(__name__)


@dataclass
class BPETrainingResult:
    """Results from one BPE training run."""

    vocab_size: int
    dictionary: TokenizerDictionary
    n_merges_completed: int
    # learned pairs in merge order with the frequency that selected them
    merges: list[tuple[SymbolPair, int]] = field(default_factory=list)


def build_dictionary(corpus: Corpus) -> TokenizerDictionary:
    """Map each final word's surface string to its symbol sequence."""
    return {"".join(word): list(word) for word in corpus}


def train_bpe(
    text: str,
    vocab_size: int,
    punctuation: Iterable[str] = PUNCTUATION,
    verbose: bool = False,
    show_progress: bool = True,
) -> BPETrainingResult:
    """
    Learn merges over the pre-tokenized words of ``text``.

    The vocabulary starts at the number of distinct characters in ``text``
    and grows by one per merge until ``vocab_size`` is reached or no word
    has two symbols left to merge.

    :param text: Training corpus.
    :param vocab_size: Target vocabulary size, start/end markers excluded.
    :param punctuation: Characters that delimit word units.
    :param verbose: Log each learned merge when ``True``.
    :param show_progress: Display a progress bar during training when ``True``.
    :returns: Achieved vocabulary size, the word dictionary and the merge history.
    :raises VocabularyError: If ``vocab_size`` is below the distinct character count.
    """
    n_chars = count_characters(text)

    if vocab_size < n_chars:
        raise VocabularyError(
            "vocab size must be greater than the number of distinct characters",
            vocab_size=vocab_size,
            n_chars=n_chars,
        )

    if vocab_size == n_chars:
        log.warning(
            f"vocab size equals the number of distinct characters ({n_chars}), "
            "no training performed and the dictionary is empty"
        )
        return BPETrainingResult(
            vocab_size=vocab_size, dictionary={}, n_merges_completed=0
        )

    corpus = build_corpus(pre_tokenize(text, punctuation))
    log.info(
        f"training on {sum(corpus.values())} words ({len(corpus)} distinct), "
        f"{n_chars} characters, target vocab size {vocab_size}"
    )

    n_merges = vocab_size - n_chars
    merges: list[tuple[SymbolPair, int]] = []
    current_size = n_chars

    with _progress_bar(n_merges, "training", show_progress) as bar:
        while current_size < vocab_size:
            pair, freq = most_frequent_pair(corpus)
            if pair is None or freq == 0:
                break

            corpus = merge_pair(corpus, pair)
            current_size += 1
            merges.append((pair, freq))
            bar.update(1)

            if verbose:
                log.info(
                    "merge %d/%d: %r -> %r (freq %d)",
                    len(merges),
                    n_merges,
                    pair,
                    pair[0] + pair[1],
                    freq,
                )

    if len(merges) < n_merges:
        log.warning(
            f"no more symbol pairs to merge after {len(merges)} merges "
            f"(requested {n_merges}) stopping early"
        )

    return BPETrainingResult(
        vocab_size=current_size,
        dictionary=build_dictionary(corpus),
        n_merges_completed=len(merges),
        merges=merges,
    )


__all__ = ["BPETrainingResult", "build_dictionary", "train_bpe"]
