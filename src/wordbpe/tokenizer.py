"""
Word-level BPE tokenizer: training entry point, lookup-based tokenization and
serialization.
"""

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from types import MappingProxyType
from typing import Final, Self
import json
import logging
import os

from ._decorators import measure_time
from ._sanitise import render_symbol, render_symbols
from .corpus import END_TOKEN, START_TOKEN
from .errors import ModelLoadError, PatternError, TokenizationError, TrainingError
from .pretokenize import PUNCTUATION, build_split_pattern, pre_tokenize
from .trainer import train_bpe
from .types import Symbol, SymbolPair, TokenizerDictionary

PREFIX: Final[str] = "WordBPE"
try:
    _version = version("wordbpe")
except PackageNotFoundError:
    _version = "dev"


VERSION: Final[str] = _version
MODEL_SUFFIX: Final[str] = ".model"
VOCAB_SUFFIX: Final[str] = ".vocab"

log = logging.getLogger(__name__)


class Tokenizer:
    """
    Subword tokenizer backed by a memorized word -> symbols dictionary.

    Training learns merges over punctuation-delimited words; tokenization
    looks each word of the input up verbatim. Words never seen during
    training cannot be tokenized, even when made of known symbols.

    Example:
       >>> tok = Tokenizer.from_corpus("This is not a token.", vocab_size=18)
       >>> tok.tokenize("This token")
       ['<|startoftext|>', 'T', 'h', 'is', ' ', 'token', '<|endoftext|>']
    """

    def __init__(self, punctuation: Iterable[str] = PUNCTUATION) -> None:
        """Initialize an untrained tokenizer splitting words on ``punctuation``."""
        self.punctuation: frozenset[str] = frozenset(punctuation)
        # validates the set up front
        build_split_pattern(self.punctuation)
        # surface word -> symbols
        self._dictionary: TokenizerDictionary = {}
        self._vocab_size: int = 0
        # learned pairs in merge order, only kept for inspection
        self.merges: list[tuple[SymbolPair, int]] = []
        self._trained: bool = False

    @classmethod
    def from_corpus(
        cls,
        text: str,
        vocab_size: int,
        punctuation: Iterable[str] = PUNCTUATION,
        verbose: bool = False,
        show_progress: bool = True,
    ) -> Self:
        """Build and train a tokenizer in one step."""
        tok = cls(punctuation)
        tok.train(text, vocab_size, verbose=verbose, show_progress=show_progress)
        return tok

    @measure_time
    def train(
        self,
        text: str | list[str],
        vocab_size: int,
        verbose: bool = False,
        show_progress: bool = True,
    ) -> None:
        """
        Train the tokenizer on a corpus.

        List inputs are concatenated before pre-tokenization. Training stops at
        ``vocab_size`` or earlier when no more pairs can be merged.

        :param text: Training text as a single string or list of strings.
        :param vocab_size: Target vocabulary size, start/end markers excluded.
        :param verbose: Log each learned merge when ``True``.
        :param show_progress: Display a progress bar when ``True``.
        :raises VocabularyError: If ``vocab_size`` is below the distinct character count.
        """
        if isinstance(text, list):
            text = "".join(text)

        result = train_bpe(
            text,
            vocab_size,
            punctuation=self.punctuation,
            verbose=verbose,
            show_progress=show_progress,
        )

        self._dictionary = result.dictionary
        self._vocab_size = result.vocab_size
        self.merges = result.merges
        self._trained = True

    @property
    def dictionary(self) -> Mapping[str, list[Symbol]]:
        """Read-only view of the trained word dictionary."""
        return MappingProxyType(self._dictionary)

    def vocab_size(self) -> int:
        """Return the vocabulary size reached by training."""
        return self._vocab_size

    def tokenize(self, text: str) -> list[str]:
        """
        Tokenize text by dictionary lookup of its word units.

        The output is wrapped in start/end markers. Either every word is
        found or the whole call fails; no partial result is returned.

        :param text: Text to tokenize.
        :returns: Token strings, markers included.
        :raises TrainingError: If the tokenizer has not been trained yet.
        :raises TokenizationError: If a word unit is not in the dictionary.
        """
        if not self._trained:
            raise TrainingError(
                f"{self.__class__.__name__} must be trained before tokenizing"
            )

        tokens = [START_TOKEN]
        for word in pre_tokenize(text, self.punctuation):
            symbols = self._dictionary.get(word)
            if symbols is None:
                raise TokenizationError(
                    "word not found in vocabulary", word=word, input_text=text
                )
            tokens.extend(symbols)
        tokens.append(END_TOKEN)
        return tokens

    def tokenize_batch(
        self, texts: list[str], num_workers: int | None = None
    ) -> list[list[str]]:
        """
        Tokenize many texts concurrently, keeping input order.

        The dictionary is never mutated after training, so lookups from
        several threads need no locking. The first failing text raises.
        """
        if not self._trained:
            raise TrainingError(
                f"{self.__class__.__name__} must be trained before tokenizing"
            )

        if not texts:
            return []

        if num_workers is None:
            workers = os.cpu_count() or 1
        else:
            workers = max(1, num_workers)

        if workers == 1 or len(texts) == 1:
            return [self.tokenize(text) for text in texts]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.tokenize, texts))

    def detokenize(self, tokens: list[str]) -> str:
        """Join tokens back into text, dropping start/end markers."""
        return "".join(tok for tok in tokens if tok not in (START_TOKEN, END_TOKEN))

    def save(self, file_prefix: str) -> None:
        """
        Save tokenizer state to disk.

        Creates a .model file holding the word dictionary and a .vocab file
        with a human-readable rendering of every entry.

        :param file_prefix: Path prefix for output files.
        :raises TrainingError: If the tokenizer has not been trained yet.
        """
        if not self._trained:
            raise TrainingError(
                f"{self.__class__.__name__} must be trained before saving"
            )
        log.info(f"saving tokenizer to {file_prefix}")
        self._save_model(file_prefix)
        self._save_vocab(file_prefix)
        log.info("tokenizer saved successfully")

    def load(self, model_filename: str) -> None:
        """
        Load tokenizer state from a .model file.

        :param model_filename: Path to the .model file.
        :raises ModelLoadError: If the file does not exist, is not a .model
            file, has a version mismatch or is malformed.
        """
        path = Path(model_filename)

        if not path.exists():
            raise ModelLoadError("model filepath does not exist", model_path=str(path))

        if not path.suffix == MODEL_SUFFIX:
            raise ModelLoadError("expected .model file", model_path=str(path))

        log.info(f"loading model from {path}")

        dictionary: TokenizerDictionary = {}

        with path.open("r", encoding="utf-8") as f:
            header = f.readline().strip().split(" ")
            if len(header) != 2 or header[0] != PREFIX:
                raise ModelLoadError("not a wordbpe model", model_path=str(path))
            if header[1] != VERSION:
                raise ModelLoadError(
                    "model version mismatch", version_mismatch=(header[1], VERSION)
                )

            punct_line = f.readline().strip()
            if not punct_line.startswith("punct "):
                raise ModelLoadError(f"expected punctuation line, got {punct_line!r}")
            try:
                punctuation = frozenset(json.loads(punct_line[6:]))
                build_split_pattern(punctuation)
            except (ValueError, TypeError, PatternError) as e:
                raise ModelLoadError("invalid punctuation line") from e

            size_line = f.readline().strip()
            if not size_line.startswith("vocab_size "):
                raise ModelLoadError(f"expected vocab size line, got {size_line!r}")
            try:
                vocab_size = int(size_line[11:])
                if vocab_size < 0:
                    raise ValueError()
            except ValueError:
                raise ModelLoadError(f"invalid vocab size: {size_line[11:]!r}")

            marker = f.readline().strip()
            if marker != "---":
                raise ModelLoadError(
                    f"dictionary marker missing: (expected ---) (got {marker})"
                )

            log.debug("loading dictionary entries")
            for line in f:
                try:
                    surface, symbols = json.loads(line)
                except (ValueError, TypeError):
                    raise ModelLoadError(
                        f"invalid dictionary entry at line: {line.strip()}"
                    )
                # symbols must be a list of strings, a bare string would spell too
                if (
                    not isinstance(surface, str)
                    or not isinstance(symbols, list)
                    or not all(isinstance(s, str) for s in symbols)
                ):
                    raise ModelLoadError(
                        f"invalid dictionary entry at line: {line.strip()}"
                    )
                if "".join(symbols) != surface:
                    raise ModelLoadError(
                        f"symbols do not spell their word: {surface!r}"
                    )
                dictionary[surface] = symbols

        # swap state only after the whole file parsed
        self.punctuation = punctuation
        self._dictionary = dictionary
        self._vocab_size = vocab_size
        self.merges = []
        self._trained = True

        log.info(
            f"model loaded successfully: {len(dictionary)} words, vocab size {vocab_size}"
        )

    def _save_model(self, file_prefix: str) -> None:
        """
        Persist the word dictionary to a .model file.

        The whole file is encoded before anything is written, so an entry
        that cannot be encoded as UTF-8 leaves no partial file behind.
        """
        model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)

        log.debug(f"saving {len(self._dictionary)} words to {model_path}")

        # header: version, split characters, vocab size
        lines = [
            f"{PREFIX} {VERSION}",
            f"punct {json.dumps(sorted(self.punctuation))}",
            f"vocab_size {self._vocab_size}",
            "---",
        ]
        # body: one json [word, symbols] entry per line
        for surface, symbols in self._dictionary.items():
            lines.append(json.dumps([surface, symbols], ensure_ascii=False))
        data = "".join(f"{line}\n" for line in lines).encode("utf-8")

        model_path.parent.mkdir(parents=True, exist_ok=True)
        model_path.write_bytes(data)

    def _save_vocab(self, file_prefix: str) -> None:
        """Persist a human-readable word -> symbols listing to a .vocab file."""
        vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
        vocab_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving vocab to {vocab_path}")

        with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
            for rank, ((left, right), freq) in enumerate(self.merges):
                f.write(
                    f"M [{rank}] [{render_symbol(left)}][{render_symbol(right)}] "
                    f"-> {render_symbol(left + right)} ({freq})\n"
                )
            for surface, symbols in sorted(self._dictionary.items()):
                f.write(f"W {render_symbol(surface)} -> {render_symbols(symbols)}\n")


__all__ = ["Tokenizer", "VERSION", "MODEL_SUFFIX", "VOCAB_SUFFIX"]
