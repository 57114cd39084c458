"""Custom exception hierarchy for wordbpe errors."""


class WordBPEError(Exception):
    """Base exception for all wordbpe errors."""


class TokenizationError(WordBPEError):
    """Raised when tokenization fails."""

    def __init__(
        self,
        message: str,
        *,
        word: str | None = None,
        input_text: str | None = None,
    ) -> None:
        """Initialize with the offending word, which gets appended to the message."""
        if word is not None:
            message = f"{message} (word: {word!r})"
        super().__init__(message)
        self.word = word
        self.input_text = input_text


class VocabularyError(WordBPEError):
    """Raised when the requested vocabulary size is invalid."""

    def __init__(
        self,
        message: str,
        *,
        vocab_size: int | None = None,
        n_chars: int | None = None,
    ) -> None:
        extra = " "
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        # training: number of distinct characters in the corpus
        if n_chars is not None:
            extra += f"(distinct characters: {n_chars}) "
        super().__init__(message + extra)
        self.vocab_size = vocab_size
        self.n_chars = n_chars


class TrainingError(WordBPEError):
    """Raised when a tokenizer is used before training."""


class ModelLoadError(WordBPEError):
    """Raised when loading a tokenizer model fails."""

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        version_mismatch: tuple[str, str] | None = None,
    ) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        if version_mismatch is not None:
            extra += f"(expected: {version_mismatch[1]}) (got {version_mismatch[0]}) "
        super().__init__(message + extra)
        self.model_path = model_path
        self.version_mismatch = version_mismatch


class PatternError(WordBPEError):
    """Raised when a punctuation set cannot be turned into a split pattern."""

    def __init__(
        self,
        message: str,
        *,
        punctuation: frozenset[str] | None = None,
    ) -> None:
        """
        Initialize PatternError with the rejected punctuation set.

        :param message: Error message.
        :param punctuation: The punctuation set that failed validation.
        """
        extra = " "
        if punctuation is not None:
            extra += f"(punctuation: {sorted(punctuation)!r}) "
        super().__init__(message + extra)
        self.punctuation = punctuation
