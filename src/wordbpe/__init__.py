"""WordBPE: word-level byte pair encoding tokenizer."""

from ._progress import disable_progress, enable_progress
from .corpus import END_TOKEN, START_TOKEN
from .errors import (
    ModelLoadError,
    PatternError,
    TokenizationError,
    TrainingError,
    VocabularyError,
    WordBPEError,
)
from .factory import from_pretrained
from .pretokenize import PUNCTUATION, pre_tokenize
from .tokenizer import Tokenizer
from .trainer import BPETrainingResult, train_bpe

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wordbpe")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "BPETrainingResult",
    "train_bpe",
    "pre_tokenize",
    "from_pretrained",
    "enable_progress",
    "disable_progress",
    "PUNCTUATION",
    "START_TOKEN",
    "END_TOKEN",
    "WordBPEError",
    "TokenizationError",
    "VocabularyError",
    "TrainingError",
    "ModelLoadError",
    "PatternError",
]
