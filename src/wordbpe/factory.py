"""Factory functions for creating tokenizers."""

from .tokenizer import Tokenizer


def from_pretrained(model_path: str) -> Tokenizer:
    """
    Load a pre-trained tokenizer from disk.

    :param model_path: Path to the .model file.
    :return: Loaded tokenizer with its dictionary and punctuation set.
    :raises ModelLoadError: If the file doesn't exist, has the wrong extension
                            or is malformed.

    .. code-block:: python

        tokenizer = from_pretrained("path/to/model.model")
        tokens = tokenizer.tokenize("Hello world")
    """
    tokenizer = Tokenizer()
    tokenizer.load(model_path)
    return tokenizer
