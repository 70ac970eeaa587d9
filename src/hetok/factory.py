"""Factory functions for creating tokenizers."""

from typing import Any

from .config import TokenizerConfig
from .tokenizer import HETokenizer


def get_tokenizer(config: TokenizerConfig | None = None, **options: Any) -> HETokenizer:
    """
    Create an untrained tokenizer.

    :param config: Base configuration; defaults are used when omitted.
    :param options: Option overrides, e.g. ``vocab_size=800``.
    :return: Tokenizer whose vocabulary holds only the special tokens.
    :raises ConfigError: If an option is unknown or invalid.

    .. code-block:: python

        tokenizer = get_tokenizer(vocab_size=800, normalize_numbers=False)
    """
    return HETokenizer(config, **options)


def from_pretrained(model_path: str) -> HETokenizer:
    """
    Load a trained tokenizer from disk.

    :param model_path: Path to the .json model file written by ``save``.
    :return: Tokenizer with vocabulary, merges, special tokens and config restored.
    :raises VocabPayloadError: If the file is missing or invalid.

    .. code-block:: python

        tokenizer = from_pretrained("path/to/model.json")
        ids = tokenizer.encode("Hello world").ids
    """
    tokenizer = HETokenizer()
    tokenizer.load(model_path)
    return tokenizer
