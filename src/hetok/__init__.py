"""HETok: pair-merge subword tokenization library."""

from importlib.metadata import PackageNotFoundError, version

# set before submodule imports; tokenizer stamps it into saved models
try:
    __version__ = version("hetok")
except PackageNotFoundError:
    __version__ = "dev"

from .classify import (
    detect_domain,
    is_email,
    is_emoji_only,
    is_number,
    is_url,
)
from .config import TokenizerConfig, UnknownHandling, list_unknown_modes
from .decoder import Decoding
from .encoder import Encoding
from .errors import (
    ConfigError,
    HETokError,
    TrainingError,
    VocabPayloadError,
)
from .factory import from_pretrained, get_tokenizer
from .tokenizer import HETokenizer
from .trainer import TrainingResult
from .vocab import SPECIAL_ROLES, WORD_START, VocabularyStore

__all__ = [
    "HETokenizer",
    "VocabularyStore",
    "TokenizerConfig",
    "UnknownHandling",
    "TrainingResult",
    "Encoding",
    "Decoding",
    "HETokError",
    "ConfigError",
    "TrainingError",
    "VocabPayloadError",
    "WORD_START",
    "SPECIAL_ROLES",
    "get_tokenizer",
    "from_pretrained",
    "list_unknown_modes",
    "is_url",
    "is_email",
    "is_number",
    "is_emoji_only",
    "detect_domain",
]
