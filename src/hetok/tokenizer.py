"""
Subword tokenizer built on a pair-merge vocabulary.
"""

import json
import logging
from pathlib import Path
from typing import Any, Final

from . import __version__
from ._decorators import measure_time
from ._sanitise import _escape_ctrl_chars
from .config import TokenizerConfig
from .decoder import Decoding, decode_ids
from .encoder import Encoding, encode_text
from .errors import VocabPayloadError
from .trainer import TrainingResult, train_vocab
from .types import MergeRule, Token, TokenId, VocabPayload
from .vocab import VocabularyStore

PREFIX: Final[str] = "HETok"
# bumped only when the model file layout changes
FORMAT_VERSION: Final[int] = 1
MODEL_SUFFIX: Final[str] = ".json"
VOCAB_SUFFIX: Final[str] = ".vocab"

VERSION: Final[str] = __version__

log = logging.getLogger(__name__)


class HETokenizer:
    """
    Statistical subword tokenizer.

    Owns one :class:`VocabularyStore`. ``train`` and ``load_vocab`` replace
    it wholesale; ``encode`` and ``decode`` only read it. Options passed to
    ``encode``/``decode`` override the instance config for that call only.

    .. code-block:: python

        tok = HETokenizer(vocab_size=800)
        tok.train("the quick brown fox jumps over the lazy dog")
        enc = tok.encode("the lazy fox")
        tok.decode(enc.ids).text
    """

    def __init__(self, config: TokenizerConfig | None = None, **options: Any) -> None:
        base = config or TokenizerConfig()
        self.store = VocabularyStore(base.merged(**options))

    @property
    def config(self) -> TokenizerConfig:
        return self.store.config

    @property
    def vocab(self) -> list[Token]:
        return self.store.vocab

    @property
    def merges(self) -> list[MergeRule]:
        return self.store.merges

    @property
    def special(self) -> dict[str, Token]:
        return self.store.special

    @property
    def token_to_id(self) -> dict[Token, TokenId]:
        return self.store.token_to_id

    @property
    def id_to_token(self) -> dict[TokenId, Token]:
        return self.store.id_to_token

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.store)

    @measure_time("training")
    def train(
        self, corpus: str | list[str], verbose: bool = False, **options: Any
    ) -> TrainingResult:
        """
        Learn a new vocabulary from ``corpus``, replacing the current one.

        ``options`` are merged into the instance config and kept after
        training.

        :param corpus: Training text as a single string or list of strings.
        :param verbose: Log each learned merge when ``True``.
        :raises ConfigError: If an option is unknown or invalid.
        :raises TrainingError: If ``corpus`` is not text.
        """
        config = self.config.merged(**options)
        result = train_vocab(corpus, config, self.store.special, verbose=verbose)
        self.store.replace(result.vocab, result.merges, self.store.special, config)
        log.info(
            f"trained vocabulary: {len(self.store)} tokens, {len(self.merges)} merge rules"
        )
        return result

    def encode(self, text: str, **options: Any) -> Encoding:
        """
        Encode ``text`` into token ids.

        Never fails for text input; characters outside the vocabulary become
        unknown tokens.

        :raises ConfigError: If an option is unknown or invalid.
        """
        return encode_text(self.store, text, self.config.merged(**options))

    def decode(self, ids: list[TokenId], **options: Any) -> Decoding:
        """
        Decode token ids into text.

        Ids outside the vocabulary decode to the unknown token.

        :raises ConfigError: If an option is unknown or invalid.
        """
        return decode_ids(self.store, ids, self.config.merged(**options))

    def load_vocab(self, data: dict[str, Any]) -> None:
        """
        Replace the vocabulary from a payload produced by :meth:`export_vocab`.

        :raises VocabPayloadError: If the payload is malformed or incomplete.
        """
        self.store.load_vocab(data)

    def export_vocab(self) -> VocabPayload:
        """Return the vocabulary, merges, special tokens and config as plain data."""
        return self.store.export_vocab()

    def save(self, file_prefix: str) -> None:
        """
        Save tokenizer state to disk.

        Creates two files: a .json model file accepted by :meth:`load` and a
        .vocab file with human-readable token listings.

        :param file_prefix: Path prefix for output files.
        """
        log.info(f"saving tokenizer to {file_prefix}")
        self._save_model(file_prefix)
        self._save_vocab(file_prefix)
        log.info("tokenizer saved successfully")

    def load(self, model_filename: str) -> None:
        """
        Load tokenizer state from a .json model file.

        :param model_filename: Path to the model file.
        :raises VocabPayloadError: If the file does not exist, has the wrong
            extension, cannot be parsed, was written by an incompatible
            format version, or carries an invalid payload.
        """
        path = Path(model_filename)

        if not path.exists():
            raise VocabPayloadError("model filepath does not exist", model_path=str(path))

        if path.suffix != MODEL_SUFFIX:
            raise VocabPayloadError(
                f"expected {MODEL_SUFFIX} file", model_path=str(path)
            )

        log.info(f"loading model from {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise VocabPayloadError(
                f"unreadable model file: {e}", model_path=str(path)
            ) from e

        if not isinstance(data, dict) or data.get("format") != PREFIX:
            raise VocabPayloadError("not a hetok model file", model_path=str(path))

        model_ver = data.get("formatVersion")
        if model_ver != FORMAT_VERSION:
            raise VocabPayloadError(
                "model version mismatch",
                model_path=str(path),
                version_mismatch=(str(model_ver), str(FORMAT_VERSION)),
            )

        self.load_vocab(data)

    def _save_model(self, file_prefix: str) -> None:
        """Persist the export payload with a format header to a .json file."""
        model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)
        # create directory if does not exist
        model_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving model to {model_path}")

        data = {
            "format": PREFIX,
            "formatVersion": FORMAT_VERSION,
            "version": VERSION,
            **self.export_vocab(),
        }
        with model_path.open("w", encoding="utf-8", newline="\n") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")

    def _save_vocab(self, file_prefix: str) -> None:
        """Persist human-readable token listings to a .vocab file."""
        vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
        vocab_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving vocab to {vocab_path}")

        special_roles = {tok: role for role, tok in self.special.items()}
        # merged token -> the pair that produced it
        derivations = {a + b: (a, b) for a, b in self.merges}

        with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
            for idx, tok in enumerate(self.vocab):
                subword = _escape_ctrl_chars(tok)
                if tok in special_roles:
                    f.write(f"ST [{idx}] {special_roles[tok]} {subword}\n")
                elif tok in derivations:
                    left, right = derivations[tok]
                    f.write(
                        f"[{idx}] [{_escape_ctrl_chars(left)}][{_escape_ctrl_chars(right)}] -> {subword}\n"
                    )
                else:
                    f.write(f"[{idx}] {subword}\n")
