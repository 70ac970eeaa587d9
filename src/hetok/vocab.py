"""
Vocabulary store: token list, id maps, merge rules, special tokens and config.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Final

from ._index import PrefixIndex
from .config import TokenizerConfig
from .errors import ConfigError, VocabPayloadError
from .types import MergeRule, Token, TokenId, VocabPayload

log = logging.getLogger(__name__)

# prepended to the first token of every word
WORD_START: Final[str] = "▁"

SPECIAL_ROLES: Final[tuple[str, ...]] = (
    "pad",
    "unk",
    "bos",
    "eos",
    "num",
    "url",
    "email",
    "emoji",
    "cap",
)

DEFAULT_SPECIAL_TOKENS: Final[dict[str, Token]] = {
    role: f"<{role}>" for role in SPECIAL_ROLES
}

PAYLOAD_FIELDS: Final[tuple[str, ...]] = ("vocab", "merges", "special", "config")


def vocab_sort_key(tok: Token) -> tuple[int, Token]:
    """Order used for prefix matching: longer tokens first, then code point order."""
    return (-len(tok), tok)


class VocabularyStore:
    """
    Owns the vocabulary and everything derived from it.

    The token list, both id maps and the prefix index are rebuilt together
    and swapped in as a unit, so a reader never sees maps from two different
    vocabularies. A fresh store holds only the special tokens.
    """

    def __init__(self, config: TokenizerConfig | None = None) -> None:
        self.vocab: list[Token] = []
        self.merges: list[MergeRule] = []
        self.special: dict[str, Token] = {}
        self.config: TokenizerConfig = TokenizerConfig()
        self.token_to_id: dict[Token, TokenId] = {}
        self.id_to_token: dict[TokenId, Token] = {}
        self.index: PrefixIndex = PrefixIndex()
        self.replace([], [], DEFAULT_SPECIAL_TOKENS, config or TokenizerConfig())

    def __len__(self) -> int:
        return len(self.vocab)

    def __contains__(self, tok: object) -> bool:
        return tok in self.token_to_id

    @property
    def unk(self) -> Token:
        return self.special["unk"]

    @property
    def unk_id(self) -> TokenId:
        return self.token_to_id[self.special["unk"]]

    def replace(
        self,
        vocab: Sequence[Token],
        merges: Sequence[MergeRule],
        special: Mapping[str, Token],
        config: TokenizerConfig,
    ) -> None:
        """
        Replace the whole store.

        The vocabulary is sorted into matching order, then any special token
        it lacks is appended so every role (``unk`` included) resolves to an id.
        """
        tokens = sorted(set(vocab), key=vocab_sort_key)
        seen = set(tokens)
        for role in SPECIAL_ROLES:
            tok = special[role]
            if tok not in seen:
                tokens.append(tok)
                seen.add(tok)

        token_to_id = {tok: idx for idx, tok in enumerate(tokens)}
        id_to_token = dict(enumerate(tokens))
        index = PrefixIndex(tokens)

        self.vocab = tokens
        self.merges = [(a, b) for a, b in merges]
        self.special = {role: special[role] for role in SPECIAL_ROLES}
        self.config = config
        self.token_to_id = token_to_id
        self.id_to_token = id_to_token
        self.index = index

        log.debug(
            f"rebuilt vocabulary with {len(tokens)} tokens and {len(self.merges)} merges"
        )

    def id_of(self, tok: Token) -> TokenId:
        """Return the id of ``tok``, or the unknown token id if absent."""
        idx = self.token_to_id.get(tok)
        return self.unk_id if idx is None else idx

    def token_of(self, idx: object) -> Token:
        """Return the token for ``idx``, or the unknown token for any invalid id."""
        # bool is an int subclass but never a valid id
        if isinstance(idx, bool) or not isinstance(idx, int):
            return self.unk
        return self.id_to_token.get(idx, self.unk)

    def load_vocab(self, data: Mapping[str, Any]) -> None:
        """
        Replace the store from a serialized vocabulary payload.

        The payload must carry ``vocab``, ``merges``, ``special`` and
        ``config``. Nothing is defaulted from the current state; the store is
        left untouched when validation fails.

        :raises VocabPayloadError: If the payload is malformed or incomplete.
        """
        vocab, merges, special, config = _validate_payload(data)
        self.replace(vocab, merges, special, config)
        log.info(
            f"vocabulary loaded: {len(self.vocab)} tokens, {len(self.merges)} merge rules"
        )

    def export_vocab(self) -> VocabPayload:
        """Return a JSON-serializable payload accepted by :meth:`load_vocab`."""
        return {
            "vocab": list(self.vocab),
            "merges": [[a, b] for a, b in self.merges],
            "special": dict(self.special),
            "config": self.config.to_dict(),
        }


def _is_list_like(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _validate_payload(
    data: Any,
) -> tuple[list[Token], list[MergeRule], dict[str, Token], TokenizerConfig]:
    """Check payload shape and convert it to store fields."""
    if not isinstance(data, Mapping):
        raise VocabPayloadError(f"expected a mapping, got {type(data).__name__}")

    missing = [name for name in PAYLOAD_FIELDS if name not in data]
    if missing:
        raise VocabPayloadError("missing required fields", field=", ".join(missing))

    raw_vocab = data["vocab"]
    if not _is_list_like(raw_vocab):
        raise VocabPayloadError("vocab must be a list of tokens", field="vocab")
    vocab: list[Token] = []
    seen: set[Token] = set()
    for pos, tok in enumerate(raw_vocab):
        if not isinstance(tok, str) or not tok:
            raise VocabPayloadError(
                f"entry {pos} is not a non-empty string", field="vocab"
            )
        if tok in seen:
            raise VocabPayloadError(f"duplicate token {tok!r}", field="vocab")
        seen.add(tok)
        vocab.append(tok)

    raw_merges = data["merges"]
    if not _is_list_like(raw_merges):
        raise VocabPayloadError("merges must be a list of pairs", field="merges")
    merges: list[MergeRule] = []
    for pos, pair in enumerate(raw_merges):
        if (
            not _is_list_like(pair)
            or len(pair) != 2
            or not all(isinstance(part, str) and part for part in pair)
        ):
            raise VocabPayloadError(
                f"entry {pos} is not a pair of tokens", field="merges"
            )
        left, right = pair
        # every merge must be justified by a vocabulary entry
        if left + right not in seen:
            raise VocabPayloadError(
                f"merged token {left + right!r} is missing from vocab",
                field="merges",
            )
        merges.append((left, right))

    raw_special = data["special"]
    if not isinstance(raw_special, Mapping):
        raise VocabPayloadError("special must be a mapping", field="special")
    absent = [role for role in SPECIAL_ROLES if role not in raw_special]
    if absent:
        raise VocabPayloadError(
            f"missing special roles: {', '.join(absent)}", field="special"
        )
    special: dict[str, Token] = {}
    for role in SPECIAL_ROLES:
        tok = raw_special[role]
        if not isinstance(tok, str) or not tok:
            raise VocabPayloadError(
                f"role {role!r} is not a non-empty string", field="special"
            )
        special[role] = tok
    for role in raw_special:
        if role not in SPECIAL_ROLES:
            log.warning(f"ignoring unrecognized special role {role!r}")
    if len(set(special.values())) != len(special):
        raise VocabPayloadError(
            "special roles must use distinct tokens", field="special"
        )

    raw_config = data["config"]
    if not isinstance(raw_config, Mapping):
        raise VocabPayloadError("config must be a mapping", field="config")
    try:
        config = TokenizerConfig.from_dict(raw_config)
    except ConfigError as e:
        raise VocabPayloadError(str(e).strip(), field="config") from e

    return vocab, merges, special, config


__all__ = [
    "WORD_START",
    "SPECIAL_ROLES",
    "DEFAULT_SPECIAL_TOKENS",
    "PAYLOAD_FIELDS",
    "VocabularyStore",
    "vocab_sort_key",
]
