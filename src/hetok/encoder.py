"""Text -> token id encoding."""

import logging
from dataclasses import dataclass, field
from typing import Any

from ._sanitise import _split_words
from .classify import Domain, classify_word, detect_domain, has_uppercase
from .config import TokenizerConfig
from .types import Token, TokenId
from .vocab import WORD_START, VocabularyStore

log = logging.getLogger(__name__)


@dataclass
class Encoding:
    """
    Result of encoding one text.

    ``meta`` holds ``normalizedText`` and one region per word; it is empty
    for empty input. ``domain`` is a coarse, non-authoritative guess.
    """

    ids: list[TokenId] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)
    domain: Domain | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"ids": self.ids, "tokens": self.tokens, "meta": self.meta}
        if self.domain is not None:
            out["domain"] = self.domain
        return out


def segment_word(store: VocabularyStore, word: str) -> list[Token]:
    """
    Split ``word`` into vocabulary tokens by greedy longest-prefix matching.

    The word is prefixed with the word-start marker first. A code point that
    no token covers becomes one unknown token.
    """
    text = WORD_START + word
    out: list[Token] = []
    i = 0
    n = len(text)
    while i < n:
        tok = store.index.longest_prefix(text, i)
        if tok is not None:
            i += len(tok)
        else:
            # the index holds every token, so the code point is not one either
            tok = store.unk
            i += 1
        out.append(tok)
    return out


def encode_text(
    store: VocabularyStore, text: str, config: TokenizerConfig
) -> Encoding:
    """
    Encode ``text`` into ids, tokens and per-word metadata.

    Urls, emails, numbers and emoji-only words each become a single special
    token when their option is enabled. Words with an uppercase letter get a
    leading capitalization marker; the word itself is segmented unchanged.
    """
    if not text:
        return Encoding()

    normalized, words = _split_words(text)
    tokens: list[Token] = []
    regions: list[dict[str, Any]] = []

    for word in words:
        category = classify_word(
            word,
            normalize_urls=config.normalize_urls,
            normalize_numbers=config.normalize_numbers,
            emoji_as_single_token=config.emoji_as_single_token,
        )
        if category is not None:
            tok = store.special[category]
            tokens.append(tok)
            regions.append(
                {
                    "original": word,
                    "tokens": [tok],
                    "info": {"normalized": True, "type": category},
                }
            )
            continue

        word_toks: list[Token] = []
        info: dict[str, Any] = {}
        if config.preserve_case_markers and has_uppercase(word):
            word_toks.append(store.special["cap"])
            info["case"] = "hasUpper"
        word_toks.extend(segment_word(store, word))

        tokens.extend(word_toks)
        regions.append({"original": word, "tokens": word_toks, "info": info})

    ids = [store.id_of(tok) for tok in tokens]
    meta = {"normalizedText": normalized, "regions": regions}
    log.debug(f"encoded {len(words)} words into {len(ids)} tokens")

    return Encoding(ids=ids, tokens=tokens, meta=meta, domain=detect_domain(text))


__all__ = ["Encoding", "encode_text", "segment_word"]
