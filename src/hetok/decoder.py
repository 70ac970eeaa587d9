"""Token id -> text decoding."""

from dataclasses import dataclass, field
from typing import Any, Final

from ._sanitise import _normalize_whitespace
from .config import TokenizerConfig
from .types import Token, TokenId
from .vocab import WORD_START, VocabularyStore

# special roles that always decode to a word of their own
WORD_LEVEL_ROLES: Final[tuple[str, ...]] = (
    "pad",
    "bos",
    "eos",
    "num",
    "url",
    "email",
    "emoji",
)


@dataclass
class Decoding:
    """Reconstructed text plus the tokens the ids resolved to."""

    text: str = ""
    tokens: list[Token] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "tokens": self.tokens}


def _capitalize_first(s: str) -> str:
    return s[:1].upper() + s[1:]


def _join_with_case_markers(store: VocabularyStore, tokens: list[Token]) -> str:
    """
    Rebuild words from a token stream that may contain capitalization markers.

    A marker swallows the following tokens up to and including the next one
    carrying the word-start marker, and capitalizes the first character of
    what it swallowed.
    """
    cap = store.special["cap"]
    standalone = {store.special[role] for role in WORD_LEVEL_ROLES}

    words: list[str] = []
    # whether the next plain token continues words[-1]
    open_word = False
    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        if tok == cap:
            run: list[Token] = []
            i += 1
            while i < n:
                run.append(tokens[i])
                i += 1
                if WORD_START in run[-1]:
                    break
            words.append(_capitalize_first("".join(run).replace(WORD_START, "", 1)))
            open_word = True
            continue

        if tok in standalone:
            words.append(tok)
            open_word = False
        elif WORD_START in tok:
            words.append(tok.replace(WORD_START, ""))
            open_word = True
        elif open_word:
            words[-1] += tok
        else:
            words.append(tok)
            open_word = True
        i += 1

    return _normalize_whitespace(" ".join(words))


def decode_ids(
    store: VocabularyStore, ids: list[TokenId], config: TokenizerConfig
) -> Decoding:
    """
    Decode ``ids`` back into text.

    Ids outside the vocabulary decode to the unknown token. Normalized
    categories (numbers, urls, emails, emoji) come back as their special
    tokens, not as the original words.
    """
    tokens = [store.token_of(idx) for idx in ids]
    if not tokens:
        return Decoding()

    if config.preserve_case_markers:
        text = _join_with_case_markers(store, tokens)
    else:
        text = "".join(tokens).replace(WORD_START, " ").lstrip()

    return Decoding(text=text, tokens=tokens)


__all__ = ["Decoding", "decode_ids"]
