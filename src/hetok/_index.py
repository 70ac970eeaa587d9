"""Prefix index for greedy longest-match segmentation."""

from typing import Iterable

from .types import Token

# terminal key; never collides with a single-character edge
_END = ""


class PrefixIndex:
    """
    Character trie over the vocabulary.

    ``longest_prefix`` returns the same token as scanning the vocabulary in
    its stored order (longest first, then code point order) and taking the
    first token that prefixes the text: two distinct tokens of equal length
    cannot both prefix the same text, so the deepest terminal node is that
    first match.
    """

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        self._root: dict = {}
        for tok in tokens:
            self._insert(tok)

    def _insert(self, tok: Token) -> None:
        node = self._root
        for ch in tok:
            node = node.setdefault(ch, {})
        node[_END] = tok

    def longest_prefix(self, text: str, start: int = 0) -> Token | None:
        """Return the longest indexed token that ``text[start:]`` starts with."""
        node = self._root
        best = None
        for i in range(start, len(text)):
            node = node.get(text[i])
            if node is None:
                break
            if _END in node:
                best = node[_END]
        return best

    def __contains__(self, tok: object) -> bool:
        if not isinstance(tok, str) or not tok:
            return False
        node = self._root
        for ch in tok:
            node = node.get(ch)
            if node is None:
                return False
        return _END in node
