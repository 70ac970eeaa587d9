"""Pair-merge vocabulary training."""

import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass

from ._sanitise import _split_words
from .config import TokenizerConfig
from .errors import TrainingError
from .types import MergeRule, Symbols, Token
from .vocab import DEFAULT_SPECIAL_TOKENS, SPECIAL_ROLES, WORD_START, vocab_sort_key

log = logging.getLogger(__name__)

# a pair must occur at least this often to be merged
MIN_PAIR_FREQ = 2


@dataclass
class TrainingResult:
    """Results from one training run."""

    vocab: list[Token]
    merges: list[MergeRule]
    n_merges_completed: int
    stopped_early: bool

    def to_dict(self) -> dict[str, list]:
        return {"vocab": list(self.vocab), "merges": [list(m) for m in self.merges]}


def count_pairs(words: Mapping[tuple[Token, ...], int]) -> Counter[MergeRule]:
    """
    Count adjacent symbol pairs across all words.

    Pairs keep the order in which they were first seen, which is what breaks
    frequency ties when picking the next merge.
    """
    counts: Counter[MergeRule] = Counter()
    for symbols, freq in words.items():
        for pair in zip(symbols, symbols[1:]):
            counts[pair] += freq
    return counts


def merge_pair(symbols: Symbols, target: MergeRule, merged: Token) -> Symbols:
    """Replace every non-overlapping left-to-right occurrence of ``target``."""
    out: Symbols = []
    i = 0
    n = len(symbols)
    while i < n:
        if i < n - 1 and symbols[i] == target[0] and symbols[i + 1] == target[1]:
            out.append(merged)
            i += 2
        else:
            out.append(symbols[i])
            i += 1
    return out


def train_vocab(
    corpus: str | list[str],
    config: TokenizerConfig,
    special: Mapping[str, Token] | None = None,
    verbose: bool = False,
) -> TrainingResult:
    """
    Learn a vocabulary by repeatedly merging the most frequent adjacent pair.

    Every word is prefixed with the word-start marker and split into code
    points. Training stops once the vocabulary reaches ``config.vocab_size``,
    when no pairs are left, or when the best pair occurs fewer than twice.

    :param corpus: Training text as a single string or list of strings.
    :param config: Options; only ``vocab_size`` is read here.
    :param special: Role -> token table reserved in the vocabulary.
    :param verbose: Log each learned merge when ``True``.
    :returns: Final vocabulary in matching order plus the merge rules.
    :raises TrainingError: If ``corpus`` is not text.
    """
    if isinstance(corpus, list):
        if not all(isinstance(part, str) for part in corpus):
            raise TrainingError("corpus list must only contain strings")
        corpus = "\n".join(corpus)
    if not isinstance(corpus, str):
        raise TrainingError(f"corpus must be text, got {type(corpus).__name__}")

    special = DEFAULT_SPECIAL_TOKENS if special is None else special
    target_size = config.vocab_size

    _, raw_words = _split_words(corpus)
    # identical words merge identically, so train on word frequencies;
    # dict order keeps first occurrences, preserving pair first-seen order
    words: dict[tuple[Token, ...], int] = Counter(
        tuple(WORD_START + w) for w in raw_words
    )
    log.info(
        f"training on {len(raw_words)} words ({len(words)} unique), "
        f"target vocab size {target_size}"
    )

    # seed: distinct code points in code point order, then reserved specials
    vocab: list[Token] = sorted({ch for symbols in words for ch in symbols})
    known = set(vocab)
    for role in SPECIAL_ROLES:
        tok = special[role]
        if tok not in known:
            vocab.append(tok)
            known.add(tok)

    merges: list[MergeRule] = []
    stopped_early = False

    while len(vocab) < target_size:
        counts = count_pairs(words)
        if not counts:
            stopped_early = True
            break
        # max() keeps the first pair among equal counts
        pair = max(counts, key=counts.__getitem__)
        freq = counts[pair]
        if freq < MIN_PAIR_FREQ:
            stopped_early = True
            break

        merged = pair[0] + pair[1]
        words = {
            tuple(merge_pair(list(symbols), pair, merged)): n
            for symbols, n in words.items()
        }

        if merged not in known:
            vocab.append(merged)
            known.add(merged)
            merges.append(pair)
            if verbose:
                log.info(
                    f"merge {len(merges)}: {pair!r} -> {merged!r} (freq {freq})"
                )

    if stopped_early:
        log.warning(
            f"no more pairs to merge after {len(merges)} merges "
            f"(vocab size {len(vocab)}, requested {target_size}) stopping early"
        )

    vocab.sort(key=vocab_sort_key)

    return TrainingResult(
        vocab=vocab,
        merges=merges,
        n_merges_completed=len(merges),
        stopped_early=stopped_early,
    )


__all__ = ["TrainingResult", "train_vocab", "count_pairs", "merge_pair"]
