"""Unit tests for the vocabulary store and payload validation."""

import pytest

from hetok._index import PrefixIndex
from hetok.config import TokenizerConfig
from hetok.errors import VocabPayloadError
from hetok.vocab import DEFAULT_SPECIAL_TOKENS, SPECIAL_ROLES, VocabularyStore


def _payload(**overrides):
    data = {
        "vocab": ["▁", "a", "b", "ab", "<unk>"],
        "merges": [["a", "b"]],
        "special": dict(DEFAULT_SPECIAL_TOKENS),
        "config": {"vocabSize": 50, "normalizeNumbers": False},
    }
    data.update(overrides)
    return data


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store():
    """Return a store loaded from a small valid payload."""
    s = VocabularyStore()
    s.load_vocab(_payload())
    return s


# Loading
# ---------------------------------------------------------------------------


def test_load_sorts_and_appends_specials(store):
    """Loaded tokens are sorted; absent special tokens are appended after them."""
    assert store.vocab[:5] == ["<unk>", "ab", "a", "b", "▁"]
    assert set(store.vocab[5:]) == set(DEFAULT_SPECIAL_TOKENS.values()) - {"<unk>"}
    assert len(store.vocab) == len(set(store.vocab))


def test_unknown_token_always_present():
    """The unknown token is added even when the payload vocab omits it."""
    s = VocabularyStore()
    s.load_vocab(_payload(vocab=["a", "b", "ab"]))
    assert "<unk>" in s
    assert s.token_of(s.unk_id) == "<unk>"


def test_id_maps_are_dense_bijection(store):
    """Ids run 0..n-1 and both maps agree."""
    assert sorted(store.id_to_token) == list(range(len(store.vocab)))
    for tok, idx in store.token_to_id.items():
        assert store.id_to_token[idx] == tok


def test_config_loaded_from_payload(store):
    """Recognized options come from the payload; the rest keep defaults."""
    assert store.config.vocab_size == 50
    assert store.config.normalize_numbers is False
    assert store.config.normalize_urls is True


def test_custom_special_tokens():
    """A payload may rename special tokens."""
    special = {role: f"[{role.upper()}]" for role in SPECIAL_ROLES}
    s = VocabularyStore()
    s.load_vocab(_payload(special=special))
    assert s.unk == "[UNK]"
    assert s.token_of(-5) == "[UNK]"
    assert "<unk>" in s.vocab


def test_export_matches_load(store):
    """Export produces a payload that reloads to the same store."""
    other = VocabularyStore()
    other.load_vocab(store.export_vocab())
    assert other.vocab == store.vocab
    assert other.merges == store.merges
    assert other.special == store.special
    assert other.config == store.config


def test_lookup_helpers(store):
    """Unknown tokens and ids resolve to the unknown entry."""
    assert store.id_of("zzz") == store.unk_id
    assert store.token_of(len(store.vocab)) == "<unk>"
    assert store.token_of("1") == "<unk>"


# Payload validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("field", ["vocab", "merges", "special", "config"])
def test_missing_field_raises(field):
    """Every payload field is required."""
    data = _payload()
    del data[field]
    with pytest.raises(VocabPayloadError, match=field):
        VocabularyStore().load_vocab(data)


@pytest.mark.parametrize(
    "overrides",
    [
        {"vocab": "ab"},
        {"vocab": ["a", ""]},
        {"vocab": ["a", "a"]},
        {"vocab": ["a", 1]},
        {"merges": [["a"]]},
        {"merges": [["a", "c"]]},
        {"merges": "ab"},
        {"special": ["<unk>"]},
        {"special": {"unk": "<unk>"}},
        {"special": {**DEFAULT_SPECIAL_TOKENS, "pad": "<unk>"}},
        {"config": []},
        {"config": {"vocabSize": -1}},
        {"config": {"unknownHandling": "drop"}},
    ],
)
def test_malformed_payload_raises(overrides):
    """Structurally invalid payloads are rejected."""
    with pytest.raises(VocabPayloadError):
        VocabularyStore().load_vocab(_payload(**overrides))


def test_non_mapping_payload_raises():
    """The payload itself must be a mapping."""
    with pytest.raises(VocabPayloadError):
        VocabularyStore().load_vocab(["vocab"])


def test_error_message_names_the_category():
    """Payload errors identify themselves as invalid payloads."""
    with pytest.raises(VocabPayloadError, match="invalid vocabulary payload"):
        VocabularyStore().load_vocab({})


def test_unrecognized_keys_are_ignored():
    """Extra special roles and config options only warn."""
    s = VocabularyStore()
    s.load_vocab(
        _payload(
            special={**DEFAULT_SPECIAL_TOKENS, "sep": "<sep>"},
            config={"vocabSize": 10, "lowercase": True},
        )
    )
    assert "<sep>" not in s
    assert s.config == TokenizerConfig(vocab_size=10)


# Prefix index
# ---------------------------------------------------------------------------


def test_prefix_index_longest_match():
    """The longest indexed prefix is returned."""
    index = PrefixIndex(["a", "ab", "abc", "b"])
    assert index.longest_prefix("abd") == "ab"
    assert index.longest_prefix("abcd") == "abc"
    assert index.longest_prefix("xabc", 1) == "abc"
    assert index.longest_prefix("zzz") is None


def test_prefix_index_membership():
    """Only complete tokens count as members."""
    index = PrefixIndex(["abc"])
    assert "abc" in index
    assert "ab" not in index
    assert "" not in index
