"""Unit tests for greedy longest-match segmentation."""

import random

import pytest

from zhpiece import ChineseWordPiece, MissingUnkTokenError, Token
from zhpiece.config import ModelConfig
from zhpiece.segmenter import ModelState, lookup_key, segment


def _pieces(tokens: list[Token]) -> list[tuple[str, int, tuple[int, int]]]:
    return [(tok.value, tok.id, tok.offsets) for tok in tokens]


def _state(vocab: dict[str, int], **config) -> ModelState:
    return ModelState.build(vocab, ModelConfig(**config))


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mixed_model():
    """Return a model whose vocabulary mixes CJK words and WordPiece pieces."""
    vocab = {
        "[UNK]": 0,
        "AI": 1,
        "时代": 2,
        "##时代": 3,
        "北京": 4,
        "北": 5,
        "京": 6,
        "大学": 7,
        "3": 8,
        "##g": 9,
        "g网络": 10,
        "un": 11,
        "##able": 12,
    }
    return ChineseWordPiece(vocab)


# Reference scenarios
# ---------------------------------------------------------------------------


def test_whole_word_preferred_as_longest():
    """A whole-word entry beats a shorter prefix plus continuation."""
    model = ChineseWordPiece({"[UNK]": 0, "un": 1, "##able": 2, "unable": 3})
    assert _pieces(model.tokenize("unable")) == [("unable", 3, (0, 6))]


def test_continuation_prefix_used_after_first_piece(mixed_model):
    """Non-initial Latin pieces are looked up with the continuation prefix."""
    assert _pieces(mixed_model.tokenize("unable")) == [
        ("un", 11, (0, 2)),
        ("##able", 12, (2, 6)),
    ]


def test_ideographs_without_combined_entry():
    """Two ideographs fall back to single-character entries with 3-byte spans."""
    model = ChineseWordPiece({"[UNK]": 0, "你": 1, "好": 2})
    assert _pieces(model.tokenize("你好")) == [("你", 1, (0, 3)), ("好", 2, (3, 6))]


def test_multi_character_ideograph_entries(mixed_model):
    """Runs of ideographs match multi-character entries greedily."""
    assert _pieces(mixed_model.tokenize("北京大学")) == [
        ("北京", 4, (0, 6)),
        ("大学", 7, (6, 12)),
    ]


def test_ideographs_never_take_the_prefix(mixed_model):
    """A CJK span after a Latin piece is looked up verbatim."""
    assert _pieces(mixed_model.tokenize("AI时代")) == [
        ("AI", 1, (0, 2)),
        ("时代", 2, (2, 8)),
    ]


def test_span_mixing_latin_and_ideographs_is_verbatim(mixed_model):
    """A span with at least one ideograph is looked up without the prefix."""
    assert _pieces(mixed_model.tokenize("3g网络")) == [
        ("3", 8, (0, 1)),
        ("g网络", 10, (1, 8)),
    ]


def test_plain_entry_not_reachable_as_continuation():
    """An unprefixed Latin entry cannot match after the first piece."""
    model = ChineseWordPiece({"[UNK]": 0, "a": 1, "b": 2})
    assert _pieces(model.tokenize("ab")) == [("a", 1, (0, 1)), ("[UNK]", 0, (1, 2))]


def test_unknown_character_is_single_unk():
    """An unmatched character becomes one unknown token and the scan resumes."""
    model = ChineseWordPiece({"[UNK]": 0, "a": 1, "##c": 2})
    assert _pieces(model.tokenize("abc")) == [
        ("a", 1, (0, 1)),
        ("[UNK]", 0, (1, 2)),
        ("##c", 2, (2, 3)),
    ]


def test_unmatched_first_character():
    """The scan continues with the prefix rule after an unknown first character."""
    model = ChineseWordPiece({"[UNK]": 0, "##b": 1})
    assert _pieces(model.tokenize("ab")) == [("[UNK]", 0, (0, 1)), ("##b", 1, (1, 2))]


def test_custom_prefix():
    """The configured prefix replaces ``##`` in continuation lookups."""
    model = ChineseWordPiece(
        {"<unk>": 0, "play": 1, "@@ing": 2}, unk_token="<unk>", continuing_subword_prefix="@@"
    )
    assert _pieces(model.tokenize("playing")) == [("play", 1, (0, 4)), ("@@ing", 2, (4, 7))]


def test_empty_word():
    """An empty word produces no tokens."""
    model = ChineseWordPiece({"[UNK]": 0})
    assert model.tokenize("") == []


# Word length limit
# ---------------------------------------------------------------------------


def test_word_over_limit_is_single_unk():
    """A word longer than the limit becomes one unknown token over all its bytes."""
    model = ChineseWordPiece({"[UNK]": 0, "a": 1}, max_input_chars_per_word=3)
    assert _pieces(model.tokenize("aaaa")) == [("[UNK]", 0, (0, 4))]


def test_limit_counts_characters_not_bytes():
    """The limit applies to characters; the unknown span still covers bytes."""
    model = ChineseWordPiece({"[UNK]": 0, "你": 1}, max_input_chars_per_word=3)
    assert _pieces(model.tokenize("你你你")) == [
        ("你", 1, (0, 3)),
        ("你", 1, (3, 6)),
        ("你", 1, (6, 9)),
    ]
    assert _pieces(model.tokenize("你你你你")) == [("[UNK]", 0, (0, 12))]


# Missing unknown token
# ---------------------------------------------------------------------------


def test_missing_unk_token_raises():
    """A required fallback without an unknown token in the vocabulary fails."""
    model = ChineseWordPiece({"a": 0})
    with pytest.raises(MissingUnkTokenError):
        model.tokenize("ab")


def test_missing_unk_token_over_limit_raises():
    """Words over the limit need the unknown token too."""
    model = ChineseWordPiece({"a": 0}, max_input_chars_per_word=1)
    with pytest.raises(MissingUnkTokenError):
        model.tokenize("aa")


def test_missing_unk_token_not_needed():
    """Fully matchable input never needs the unknown token."""
    model = ChineseWordPiece({"a": 0, "##b": 1})
    assert _pieces(model.tokenize("ab")) == [("a", 0, (0, 1)), ("##b", 1, (1, 2))]


def test_missing_unk_error_message():
    """The error names the missing token."""
    assert "Missing [UNK] token" in str(MissingUnkTokenError("[UNK]"))


# Lookup keys
# ---------------------------------------------------------------------------


def test_lookup_key_rules():
    """Keys are verbatim at the word start or for CJK spans, prefixed otherwise."""
    word = "ab你c"
    counts = [0, 0, 0, 1, 1]
    assert lookup_key(word, 0, 2, counts, "##") == "ab"
    assert lookup_key(word, 1, 2, counts, "##") == "##b"
    assert lookup_key(word, 1, 3, counts, "##") == "b你"
    assert lookup_key(word, 3, 4, counts, "##") == "##c"


# Properties
# ---------------------------------------------------------------------------

_ALPHABET = "ab你好c1"


def _random_vocab(rng: random.Random) -> dict[str, int]:
    keys = {"[UNK]"}
    for _ in range(rng.randint(0, 25)):
        piece = "".join(rng.choice(_ALPHABET) for _ in range(rng.randint(1, 3)))
        keys.add(rng.choice(["", "##"]) + piece)
    return {key: i for i, key in enumerate(sorted(keys))}


def _random_word(rng: random.Random) -> str:
    return "".join(rng.choice(_ALPHABET) for _ in range(rng.randint(0, 8)))


def test_accelerated_scan_matches_plain_scan():
    """The trie-accelerated scan yields exactly the plain scan's tokens."""
    rng = random.Random(1234)
    for _ in range(300):
        state = _state(_random_vocab(rng))
        for _ in range(10):
            word = _random_word(rng)
            assert segment(word, state) == segment(word, state, accelerated=False)


def test_offsets_partition_the_word():
    """Token spans are contiguous and cover every byte of the word."""
    rng = random.Random(42)
    for _ in range(200):
        state = _state(_random_vocab(rng))
        word = _random_word(rng)
        tokens = segment(word, state)
        data = word.encode("utf-8")

        position = 0
        for tok in tokens:
            start, end = tok.offsets
            assert start == position
            assert end > start
            position = end
        assert position == len(data)
        assert b"".join(data[s:e] for s, e in (tok.offsets for tok in tokens)) == data


def test_tokens_are_vocabulary_entries():
    """Every emitted value maps to its emitted id."""
    rng = random.Random(7)
    for _ in range(100):
        vocab = _random_vocab(rng)
        state = _state(vocab)
        for tok in segment(_random_word(rng), state):
            assert vocab[tok.value] == tok.id
