"""Unit tests for the whitespace and jieba word splitters."""

import pytest

import zhpiece as zp


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def jieba_pre_tokenizer():
    """Return a jieba splitter with the bundled dictionary."""
    return zp.JiebaPreTokenizer()


# Whitespace
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Hey man!", [("Hey", (0, 3)), ("man!", (4, 8))]),
        ("\n", []),
        ("", []),
        ("你好 世界", [("你好", (0, 6)), ("世界", (7, 13))]),
        ("  a\tb  ", [("a", (2, 3)), ("b", (4, 5))]),
    ],
)
def test_whitespace_splits(text, expected):
    """Words are maximal non-whitespace runs with byte offsets."""
    assert zp.WhitespacePreTokenizer().pre_tokenize(text) == expected


# Jieba
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Hey man!", [("Hey", (0, 3)), ("man", (4, 7)), ("!", (7, 8))]),
        (
            "How are you doing?",
            [
                ("How", (0, 3)),
                ("are", (4, 7)),
                ("you", (8, 11)),
                ("doing", (12, 17)),
                ("?", (17, 18)),
            ],
        ),
        ("\n", []),
        ("", []),
    ],
)
def test_jieba_latin_text(jieba_pre_tokenizer, text, expected):
    """Latin text splits on whitespace and punctuation without whitespace words."""
    assert jieba_pre_tokenizer.pre_tokenize(text) == expected


def test_jieba_chinese_words(jieba_pre_tokenizer):
    """Chinese text is segmented into dictionary words with 3-byte characters."""
    assert jieba_pre_tokenizer.pre_tokenize("我来到北京清华大学") == [
        ("我", (0, 3)),
        ("来到", (3, 9)),
        ("北京", (9, 15)),
        ("清华大学", (15, 27)),
    ]


@pytest.mark.parametrize(
    "text",
    ["我来到北京清华大学", "AI 时代, 3g网络!", "  你好\n世界  hello  "],
)
def test_offsets_slice_original_bytes(jieba_pre_tokenizer, text):
    """Every offset pair slices its word out of the UTF-8 text."""
    data = text.encode("utf-8")
    splits = jieba_pre_tokenizer.pre_tokenize(text)
    assert splits
    for word, (start, end) in splits:
        assert word
        assert not any(ch.isspace() for ch in word)
        assert data[start:end].decode("utf-8") == word


def test_split_words(jieba_pre_tokenizer):
    """split_words drops the offsets."""
    assert jieba_pre_tokenizer.split_words("我来到北京清华大学") == [
        "我",
        "来到",
        "北京",
        "清华大学",
    ]
    assert zp.WhitespacePreTokenizer().split_words(" a  b ") == ["a", "b"]


def test_pre_tokenize_then_tokenize():
    """Word offsets shift model offsets back into the original text."""
    model = zp.ChineseWordPiece({"[UNK]": 0, "你好": 1, "世": 2, "界": 3})
    text = "你好 世界"
    data = text.encode("utf-8")
    for word, (start, _) in zp.WhitespacePreTokenizer().pre_tokenize(text):
        for tok in model.tokenize(word):
            s, e = tok.offsets
            assert data[start + s : start + e].decode("utf-8") == tok.value
