"""Unit tests for the vocabulary trie."""

import pytest

from zhpiece import VocabMatcher
from zhpiece.matcher import transform_entries


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def matcher():
    """Return a matcher over a few overlapping entries."""
    return VocabMatcher(["a", "ab", "abc", "b"])


# Entry transformation
# ---------------------------------------------------------------------------


def test_transform_keeps_cjk_and_strips_prefix():
    """CJK entries stay verbatim, prefixed entries lose the prefix, others drop out."""
    keys = ["[UNK]", "un", "##able", "你好", "##你"]
    assert transform_entries(keys, "##") == {"able", "你好", "##你", "你"}


def test_transform_drops_bare_prefix():
    """An entry equal to the prefix contributes nothing."""
    assert transform_entries(["##"], "##") == set()


def test_from_vocab():
    """Matcher built from a vocabulary holds the transformed entries."""
    matcher = VocabMatcher.from_vocab({"[UNK]": 0, "##ing": 1, "中国": 2}, "##")
    assert len(matcher) == 2
    assert "ing" in matcher
    assert "中国" in matcher
    assert "##ing" not in matcher
    assert "[UNK]" not in matcher


# Lookups
# ---------------------------------------------------------------------------


def test_match_ends_ascending(matcher):
    """All entry ends starting at a position are reported, shortest first."""
    assert matcher.match_ends("abcd", 0) == [1, 2, 3]
    assert matcher.match_ends("abcd", 1) == [2]


def test_match_ends_no_match(matcher):
    """Positions without any entry report nothing."""
    assert matcher.match_ends("xyz", 0) == []
    assert matcher.match_ends("abcd", 2) == []
    assert matcher.match_ends("ab", 2) == []


def test_contains_and_len(matcher):
    """Membership is exact and duplicates are counted once."""
    assert "ab" in matcher
    assert "abcd" not in matcher
    assert "" not in matcher
    matcher.insert("ab")
    matcher.insert("")
    assert len(matcher) == 4
