"""
Vocabulary trie used to accelerate the segmentation scan.

Entries are transformed before insertion:

- an entry holding at least one CJK ideograph is inserted verbatim;
- an entry starting with the continuation prefix is inserted with the prefix
  stripped;
- anything else is left out, since it can only ever match at the start of a
  word where the segmenter does a direct vocabulary scan.

An entry that satisfies both rules is inserted in both forms. The trie only
proposes candidate end positions; the segmenter still checks every candidate
against the vocabulary.
"""

import logging
from collections.abc import Iterable
from typing import Final

from ._unicode import contains_cjk

log = logging.getLogger(__name__)

# characters are length-1 strings so the empty key never collides with a child
_TERMINAL: Final[str] = ""

type TrieNode = dict[str, TrieNode]


def transform_entries(keys: Iterable[str], prefix: str) -> set[str]:
    """Return the strings a vocabulary contributes to the trie."""
    entries: set[str] = set()
    for key in keys:
        if contains_cjk(key):
            entries.add(key)
        if key.startswith(prefix):
            entries.add(key[len(prefix) :])
    # an entry equal to the bare prefix strips down to nothing
    entries.discard("")
    return entries


class VocabMatcher:
    """Character trie over transformed vocabulary entries."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._root: TrieNode = {}
        self._size = 0
        for entry in entries:
            self.insert(entry)

    @classmethod
    def from_vocab(cls, keys: Iterable[str], prefix: str) -> "VocabMatcher":
        """Build a matcher from vocabulary keys and the continuation prefix."""
        matcher = cls(transform_entries(keys, prefix))
        log.debug(f"built vocabulary matcher with {len(matcher)} entries")
        return matcher

    def insert(self, entry: str) -> None:
        """Add one non-empty entry to the trie."""
        if not entry:
            return
        node = self._root
        for c in entry:
            node = node.setdefault(c, {})
        if _TERMINAL not in node:
            node[_TERMINAL] = {}
            self._size += 1

    def __len__(self) -> int:
        return self._size

    def __contains__(self, entry: object) -> bool:
        if not isinstance(entry, str) or not entry:
            return False
        node = self._root
        for c in entry:
            child = node.get(c)
            if child is None:
                return False
            node = child
        return _TERMINAL in node

    def match_ends(self, text: str, start: int) -> list[int]:
        """
        Character positions where an entry beginning at ``start`` ends.

        Positions are ascending, so the longest match is the last element.
        """
        ends: list[int] = []
        node = self._root
        for i in range(start, len(text)):
            child = node.get(text[i])
            if child is None:
                break
            node = child
            if _TERMINAL in node:
                ends.append(i + 1)
        return ends
