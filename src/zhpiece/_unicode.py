"""
Character classification helpers shared by the matcher and the segmenter.
"""

from typing import Final

import regex as re

# CJK Unified Ideographs block
CJK_START: Final[int] = 0x4E00
CJK_END: Final[int] = 0x9FFF

_CJK_RE = re.compile(r"[\u4e00-\u9fff]")


def is_cjk(c: str) -> bool:
    """Return ``True`` if the single character ``c`` is a CJK unified ideograph."""
    return CJK_START <= ord(c) <= CJK_END


def contains_cjk(s: str) -> bool:
    """Return ``True`` if ``s`` holds at least one CJK unified ideograph."""
    return _CJK_RE.search(s) is not None


def cjk_prefix_counts(word: str) -> list[int]:
    """
    Running count of CJK ideographs.

    Entry ``i`` is the number of ideographs among the first ``i`` characters,
    so the result has ``len(word) + 1`` entries.
    """
    counts = [0]
    running = 0
    for c in word:
        if is_cjk(c):
            running += 1
        counts.append(running)
    return counts


def byte_offsets(word: str) -> list[int]:
    """
    UTF-8 byte offset of every character boundary in ``word``.

    Entry ``i`` is where character ``i`` starts; the final entry is the byte
    length of the whole word.
    """
    offsets = [0]
    running = 0
    for c in word:
        running += len(c.encode("utf-8"))
        offsets.append(running)
    return offsets
