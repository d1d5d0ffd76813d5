"""
Word splitters that run before the model.

Both splitters return ``(word, (start, end))`` pairs where the offsets are
UTF-8 byte offsets into the original text. Words never contain whitespace and
are never empty.
"""

import logging
from abc import ABC, abstractmethod
from os import PathLike
from typing import override

import jieba
import regex as re

from ._unicode import byte_offsets
from .types import Offsets

log = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\S+")

type Split = tuple[str, Offsets]


class PreTokenizer(ABC):
    """Splits raw text into words for per-word tokenization."""

    @abstractmethod
    def pre_tokenize(self, text: str) -> list[Split]:
        """Return the words of ``text`` with their byte offsets."""
        ...

    def split_words(self, text: str) -> list[str]:
        """Return the words of ``text`` without offsets."""
        return [word for word, _ in self.pre_tokenize(text)]


def _split_whitespace(
    piece: str, char_start: int, offsets: list[int], splits: list[Split]
) -> None:
    """Append the non-whitespace runs of ``piece``, which begins at character ``char_start``."""
    for m in _WORD_RE.finditer(piece):
        start = offsets[char_start + m.start()]
        end = offsets[char_start + m.end()]
        splits.append((m.group(0), (start, end)))


class WhitespacePreTokenizer(PreTokenizer):
    """Splits text into maximal runs of non-whitespace characters."""

    @override
    def pre_tokenize(self, text: str) -> list[Split]:
        splits: list[Split] = []
        _split_whitespace(text, 0, byte_offsets(text), splits)
        return splits


class JiebaPreTokenizer(PreTokenizer):
    """
    Splits text with the jieba Chinese word segmenter.

    Whitespace pieces produced by jieba are dropped, and any piece that still
    holds whitespace is split further so every word is a non-whitespace run.
    """

    def __init__(
        self, user_dict: str | PathLike[str] | None = None, hmm: bool = True
    ) -> None:
        """
        :param user_dict: Optional jieba user dictionary loaded into the default segmenter.
        :param hmm: Let jieba discover unknown words with its HMM model.
        """
        if user_dict is not None:
            jieba.load_userdict(str(user_dict))
            log.info(f"loaded jieba user dictionary {user_dict}")
        self.hmm = hmm

    @override
    def pre_tokenize(self, text: str) -> list[Split]:
        splits: list[Split] = []
        if not text:
            return splits

        # jieba reports character offsets
        offsets = byte_offsets(text)
        for piece, char_start, char_end in jieba.tokenize(text, HMM=self.hmm):
            if char_start == char_end:
                continue
            _split_whitespace(piece, char_start, offsets, splits)
        return splits


__all__ = ["PreTokenizer", "WhitespacePreTokenizer", "JiebaPreTokenizer"]
