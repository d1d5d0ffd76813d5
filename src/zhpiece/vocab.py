"""
Vocabulary table and plain-text vocabulary file codec.

A vocabulary file holds one token per line; the 0-based line number is the
token id. Tokens are not escaped, so a token is the line with trailing
whitespace removed.
"""

import logging
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from .errors import VocabularyError
from .types import ReverseVocabulary, TokenId, Vocabulary

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class VocabTable:
    """Forward and reverse vocabulary maps kept in lock-step."""

    vocab: Vocabulary = field(default_factory=dict)
    vocab_r: ReverseVocabulary = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, vocab: Vocabulary) -> "VocabTable":
        """
        Build a table from a token -> id mapping.

        :raises VocabularyError: If an id is negative or shared by two tokens.
        """
        vocab = dict(vocab)
        vocab_r: ReverseVocabulary = {}
        for tok, tok_id in vocab.items():
            if not isinstance(tok_id, int) or tok_id < 0:
                raise VocabularyError(
                    "token ids must be non-negative integers", invalid_tok=tok
                )
            if tok_id in vocab_r:
                raise VocabularyError(
                    f"id {tok_id} assigned to both {vocab_r[tok_id]!r} and {tok!r}",
                    vocab_size=len(vocab),
                )
            vocab_r[tok_id] = tok
        return cls(vocab=vocab, vocab_r=vocab_r)

    def __len__(self) -> int:
        return len(self.vocab)

    def __contains__(self, token: object) -> bool:
        return token in self.vocab

    def ordered(self) -> list[tuple[str, TokenId]]:
        """Return ``(token, id)`` pairs sorted by ascending id."""
        return [(self.vocab_r[i], i) for i in sorted(self.vocab_r)]


def read_vocab_file(path: str | PathLike[str]) -> Vocabulary:
    """
    Read a vocabulary file, assigning ids by line order.

    I/O errors propagate unchanged.
    """
    path = Path(path)
    log.debug(f"reading vocab file {path}")
    vocab: Vocabulary = {}
    with path.open("r", encoding="utf-8") as f:
        for index, line in enumerate(f):
            # a repeated line keeps the id of its last occurrence
            vocab[line.rstrip()] = index
    log.debug(f"read {len(vocab)} tokens from {path}")
    return vocab


def write_vocab_file(table: VocabTable, path: str | PathLike[str]) -> Path:
    """Write tokens sorted by ascending id, one per line."""
    path = Path(path)
    log.debug(f"writing {len(table)} tokens to {path}")
    with path.open("w", encoding="utf-8", newline="\n") as f:
        for tok, _ in table.ordered():
            f.write(f"{tok}\n")
    return path
