"""
Base model interface for subword tokenization models.
"""

import logging
import os
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ..parallel import ParallelMode, ParallelStrategy
from ..types import Token, TokenId, Vocabulary

if TYPE_CHECKING:
    from ..trainer import ChineseWordPieceTrainer


VOCAB_FILENAME: Final[str] = "vocab.txt"

log = logging.getLogger(__name__)


class Model(ABC):
    """
    Abstract base class for word-level subword models.

    A model turns one pre-tokenized word into vocabulary tokens. Splitting raw
    text into words happens upstream (see ``zhpiece.pre_tokenizers``).
    """

    MODEL_TYPE: str = "base"

    @abstractmethod
    def tokenize(self, sequence: str) -> list[Token]:
        """Split one word into tokens."""
        ...

    @abstractmethod
    def get_vocab(self) -> Vocabulary:
        """Return a copy of the token -> id mapping."""
        ...

    @abstractmethod
    def token_to_id(self, token: str) -> TokenId | None:
        """Return the id of ``token`` or ``None`` if it is not in the vocabulary."""
        ...

    @abstractmethod
    def id_to_token(self, tok_id: TokenId) -> str | None:
        """Return the token for ``tok_id`` or ``None`` if the id is unused."""
        ...

    @abstractmethod
    def save(
        self, folder: str | PathLike[str], name: str | None = None
    ) -> list[Path]:
        """Persist the model's files into ``folder`` and return their paths."""
        ...

    @abstractmethod
    def get_trainer(self) -> "ChineseWordPieceTrainer":
        """Return a trainer able to fit this model's vocabulary."""
        ...

    def get_vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.get_vocab())

    def tokenize_batch(
        self,
        words: list[str],
        num_workers: int | None = None,
        parallel_mode: ParallelStrategy | ParallelMode = ParallelMode.AUTO,
    ) -> list[list[Token]]:
        """
        Tokenize many words, optionally across worker threads.

        Every word is segmented independently, so results are simply collected
        back in input order. The first failing word raises to the caller.

        :param words: Pre-tokenized words.
        :param num_workers: Thread count for batch mode (default: CPU count).
        :param parallel_mode: "auto", "batch" or "off".
        :returns: One token list per input word.
        :raises ConfigurationError: If ``parallel_mode`` is unknown.
        """
        mode = ParallelMode.get(parallel_mode)

        if not words:
            return []

        if num_workers is None:
            workers = os.cpu_count() or 1
        else:
            workers = max(1, num_workers)

        def process_batch() -> list[list[Token]]:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                return list(pool.map(self.tokenize, words))

        match mode:
            case ParallelMode.OFF:
                return [self.tokenize(word) for word in words]
            case ParallelMode.BATCH:
                return process_batch()
            case ParallelMode.AUTO:
                if len(words) <= 1 or workers == 1:
                    return [self.tokenize(word) for word in words]
                return process_batch()
