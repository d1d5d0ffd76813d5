"""ChineseWordPiece: WordPiece segmentation that keeps CJK ideographs prefix-free."""

import logging
import threading
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING, Self, override

from tokenizers import Tokenizer as HFTokenizer
from tokenizers import models as hf_models

from ..config import (
    DEFAULT_CONTINUING_SUBWORD_PREFIX,
    DEFAULT_MAX_INPUT_CHARS_PER_WORD,
    DEFAULT_UNK_TOKEN,
    MODEL_TYPE,
    ModelConfig,
)
from ..errors import ConfigurationError
from ..segmenter import ModelState, segment
from ..types import Token, TokenId, Vocabulary
from ..vocab import read_vocab_file, write_vocab_file
from .base import VOCAB_FILENAME, Model

if TYPE_CHECKING:
    from ..trainer import ChineseWordPieceTrainer

log = logging.getLogger(__name__)


class ChineseWordPieceBuilder:
    """
    Collects configuration for a :class:`ChineseWordPiece` model.

    Every setter returns the builder so calls can be chained:

    .. code-block:: python

        model = (
            ChineseWordPiece.builder()
            .files("vocab.txt")
            .unk_token("<unk>")
            .build()
        )
    """

    def __init__(self) -> None:
        self._files: str | None = None
        self._vocab: Vocabulary = {}
        self._unk_token = DEFAULT_UNK_TOKEN
        self._continuing_subword_prefix = DEFAULT_CONTINUING_SUBWORD_PREFIX
        self._max_input_chars_per_word = DEFAULT_MAX_INPUT_CHARS_PER_WORD

    def files(self, vocab: str | PathLike[str]) -> Self:
        """Read the vocabulary from this file at build time."""
        self._files = str(vocab)
        return self

    def vocab(self, vocab: Vocabulary) -> Self:
        """Set the token -> id mapping."""
        self._vocab = dict(vocab)
        return self

    def unk_token(self, unk_token: str) -> Self:
        """Set the token emitted when nothing in the vocabulary matches."""
        self._unk_token = unk_token
        return self

    def continuing_subword_prefix(self, prefix: str) -> Self:
        """Set the marker prepended to non-initial, non-CJK lookups."""
        self._continuing_subword_prefix = prefix
        return self

    def max_input_chars_per_word(self, max_chars: int) -> Self:
        """Set the longest word (in characters) that is segmented at all."""
        self._max_input_chars_per_word = max_chars
        return self

    def build(self) -> "ChineseWordPiece":
        """
        Construct the model.

        :raises OSError: If a vocabulary file was given and cannot be read.
        :raises ConfigurationError: If a setting is invalid.
        :raises VocabularyError: If two tokens share an id.
        """
        vocab = self._vocab
        if self._files is not None:
            vocab = read_vocab_file(self._files)

        return ChineseWordPiece(
            vocab,
            unk_token=self._unk_token,
            continuing_subword_prefix=self._continuing_subword_prefix,
            max_input_chars_per_word=self._max_input_chars_per_word,
        )


class ChineseWordPiece(Model):
    """
    WordPiece model with greedy longest-match segmentation.

    Spans made of CJK ideographs match vocabulary entries verbatim; other
    spans after the first piece of a word are looked up with the continuation
    prefix. Characters that cannot be matched become single unknown tokens.

    ``tokenize`` only reads the model and is safe to call from many threads.
    ``train`` installs a new vocabulary in a single swap.
    """

    MODEL_TYPE = MODEL_TYPE

    def __init__(
        self,
        vocab: Vocabulary | None = None,
        *,
        unk_token: str = DEFAULT_UNK_TOKEN,
        continuing_subword_prefix: str = DEFAULT_CONTINUING_SUBWORD_PREFIX,
        max_input_chars_per_word: int = DEFAULT_MAX_INPUT_CHARS_PER_WORD,
    ) -> None:
        config = ModelConfig(
            unk_token=unk_token,
            continuing_subword_prefix=continuing_subword_prefix,
            max_input_chars_per_word=max_input_chars_per_word,
        )
        self._state = ModelState.build(vocab or {}, config)
        # serializes writers; readers take one reference to ``_state``
        self._lock = threading.Lock()

        if self._state.table and unk_token not in self._state.table:
            log.warning(
                f"unk token {unk_token!r} is not in the vocabulary: "
                "unmatched input will fail to tokenize"
            )
        log.debug(f"built {self!r}")

    @staticmethod
    def builder() -> ChineseWordPieceBuilder:
        """Return a fresh builder with default settings."""
        return ChineseWordPieceBuilder()

    @staticmethod
    def read_file(vocab: str | PathLike[str]) -> Vocabulary:
        """Read a vocabulary file; the line number is the token id."""
        return read_vocab_file(vocab)

    @classmethod
    def from_file(cls, vocab: str | PathLike[str]) -> ChineseWordPieceBuilder:
        """Return a builder that loads its vocabulary from ``vocab``."""
        return cls.builder().files(vocab)

    @classmethod
    def from_bpe(cls, tokenizer: HFTokenizer) -> "ChineseWordPiece":
        """
        Build a model from a trained HuggingFace BPE tokenizer.

        The vocabulary (added tokens included) is copied verbatim. The BPE
        model's unknown token and continuation prefix are adopted when set.

        :raises ConfigurationError: If the tokenizer's model is not BPE.
        """
        bpe = tokenizer.model
        if not isinstance(bpe, hf_models.BPE):
            raise ConfigurationError(
                f"expected a BPE model, got {type(bpe).__name__}"
            )

        builder = cls.builder().vocab(tokenizer.get_vocab(with_added_tokens=True))
        if bpe.unk_token is not None:
            builder = builder.unk_token(bpe.unk_token)
        if bpe.continuing_subword_prefix is not None:
            builder = builder.continuing_subword_prefix(bpe.continuing_subword_prefix)
        return builder.build()

    @property
    def config(self) -> ModelConfig:
        return self._state.config

    @property
    def unk_token(self) -> str:
        return self._state.config.unk_token

    @property
    def continuing_subword_prefix(self) -> str:
        return self._state.config.continuing_subword_prefix

    @property
    def max_input_chars_per_word(self) -> int:
        return self._state.config.max_input_chars_per_word

    @override
    def tokenize(self, sequence: str) -> list[Token]:
        """
        Split one word into vocabulary tokens.

        :param sequence: A word without surrounding whitespace.
        :returns: Tokens whose byte offsets partition ``sequence``.
        :raises MissingUnkTokenError: If an unknown token is required but not
            in the vocabulary.
        """
        return segment(sequence, self._state)

    @override
    def get_vocab(self) -> Vocabulary:
        return dict(self._state.table.vocab)

    @override
    def get_vocab_size(self) -> int:
        return len(self._state.table)

    @override
    def token_to_id(self, token: str) -> TokenId | None:
        return self._state.table.vocab.get(token)

    @override
    def id_to_token(self, tok_id: TokenId) -> str | None:
        return self._state.table.vocab_r.get(tok_id)

    @override
    def save(
        self, folder: str | PathLike[str], name: str | None = None
    ) -> list[Path]:
        """
        Write the vocabulary file into ``folder``.

        The file is ``vocab.txt``, or ``<name>-vocab.txt`` when ``name`` is given.

        :returns: Paths of the written files.
        """
        filename = VOCAB_FILENAME if name is None else f"{name}-{VOCAB_FILENAME}"
        folder = Path(folder)
        folder.mkdir(parents=True, exist_ok=True)

        log.info(f"saving vocabulary to {folder / filename}")
        vocab_path = write_vocab_file(self._state.table, folder / filename)
        log.info(f"saved {len(self._state.table)} tokens")
        return [vocab_path]

    @override
    def get_trainer(self) -> "ChineseWordPieceTrainer":
        from ..trainer import ChineseWordPieceTrainer

        return ChineseWordPieceTrainer()

    def to_str(self, pretty: bool = False) -> str:
        """Serialize the model to its JSON record."""
        from ..serialization import to_json

        return to_json(self, pretty=pretty)

    def save_json(self, path: str | PathLike[str], pretty: bool = True) -> Path:
        """Write the JSON record to ``path``, creating parent folders."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        log.info(f"saving model to {path}")
        path.write_text(self.to_str(pretty=pretty), encoding="utf-8")
        return path

    def _install_vocab(self, vocab: Vocabulary, continuing_subword_prefix: str) -> None:
        """Replace vocabulary and prefix in one swap; other settings are kept."""
        with self._lock:
            config = ModelConfig(
                unk_token=self._state.config.unk_token,
                continuing_subword_prefix=continuing_subword_prefix,
                max_input_chars_per_word=self._state.config.max_input_chars_per_word,
            )
            self._state = ModelState.build(vocab, config)
        log.info(f"installed vocabulary with {len(self._state.table)} tokens")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChineseWordPiece):
            return NotImplemented
        return (
            self._state.config == other._state.config
            and self._state.table.vocab == other._state.table.vocab
        )

    # models are mutable through training
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        config = self._state.config
        return (
            f"{self.__class__.__name__}(unk_token={config.unk_token!r}, "
            f"continuing_subword_prefix={config.continuing_subword_prefix!r}, "
            f"max_input_chars_per_word={config.max_input_chars_per_word}, "
            f"vocab={len(self._state.table)})"
        )
