"""
Vocabulary training for ChineseWordPiece models.

Vocabulary induction is delegated to the HuggingFace ``tokenizers`` BPE
trainer. The learned BPE vocabulary already follows the WordPiece layout when
the trainer uses a continuation prefix, so it is installed into the model as is.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Self

from tokenizers import AddedToken
from tokenizers import Tokenizer as HFTokenizer
from tokenizers import models as hf_models
from tokenizers import pre_tokenizers as hf_pre_tokenizers
from tokenizers import trainers as hf_trainers

from ._decorators import measure_time
from ._models.wordpiece import ChineseWordPiece
from ._progress import _is_enabled
from .config import DEFAULT_CONTINUING_SUBWORD_PREFIX
from .errors import TrainingError

log = logging.getLogger(__name__)

type Process = Callable[[str], list[str]]


class ChineseWordPieceTrainer:
    """
    Trains the vocabulary of a :class:`ChineseWordPiece` model.

    Settings are stored on the wrapped ``tokenizers`` BPE trainer and read back
    through properties. Training data is buffered with :meth:`feed` and
    consumed by :meth:`train`.

    Example:
       >>> trainer = ChineseWordPieceTrainer(vocab_size=1000, special_tokens=["[UNK]"])
       >>> trainer.feed(["我爱自然语言处理", "hello world"])
       >>> model = ChineseWordPiece()
       >>> added = trainer.train(model)
    """

    def __init__(
        self,
        *,
        vocab_size: int = 30000,
        min_frequency: int = 0,
        show_progress: bool | None = None,
        special_tokens: list[str | AddedToken] | None = None,
        limit_alphabet: int | None = None,
        initial_alphabet: list[str] | None = None,
        continuing_subword_prefix: str | None = DEFAULT_CONTINUING_SUBWORD_PREFIX,
        end_of_word_suffix: str | None = None,
    ) -> None:
        if show_progress is None:
            show_progress = _is_enabled()

        kwargs = {
            "vocab_size": vocab_size,
            "min_frequency": min_frequency,
            "show_progress": show_progress,
            "special_tokens": special_tokens or [],
            "initial_alphabet": initial_alphabet or [],
        }
        # the bindings reject explicit None for optional settings
        if limit_alphabet is not None:
            kwargs["limit_alphabet"] = limit_alphabet
        if continuing_subword_prefix is not None:
            kwargs["continuing_subword_prefix"] = continuing_subword_prefix
        if end_of_word_suffix is not None:
            kwargs["end_of_word_suffix"] = end_of_word_suffix

        self._bpe_trainer = hf_trainers.BpeTrainer(**kwargs)
        # one whitespace-joined line of words per fed sequence
        self._sequences: list[str] = []

    @staticmethod
    def builder() -> "ChineseWordPieceTrainerBuilder":
        """Return a builder with default settings."""
        return ChineseWordPieceTrainerBuilder()

    @property
    def min_frequency(self) -> int:
        return self._bpe_trainer.min_frequency

    @min_frequency.setter
    def min_frequency(self, freq: int) -> None:
        self._bpe_trainer.min_frequency = freq

    @property
    def vocab_size(self) -> int:
        return self._bpe_trainer.vocab_size

    @vocab_size.setter
    def vocab_size(self, size: int) -> None:
        self._bpe_trainer.vocab_size = size

    @property
    def show_progress(self) -> bool:
        return self._bpe_trainer.show_progress

    @show_progress.setter
    def show_progress(self, show: bool) -> None:
        self._bpe_trainer.show_progress = show

    @property
    def special_tokens(self) -> list[str]:
        return [tok.content for tok in self._bpe_trainer.special_tokens]

    @special_tokens.setter
    def special_tokens(self, tokens: list[str | AddedToken]) -> None:
        self._bpe_trainer.special_tokens = tokens

    @property
    def limit_alphabet(self) -> int | None:
        return self._bpe_trainer.limit_alphabet

    @limit_alphabet.setter
    def limit_alphabet(self, limit: int | None) -> None:
        self._bpe_trainer.limit_alphabet = limit

    @property
    def initial_alphabet(self) -> list[str]:
        return self._bpe_trainer.initial_alphabet

    @initial_alphabet.setter
    def initial_alphabet(self, alphabet: list[str]) -> None:
        self._bpe_trainer.initial_alphabet = alphabet

    @property
    def continuing_subword_prefix(self) -> str | None:
        return self._bpe_trainer.continuing_subword_prefix

    @continuing_subword_prefix.setter
    def continuing_subword_prefix(self, prefix: str | None) -> None:
        self._bpe_trainer.continuing_subword_prefix = prefix

    @property
    def end_of_word_suffix(self) -> str | None:
        return self._bpe_trainer.end_of_word_suffix

    @end_of_word_suffix.setter
    def end_of_word_suffix(self, suffix: str | None) -> None:
        self._bpe_trainer.end_of_word_suffix = suffix

    def should_show_progress(self) -> bool:
        return self.show_progress

    def feed(self, iterator: Iterable[str], process: Process | None = None) -> None:
        """
        Buffer training sequences.

        :param iterator: Raw training sequences.
        :param process: Splits one sequence into words, e.g.
            ``JiebaPreTokenizer().split_words``. Defaults to whitespace splitting.
        """
        n_words = 0
        for sequence in iterator:
            words = process(sequence) if process is not None else sequence.split()
            # words never contain whitespace so a plain join round-trips
            words = [w for w in words if w and not w.isspace()]
            if words:
                self._sequences.append(" ".join(words))
                n_words += len(words)
        log.debug(f"fed {n_words} words ({len(self._sequences)} sequences buffered)")

    @measure_time
    def train(self, model: ChineseWordPiece) -> list[str]:
        """
        Learn a vocabulary from the fed data and install it into ``model``.

        Only the vocabulary and the continuation prefix of ``model`` change;
        its unknown token and word length limit are kept.

        :returns: The special tokens the trainer added to the vocabulary.
        :raises TrainingError: If nothing was fed, ``model`` is not a
            ChineseWordPiece, or the BPE trainer fails.
        """
        if not isinstance(model, ChineseWordPiece):
            raise TrainingError(
                f"expected a ChineseWordPiece model, got {type(model).__name__}"
            )
        if not self._sequences:
            raise TrainingError("no training data, call feed() before train()")

        log.info(
            f"training vocabulary (target size {self.vocab_size}) "
            f"on {len(self._sequences)} sequences"
        )

        bpe_tokenizer = HFTokenizer(hf_models.BPE())
        bpe_tokenizer.pre_tokenizer = hf_pre_tokenizers.WhitespaceSplit()
        try:
            bpe_tokenizer.train_from_iterator(
                self._sequences,
                trainer=self._bpe_trainer,
                length=len(self._sequences),
            )
        except Exception as e:
            raise TrainingError("bpe trainer failed") from e

        trained = ChineseWordPiece.from_bpe(bpe_tokenizer)
        model._install_vocab(trained.get_vocab(), trained.continuing_subword_prefix)

        added = [tok for tok in self.special_tokens if trained.token_to_id(tok) is not None]
        log.info(f"trained vocabulary of {trained.get_vocab_size()} tokens")
        return added


class ChineseWordPieceTrainerBuilder:
    """Chainable configuration for :class:`ChineseWordPieceTrainer`."""

    def __init__(self) -> None:
        self._options: dict = {}

    def min_frequency(self, frequency: int) -> Self:
        self._options["min_frequency"] = frequency
        return self

    def vocab_size(self, size: int) -> Self:
        self._options["vocab_size"] = size
        return self

    def show_progress(self, show: bool) -> Self:
        self._options["show_progress"] = show
        return self

    def special_tokens(self, tokens: list[str | AddedToken]) -> Self:
        self._options["special_tokens"] = tokens
        return self

    def limit_alphabet(self, limit: int) -> Self:
        self._options["limit_alphabet"] = limit
        return self

    def initial_alphabet(self, alphabet: Iterable[str]) -> Self:
        self._options["initial_alphabet"] = list(alphabet)
        return self

    def continuing_subword_prefix(self, prefix: str) -> Self:
        self._options["continuing_subword_prefix"] = prefix
        return self

    def end_of_word_suffix(self, suffix: str) -> Self:
        self._options["end_of_word_suffix"] = suffix
        return self

    def build(self) -> ChineseWordPieceTrainer:
        return ChineseWordPieceTrainer(**self._options)


__all__ = ["ChineseWordPieceTrainer", "ChineseWordPieceTrainerBuilder"]
