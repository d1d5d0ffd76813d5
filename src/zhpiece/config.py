"""Model configuration for the ChineseWordPiece model."""

from dataclasses import dataclass
from typing import Final

from .errors import ConfigurationError

MODEL_TYPE: Final[str] = "ChineseWordPiece"
DEFAULT_UNK_TOKEN: Final[str] = "[UNK]"
DEFAULT_CONTINUING_SUBWORD_PREFIX: Final[str] = "##"
DEFAULT_MAX_INPUT_CHARS_PER_WORD: Final[int] = 100


@dataclass(frozen=True)
class ModelConfig:
    """
    Settings that steer segmentation.

    The unknown token is not required to exist in the vocabulary here; that is
    checked lazily when a fallback is actually emitted.
    """

    unk_token: str = DEFAULT_UNK_TOKEN
    continuing_subword_prefix: str = DEFAULT_CONTINUING_SUBWORD_PREFIX
    max_input_chars_per_word: int = DEFAULT_MAX_INPUT_CHARS_PER_WORD

    def __post_init__(self) -> None:
        if not isinstance(self.unk_token, str) or not self.unk_token:
            raise ConfigurationError(
                f"unk_token must be a non-empty string: {self.unk_token!r}"
            )
        if not isinstance(self.continuing_subword_prefix, str):
            raise ConfigurationError(
                "continuing_subword_prefix must be a string: "
                f"{self.continuing_subword_prefix!r}"
            )
        # bool is an int subclass but never a sensible limit
        if (
            not isinstance(self.max_input_chars_per_word, int)
            or isinstance(self.max_input_chars_per_word, bool)
            or self.max_input_chars_per_word < 0
        ):
            raise ConfigurationError(
                "max_input_chars_per_word must be a non-negative integer: "
                f"{self.max_input_chars_per_word!r}"
            )
