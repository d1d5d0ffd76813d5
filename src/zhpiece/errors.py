"""Custom exception hierarchy for zhpiece errors."""

from .types import TokenId


class ZhPieceError(Exception):
    """Base exception for all zhpiece errors."""


class MissingUnkTokenError(ZhPieceError):
    """Raised when an unknown-token fallback is needed but absent from the vocabulary."""

    def __init__(self, unk_token: str) -> None:
        super().__init__(
            f"ChineseWordPiece error: Missing {unk_token} token from the vocabulary"
        )
        self.unk_token = unk_token


class VocabularyError(ZhPieceError):
    """Raised when vocabulary operations fail."""

    def __init__(
        self,
        message: str,
        *,
        vocab_size: int | None = None,
        invalid_tok: str | TokenId | None = None,
    ) -> None:
        """Initialize with optional token and vocab_size that get appended to the message."""
        extra = " "
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        if invalid_tok is not None:
            extra += f"(invalid token: {invalid_tok!r}) "
        super().__init__(message + extra)
        self.vocab_size = vocab_size
        self.invalid_tok = invalid_tok


class ConfigurationError(ZhPieceError):
    """Raised when a model or batch option has an invalid value."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name is not None:
            extra += f"(available: {available}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available = available


class TrainingError(ZhPieceError):
    """Raised when vocabulary training fails."""


class ModelLoadError(ZhPieceError):
    """Raised when loading a serialized model fails."""

    def __init__(self, message: str, *, model_path: str | None = None) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        super().__init__(message + extra)
        self.model_path = model_path


class SerializationError(ModelLoadError):
    """Raised when a serialized model record has the wrong shape."""


class MissingFieldError(SerializationError):
    """Raised when a required field is absent from a model record."""

    def __init__(self, field: str) -> None:
        super().__init__(f"missing field `{field}`")
        self.field = field


class InvalidDiscriminantError(SerializationError):
    """Raised when the record's ``type`` tag names a different model."""

    def __init__(self, got: str, expected: str) -> None:
        super().__init__(f'invalid value: string "{got}", expected {expected}')
        self.got = got
        self.expected = expected
