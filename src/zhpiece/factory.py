"""Factory functions for creating models."""

import logging
from os import PathLike
from pathlib import Path

from ._models.wordpiece import ChineseWordPiece
from .errors import ModelLoadError
from .serialization import from_json
from .types import Vocabulary

log = logging.getLogger(__name__)


def get_model(
    vocab: Vocabulary | None = None,
    *,
    vocab_file: str | PathLike[str] | None = None,
    unk_token: str | None = None,
    continuing_subword_prefix: str | None = None,
    max_input_chars_per_word: int | None = None,
) -> ChineseWordPiece:
    """
    Create a model from a vocabulary mapping or a vocabulary file.

    Settings left as ``None`` keep their defaults. ``vocab_file`` wins over
    ``vocab`` when both are given.

    .. code-block:: python

        model = get_model({"[UNK]": 0, "你": 1, "好": 2})
        model = get_model(vocab_file="vocab.txt", unk_token="<unk>")
    """
    builder = ChineseWordPiece.builder()
    if vocab is not None:
        builder = builder.vocab(vocab)
    if vocab_file is not None:
        builder = builder.files(vocab_file)
    if unk_token is not None:
        builder = builder.unk_token(unk_token)
    if continuing_subword_prefix is not None:
        builder = builder.continuing_subword_prefix(continuing_subword_prefix)
    if max_input_chars_per_word is not None:
        builder = builder.max_input_chars_per_word(max_input_chars_per_word)
    return builder.build()


def from_file(vocab_file: str | PathLike[str], **overrides) -> ChineseWordPiece:
    """Create a model from a vocabulary file; keyword settings as in :func:`get_model`."""
    return get_model(vocab_file=vocab_file, **overrides)


def from_pretrained(model_path: str | PathLike[str]) -> ChineseWordPiece:
    """
    Load a model saved with :meth:`ChineseWordPiece.save_json`.

    :raises ModelLoadError: If the file does not exist or holds a malformed record.

    .. code-block:: python

        model = from_pretrained("path/to/model.json")
        tokens = model.tokenize("你好")
    """
    path = Path(model_path)
    if not path.exists():
        raise ModelLoadError("model filepath does not exist", model_path=str(path))

    log.info(f"loading model from {path}")
    model = from_json(path.read_text(encoding="utf-8"))
    log.info(f"model loaded successfully: {model.get_vocab_size()} tokens")
    return model


__all__ = ["get_model", "from_file", "from_pretrained"]
