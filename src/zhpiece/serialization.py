"""
JSON record codec for ChineseWordPiece models.

The record has a fixed set of fields, small ones first:

.. code-block:: json

    {
        "type": "ChineseWordPiece",
        "unk_token": "[UNK]",
        "continuing_subword_prefix": "##",
        "max_input_chars_per_word": 100,
        "vocab": {"[UNK]": 0, "...": 1}
    }

``type`` may be missing on input for records written before it existed.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Final

from ._models.wordpiece import ChineseWordPiece
from .config import MODEL_TYPE
from .errors import InvalidDiscriminantError, MissingFieldError, ModelLoadError

log = logging.getLogger(__name__)

REQUIRED_FIELDS: Final[tuple[str, ...]] = (
    "unk_token",
    "continuing_subword_prefix",
    "max_input_chars_per_word",
    "vocab",
)


def to_dict(model: ChineseWordPiece) -> dict[str, Any]:
    """Return the model record with the vocabulary ordered by ascending id."""
    config = model.config
    return {
        "type": MODEL_TYPE,
        "unk_token": config.unk_token,
        "continuing_subword_prefix": config.continuing_subword_prefix,
        "max_input_chars_per_word": config.max_input_chars_per_word,
        "vocab": dict(sorted(model.get_vocab().items(), key=lambda kv: kv[1])),
    }


def to_json(model: ChineseWordPiece, pretty: bool = False) -> str:
    """Serialize ``model`` to a JSON string."""
    record = to_dict(model)
    if pretty:
        return json.dumps(record, ensure_ascii=False, indent=2)
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def from_dict(record: Mapping[str, Any]) -> ChineseWordPiece:
    """
    Rebuild a model from its record.

    Unknown keys are ignored.

    :raises InvalidDiscriminantError: If ``type`` names another model.
    :raises MissingFieldError: For the first required field that is absent.
    """
    if "type" in record and record["type"] != MODEL_TYPE:
        raise InvalidDiscriminantError(str(record["type"]), MODEL_TYPE)

    for name in REQUIRED_FIELDS:
        if name not in record:
            raise MissingFieldError(name)

    return (
        ChineseWordPiece.builder()
        .vocab(record["vocab"])
        .unk_token(record["unk_token"])
        .continuing_subword_prefix(record["continuing_subword_prefix"])
        .max_input_chars_per_word(record["max_input_chars_per_word"])
        .build()
    )


def from_json(data: str) -> ChineseWordPiece:
    """
    Deserialize a model from a JSON string.

    :raises ModelLoadError: If ``data`` is not a JSON object.
    """
    try:
        record = json.loads(data)
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"invalid model json: {e}") from e

    if not isinstance(record, dict):
        raise ModelLoadError(
            f"model record must be a json object, got {type(record).__name__}"
        )

    model = from_dict(record)
    log.debug(f"deserialized {model!r}")
    return model


__all__ = ["to_dict", "to_json", "from_dict", "from_json"]
