"""zhpiece: Chinese-aware WordPiece tokenization model."""

from ._models.base import Model
from ._models.wordpiece import ChineseWordPiece, ChineseWordPieceBuilder
from ._progress import disable_progress, enable_progress
from .config import ModelConfig
from .errors import (
    ConfigurationError,
    InvalidDiscriminantError,
    MissingFieldError,
    MissingUnkTokenError,
    ModelLoadError,
    SerializationError,
    TrainingError,
    VocabularyError,
    ZhPieceError,
)
from .factory import from_file, from_pretrained, get_model
from .matcher import VocabMatcher
from .parallel import ParallelMode, list_parallel_modes
from .pre_tokenizers import JiebaPreTokenizer, PreTokenizer, WhitespacePreTokenizer
from .serialization import from_json, to_json
from .trainer import ChineseWordPieceTrainer, ChineseWordPieceTrainerBuilder
from .types import Token

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("zhpiece")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Model",
    "ChineseWordPiece",
    "ChineseWordPieceBuilder",
    "ChineseWordPieceTrainer",
    "ChineseWordPieceTrainerBuilder",
    "ModelConfig",
    "Token",
    "VocabMatcher",
    "PreTokenizer",
    "JiebaPreTokenizer",
    "WhitespacePreTokenizer",
    "ParallelMode",
    "ZhPieceError",
    "MissingUnkTokenError",
    "VocabularyError",
    "ConfigurationError",
    "TrainingError",
    "ModelLoadError",
    "SerializationError",
    "MissingFieldError",
    "InvalidDiscriminantError",
    "get_model",
    "from_file",
    "from_pretrained",
    "from_json",
    "to_json",
    "list_parallel_modes",
    "enable_progress",
    "disable_progress",
]
