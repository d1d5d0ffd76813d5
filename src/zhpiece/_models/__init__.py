"""Model implementations for word-level subword segmentation."""

from .base import Model
from .wordpiece import ChineseWordPiece, ChineseWordPieceBuilder


__all__ = ["Model", "ChineseWordPiece", "ChineseWordPieceBuilder"]
