"""
Core types for tokenization.
"""

from dataclasses import dataclass

type TokenId = int
type Offsets = tuple[int, int]
type Vocabulary = dict[str, TokenId]
type ReverseVocabulary = dict[TokenId, str]


@dataclass(frozen=True, slots=True)
class Token:
    """
    One segmentation result.

    ``value`` is the vocabulary key that matched (continuation prefix included),
    ``offsets`` is the half-open byte span of the piece inside the word.
    """

    value: str
    id: TokenId
    offsets: Offsets
