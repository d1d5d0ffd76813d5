"""
Greedy longest-match segmentation of a single word.

The scan walks a cursor from the left edge of the word. At every cursor
position the longest vocabulary entry starting there wins; if none exists a
single-character unknown token is emitted and the cursor moves one character.

Lookup keys follow the WordPiece convention with one exception for Chinese:

- a span holding at least one CJK ideograph is looked up verbatim;
- any other span is looked up verbatim at the start of the word and with the
  continuation prefix prepended everywhere else.

Offsets are UTF-8 byte offsets into the word while the scan itself moves in
characters.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from ._unicode import byte_offsets, cjk_prefix_counts
from .config import ModelConfig
from .errors import MissingUnkTokenError
from .matcher import VocabMatcher
from .types import Offsets, Token, TokenId, Vocabulary
from .vocab import VocabTable


@dataclass(frozen=True)
class ModelState:
    """
    Everything a segmentation call reads, bundled so it can be swapped at once.

    The matcher is derived from the vocabulary and the continuation prefix, so
    the three always change together.
    """

    config: ModelConfig
    table: VocabTable
    matcher: VocabMatcher

    @classmethod
    def build(cls, vocab: Vocabulary, config: ModelConfig) -> "ModelState":
        """Validate ``vocab`` and build its matcher under ``config``."""
        table = VocabTable.from_mapping(vocab)
        matcher = VocabMatcher.from_vocab(table.vocab, config.continuing_subword_prefix)
        return cls(config=config, table=table, matcher=matcher)


def lookup_key(
    word: str, start: int, end: int, cjk_counts: list[int], prefix: str
) -> str:
    """Return the vocabulary key for the character span ``[start, end)``."""
    piece = word[start:end]
    # ideographs never carry the continuation marker
    if start == 0 or cjk_counts[end] - cjk_counts[start] > 0:
        return piece
    return prefix + piece


def _unk_token(state: ModelState, offsets: Offsets) -> Token:
    unk = state.config.unk_token
    tok_id = state.table.vocab.get(unk)
    if tok_id is None:
        raise MissingUnkTokenError(unk)
    return Token(value=unk, id=tok_id, offsets=offsets)


def _candidate_ends(
    word: str, start: int, state: ModelState, accelerated: bool
) -> Iterable[int]:
    """Candidate end positions for ``start``, longest first."""
    # verbatim non-CJK entries are absent from the trie, so the word start is
    # always scanned directly
    if accelerated and start > 0:
        return reversed(state.matcher.match_ends(word, start))
    return range(len(word), start, -1)


def _longest_match(
    word: str,
    start: int,
    cjk_counts: list[int],
    state: ModelState,
    accelerated: bool,
) -> tuple[int, str, TokenId] | None:
    vocab = state.table.vocab
    prefix = state.config.continuing_subword_prefix
    for end in _candidate_ends(word, start, state, accelerated):
        key = lookup_key(word, start, end, cjk_counts, prefix)
        tok_id = vocab.get(key)
        if tok_id is not None:
            return end, key, tok_id
    return None


def segment(word: str, state: ModelState, accelerated: bool = True) -> list[Token]:
    """
    Split ``word`` into vocabulary tokens.

    :param word: A single pre-tokenized word.
    :param state: Configuration, vocabulary and matcher to segment against.
    :param accelerated: Use the trie to enumerate candidates after the first
        character. The result is identical either way; ``False`` runs the
        plain quadratic scan.
    :returns: Tokens in left-to-right order whose offsets partition the word's bytes.
    :raises MissingUnkTokenError: If a fallback is required and the unknown
        token is not in the vocabulary.
    """
    n_chars = len(word)
    if n_chars > state.config.max_input_chars_per_word:
        return [_unk_token(state, (0, len(word.encode("utf-8"))))]

    offsets = byte_offsets(word)
    cjk_counts = cjk_prefix_counts(word)

    tokens: list[Token] = []
    start = 0
    while start < n_chars:
        match = _longest_match(word, start, cjk_counts, state, accelerated)
        if match is None:
            tokens.append(_unk_token(state, (offsets[start], offsets[start + 1])))
            start += 1
            continue
        end, key, tok_id = match
        tokens.append(Token(value=key, id=tok_id, offsets=(offsets[start], offsets[end])))
        start = end

    return tokens
