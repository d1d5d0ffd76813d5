"""Encode a text corpus into fixed-width id / attention-mask arrays.

Every line of the input files is one sample. Lines shorter than
``--min-chars`` are skipped. Each sample is split into words with jieba,
every word is tokenized with a ChineseWordPiece model, and the resulting ids
are truncated / padded to ``--max-length``. The arrays are written to an
``.npz`` archive under the keys ``id`` and ``attention_mask``.
"""

import argparse
import logging
import time
from pathlib import Path

import numpy as np
from datasets import load_dataset

from zhpiece import ChineseWordPiece, JiebaPreTokenizer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def load_lines(data_dir: Path, min_chars: int, max_samples: int | None) -> list[str]:
    """Read every ``*.txt`` file under ``data_dir`` line by line."""
    files = sorted(str(p) for p in data_dir.glob("*.txt"))
    if not files:
        raise SystemExit(f"no .txt files found in {data_dir}")
    print(f"Reading {len(files)} files from {data_dir} …")
    ds = load_dataset("text", data_files=files, split="train")
    ds = ds.filter(lambda row: len(row["text"]) >= min_chars)
    if max_samples is not None:
        ds = ds.select(range(min(max_samples, len(ds))))
    return ds["text"]


def encode_line(
    model: ChineseWordPiece,
    pre_tokenizer: JiebaPreTokenizer,
    line: str,
    max_length: int,
    pad_id: int,
) -> tuple[list[int], list[int]]:
    """Return ``(ids, attention_mask)`` for one line, both ``max_length`` long."""
    words = pre_tokenizer.split_words(line)
    ids = [tok.id for word_toks in model.tokenize_batch(words, parallel_mode="off") for tok in word_toks]
    ids = ids[:max_length]
    mask = [1] * len(ids)
    n_pad = max_length - len(ids)
    return ids + [pad_id] * n_pad, mask + [0] * n_pad


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Encode a text corpus with a ChineseWordPiece vocabulary."
    )
    parser.add_argument("--vocab", type=Path, required=True, help="Vocabulary file.")
    parser.add_argument("--data-dir", type=Path, required=True, help="Folder of .txt files.")
    parser.add_argument("--output", type=Path, default=Path("processed_data.npz"))
    parser.add_argument("--unk-token", default="<unk>")
    parser.add_argument("--pad-token", default="[PAD]")
    parser.add_argument("--max-length", type=int, default=2048)
    parser.add_argument("--min-chars", type=int, default=8192)
    parser.add_argument("--max-samples", type=int, default=500_000)
    parser.add_argument("--user-dict", type=Path, default=None, help="jieba user dictionary.")
    args = parser.parse_args()

    start = time.perf_counter()
    model = ChineseWordPiece.from_file(args.vocab).unk_token(args.unk_token).build()
    pad_id = model.token_to_id(args.pad_token)
    if pad_id is None:
        raise SystemExit(f"pad token {args.pad_token!r} is not in the vocabulary")
    pre_tokenizer = JiebaPreTokenizer(user_dict=args.user_dict)

    lines = load_lines(args.data_dir, args.min_chars, args.max_samples)
    print(f"Reading files takes {time.perf_counter() - start:.1f} seconds ({len(lines):,} lines)")

    ids = np.full((len(lines), args.max_length), pad_id, dtype=np.uint16)
    masks = np.zeros((len(lines), args.max_length), dtype=np.uint16)
    for row, line in enumerate(lines):
        row_ids, row_mask = encode_line(model, pre_tokenizer, line, args.max_length, pad_id)
        ids[row] = row_ids
        masks[row] = row_mask

    args.output.parent.mkdir(parents=True, exist_ok=True)
    np.savez(args.output, id=ids, attention_mask=masks)

    print(f"Takes {time.perf_counter() - start:.1f} seconds in total")
    print(f"Token number: {ids.size:,}")


if __name__ == "__main__":
    main()
