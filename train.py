"""Train a ChineseWordPiece vocabulary on a text corpus and save it."""

import argparse
import logging
import time
from pathlib import Path

from datasets import load_dataset

from zhpiece import ChineseWordPiece, ChineseWordPieceTrainer, JiebaPreTokenizer

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)

SPECIAL_TOKENS = ["[PAD]", "[UNK]", "[CLS]", "[SEP]", "[MASK]"]


def main() -> None:
    parser = argparse.ArgumentParser(description="Train a ChineseWordPiece vocabulary.")
    parser.add_argument("files", nargs="+", help="Plain-text training files.")
    parser.add_argument("--vocab-size", type=int, default=30_000)
    parser.add_argument("--min-frequency", type=int, default=2)
    parser.add_argument("--output", type=Path, default=Path("model"))
    parser.add_argument("--name", default=None, help="Prefix for the saved vocab file.")
    args = parser.parse_args()

    print(f"\n📚 Loading {len(args.files)} files...")
    ds = load_dataset("text", data_files=args.files, split="train")
    print(f"   {len(ds):,} lines")

    trainer = (
        ChineseWordPieceTrainer.builder()
        .vocab_size(args.vocab_size)
        .min_frequency(args.min_frequency)
        .special_tokens(SPECIAL_TOKENS)
        .build()
    )
    trainer.feed(ds["text"], process=JiebaPreTokenizer().split_words)

    model = ChineseWordPiece()
    print(f"\n🔧 Training vocabulary (vocab_size={args.vocab_size})...")
    train_start = time.perf_counter()
    added = trainer.train(model)
    print(f"   ✓ Training completed in {time.perf_counter() - train_start:.3f}s")
    print(f"   ✓ Vocab size: {model.get_vocab_size():,} (special tokens: {added})")

    paths = model.save(args.output, args.name)
    json_path = model.save_json(args.output / "model.json")
    print(f"   ✓ Saved {[str(p) for p in paths]} and {json_path}")


if __name__ == "__main__":
    main()
