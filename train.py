"""Train a wordbpe tokenizer on a local text file or a Hugging Face dataset."""

import argparse
import logging
import time
from pathlib import Path

import wordbpe as wbpe

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def load_corpus(path: str | None, dataset: str | None, rows: int) -> str:
    """Read the corpus from a file, or join the text column of a dataset split."""
    if path is not None:
        return Path(path).read_text(encoding="utf-8")

    from datasets import load_dataset

    ds = load_dataset(dataset, split="train")
    return "".join(ds[:rows]["text"])


def main() -> None:
    """Train, report statistics and save the tokenizer."""
    parser = argparse.ArgumentParser(description="Train a wordbpe tokenizer.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", type=str, help="UTF-8 text file to train on.")
    source.add_argument(
        "--dataset",
        type=str,
        help="Hugging Face dataset with a 'text' column (requires `datasets`).",
    )
    parser.add_argument(
        "--rows", type=int, default=1000, help="Dataset rows to join into the corpus."
    )
    parser.add_argument(
        "--vocab-size", type=int, required=True, help="Target vocabulary size."
    )
    parser.add_argument(
        "--out", type=str, default="wordbpe", help="Output prefix for .model/.vocab."
    )
    parser.add_argument("--verbose", action="store_true", help="Log every merge.")
    args = parser.parse_args()

    text = load_corpus(args.file, args.dataset, args.rows)
    print(f"Corpus: {len(text):,} chars, {len(set(text)):,} distinct")

    tokenizer = wbpe.Tokenizer()
    start = time.perf_counter()
    tokenizer.train(text, vocab_size=args.vocab_size, verbose=args.verbose)
    elapsed = time.perf_counter() - start

    print(f"Trained in {elapsed:.3f}s")
    print(f"Vocab size reached: {tokenizer.vocab_size():,}")
    print(f"Distinct words: {len(tokenizer.dictionary):,}")

    if tokenizer.dictionary:
        # markers excluded
        n_tokens = len(tokenizer.tokenize(text)) - 2
        print(f"Corpus tokens: {n_tokens:,} ({len(text) / max(1, n_tokens):.2f} chars/token)")

    tokenizer.save(args.out)
    print(f"Saved to {args.out}.model / {args.out}.vocab")


if __name__ == "__main__":
    main()
