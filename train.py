"""Train a tokenizer on a local text file or a Hugging Face dataset and save it.

Prints vocabulary size, merge count and compression statistics for the
trained model.
"""

import argparse
import logging
import time
from pathlib import Path

from hetok import HETokenizer

HF_DATASET = "stevez80/Sci-Fi-Books-gutenberg"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def load_corpus(text_file: Path | None, dataset: str, num_docs: int | None) -> str:
    """Read ``text_file`` when given, otherwise up to ``num_docs`` dataset rows."""
    if text_file is not None:
        print(f"Loading {text_file} …")
        return text_file.read_text(encoding="utf-8")

    # only needed when no local file is given
    from datasets import load_dataset

    print(f"Loading {dataset} (non-streaming) …")
    ds = load_dataset(dataset, split="train")
    if num_docs is not None:
        return "\n".join(ds[:num_docs]["text"])
    return "\n".join(ds["text"])


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--text-file", type=Path, default=None)
    parser.add_argument("--dataset", default=HF_DATASET)
    parser.add_argument("--num-docs", type=int, default=200)
    parser.add_argument("--vocab-size", type=int, default=1200)
    parser.add_argument("--output", default="models/hetok")
    parser.add_argument("--verbose", action="store_true", help="log every merge")
    args = parser.parse_args()

    corpus = load_corpus(args.text_file, args.dataset, args.num_docs)
    print(f"number of chars {len(corpus):,}")

    tok = HETokenizer(vocab_size=args.vocab_size)
    start = time.perf_counter()
    result = tok.train(corpus, verbose=args.verbose)
    train_time = time.perf_counter() - start

    print(f"   ✓ Training completed in {train_time:.3f}s")
    print(f"   ✓ Merges created: {result.n_merges_completed:,}")
    print(f"   ✓ Final vocab size: {tok.vocab_size():,}")

    encoded = tok.encode(corpus)
    n_chars = len(encoded.meta.get("normalizedText", ""))
    if encoded.ids:
        print(f"   Characters: {n_chars:,}")
        print(f"   Tokens: {len(encoded.ids):,}")
        print(f"   Compression ratio: {n_chars / len(encoded.ids):.2f} chars/token")

    tok.save(args.output)
    print(f"   ✓ Model saved to {args.output}.json")


if __name__ == "__main__":
    main()
