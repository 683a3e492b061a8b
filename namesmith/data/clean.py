"""Corpus ingestion and cleaning.

Reads a plain text file with one name per line and turns it into the corpus
the encoder and generator expect: lowercase, whitespace collapsed, only
vocabulary characters, at least ``min_length`` characters, no duplicates.

Usage:
    python -m namesmith.data.clean data/raw_names.txt data/names.txt
"""

from __future__ import annotations

import argparse
import logging
import re
import unicodedata
from pathlib import Path
from typing import Iterable

from namesmith.tokenizer.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2


def normalize_text(text: str) -> str:
    """Compose unicode, collapse whitespace, lowercase."""
    text = unicodedata.normalize("NFC", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text.lower()


def clean_name(name: str, vocabulary: Vocabulary, min_length: int = MIN_NAME_LENGTH) -> str | None:
    """Clean and validate a name. Returns None to filter out."""
    name = normalize_text(name)
    if len(name) < min_length:
        return None
    if not vocabulary.accepts(name):
        return None
    return name


def clean_corpus(
    names: Iterable[str],
    vocabulary: Vocabulary,
    min_length: int = MIN_NAME_LENGTH,
) -> list[str]:
    """Clean names and drop duplicates, keeping first-seen order."""
    seen: set[str] = set()
    corpus = []
    rejected = 0
    for raw in names:
        name = clean_name(raw, vocabulary, min_length)
        if name is None:
            if raw.strip():
                rejected += 1
            continue
        if name not in seen:
            seen.add(name)
            corpus.append(name)
    if rejected:
        logger.info("Dropped %d names that were too short or outside the vocabulary", rejected)
    return corpus


def load_corpus(
    path: str | Path,
    vocabulary: Vocabulary,
    min_length: int = MIN_NAME_LENGTH,
) -> list[str]:
    """Load and clean a one-name-per-line UTF-8 file."""
    with open(path, encoding="utf-8") as f:
        corpus = clean_corpus(f, vocabulary, min_length)
    logger.info("Loaded %d names from %s", len(corpus), path)
    return corpus


def save_corpus(corpus: Iterable[str], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for name in corpus:
            f.write(name + "\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Clean a raw name list into a training corpus")
    parser.add_argument("input", type=str)
    parser.add_argument("output", type=str)
    parser.add_argument("--min-length", type=int, default=MIN_NAME_LENGTH)
    args = parser.parse_args()

    vocabulary = Vocabulary()
    with open(args.input, encoding="utf-8") as f:
        raw = [line for line in f if line.strip()]
    corpus = clean_corpus(raw, vocabulary, args.min_length)
    print(f"Raw names: {len(raw)}")
    print(f"Clean names: {len(corpus)}")

    save_corpus(corpus, args.output)
    print(f"Wrote {args.output}")


if __name__ == "__main__":
    main()
