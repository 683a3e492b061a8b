"""Train NameLSTM on the (window -> next character) pairs of a name corpus.

Usage:
    python -m namesmith.training.trainer --corpus data/names.txt
"""

from __future__ import annotations

import argparse
import logging
import time

import torch
import torch.nn as nn
import torch.nn.functional as F
from torch.utils.data import DataLoader
from tqdm import tqdm

from namesmith.config import TrainingParams, load_config, resolve_device
from namesmith.data.clean import load_corpus
from namesmith.data.dataset import NameWindowDataset
from namesmith.data.encoding import SequenceEncoder
from namesmith.data.expand import ExampleExpander
from namesmith.model.name_lstm import NameLSTM
from namesmith.tokenizer.vocabulary import Vocabulary
from namesmith.training.scheduler import warmup_cosine_schedule

logger = logging.getLogger(__name__)


def build_dataset(
    corpus: list[str],
    vocabulary: Vocabulary,
    window_length: int,
    shuffle: bool = True,
    seed: int | None = None,
) -> NameWindowDataset:
    encoder = SequenceEncoder(vocabulary.width, window_length)
    return NameWindowDataset(corpus, ExampleExpander(vocabulary), encoder, shuffle=shuffle, seed=seed)


def train(
    model: NameLSTM,
    dataset: NameWindowDataset,
    params: TrainingParams,
    device: str = "cpu",
    progress: bool = True,
) -> list[float]:
    """Fit ``model`` in place. Returns the mean training loss of each epoch."""
    if len(dataset) == 0:
        raise ValueError("training dataset is empty")

    torch.manual_seed(params.seed)
    model.to(device)

    loader_rng = torch.Generator().manual_seed(params.seed)
    loader = DataLoader(dataset, batch_size=params.batch_size, shuffle=params.shuffle, generator=loader_rng)

    optimizer = torch.optim.AdamW(model.parameters(), lr=params.learning_rate, weight_decay=params.weight_decay)
    scheduler = warmup_cosine_schedule(optimizer, len(loader) * params.epochs, params.warmup_ratio)

    history: list[float] = []
    start_time = time.time()
    for epoch in range(params.epochs):
        model.train()
        epoch_loss = 0.0
        pbar = tqdm(loader, desc=f"Epoch {epoch + 1}/{params.epochs}", disable=not progress, leave=False)
        for batch in pbar:
            windows = batch["window"].to(device)
            targets = batch["target"].to(device)

            optimizer.zero_grad()
            logits = model(windows)
            loss = F.cross_entropy(logits, targets)
            loss.backward()
            nn.utils.clip_grad_norm_(model.parameters(), params.max_grad_norm)
            optimizer.step()
            scheduler.step()

            epoch_loss += loss.item()
            pbar.set_postfix(loss=f"{loss.item():.4f}")

        avg_loss = epoch_loss / len(loader)
        history.append(avg_loss)
        logger.info("Epoch %d: loss=%.4f, elapsed=%.0fs", epoch + 1, avg_loss, time.time() - start_time)

    model.eval()
    return history


def main() -> None:
    parser = argparse.ArgumentParser(description="Train NameLSTM on a name corpus")
    parser.add_argument("--config", type=str, default="configs/namesmith.yaml")
    parser.add_argument("--corpus", type=str, default=None)
    parser.add_argument("--epochs", type=int, default=None)
    parser.add_argument("--save-path", type=str, default=None)
    args = parser.parse_args()

    config = load_config(args.config)
    if args.corpus:
        config.data.corpus_path = args.corpus
    if args.epochs is not None:
        config.training.epochs = args.epochs
    if args.save_path:
        config.checkpoint.path = args.save_path

    device = resolve_device(config.checkpoint.device)
    vocabulary = Vocabulary()
    corpus = load_corpus(config.data.corpus_path, vocabulary, config.data.min_length)
    dataset = build_dataset(
        corpus, vocabulary, config.model.window_length,
        shuffle=config.training.shuffle, seed=config.training.seed,
    )

    torch.manual_seed(config.training.seed)
    model = NameLSTM(vocabulary.width, config.model.hidden_size, config.model.dropout)
    params = model.count_parameters()
    print(f"Corpus: {len(corpus):,} names, {len(dataset):,} training windows")
    print(f"Model: {params['total']:,} params on {device}\n")

    start_time = time.time()
    history = train(model, dataset, config.training, device=device)
    for epoch, loss in enumerate(history, 1):
        print(f"  Epoch {epoch}: loss={loss:.4f}")

    model.save(config.checkpoint.path)
    print(f"\nTraining done in {time.time() - start_time:.0f}s. Saved to {config.checkpoint.path}")


if __name__ == "__main__":
    main()
