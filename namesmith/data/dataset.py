"""Training dataset: every (window, next symbol) pair of a corpus."""

from __future__ import annotations

from typing import Iterable, Optional

import torch
from torch.utils.data import Dataset

from namesmith.data.encoding import SequenceEncoder
from namesmith.data.expand import ExampleExpander, TrainingExample


class NameWindowDataset(Dataset):
    """One-hot windows and target ids for next-character training."""

    def __init__(
        self,
        corpus: Iterable[str],
        expander: ExampleExpander,
        encoder: SequenceEncoder,
        shuffle: bool = True,
        seed: Optional[int] = None,
    ) -> None:
        self.encoder = encoder
        self.examples: list[TrainingExample] = expander.expand_corpus(corpus, shuffle=shuffle, seed=seed)

    def __len__(self) -> int:
        return len(self.examples)

    def __getitem__(self, idx: int) -> dict[str, torch.Tensor]:
        example = self.examples[idx]
        return {
            "window": self.encoder.encode(example.window),
            "target": torch.tensor(example.target, dtype=torch.long),
        }

