"""Expand names into (prefix, next symbol) training pairs."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Optional

from namesmith.tokenizer.vocabulary import Vocabulary


@dataclass(frozen=True)
class TrainingExample:
    window: tuple[int, ...]
    target: int


class ExampleExpander:
    """Turns a name of k characters into k + 1 training examples.

    The stop id is appended to the name; example i (1-based) predicts symbol i
    of that sequence from the i - 1 symbols before it, so the first example
    has an empty window and the last one targets stop.
    """

    def __init__(self, vocabulary: Vocabulary) -> None:
        self.vocabulary = vocabulary

    def expand(self, name: str) -> list[TrainingExample]:
        ids = self.vocabulary.encode_text(name) + [self.vocabulary.stop_id]
        return [TrainingExample(window=tuple(ids[:i]), target=ids[i]) for i in range(len(ids))]

    def expand_corpus(
        self,
        corpus: Iterable[str],
        shuffle: bool = False,
        seed: Optional[int] = None,
    ) -> list[TrainingExample]:
        examples: list[TrainingExample] = []
        for name in corpus:
            examples.extend(self.expand(name))
        if shuffle:
            random.Random(seed).shuffle(examples)
        return examples
