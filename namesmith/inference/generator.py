"""Name generation: autoregressive character sampling -> title-case -> dedup -> novelty filter."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

import torch

from namesmith.config import DEFAULT_CONFIG_PATH, NamesmithConfig, load_config, resolve_device
from namesmith.data.encoding import SequenceEncoder
from namesmith.errors import DegenerateDistribution
from namesmith.inference.filter import filter_new_names, title_case
from namesmith.inference.sampler import TemperatureSampler, check_temperature
from namesmith.model.name_lstm import NameLSTM
from namesmith.model.protocol import SequenceModel
from namesmith.tokenizer.vocabulary import OutcomeKind, Vocabulary

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 30


class StopReason(Enum):
    STOP_TOKEN = "stop_token"
    MAX_LENGTH = "max_length"


@dataclass(frozen=True)
class GenerationResult:
    name: str
    reason: StopReason


class NameGenerator:
    """Builds one name at a time from a next-symbol model."""

    def __init__(
        self,
        model: SequenceModel,
        vocabulary: Vocabulary,
        encoder: SequenceEncoder | None = None,
        sampler: TemperatureSampler | None = None,
        max_length: int = MAX_NAME_LENGTH,
    ) -> None:
        if max_length <= 0:
            raise ValueError("max_length must be positive")
        self.model = model
        self.vocabulary = vocabulary
        self.encoder = encoder or SequenceEncoder(vocabulary.width)
        if self.encoder.width != vocabulary.width:
            raise ValueError(
                f"encoder width {self.encoder.width} does not match vocabulary width {vocabulary.width}"
            )
        self.sampler = sampler or TemperatureSampler()
        self.max_length = max_length

    def _next_distribution(self, buffer: list[str]) -> torch.Tensor:
        window = self.encoder.encode(self.vocabulary.encode_text("".join(buffer)))
        dist = self.model.predict(window)
        if dist.dim() != 1 or dist.numel() != self.vocabulary.width:
            raise DegenerateDistribution(
                f"model returned shape {tuple(dist.shape)}, expected ({self.vocabulary.width},)"
            )
        return dist

    def run(self, temperature: float, rng: torch.Generator) -> GenerationResult:
        """Sample characters until stop is drawn or the buffer is full."""
        buffer: list[str] = []
        while len(buffer) < self.max_length:
            dist = self._next_distribution(buffer)
            outcome = self.vocabulary.outcome(self.sampler.sample(dist, temperature, rng))
            if outcome.kind is OutcomeKind.STOP:
                return GenerationResult(title_case("".join(buffer)), StopReason.STOP_TOKEN)
            if outcome.kind is OutcomeKind.PAD:
                raise ValueError("sampler returned the pad id")
            buffer.append(outcome.char)
        return GenerationResult(title_case("".join(buffer)), StopReason.MAX_LENGTH)

    def generate(self, temperature: float, rng: torch.Generator) -> str:
        return self.run(temperature, rng).name

    @classmethod
    def from_checkpoint(
        cls,
        checkpoint_path: str | Path,
        config: NamesmithConfig | None = None,
        device: str = "cpu",
    ) -> "NameGenerator":
        config = config or NamesmithConfig()
        vocabulary = Vocabulary()
        model = NameLSTM.load(checkpoint_path, device=device)
        model.eval()
        if model.vocab_width != vocabulary.width:
            raise ValueError(
                f"checkpoint was trained for width {model.vocab_width}, vocabulary width is {vocabulary.width}"
            )
        encoder = SequenceEncoder(vocabulary.width, config.model.window_length)
        return cls(model, vocabulary, encoder, max_length=config.generation.max_length)


class BatchGenerator:
    """Runs many independent generations, each with its own seeded RNG.

    Per-run seeds are drawn from one parent generator before any run starts,
    so results are reproducible for a given ``seed`` regardless of ``workers``.
    """

    def __init__(self, generator: NameGenerator, seed: Optional[int] = None, workers: int = 1) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.generator = generator
        self.workers = workers
        self._seeds = torch.Generator()
        if seed is None:
            self._seeds.seed()
        else:
            self._seeds.manual_seed(seed)

    def _run_seeds(self, n: int) -> list[int]:
        return torch.randint(0, 2**62, (n,), generator=self._seeds).tolist()

    def _attempt(self, seed: int, temperature: float) -> Optional[str]:
        rng = torch.Generator().manual_seed(seed)
        try:
            return self.generator.generate(temperature, rng)
        except DegenerateDistribution as e:
            logger.warning("Skipping generation attempt: %s", e)
            return None

    def generate_many(self, n: int, temperature: float) -> list[str]:
        """Run the generator ``n`` times; duplicates and empty names are kept.

        Attempts that hit a degenerate model distribution are skipped.
        """
        if n < 0:
            raise ValueError("n must be non-negative")
        check_temperature(temperature)
        seeds = self._run_seeds(n)

        if self.workers == 1 or n <= 1:
            results = [self._attempt(s, temperature) for s in seeds]
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                results = list(pool.map(lambda s: self._attempt(s, temperature), seeds))

        names = [r for r in results if r is not None]
        if len(names) < n:
            logger.warning("%d of %d generation attempts failed", n - len(names), n)
        return names

    def generate_many_new(self, n: int, temperature: float, corpus: Iterable[str]) -> list[str]:
        """Unique generated names not already in ``corpus``, sorted."""
        return filter_new_names(self.generate_many(n, temperature), corpus)

    @classmethod
    def from_config(cls, config_path: str | Path | None = DEFAULT_CONFIG_PATH) -> "BatchGenerator":
        config = load_config(config_path)
        device = resolve_device(config.checkpoint.device)
        generator = NameGenerator.from_checkpoint(config.checkpoint.path, config, device=device)
        return cls(generator, seed=config.generation.seed, workers=config.generation.workers)
