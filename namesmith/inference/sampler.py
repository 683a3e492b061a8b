"""Temperature-scaled categorical sampling over next-symbol distributions."""

from __future__ import annotations

import math

import torch
import torch.nn.functional as F

from namesmith.errors import DegenerateDistribution
from namesmith.tokenizer.vocabulary import PAD_ID

SUM_TOLERANCE = 1e-3


def check_distribution(dist: torch.Tensor) -> torch.Tensor:
    """Return ``dist`` as float64, or raise if it is not a distribution."""
    if dist.dim() != 1 or dist.numel() == 0:
        raise DegenerateDistribution(f"expected a non-empty 1-d distribution, got shape {tuple(dist.shape)}")
    p = dist.detach().to(dtype=torch.float64, device="cpu")
    if not torch.isfinite(p).all():
        raise DegenerateDistribution("distribution contains non-finite values")
    if (p < 0).any():
        raise DegenerateDistribution("distribution contains negative values")
    total = p.sum().item()
    if abs(total - 1.0) > SUM_TOLERANCE:
        raise DegenerateDistribution(f"distribution sums to {total:.6f}, not 1")
    return p


def exclude_pad(p: torch.Tensor) -> torch.Tensor:
    """Zero the pad slot and renormalize what is left."""
    p = p.clone()
    p[PAD_ID] = 0.0
    mass = p.sum()
    if mass <= 0:
        raise DegenerateDistribution("all probability mass is on the pad slot")
    return p / mass


def check_temperature(temperature: float) -> None:
    if not math.isfinite(temperature) or temperature <= 0:
        raise ValueError(f"Temperature must be a positive finite number, got {temperature}")


def apply_temperature(p: torch.Tensor, temperature: float) -> torch.Tensor:
    """Rescale a distribution by ``softmax(log(p) / temperature)``.

    Logits are shifted so the largest is 0 before dividing, which keeps the
    argmax finite for any temperature. Zero entries become -inf logits and come
    back out of the softmax as exact zeros. At least one entry must be positive.
    """
    check_temperature(temperature)
    logits = (torch.log(p) - torch.log(p.max())) / temperature
    return F.softmax(logits, dim=-1)


class TemperatureSampler:
    """Draws one id from a model distribution. Pad is never drawn."""

    def sample(self, dist: torch.Tensor, temperature: float, rng: torch.Generator) -> int:
        check_temperature(temperature)
        p = exclude_pad(check_distribution(dist))
        scaled = apply_temperature(p, temperature)
        return int(torch.multinomial(scaled, num_samples=1, generator=rng).item())
