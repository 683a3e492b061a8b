"""What the generator needs from a sequence model."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import torch


@runtime_checkable
class SequenceModel(Protocol):
    def predict(self, window: torch.Tensor) -> torch.Tensor:
        """Map a ``[L, V]`` one-hot window to a length-``V`` distribution over the next id."""
        ...
