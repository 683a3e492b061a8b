"""Fixed-length one-hot windows.

The same routine builds training inputs and the per-step inference input, so
both sides of the model always see identically shaped and padded windows.
"""

from __future__ import annotations

from typing import Sequence

import torch

DEFAULT_WINDOW_LENGTH = 10


class SequenceEncoder:
    """Left-padded one-hot encoder for id windows of length ``window_length``."""

    def __init__(self, width: int, window_length: int = DEFAULT_WINDOW_LENGTH) -> None:
        if window_length <= 0:
            raise ValueError("window_length must be positive")
        if width <= 1:
            raise ValueError("width must leave room for the pad slot and one symbol")
        self.width = width
        self.window_length = window_length

    def encode(self, ids: Sequence[int]) -> torch.Tensor:
        """Encode ids as a ``[window_length, width]`` float tensor.

        Windows shorter than ``window_length`` get all-zero leading rows.
        Longer windows keep only their most recent ``window_length`` ids.
        """
        recent = list(ids)[-self.window_length:]
        for i in recent:
            if not 0 <= i < self.width:
                raise ValueError(f"id {i} is outside [0, {self.width})")

        window = torch.zeros(self.window_length, self.width, dtype=torch.float32)
        if recent:
            offset = self.window_length - len(recent)
            rows = torch.arange(offset, self.window_length)
            window[rows, torch.tensor(recent, dtype=torch.long)] = 1.0
        return window

    def encode_batch(self, windows: Sequence[Sequence[int]]) -> torch.Tensor:
        if not windows:
            return torch.zeros(0, self.window_length, self.width, dtype=torch.float32)
        return torch.stack([self.encode(w) for w in windows])
