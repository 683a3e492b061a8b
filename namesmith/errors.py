"""Exceptions raised by the encoding and generation pipeline."""

from __future__ import annotations


class NamesmithError(Exception):
    """Base class for namesmith errors."""


class UnknownSymbol(NamesmithError, KeyError):
    """A character outside the fixed vocabulary was encoded."""

    def __init__(self, symbol: str) -> None:
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self) -> str:
        return f"symbol {self.symbol!r} is not in the vocabulary"


class DegenerateDistribution(NamesmithError, ValueError):
    """A model returned something that is not a probability distribution."""
