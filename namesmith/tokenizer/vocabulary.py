"""Character vocabulary for name generation.

Maps every symbol of the fixed alphabet to a positive integer id. Id 0 is the
pad slot and never belongs to a symbol; the stop sentinel takes the last id.
Sampled ids are turned into tagged outcomes here and nowhere else, so no other
module does offset arithmetic on distribution positions.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

from namesmith.errors import UnknownSymbol

PAD_ID = 0
STOP_TOKEN = "<stop>"

BASE_LETTERS = "abcdefghijklmnopqrstuvwxyz"
DIACRITIC_LETTERS = "àáâãäåæçèéêëìíîïñòóôõöøùúûüýÿœßąćčďđęěłńňőřśšťůűźżž"
PUNCTUATION = ".- "

DEFAULT_ALPHABET = BASE_LETTERS + DIACRITIC_LETTERS + PUNCTUATION


class OutcomeKind(Enum):
    PAD = "pad"
    STOP = "stop"
    CHAR = "char"


class Outcome(NamedTuple):
    kind: OutcomeKind
    char: Optional[str] = None

    @classmethod
    def of_char(cls, char: str) -> "Outcome":
        return cls(OutcomeKind.CHAR, char)


PAD = Outcome(OutcomeKind.PAD)
STOP = Outcome(OutcomeKind.STOP)


class Vocabulary:
    """Fixed bijection between symbols and ids, with pad and stop sentinels."""

    def __init__(self, alphabet: str = DEFAULT_ALPHABET) -> None:
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("alphabet contains duplicate characters")
        if not alphabet:
            raise ValueError("alphabet must not be empty")

        self.chars = tuple(alphabet)
        self.symbols = self.chars + (STOP_TOKEN,)

        self._symbol_to_id: dict[str, int] = {s: i for i, s in enumerate(self.symbols, start=1)}
        self._id_to_symbol: dict[int, str] = {i: s for s, i in self._symbol_to_id.items()}

        self.stop_id = self._symbol_to_id[STOP_TOKEN]
        self.pad_id = PAD_ID

        self._outcomes: dict[int, Outcome] = {PAD_ID: PAD, self.stop_id: STOP}
        for c in self.chars:
            self._outcomes[self._symbol_to_id[c]] = Outcome.of_char(c)

    @property
    def size(self) -> int:
        """Number of symbols, stop included."""
        return len(self.symbols)

    @property
    def width(self) -> int:
        """One-hot width: every symbol plus the pad slot."""
        return self.size + 1

    def __len__(self) -> int:
        return self.size

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbol_to_id

    def encode(self, symbol: str) -> int:
        try:
            return self._symbol_to_id[symbol]
        except KeyError:
            raise UnknownSymbol(symbol) from None

    def encode_text(self, text: str) -> list[int]:
        """Encode every character of a string. The stop id is not appended."""
        return [self.encode(c) for c in text]

    def decode(self, symbol_id: int) -> str:
        try:
            return self._id_to_symbol[symbol_id]
        except KeyError:
            raise ValueError(f"id {symbol_id} has no symbol") from None

    def outcome(self, symbol_id: int) -> Outcome:
        try:
            return self._outcomes[symbol_id]
        except KeyError:
            raise ValueError(f"id {symbol_id} is outside the vocabulary") from None

    def id_of(self, outcome: Outcome) -> int:
        if outcome.kind is OutcomeKind.PAD:
            return PAD_ID
        if outcome.kind is OutcomeKind.STOP:
            return self.stop_id
        return self.encode(outcome.char)

    def accepts(self, text: str) -> bool:
        """True if every character of text is a vocabulary character."""
        return all(c in self._symbol_to_id for c in text)
