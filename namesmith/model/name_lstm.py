"""NameLSTM: two stacked LSTMs over one-hot character windows.

The first LSTM emits a representation per window position, the second reads
those and keeps only its final hidden state. Dropout and a linear projection to
the vocabulary width follow; ``predict`` applies the softmax.
"""

from __future__ import annotations

from pathlib import Path

import torch
import torch.nn as nn
import torch.nn.functional as F


class NameLSTM(nn.Module):
    def __init__(self, vocab_width: int, hidden_size: int = 128, dropout: float = 0.2) -> None:
        super().__init__()
        self.vocab_width = vocab_width
        self.hidden_size = hidden_size
        self.dropout_p = dropout

        self.sequence_lstm = nn.LSTM(vocab_width, hidden_size, batch_first=True)
        self.summary_lstm = nn.LSTM(hidden_size, hidden_size, batch_first=True)
        self.dropout = nn.Dropout(dropout)
        self.output_proj = nn.Linear(hidden_size, vocab_width)
        self._init_lstm_weights()

    def _init_lstm_weights(self) -> None:
        for lstm in (self.sequence_lstm, self.summary_lstm):
            for name, param in lstm.named_parameters():
                if "weight_ih" in name:
                    nn.init.xavier_uniform_(param)
                elif "weight_hh" in name:
                    nn.init.orthogonal_(param)
                elif "bias" in name:
                    nn.init.zeros_(param)

    def forward(self, windows: torch.Tensor) -> torch.Tensor:
        """``[B, L, V]`` windows to ``[B, V]`` logits."""
        per_position, _ = self.sequence_lstm(windows)
        _, (hidden, _) = self.summary_lstm(per_position)
        summary = self.dropout(hidden[-1])
        return self.output_proj(summary)

    @torch.no_grad()
    def predict(self, window: torch.Tensor) -> torch.Tensor:
        """Next-id distribution for a single ``[L, V]`` window."""
        was_training = self.training
        self.eval()
        try:
            device = next(self.parameters()).device
            logits = self(window.unsqueeze(0).to(device))
            return F.softmax(logits, dim=-1).squeeze(0).cpu()
        finally:
            if was_training:
                self.train()

    def hparams(self) -> dict:
        return {"vocab_width": self.vocab_width, "hidden_size": self.hidden_size, "dropout": self.dropout_p}

    def count_parameters(self) -> dict[str, int]:
        lstm = sum(p.numel() for p in self.sequence_lstm.parameters())
        lstm += sum(p.numel() for p in self.summary_lstm.parameters())
        total = sum(p.numel() for p in self.parameters())
        return {"lstm": lstm, "output": total - lstm, "total": total}

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        torch.save({"hparams": self.hparams(), "state_dict": self.state_dict()}, path)

    @classmethod
    def load(cls, path: str | Path, device: str = "cpu") -> "NameLSTM":
        checkpoint = torch.load(path, map_location=device, weights_only=True)
        model = cls(**checkpoint["hparams"])
        model.load_state_dict(checkpoint["state_dict"])
        return model.to(device)
