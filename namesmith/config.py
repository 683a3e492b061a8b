"""Pydantic configuration loader for namesmith."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = "configs/namesmith.yaml"


class ModelConfig(BaseModel):
    window_length: int = Field(10, gt=0)
    hidden_size: int = Field(128, gt=0)
    dropout: float = Field(0.2, ge=0.0, lt=1.0)


class TrainingParams(BaseModel):
    epochs: int = Field(30, gt=0)
    batch_size: int = Field(64, gt=0)
    learning_rate: float = 1e-3
    weight_decay: float = 0.0
    warmup_ratio: float = 0.05
    max_grad_norm: float = 1.0
    seed: int = 42
    shuffle: bool = True


class DataConfig(BaseModel):
    corpus_path: str = "data/names.txt"
    min_length: int = Field(2, ge=1)


class GenerationConfig(BaseModel):
    temperature: float = Field(1.0, gt=0.0, allow_inf_nan=False)
    num_names: int = Field(20, ge=0)
    max_length: int = Field(30, gt=0)
    seed: Optional[int] = None
    workers: int = Field(1, ge=1)


class CheckpointConfig(BaseModel):
    path: str = "checkpoints/namesmith.pt"
    device: str = "auto"


class NamesmithConfig(BaseModel):
    model: ModelConfig = ModelConfig()
    training: TrainingParams = TrainingParams()
    data: DataConfig = DataConfig()
    generation: GenerationConfig = GenerationConfig()
    checkpoint: CheckpointConfig = CheckpointConfig()


def load_yaml(path: str | Path) -> dict:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str | Path | None = DEFAULT_CONFIG_PATH) -> NamesmithConfig:
    """Load a config file, falling back to defaults when it does not exist."""
    if path is None or not Path(path).exists():
        return NamesmithConfig()
    return NamesmithConfig(**load_yaml(path))


def resolve_device(device: str) -> str:
    if device == "auto":
        import torch

        return "cuda" if torch.cuda.is_available() else "cpu"
    return device
