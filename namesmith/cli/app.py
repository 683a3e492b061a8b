"""CLI interface: `namesmith train`, `namesmith generate -n 20 -t 0.8`"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from namesmith.config import DEFAULT_CONFIG_PATH

console = Console()


@click.group()
@click.version_option(package_name="namesmith")
@click.option("-v", "--verbose", is_flag=True, help="Show info-level log messages")
def main(verbose: bool) -> None:
    """namesmith - Generate new names from a character-level model of a name list."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@main.command()
@click.option("--corpus", default=None, help="Name list, one per line")
@click.option("--epochs", default=None, type=click.IntRange(min=1), help="Training epochs")
@click.option("--save-path", default=None, help="Where to write the checkpoint")
@click.option("--seed", default=None, type=int, help="Training seed")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, help="Config path")
def train(corpus: str | None, epochs: int | None, save_path: str | None, seed: int | None, config_path: str) -> None:
    """Train a NameLSTM checkpoint on a name list."""
    from namesmith.config import load_config, resolve_device
    from namesmith.data.clean import load_corpus
    from namesmith.model.name_lstm import NameLSTM
    from namesmith.tokenizer.vocabulary import Vocabulary
    from namesmith.training.trainer import build_dataset
    from namesmith.training.trainer import train as fit

    cfg = load_config(config_path)
    if corpus:
        cfg.data.corpus_path = corpus
    if epochs is not None:
        cfg.training.epochs = epochs
    if save_path:
        cfg.checkpoint.path = save_path
    if seed is not None:
        cfg.training.seed = seed

    if not Path(cfg.data.corpus_path).exists():
        raise click.BadParameter(f"corpus file not found: {cfg.data.corpus_path}", param_hint="--corpus")

    vocabulary = Vocabulary()
    names = load_corpus(cfg.data.corpus_path, vocabulary, cfg.data.min_length)
    if not names:
        raise click.ClickException("No usable names in the corpus.")
    dataset = build_dataset(
        names, vocabulary, cfg.model.window_length,
        shuffle=cfg.training.shuffle, seed=cfg.training.seed,
    )

    import torch

    torch.manual_seed(cfg.training.seed)
    model = NameLSTM(vocabulary.width, cfg.model.hidden_size, cfg.model.dropout)
    device = resolve_device(cfg.checkpoint.device)
    console.print(f"\n[bold]Corpus:[/bold] {len(names):,} names, {len(dataset):,} training windows")
    console.print(f"[bold]Model:[/bold] {model.count_parameters()['total']:,} params on {device}\n")

    history = fit(model, dataset, cfg.training, device=device)
    for i, loss in enumerate(history, 1):
        console.print(f"  Epoch {i}: loss={loss:.4f}")

    model.save(cfg.checkpoint.path)
    console.print(f"\n[green]Saved checkpoint to {cfg.checkpoint.path}[/green]")


@main.command()
@click.option("-n", "--num", default=None, type=click.IntRange(min=0), help="Number of generation attempts")
@click.option("--temperature", "-t", default=None, type=float, help="Sampling temperature")
@click.option("--seed", default=None, type=int, help="Seed for reproducible output")
@click.option("--workers", default=None, type=click.IntRange(min=1), help="Threads used for generation")
@click.option("--checkpoint", default=None, help="Model checkpoint path")
@click.option("--corpus", default=None, help="Name list used to drop already-known names")
@click.option("--all", "keep_all", is_flag=True, help="Keep duplicates and names from the corpus")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, help="Config path")
def generate(
    num: int | None,
    temperature: float | None,
    seed: int | None,
    workers: int | None,
    checkpoint: str | None,
    corpus: str | None,
    keep_all: bool,
    config_path: str,
) -> None:
    """Generate new names from a trained checkpoint."""
    from namesmith.config import load_config, resolve_device
    from namesmith.data.clean import load_corpus
    from namesmith.inference.generator import BatchGenerator, NameGenerator

    cfg = load_config(config_path)
    if num is not None:
        cfg.generation.num_names = num
    if temperature is not None:
        cfg.generation.temperature = temperature
    if seed is not None:
        cfg.generation.seed = seed
    if workers is not None:
        cfg.generation.workers = workers
    if checkpoint:
        cfg.checkpoint.path = checkpoint
    if corpus:
        cfg.data.corpus_path = corpus

    if not math.isfinite(cfg.generation.temperature) or cfg.generation.temperature <= 0:
        raise click.BadParameter("temperature must be a positive finite number", param_hint="--temperature")
    if not Path(cfg.checkpoint.path).exists():
        raise click.BadParameter(f"checkpoint not found: {cfg.checkpoint.path}", param_hint="--checkpoint")

    with console.status("[bold green]Loading model..."):
        device = resolve_device(cfg.checkpoint.device)
        generator = NameGenerator.from_checkpoint(cfg.checkpoint.path, cfg, device=device)
        batch = BatchGenerator(generator, seed=cfg.generation.seed, workers=cfg.generation.workers)

    with console.status("[bold green]Generating names..."):
        if keep_all:
            names = batch.generate_many(cfg.generation.num_names, cfg.generation.temperature)
        else:
            known = []
            if Path(cfg.data.corpus_path).exists():
                known = load_corpus(cfg.data.corpus_path, generator.vocabulary, cfg.data.min_length)
            else:
                console.print(f"[yellow]Corpus {cfg.data.corpus_path} not found; not filtering known names.[/yellow]")
            names = batch.generate_many_new(cfg.generation.num_names, cfg.generation.temperature, known)

    if not names:
        console.print("[red]No new names generated. Try more attempts or a higher temperature.[/red]")
        return

    table = Table(title=f"Generated Names (t={cfg.generation.temperature:g})", show_lines=False)
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="bold cyan", min_width=15)
    table.add_column("Length", justify="right", width=6)
    for i, name in enumerate(names, 1):
        table.add_row(str(i), name, str(len(name)))

    console.print(table)


@main.command()
@click.option("--checkpoint", default=None, help="Model checkpoint path")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, help="Config path")
def info(checkpoint: str | None, config_path: str) -> None:
    """Show vocabulary and model information."""
    from namesmith.config import load_config
    from namesmith.model.name_lstm import NameLSTM
    from namesmith.tokenizer.vocabulary import Vocabulary

    cfg = load_config(config_path)
    vocabulary = Vocabulary()

    if checkpoint:
        if not Path(checkpoint).exists():
            raise click.BadParameter(f"checkpoint not found: {checkpoint}", param_hint="--checkpoint")
        model = NameLSTM.load(checkpoint)
    else:
        model = NameLSTM(vocabulary.width, cfg.model.hidden_size, cfg.model.dropout)

    params = model.count_parameters()
    console.print("\n[bold]NameLSTM[/bold] (two stacked LSTMs over one-hot character windows)\n")
    console.print(f"  Vocabulary:     {vocabulary.size} symbols + pad (width {vocabulary.width})")
    console.print(f"  Window length:  {cfg.model.window_length}")
    console.print(f"  Hidden size:    {model.hidden_size}")
    console.print(f"  LSTM params:    {params['lstm']:>10,}")
    console.print(f"  Output params:  {params['output']:>10,}")
    console.print(f"  Total params:   {params['total']:>10,}\n")


if __name__ == "__main__":
    main()
