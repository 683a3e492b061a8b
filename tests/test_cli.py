"""Tests for the click command line interface."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / "names.txt"
    path.write_text("anna\nhanna\njohanna\nmarie\nmaria\nmario\n", encoding="utf-8")
    return path


@pytest.fixture
def checkpoint(tmp_path, corpus_file):
    from namesmith.cli.app import main
    path = tmp_path / "model.pt"
    result = CliRunner().invoke(main, [
        "train", "--corpus", str(corpus_file), "--epochs", "1", "--save-path", str(path),
        "--config", str(tmp_path / "none.yaml"),
    ])
    assert result.exit_code == 0, result.output
    return path


def test_help():
    from namesmith.cli.app import main
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    for command in ("train", "generate", "info"):
        assert command in result.output


def test_info(tmp_path):
    from namesmith.cli.app import main
    result = CliRunner().invoke(main, ["info", "--config", str(tmp_path / "none.yaml")])
    assert result.exit_code == 0, result.output
    assert "NameLSTM" in result.output
    assert "Total params" in result.output


def test_train_writes_checkpoint(checkpoint):
    assert checkpoint.exists()


def test_train_missing_corpus(tmp_path):
    from namesmith.cli.app import main
    result = CliRunner().invoke(main, [
        "train", "--corpus", str(tmp_path / "missing.txt"), "--config", str(tmp_path / "none.yaml"),
    ])
    assert result.exit_code == 2
    assert "corpus file not found" in result.output


def test_generate(tmp_path, checkpoint, corpus_file):
    from namesmith.cli.app import main
    args = [
        "generate", "-n", "8", "-t", "0.8", "--seed", "3",
        "--checkpoint", str(checkpoint), "--corpus", str(corpus_file),
        "--config", str(tmp_path / "none.yaml"),
    ]
    first = CliRunner().invoke(main, args)
    second = CliRunner().invoke(main, args)
    assert first.exit_code == 0, first.output
    assert first.output == second.output


def test_generate_all_keeps_every_attempt(tmp_path, checkpoint):
    from namesmith.cli.app import main
    result = CliRunner().invoke(main, [
        "generate", "-n", "3", "--all", "--seed", "1", "--checkpoint", str(checkpoint),
        "--config", str(tmp_path / "none.yaml"),
    ])
    assert result.exit_code == 0, result.output


def test_generate_missing_checkpoint(tmp_path):
    from namesmith.cli.app import main
    result = CliRunner().invoke(main, [
        "generate", "--checkpoint", str(tmp_path / "missing.pt"), "--config", str(tmp_path / "none.yaml"),
    ])
    assert result.exit_code == 2
    assert "checkpoint not found" in result.output


def test_info_with_checkpoint(tmp_path, checkpoint):
    from namesmith.cli.app import main
    result = CliRunner().invoke(main, [
        "info", "--checkpoint", str(checkpoint), "--config", str(tmp_path / "none.yaml"),
    ])
    assert result.exit_code == 0, result.output
    assert "Hidden size" in result.output


@pytest.mark.parametrize("args", [
    ["-n", "-1"],
    ["--workers", "0"],
    ["-t", "inf"],
    ["-t", "0"],
])
def test_generate_rejects_bad_options(tmp_path, checkpoint, args):
    from namesmith.cli.app import main
    result = CliRunner().invoke(main, [
        "generate", *args, "--checkpoint", str(checkpoint), "--config", str(tmp_path / "none.yaml"),
    ])
    assert result.exit_code == 2, result.output
    assert "Traceback" not in result.output


def test_train_rejects_zero_epochs(tmp_path, corpus_file):
    from namesmith.cli.app import main
    result = CliRunner().invoke(main, [
        "train", "--corpus", str(corpus_file), "--epochs", "0",
        "--save-path", str(tmp_path / "model.pt"), "--config", str(tmp_path / "none.yaml"),
    ])
    assert result.exit_code == 2
    assert not (tmp_path / "model.pt").exists()
