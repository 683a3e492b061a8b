"""Smoke tests for NameLSTM and the training loop."""

import pytest
import torch


def test_model_builds():
    from namesmith.model.name_lstm import NameLSTM
    from namesmith.tokenizer.vocabulary import Vocabulary
    model = NameLSTM(vocab_width=Vocabulary().width)
    params = model.count_parameters()
    assert params["total"] == params["lstm"] + params["output"]
    assert params["lstm"] > 0


def test_forward_pass():
    from namesmith.model.name_lstm import NameLSTM
    model = NameLSTM(vocab_width=12, hidden_size=16)
    logits = model(torch.rand(3, 10, 12))
    assert logits.shape == (3, 12)


def test_predict_is_a_distribution():
    from namesmith.data.encoding import SequenceEncoder
    from namesmith.model.name_lstm import NameLSTM
    from namesmith.model.protocol import SequenceModel
    model = NameLSTM(vocab_width=8, hidden_size=16)
    assert isinstance(model, SequenceModel)

    window = SequenceEncoder(8, window_length=10).encode([1, 2, 3])
    model.train()
    dist = model.predict(window)
    assert model.training
    assert dist.shape == (8,)
    assert (dist >= 0).all()
    assert dist.sum().item() == pytest.approx(1.0, abs=1e-5)
    assert torch.equal(dist, model.predict(window))


def test_save_and_load(tmp_path):
    from namesmith.model.name_lstm import NameLSTM
    model = NameLSTM(vocab_width=8, hidden_size=16, dropout=0.1)
    path = tmp_path / "ckpt" / "model.pt"
    model.save(path)

    loaded = NameLSTM.load(path)
    assert loaded.hparams() == model.hparams()
    window = torch.zeros(10, 8)
    window[-1, 3] = 1.0
    assert torch.allclose(loaded.predict(window), model.predict(window))


def test_training_reduces_loss():
    from namesmith.config import TrainingParams
    from namesmith.model.name_lstm import NameLSTM
    from namesmith.tokenizer.vocabulary import Vocabulary
    from namesmith.training.trainer import build_dataset, train
    vocab = Vocabulary()
    dataset = build_dataset(["anna", "hanna", "johanna"], vocab, window_length=10, seed=0)
    torch.manual_seed(0)
    model = NameLSTM(vocab.width, hidden_size=32, dropout=0.0)

    params = TrainingParams(epochs=15, batch_size=8, learning_rate=1e-2, seed=0)
    history = train(model, dataset, params, progress=False)
    assert len(history) == 15
    assert history[-1] < history[0]
    assert not model.training


def test_training_rejects_empty_dataset():
    from namesmith.config import TrainingParams
    from namesmith.model.name_lstm import NameLSTM
    from namesmith.tokenizer.vocabulary import Vocabulary
    from namesmith.training.trainer import build_dataset, train
    vocab = Vocabulary()
    with pytest.raises(ValueError):
        train(NameLSTM(vocab.width), build_dataset([], vocab, 10), TrainingParams(), progress=False)


def test_generator_from_checkpoint(tmp_path):
    from namesmith.config import NamesmithConfig
    from namesmith.inference.generator import BatchGenerator, NameGenerator
    from namesmith.model.name_lstm import NameLSTM
    from namesmith.tokenizer.vocabulary import Vocabulary
    path = tmp_path / "model.pt"
    NameLSTM(Vocabulary().width, hidden_size=16).save(path)

    gen = NameGenerator.from_checkpoint(path, NamesmithConfig())
    names = BatchGenerator(gen, seed=1).generate_many(5, 1.0)
    assert len(names) == 5
    assert all(gen.vocabulary.accepts(n.lower()) for n in names)


def test_checkpoint_width_must_match_vocabulary(tmp_path):
    from namesmith.inference.generator import NameGenerator
    from namesmith.model.name_lstm import NameLSTM
    path = tmp_path / "model.pt"
    NameLSTM(vocab_width=5, hidden_size=8).save(path)
    with pytest.raises(ValueError):
        NameGenerator.from_checkpoint(path)


def test_batch_generator_from_config(tmp_path):
    from namesmith.inference.generator import BatchGenerator
    from namesmith.model.name_lstm import NameLSTM
    from namesmith.tokenizer.vocabulary import Vocabulary
    ckpt = tmp_path / "model.pt"
    NameLSTM(Vocabulary().width, hidden_size=16).save(ckpt)
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(
        f"checkpoint:\n  path: {ckpt.as_posix()}\n  device: cpu\ngeneration:\n  seed: 4\n  workers: 2\n  max_length: 6\n",
        encoding="utf-8",
    )

    batch = BatchGenerator.from_config(cfg)
    assert batch.workers == 2
    assert batch.generator.max_length == 6
    names = batch.generate_many(4, 1.0)
    assert names == BatchGenerator.from_config(cfg).generate_many(4, 1.0)
