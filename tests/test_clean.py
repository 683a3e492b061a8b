"""Tests for corpus ingestion and cleaning."""


def test_normalize_text():
    from namesmith.data.clean import normalize_text
    assert normalize_text("  Jean \t  Luc\n") == "jean luc"
    # decomposed e + combining acute becomes a single vocabulary character
    assert normalize_text("E\u0301lodie") == "élodie"


def test_clean_name_rules():
    from namesmith.data.clean import clean_name
    from namesmith.tokenizer.vocabulary import Vocabulary
    vocab = Vocabulary()
    assert clean_name("Anna", vocab) == "anna"
    assert clean_name("A", vocab) is None
    assert clean_name("   ", vocab) is None
    assert clean_name("r2d2", vocab) is None
    assert clean_name("o'neil", vocab) is None
    assert clean_name("Ab", vocab, min_length=3) is None


def test_clean_corpus_dedupes_in_order():
    from namesmith.data.clean import clean_corpus
    from namesmith.tokenizer.vocabulary import Vocabulary
    corpus = clean_corpus(["Paul", "anna", "PAUL", "x", "", "Zoë"], Vocabulary())
    assert corpus == ["paul", "anna", "zoë"]


def test_load_and_save_corpus(tmp_path):
    from namesmith.data.clean import load_corpus, save_corpus
    from namesmith.tokenizer.vocabulary import Vocabulary
    src = tmp_path / "raw.txt"
    src.write_text("Anna\nBjörn\n\nQ\nanna\nsøren\n", encoding="utf-8")
    corpus = load_corpus(src, Vocabulary())
    assert corpus == ["anna", "björn", "søren"]

    out = tmp_path / "out" / "names.txt"
    save_corpus(corpus, out)
    assert load_corpus(out, Vocabulary()) == corpus
