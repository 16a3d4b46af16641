import logging

import pytest

from wordsmith import config
from wordsmith.errors import WordListError
from wordsmith.words import WordList, WordSource, load_frequencies, load_words_from_file


def test_from_words_orders_by_frequency_then_alphabet(ranked_wordlist):
    assert ranked_wordlist.ordered_words[:6] == ("there", "other", "three", "least", "react", "trace")
    assert ranked_wordlist.ordered_words[6:9] == ("abide", "beast", "boast")
    assert ranked_wordlist.ordered_solutions == ranked_wordlist.ordered_words[:10]
    assert len(ranked_wordlist.allowed_solutions) == 10
    assert ranked_wordlist.allowed_solutions <= ranked_wordlist.words
    assert ranked_wordlist.letter_count == 5


def test_from_words_without_top_n_allows_everything(wordlist, words):
    assert wordlist.allowed_solutions == frozenset(words)
    assert list(wordlist.ordered_words) == sorted(words)


def test_from_words_drops_duplicates():
    wordlist = WordList.from_words(["crane", "crane", "slate"])
    assert wordlist.ordered_words == ("crane", "slate")


def test_validity(ranked_wordlist):
    assert ranked_wordlist.is_valid_guess("tarot")
    assert not ranked_wordlist.is_valid_solution("tarot")
    assert ranked_wordlist.is_valid_solution("there")
    assert not ranked_wordlist.is_valid_guess("zzzzz")


def test_solutions_must_be_guesses():
    with pytest.raises(WordListError):
        WordList(["crane"], ["slate"])


def test_empty_and_mixed_lengths():
    with pytest.raises(WordListError):
        WordList.from_words([])
    with pytest.raises(WordListError):
        WordList.from_words(["crane", "cranes"])


def test_load_words_from_file(data_dir, words):
    loaded = load_words_from_file(str(data_dir / "wordle.txt"), 5)
    assert loaded == words + ["shout"]
    assert load_words_from_file(str(data_dir / "wordle.txt"), 7) == ["toolong"]


def test_load_missing_file(tmp_path):
    with pytest.raises(WordListError):
        load_words_from_file(str(tmp_path / "missing.txt"), 5)


def test_load_frequencies(data_dir):
    frequencies = load_frequencies(str(data_dir / "frequency.txt"))
    assert frequencies["there"] == 900
    assert len(frequencies) == 6


@pytest.mark.parametrize("line", ["there 900", "there\t900\textra", "there\tmany"])
def test_malformed_frequency_table(tmp_path, line):
    path = tmp_path / "frequency.txt"
    path.write_text(f"other\t10\n{line}\n")
    with pytest.raises(WordListError):
        load_frequencies(str(path))


@pytest.mark.parametrize("text, kind, letter_count, top_n", [
    ("wordle", "wordle", 5, config.WORDLE_TOP_N),
    ("scrabble:6", "scrabble", 6, config.DEFAULT_TOP_N),
    ("Dictionary:7:500", "dictionary", 7, 500),
])
def test_word_source_parse(text, kind, letter_count, top_n):
    source = WordSource.parse(text)
    assert source.kind == kind
    assert source.letter_count() == letter_count
    assert source.top_n == top_n


@pytest.mark.parametrize("text", ["boggle", "wordle:6", "scrabble:six", "scrabble:5:0", "scrabble:5:1:2"])
def test_word_source_parse_errors(text):
    with pytest.raises(ValueError):
        WordSource.parse(text)


def test_word_source_constructors():
    assert WordSource.scrabble(6, 100) == WordSource.parse("scrabble:6:100")
    assert WordSource.dictionary(8) == WordSource("dictionary", 8)


def test_word_source_load(data_dir):
    source = WordSource("wordle", top_n=3)
    words, solutions = source.load(str(data_dir))
    assert "shout" in words
    assert solutions == {"there", "other", "three"}


def test_word_source_data_dir_from_environment(data_dir, monkeypatch):
    monkeypatch.setenv(config.DATA_DIR_ENV, str(data_dir))
    wordlist = WordSource.wordle().wordlist()
    assert wordlist.is_valid_solution("crane")


def test_word_source_without_frequencies(data_dir, caplog):
    (data_dir / "frequency.txt").unlink()
    with caplog.at_level(logging.WARNING):
        wordlist = WordSource("wordle", top_n=2).wordlist(str(data_dir))
    assert wordlist.ordered_solutions == ("abide", "beast")
    assert "No frequency table" in caplog.text


def test_word_source_without_matching_words(data_dir):
    with pytest.raises(WordListError):
        WordSource.wordle().wordlist(str(data_dir / "missing"))
