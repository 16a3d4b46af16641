import pytest

from wordsmith.words import WordList

WORDS = [
    "roast", "toast", "coast", "boast", "beast", "feast", "least",
    "slate", "stale", "steal", "crane", "crate", "trace", "react",
    "caret", "cater", "abide", "speed", "erase", "relax", "other",
    "there", "three", "ether", "tarot",
]

FREQUENCIES = {
    "there": 900,
    "other": 800,
    "three": 700,
    "least": 600,
    "react": 500,
    "trace": 400,
}


@pytest.fixture
def words() -> list[str]:
    return list(WORDS)


@pytest.fixture
def wordlist() -> WordList:
    return WordList.from_words(WORDS)


@pytest.fixture
def ranked_wordlist() -> WordList:
    return WordList.from_words(WORDS, top_n=10, frequencies=FREQUENCIES)


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "wordle.txt").write_text("\n".join(WORDS + ["toolong", "ab", "Shout", "x-ray"]) + "\n")
    (tmp_path / "frequency.txt").write_text("\n".join(f"{w}\t{n}" for w, n in FREQUENCIES.items()) + "\n")
    return tmp_path
