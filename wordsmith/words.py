import logging
import os

from typing import Iterable, Mapping, Optional

from wordsmith import config
from wordsmith.errors import WordListError

log = logging.getLogger(__name__)


def load_words_from_file(file: str, letter_count: int) -> list[str]:
    """
    Loads words of a given length from a newline-delimited word list.

    Lines are stripped and lowercased. Anything that is not purely alphabetic, or not
    exactly letter_count characters long, is skipped.

    Args:
        file (str): Path of the word list.
        letter_count (int): Word length to keep.

    Returns:
        list[str]: The matching words, in file order.
    """

    if not os.path.exists(file):
        raise WordListError(f"Word list {file} does not exist.")

    with open(file, "r", encoding="utf-8") as f:
        wordset = f.read().splitlines()

    words = [w.strip().lower() for w in wordset]
    words = [w for w in words if w.isascii() and w.isalpha() and len(w) == letter_count]
    log.info("Loaded %d %d-letter words from %s", len(words), letter_count, file)
    return words


def load_frequencies(file: str) -> dict[str, int]:
    """
    Loads a tab-separated word/usage-count table.

    Every non-blank line must be "word<TAB>count". A malformed line is fatal.
    """

    if not os.path.exists(file):
        raise WordListError(f"Frequency table {file} does not exist.")

    frequencies = {}
    with open(file, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            parts = line.split("\t")
            if len(parts) != 2:
                raise WordListError(f"Bad frequency table {file}:{lineno}: expected 'word<TAB>count'.")
            word, count = parts
            try:
                frequencies[word.strip().lower()] = int(count)
            except ValueError:
                raise WordListError(f"Bad frequency table {file}:{lineno}: {count!r} is not a count.") from None

    log.info("Loaded %d word frequencies from %s", len(frequencies), file)
    return frequencies


class WordList:
    """
    The vocabulary of one game variant.

    `words` holds every acceptable guess and `allowed_solutions` the subset that can be the
    hidden answer. `ordered_words` fixes the iteration order used by the solver: descending
    usage frequency, then alphabetical. A WordList is read-only once built and is shared by
    the game and every solver using it.
    """

    def __init__(self, ordered_words: Iterable[str], allowed_solutions: Iterable[str]):
        self.ordered_words: tuple[str, ...] = tuple(ordered_words)
        self.words: frozenset[str] = frozenset(self.ordered_words)
        self.allowed_solutions: frozenset[str] = frozenset(allowed_solutions)
        self.ordered_solutions: tuple[str, ...] = tuple(w for w in self.ordered_words if w in self.allowed_solutions)

        if not self.ordered_words:
            raise WordListError("Word list is empty.")
        if not self.allowed_solutions:
            raise WordListError("Word list has no allowed solutions.")
        if not self.allowed_solutions <= self.words:
            missing = sorted(self.allowed_solutions - self.words)[:5]
            raise WordListError(f"Allowed solutions are not all valid guesses: {missing}")

        lengths = {len(w) for w in self.ordered_words}
        if len(lengths) != 1:
            raise WordListError(f"Word list mixes word lengths: {sorted(lengths)}")
        self.letter_count: int = lengths.pop()

    @classmethod
    def from_words(cls, words: Iterable[str], top_n: Optional[int] = None, frequencies: Optional[Mapping[str, int]] = None) -> "WordList":
        """
        Builds a word list, ranking words by frequency and keeping the top_n as solutions.

        Args:
            words (Iterable[str]): Acceptable guesses. Duplicates are ignored.
            top_n (Optional[int]): Size of the solution pool. None allows every word.
            frequencies (Optional[Mapping[str, int]]): Usage counts. Unknown words count as 0.

        Returns:
            WordList: The ranked word list.
        """
        frequencies = frequencies or {}
        unique = set(words)
        ranked = sorted(unique, key=lambda w: (-frequencies.get(w, 0), w))
        solutions = ranked if top_n is None else ranked[:top_n]
        return cls(ranked, solutions)

    def __len__(self) -> int:
        return len(self.ordered_words)

    def __repr__(self) -> str:
        return f"WordList(words={len(self.words)}, solutions={len(self.allowed_solutions)}, letter_count={self.letter_count})"

    def is_valid_guess(self, word: str) -> bool:
        return str(word) in self.words

    def is_valid_solution(self, word: str) -> bool:
        return str(word) in self.allowed_solutions


class WordSource:
    """
    Where a game variant gets its words from.

    Three kinds exist: "wordle" (the 5 letter Wordle list, top 2315 solutions), "scrabble" and
    "dictionary" (any letter count, top_n solutions ranked by frequency).
    """

    KINDS = ("wordle", "scrabble", "dictionary")

    _FILES = {
        "wordle": config.WORDLE_FILE,
        "scrabble": config.SCRABBLE_FILE,
        "dictionary": config.DICTIONARY_FILE,
    }

    def __init__(self, kind: str = "wordle", letter_count: Optional[int] = None, top_n: Optional[int] = None):
        if kind not in self.KINDS:
            raise ValueError(f"Unknown word source {kind!r}. Expected one of {', '.join(self.KINDS)}.")
        if kind == "wordle":
            if letter_count not in (None, config.WORDLE_LETTER_COUNT):
                raise ValueError("The wordle source only has 5 letter words.")
            letter_count = config.WORDLE_LETTER_COUNT
            top_n = config.WORDLE_TOP_N if top_n is None else top_n
        else:
            letter_count = config.WORDLE_LETTER_COUNT if letter_count is None else letter_count
            top_n = config.DEFAULT_TOP_N if top_n is None else top_n
        if letter_count < 1 or top_n < 1:
            raise ValueError("letter_count and top_n must be positive.")

        self.kind = kind
        self._letter_count = letter_count
        self.top_n = top_n

    @classmethod
    def wordle(cls) -> "WordSource":
        return cls("wordle")

    @classmethod
    def scrabble(cls, letter_count: int, top_n: int = config.DEFAULT_TOP_N) -> "WordSource":
        return cls("scrabble", letter_count, top_n)

    @classmethod
    def dictionary(cls, letter_count: int, top_n: int = config.DEFAULT_TOP_N) -> "WordSource":
        return cls("dictionary", letter_count, top_n)

    @classmethod
    def parse(cls, text: str) -> "WordSource":
        """
        Parses "kind[:letter_count[:top_n]]", e.g. "wordle", "scrabble:6" or "dictionary:7:5000".
        """
        parts = text.strip().lower().split(":")
        if len(parts) > 3:
            raise ValueError(f"Bad word source {text!r}.")
        try:
            numbers = [int(p) for p in parts[1:]]
        except ValueError:
            raise ValueError(f"Bad word source {text!r}: letter count and top_n must be integers.") from None
        return cls(parts[0], *numbers)

    def __repr__(self) -> str:
        return f"WordSource({self.kind!r}, letter_count={self._letter_count}, top_n={self.top_n})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, WordSource):
            return NotImplemented
        return (self.kind, self._letter_count, self.top_n) == (other.kind, other._letter_count, other.top_n)

    def __hash__(self) -> int:
        return hash((self.kind, self._letter_count, self.top_n))

    def letter_count(self) -> int:
        return self._letter_count

    def load(self, data_dir: Optional[str] = None) -> tuple[frozenset[str], frozenset[str]]:
        """
        Returns (guess vocabulary, solution pool) for this source.
        """
        wordlist = self.wordlist(data_dir)
        return wordlist.words, wordlist.allowed_solutions

    def wordlist(self, data_dir: Optional[str] = None) -> WordList:
        directory = config.data_dir(data_dir)
        words = load_words_from_file(os.path.join(directory, self._FILES[self.kind]), self._letter_count)
        if not words:
            raise WordListError(f"No {self._letter_count}-letter words found for the {self.kind} source.")

        frequency_file = os.path.join(directory, config.FREQUENCY_FILE)
        if os.path.exists(frequency_file):
            frequencies = load_frequencies(frequency_file)
        else:
            log.warning("No frequency table at %s; solutions are ranked alphabetically.", frequency_file)
            frequencies = {}

        return WordList.from_words(words, self.top_n, frequencies)
