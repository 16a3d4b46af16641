import os

from typing import Final, Optional

# Game
DEFAULT_TRIES: Final[int] = 5

# Word sources
WORDLE_LETTER_COUNT: Final[int] = 5
WORDLE_TOP_N: Final[int] = 2315
DEFAULT_TOP_N: Final[int] = 3000

WORDLE_FILE: Final[str] = "wordle.txt"
SCRABBLE_FILE: Final[str] = "scrabble.txt"
DICTIONARY_FILE: Final[str] = "dictionary.txt"
FREQUENCY_FILE: Final[str] = "frequency.txt"

DATA_DIR_ENV: Final[str] = "WORDSMITH_DATA_DIR"
DEFAULT_DATA_DIR: Final[str] = "data"

# Solver
# Precomputed offline with `wordsmith first` on the Wordle source.
OPENING_WORDS: Final[dict[int, str]] = {
    5: "roast",
}

THRESHOLD_BEST: Final[float] = 0.0
THRESHOLD_GOOD: Final[float] = 0.125
THRESHOLD_FAST: Final[float] = 0.25


def data_dir(override: Optional[str] = None) -> str:
    """
    Returns the directory holding the word list and frequency files.

    Resolution order: the explicit override (e.g. --data-dir), the WORDSMITH_DATA_DIR
    environment variable, then ./data in the working directory.
    """
    if override:
        return override
    return os.environ.get(DATA_DIR_ENV) or os.path.join(os.getcwd(), DEFAULT_DATA_DIR)
