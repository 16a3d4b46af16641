import logging
import random as rnd

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from wordsmith import config
from wordsmith.errors import GameFinished, InvalidGuess, InvalidSolution
from wordsmith.letters import Letter, Word
from wordsmith.words import WordList, WordSource

log = logging.getLogger(__name__)


class LetterMatch(Enum):
    EXACT = "g"
    PARTIAL = "y"
    WRONG = "x"

    @property
    def symbol(self) -> str:
        return self.value


EXACT = LetterMatch.EXACT
PARTIAL = LetterMatch.PARTIAL
WRONG = LetterMatch.WRONG


def get_feedback(guess: Sequence, solution: Sequence) -> tuple[LetterMatch, ...]:
    """
    Returns the per-position feedback for the guess compared to the solution.

    Works on anything indexable whose items compare by letter (str, Word). Duplicate letters
    follow Wordle rules: a guessed letter is only PARTIAL while the solution still has an
    unmatched copy of it, so "speed" against "erase" marks a single 'e'.
    """
    length = len(guess)
    if len(solution) != length:
        raise ValueError(f"Cannot compare a {length} letter guess with a {len(solution)} letter solution.")

    # Solution letters not matched in place
    unmatched = {}
    for i in range(length):
        if guess[i] != solution[i]:
            unmatched[solution[i]] = unmatched.get(solution[i], 0) + 1

    feedback = []
    for i in range(length):
        char = guess[i]
        if char == solution[i]:
            feedback.append(EXACT)
        elif unmatched.get(char, 0) > 0:
            feedback.append(PARTIAL)
            unmatched[char] -= 1
        else:
            feedback.append(WRONG)

    return tuple(feedback)


@dataclass(frozen=True)
class GuessResult:
    """
    A guess together with the feedback it received.

    Equality and hashing cover both the guess and the whole feedback sequence.
    """

    guess: Word
    matches: tuple[LetterMatch, ...]

    def __post_init__(self):
        if not isinstance(self.guess, Word):
            object.__setattr__(self, "guess", Word(self.guess))
        object.__setattr__(self, "matches", tuple(self.matches))
        if len(self.matches) != len(self.guess):
            raise ValueError("A guess result needs exactly one match per letter.")

    @classmethod
    def from_pattern(cls, guess: Union[str, Word], pattern: str) -> "GuessResult":
        """
        Builds a result from a feedback string: g for exact, y for partial, x for wrong.
        """
        try:
            matches = tuple(LetterMatch(c) for c in pattern.lower())
        except ValueError:
            raise ValueError(f"Bad feedback {pattern!r}: use g, y and x only.") from None
        return cls(Word(guess), matches)

    @property
    def pattern(self) -> str:
        return "".join(m.symbol for m in self.matches)

    def is_solved(self) -> bool:
        return all(m is EXACT for m in self.matches)

    def __str__(self) -> str:
        return f"{self.guess} {self.pattern}"


def evaluate(guess: Union[str, Word], solution: Union[str, Word], letter_count: Optional[int] = None) -> GuessResult:
    """
    Grades a guess against a solution.

    Args:
        guess (Union[str, Word]): The guessed word.
        solution (Union[str, Word]): The hidden word.
        letter_count (Optional[int]): Expected word length, checked when given.

    Returns:
        GuessResult: The guess with one LetterMatch per position.
    """
    guess = Word(guess)
    if letter_count is not None and len(guess) != letter_count:
        raise ValueError(f"Expected a {letter_count} letter guess, got {guess!s}.")
    return GuessResult(guess, get_feedback(str(guess), str(solution)))


def is_solved(result: GuessResult) -> bool:
    return result.is_solved()


class State(Enum):
    UNSOLVED = "unsolved"
    SOLVED = "solved"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        return self is not State.UNSOLVED


class LetterState(Enum):
    EXACT = "exact"
    PARTIAL = "partial"
    ELIMINATED = "eliminated"
    UNKNOWN = "unknown"


class Game:
    """
    One round of the guessing game.

    The game owns its guess history. The word list is shared and never modified.
    """

    def __init__(self, wordlist: WordList, tries: int = config.DEFAULT_TRIES, solution: Optional[str] = None):
        if tries < 1:
            raise ValueError("A game needs at least one try.")
        self.wordlist = wordlist
        self.letter_count = wordlist.letter_count
        self.tries = tries
        self.guesses: list[GuessResult] = []
        self.solution = rnd.choice(wordlist.ordered_solutions)
        if solution is not None:
            self.set_solution(solution)

    @classmethod
    def from_source(cls, source: WordSource, data_dir: Optional[str] = None, **kwargs) -> "Game":
        return cls(source.wordlist(data_dir), **kwargs)

    @property
    def state(self) -> State:
        if not self.guesses:
            return State.UNSOLVED
        if self.guesses[-1].is_solved():
            return State.SOLVED
        if len(self.guesses) >= self.tries:
            return State.FAILED
        return State.UNSOLVED

    @property
    def attempts(self) -> int:
        return len(self.guesses)

    @property
    def remaining_attempts(self) -> int:
        return self.tries - len(self.guesses)

    def set_solution(self, solution: str) -> None:
        """
        Changes the hidden word. This starts a new round: the guess history is cleared.
        """
        if not self.wordlist.is_valid_solution(solution):
            raise InvalidSolution(solution)
        self.solution = str(solution)
        self.restart()

    def restart(self) -> None:
        """Clears the guess history and keeps the solution."""
        self.guesses = []

    def submit_guess(self, guess: str) -> GuessResult:
        """
        Grades a guess against the solution and records it.

        Raises:
            InvalidGuess: The word is not an acceptable guess.
            GameFinished: The round is already solved or failed.
        """
        guess = str(guess).strip().lower()
        if not self.wordlist.is_valid_guess(guess):
            raise InvalidGuess(guess)

        state = self.state
        if state.is_terminal():
            raise GameFinished(state)

        result = evaluate(guess, self.solution, self.letter_count)
        self.guesses.append(result)
        log.debug("Guess %d/%d: %s", len(self.guesses), self.tries, result)
        return result

    def letter_states(self) -> dict[Letter, LetterState]:
        """
        Summarises the history per letter, keeping the best classification seen.

        Letters never guessed are absent from the map (they are UNKNOWN).
        """
        states = {}
        for result in self.guesses:
            for letter, match in zip(result.guess, result.matches):
                previous = states.get(letter, LetterState.UNKNOWN)
                if match is EXACT or previous is LetterState.EXACT:
                    states[letter] = LetterState.EXACT
                elif match is PARTIAL or previous is LetterState.PARTIAL:
                    states[letter] = LetterState.PARTIAL
                else:
                    states[letter] = LetterState.ELIMINATED
        return states
