import logging

from typing import Optional

from wordsmith import config
from wordsmith.candidate_scorers import Choice, SolverMode, Strategy, scorer_for
from wordsmith.errors import NoCandidatesRemain
from wordsmith.filter import Filter, filter_candidates
from wordsmith.letters import Word
from wordsmith.wordle import Game, GuessResult, State
from wordsmith.words import WordList

log = logging.getLogger(__name__)

DEFAULT_OPENING = object()


class Solver:
    """
    Plays a game by picking the guess that best splits the remaining candidate solutions.

    The solver keeps its own candidate set, rebuilt from the game's history when it is created
    and narrowed after every guess it submits.
    """

    def __init__(
        self,
        game: Game,
        strategy: Strategy = Strategy.MIN_EV,
        mode: SolverMode = SolverMode.BEST,
        opening=DEFAULT_OPENING,
        time_limit: Optional[float] = None,
        workers: int = 1,
        show_progress: bool = False,
    ):
        """
        Args:
            game (Game): The game to play. Guesses already made are replayed.
            strategy (Strategy): Default scoring strategy.
            mode (SolverMode): Early exit threshold.
            opening (Optional[str]): First guess to play without scoring. Defaults to the
                precomputed word for the game's letter count; None always scores.
            time_limit (Optional[float]): Seconds per turn before settling for the best found so far.
            workers (int): Processes used to score guesses.
            show_progress (bool): Show a progress bar while scoring.
        """
        self.game = game
        self.strategy = strategy
        self.mode = mode
        self.time_limit = time_limit
        self.workers = workers
        self.show_progress = show_progress
        self.timed_out = False

        if opening is DEFAULT_OPENING:
            opening = config.OPENING_WORDS.get(game.letter_count)
        if opening is not None and not game.wordlist.is_valid_guess(opening):
            log.debug("Opening word %s is not in the word list; the first guess will be scored.", opening)
            opening = None
        self.opening = opening

        history = Filter(game.guesses, length=game.letter_count)
        self.possible_solutions: set[str] = history.retain(set(game.wordlist.allowed_solutions))
        self.first_guess = not game.guesses
        if not self.possible_solutions:
            raise NoCandidatesRemain("No allowed solution is consistent with the guesses made so far.")

    @property
    def wordlist(self) -> WordList:
        return self.game.wordlist

    def find_guess(self, strategy: Optional[Strategy] = None) -> Choice:
        """
        Scores the whole guess vocabulary against the remaining candidates and returns the best.
        """
        strategy = strategy or self.strategy
        scorer = scorer_for(strategy, self.possible_solutions)
        choice = scorer.best(
            self.wordlist.ordered_words,
            mode=self.mode,
            time_limit=self.time_limit,
            workers=self.workers,
            show_progress=self.show_progress,
        )
        self.timed_out = choice.timed_out
        log.debug("Best %s guess among %d candidates: %s (%.3f)", strategy.value, len(self.possible_solutions), choice.guess, choice.score)
        return choice

    def select_guess(self, strategy: Optional[Strategy] = None) -> Word:
        """
        Picks the next guess without submitting it.

        A single remaining candidate is returned directly. The first guess of a round is the
        precomputed opening word when there is one. Otherwise every word in the vocabulary is scored.
        """
        self.timed_out = False
        if not self.possible_solutions:
            raise NoCandidatesRemain()
        if len(self.possible_solutions) == 1:
            return Word(next(iter(self.possible_solutions)))
        if self.first_guess and self.opening is not None:
            return Word(self.opening)
        return Word(self.find_guess(strategy).guess)

    def update(self, result: GuessResult) -> None:
        """Narrows the candidates by a result."""
        before = len(self.possible_solutions)
        filter_candidates(result, self.possible_solutions)
        self.first_guess = False
        log.debug("%s: %d -> %d candidates", result, before, len(self.possible_solutions))
        if not self.possible_solutions:
            raise NoCandidatesRemain(f"No candidate solution is consistent with {result}.")

    def guess(self, strategy: Optional[Strategy] = None) -> GuessResult:
        """
        Picks a guess, submits it to the game and narrows the candidates by the feedback.

        Raises:
            InvalidGuess, GameFinished: The game rejected the guess.
            NoCandidatesRemain: The feedback ruled out every candidate.
        """
        word = self.select_guess(strategy)
        result = self.game.submit_guess(str(word))
        self.update(result)
        return result

    def solve(self, strategy: Optional[Strategy] = None) -> State:
        """Guesses until the game is solved or out of attempts."""
        while self.game.state is State.UNSOLVED:
            self.guess(strategy)
        return self.game.state


def best_opening(wordlist: WordList, strategy: Strategy = Strategy.MIN_EV, workers: int = 1, show_progress: bool = False) -> Choice:
    """
    Scores every guess against the full solution pool. This is how the opening words are precomputed.
    """
    scorer = scorer_for(strategy, wordlist.allowed_solutions)
    return scorer.best(wordlist.ordered_words, workers=workers, show_progress=show_progress)
