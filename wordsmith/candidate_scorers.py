import logging
import math
import time

from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from enum import Enum
from typing import Iterable, NamedTuple, Optional, Sequence

from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn, TimeRemainingColumn

from wordsmith import config
from wordsmith.wordle import LetterMatch, get_feedback

log = logging.getLogger(__name__)


class Strategy(Enum):
    """How a guess is scored. Every strategy is minimised."""

    MIN_EV = "minev"
    MIN_LOG_EV = "minlogev"
    MINIMAX = "minimax"

    @classmethod
    def parse(cls, text: str) -> "Strategy":
        try:
            return cls(text.strip().lower().replace("-", "").replace("_", ""))
        except ValueError:
            raise ValueError(f"Unknown strategy {text!r}. Expected one of {', '.join(s.value for s in cls)}.") from None


class SolverMode(Enum):
    """
    How early the selector may stop scanning.

    A guess whose effective remaining pool size is at most `threshold * N` is taken as soon as
    it is found. BEST never stops early.
    """

    BEST = "best"
    GOOD = "good"
    FAST = "fast"

    @property
    def threshold(self) -> float:
        return {
            SolverMode.BEST: config.THRESHOLD_BEST,
            SolverMode.GOOD: config.THRESHOLD_GOOD,
            SolverMode.FAST: config.THRESHOLD_FAST,
        }[self]

    @classmethod
    def parse(cls, text: str) -> "SolverMode":
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown mode {text!r}. Expected one of {', '.join(m.value for m in cls)}.") from None


def partition(guess: str, candidates: Iterable[str]) -> Counter[tuple[LetterMatch, ...]]:
    """
    Groups the candidates by the feedback `guess` would receive if each were the solution.

    Returns:
        Counter: feedback pattern -> number of candidates producing it.
    """
    guess = str(guess)
    return Counter(get_feedback(guess, c) for c in candidates)


def score_partition(sizes: Iterable[int], strategy: Strategy) -> float:
    if strategy is Strategy.MIN_EV:
        return float(sum(n * n for n in sizes))
    if strategy is Strategy.MIN_LOG_EV:
        # Correctly rounded, so equal class sizes give equal scores in any order
        return math.fsum(n * math.log2(n) for n in sizes)
    if strategy is Strategy.MINIMAX:
        return float(max(sizes, default=0))
    raise ValueError(f"Unknown strategy {strategy!r}")


def score(guess: str, strategy: Strategy, candidates: Iterable[str]) -> float:
    """
    Scores a guess against the remaining candidates. Lower is better.

    MIN_EV: sum of squared class sizes (N times the expected remaining pool size).
    MIN_LOG_EV: sum of n*log2(n) over classes (N times the expected remaining entropy).
    MINIMAX: size of the largest class.
    """
    return score_partition(partition(guess, candidates).values(), strategy)


def effective_size(value: float, strategy: Strategy, total: int) -> float:
    """
    Converts a score into the pool size it is "worth", so thresholds mean the same for every strategy.
    """
    if total == 0:
        return 0.0
    if strategy is Strategy.MIN_EV:
        return value / total
    if strategy is Strategy.MIN_LOG_EV:
        return 2 ** (value / total)
    return value


def _score_chunk(strategy: Strategy, guesses: Sequence[str], candidates: Sequence[str], deadline: Optional[float] = None) -> list[float]:
    """
    Scores guesses in order, stopping once the wall-clock deadline has passed.

    The returned list may be shorter than `guesses`.
    """
    scores = []
    for guess in guesses:
        if deadline is not None and time.time() > deadline:
            break
        scores.append(score(guess, strategy, candidates))
    return scores


class Choice(NamedTuple):
    guess: str
    score: float
    timed_out: bool = False


class _Scorer:

    STRATEGY: Strategy

    def __init__(self, candidates: Iterable[str]):
        self.candidates = tuple(sorted(candidates))
        self._candidate_set = frozenset(self.candidates)

    def __len__(self) -> int:
        return len(self.candidates)

    def partition(self, guess: str) -> Counter[tuple[LetterMatch, ...]]:
        return partition(guess, self.candidates)

    def score(self, guess: str) -> float:
        return score(guess, self.STRATEGY, self.candidates)

    def effective_size(self, value: float) -> float:
        return effective_size(value, self.STRATEGY, len(self.candidates))

    def _better(self, guess: str, value: float, best: Optional[Choice]) -> bool:
        if best is None or value < best.score:
            return True
        # Equal scores: prefer a guess that could itself be the answer
        return value == best.score and best.guess not in self._candidate_set and guess in self._candidate_set

    def best(
        self,
        guesses: Sequence[str],
        mode: SolverMode = SolverMode.BEST,
        time_limit: Optional[float] = None,
        workers: int = 1,
        show_progress: bool = False,
    ) -> Choice:
        """
        Returns the lowest scoring guess.

        Guesses are scanned in the given order. Ties go to a guess that is itself a candidate,
        then to the one found first. In GOOD and FAST mode the first guess under the mode's
        threshold is returned without looking further.

        Args:
            guesses (Sequence[str]): The guess vocabulary, in scan order.
            mode (SolverMode): Early exit threshold.
            time_limit (Optional[float]): Seconds to spend before settling for the best found so far.
            workers (int): Processes to score with. 1 scores in this process.
            show_progress (bool): Show a rich progress bar.

        Returns:
            Choice: The guess, its score, and whether the time limit cut the scan short.
        """
        if not guesses:
            raise ValueError("No guesses to choose from.")
        if not self.candidates:
            raise ValueError("No candidates to score against.")

        deadline = None if time_limit is None else time.monotonic() + time_limit

        if workers > 1 and len(guesses) > workers:
            scored, timed_out = self._score_parallel(guesses, workers, deadline)
        else:
            scored, timed_out = self._score_sequential(guesses, mode, deadline, show_progress)

        choice = self._select(scored, mode)
        if timed_out:
            log.warning("Ran out of time after scoring %d/%d guesses; using %s", len(scored), len(guesses), choice.guess)
            choice = choice._replace(timed_out=True)
        return choice

    def _select(self, scored: Iterable[tuple[str, float]], mode: SolverMode) -> Choice:
        limit = mode.threshold * len(self.candidates)
        best = None
        for guess, value in scored:
            if self.effective_size(value) <= limit:
                return Choice(guess, value)
            if self._better(guess, value, best):
                best = Choice(guess, value)
        return best

    def _score_sequential(self, guesses, mode, deadline, show_progress) -> tuple[list[tuple[str, float]], bool]:
        limit = mode.threshold * len(self.candidates)
        scored = []

        def scan(advance=None) -> bool:
            for i, guess in enumerate(guesses):
                if deadline is not None and scored and time.monotonic() > deadline:
                    return True
                value = self.score(guess)
                scored.append((guess, value))
                if advance is not None and i % 10 == 0:
                    advance(i)
                if self.effective_size(value) <= limit:
                    break
            return False

        if not show_progress:
            return scored, scan()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            transient=True,
        ) as progress:
            task = progress.add_task(f"[green]Scoring {len(guesses)} guesses ({self.STRATEGY.value})...", total=len(guesses))
            timed_out = scan(lambda i: progress.update(task, completed=i))
            progress.update(task, completed=len(guesses))
        return scored, timed_out

    def _score_parallel(self, guesses, workers, deadline) -> tuple[list[tuple[str, float]], bool]:
        size = math.ceil(len(guesses) / (workers * 4))
        chunks = [guesses[i:i + size] for i in range(0, len(guesses), size)]

        # Workers check the deadline themselves, against the wall clock shared across processes
        wall_deadline = None if deadline is None else time.time() + (deadline - time.monotonic())

        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_score_chunk, self.STRATEGY, chunk, self.candidates, wall_deadline) for chunk in chunks]

            # Aggregate in vocabulary order once every chunk is in
            scored = []
            timed_out = False
            for chunk, future in zip(chunks, futures):
                scores = future.result()
                timed_out = timed_out or len(scores) < len(chunk)
                scored.extend(zip(chunk, scores))

        if not scored:
            # Nothing finished in time: fall back to the first guess so a choice always exists
            scored = [(guesses[0], self.score(guesses[0]))]
        return scored, timed_out


class ExpectedSizeScorer(_Scorer):
    """
    Minimises the expected number of candidates left after the guess.

    The score is the sum of squared feedback class sizes, which is N times the expectation.
    """

    STRATEGY = Strategy.MIN_EV


class EntropyScorer(_Scorer):
    """
    Minimises the expected remaining uncertainty, i.e. maximises information gain.

    The score is sum(n * log2(n)) over feedback classes. Subtracting it from N*log2(N) and dividing
    by N gives the entropy of the feedback distribution in bits.
    """

    STRATEGY = Strategy.MIN_LOG_EV

    def entropy(self, guess: str) -> float:
        """Information the guess is expected to reveal, in bits."""
        total = len(self.candidates)
        if total == 0:
            return 0.0
        return math.log2(total) - self.score(guess) / total


class MinimaxScorer(_Scorer):
    """
    Minimises the worst case: the size of the largest feedback class.
    """

    STRATEGY = Strategy.MINIMAX


SCORERS: dict[Strategy, type[_Scorer]] = {
    Strategy.MIN_EV: ExpectedSizeScorer,
    Strategy.MIN_LOG_EV: EntropyScorer,
    Strategy.MINIMAX: MinimaxScorer,
}


def scorer_for(strategy: Strategy, candidates: Iterable[str]) -> _Scorer:
    return SCORERS[strategy](candidates)
