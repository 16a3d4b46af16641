import logging
import time

from collections import Counter
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Iterable, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from wordsmith import config
from wordsmith.candidate_scorers import SolverMode, Strategy
from wordsmith.solver import Solver, DEFAULT_OPENING
from wordsmith.wordle import Game, State
from wordsmith.words import WordList

log = logging.getLogger(__name__)


def play_single_game(
    wordlist: WordList,
    solution: str,
    strategy: Strategy = Strategy.MIN_EV,
    mode: SolverMode = SolverMode.BEST,
    tries: int = config.DEFAULT_TRIES,
    opening=DEFAULT_OPENING,
) -> tuple[State, list[str]]:
    """
    Lets the solver play one game against a known solution.

    Returns:
        tuple[State, list[str]]: (final state, guesses made)
    """
    game = Game(wordlist, tries=tries, solution=solution)
    solver = Solver(game, strategy=strategy, mode=mode, opening=opening)
    state = solver.solve()
    return state, [str(r.guess) for r in game.guesses]


@dataclass
class BenchmarkResult:
    total: int = 0
    distribution: Counter = field(default_factory=Counter)
    failed: list[str] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def solved(self) -> int:
        return sum(self.distribution.values())

    @property
    def average_guesses(self) -> float:
        if not self.solved:
            return 0.0
        return sum(n * count for n, count in self.distribution.items()) / self.solved

    @property
    def ms_per_puzzle(self) -> float:
        return 1000 * self.elapsed / self.total if self.total else 0.0

    def cumulative(self) -> list[tuple[int, int, float, float]]:
        """
        Rows of (guesses, count, share of all puzzles, cumulative share), by guess count.
        """
        rows = []
        acc = 0
        for guesses in sorted(self.distribution):
            count = self.distribution[guesses]
            acc += count
            rows.append((guesses, count, count / self.total, acc / self.total))
        return rows

    def add(self, solution: str, state: State, guesses: int) -> None:
        self.total += 1
        if state is State.SOLVED:
            self.distribution[guesses] += 1
        else:
            self.failed.append(solution)


def run_benchmark(
    wordlist: WordList,
    solutions: Optional[Iterable[str]] = None,
    strategy: Strategy = Strategy.MIN_EV,
    mode: SolverMode = SolverMode.BEST,
    tries: int = config.DEFAULT_TRIES,
    workers: int = 1,
    show_progress: bool = False,
    console: Optional[Console] = None,
) -> BenchmarkResult:
    """
    Solves every puzzle in `solutions` (default: the whole solution pool) and collects statistics.

    Args:
        wordlist (WordList): The word list to play with.
        solutions (Optional[Iterable[str]]): Hidden words to play against.
        strategy (Strategy): Scoring strategy.
        mode (SolverMode): Early exit threshold.
        tries (int): Attempts per game.
        workers (int): Processes to play games in.
        show_progress (bool): Show a rich progress bar.

    Returns:
        BenchmarkResult: Guess distribution, failures and timing.
    """
    solutions = list(wordlist.ordered_solutions if solutions is None else solutions)
    result = BenchmarkResult()
    start = time.perf_counter()

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
        disable=not show_progress,
    )
    with progress:
        task = progress.add_task(f"Solving {len(solutions)} puzzles ({strategy.value}, {mode.value})...", total=len(solutions))

        if workers > 1:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                future_to_solution = {
                    executor.submit(play_single_game, wordlist, solution, strategy, mode, tries): solution
                    for solution in solutions
                }
                for future in as_completed(future_to_solution):
                    solution = future_to_solution[future]
                    state, guesses = future.result()
                    result.add(solution, state, len(guesses))
                    _log_game(solution, state, guesses)
                    progress.advance(task)
        else:
            for solution in solutions:
                state, guesses = play_single_game(wordlist, solution, strategy, mode, tries)
                result.add(solution, state, len(guesses))
                _log_game(solution, state, guesses)
                progress.advance(task)

    result.elapsed = time.perf_counter() - start
    return result


def _log_game(solution: str, state: State, guesses: list[str]) -> None:
    if state is State.SOLVED:
        log.debug("%s", ",".join(guesses))
    else:
        log.info("Failed to solve %s (%s)", solution, ",".join(guesses))


def generate_stats_table(result: BenchmarkResult) -> Group:
    table = Table.grid(expand=True)
    table.add_column(justify="left")
    table.add_column(justify="right")

    table.add_row("Puzzles:", f"{result.total}")
    table.add_row("Solved:", f"{result.solved}")
    table.add_row("Failed:", f"{len(result.failed)}")
    table.add_row("Average guesses:", f"{result.average_guesses:.2f}")
    table.add_row("Time per puzzle:", f"{result.ms_per_puzzle:.2f} ms")

    dist_table = Table(title="Guess Distribution", show_header=True, header_style="bold magenta")
    dist_table.add_column("Guesses", justify="right")
    dist_table.add_column("Count", justify="right")
    dist_table.add_column("Share", justify="right")
    dist_table.add_column("Cumulative", justify="right")

    for guesses, count, share, cumulative in result.cumulative():
        dist_table.add_row(str(guesses), str(count), f"{100 * share:.1f}%", f"{100 * cumulative:.1f}%")

    return Group(
        Panel(table, title="Statistics", border_style="green"),
        dist_table,
    )
