import argparse
import logging
import sys

from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from wordsmith import config
from wordsmith.candidate_scorers import SolverMode, Strategy
from wordsmith.errors import InvalidGuess, NoCandidatesRemain, WordsmithError
from wordsmith.simulate import generate_stats_table, run_benchmark
from wordsmith.solver import Solver, best_opening
from wordsmith.wordle import EXACT, PARTIAL, Game, GuessResult, State
from wordsmith.words import WordSource

log = logging.getLogger(__name__)

console = Console()

_STYLES = {
    EXACT: "bold white on green",
    PARTIAL: "bold black on yellow",
}


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-s", "--source", help="Word source: wordle, scrabble[:letters[:top_n]] or dictionary[:letters[:top_n]]", type=WordSource.parse, default=WordSource.wordle())
    common.add_argument("-d", "--data-dir", help=f"Directory holding the word lists (default: ${config.DATA_DIR_ENV} or ./{config.DEFAULT_DATA_DIR})", type=str, default=None)
    common.add_argument("-t", "--tries", help="Attempts per game", type=int, default=config.DEFAULT_TRIES)
    common.add_argument("-v", "--verbose", help="Log solver decisions", action="store_true")

    solving = argparse.ArgumentParser(add_help=False)
    solving.add_argument("--strategy", help="Scoring strategy", type=Strategy.parse, default=Strategy.MIN_EV, metavar="{minev,minlogev,minimax}")
    solving.add_argument("--mode", help="Early exit threshold", type=SolverMode.parse, default=SolverMode.BEST, metavar="{best,good,fast}")
    solving.add_argument("-w", "--workers", help="Processes used for scoring", type=int, default=1)

    parser = argparse.ArgumentParser(prog="wordsmith", description="Play and solve Wordle-like word games.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    play = subparsers.add_parser("play", parents=[common], help="Play a game yourself")
    play.add_argument("--solution", help="Hidden word (default: random)", type=str, default=None)

    assist = subparsers.add_parser("assist", parents=[common, solving], help="Get suggestions for a game played elsewhere")
    assist.add_argument("--time-limit", help="Seconds per suggestion", type=float, default=None)

    benchmark = subparsers.add_parser("benchmark", parents=[common, solving], help="Solve every puzzle and report statistics")
    benchmark.add_argument("-n", "--number", help="Only play the n most frequent solutions", type=int, default=None)

    subparsers.add_parser("first", parents=[common, solving], help="Search for the best opening word")

    return parser


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def format_result(result: GuessResult) -> Text:
    text = Text()
    for letter, match in zip(result.guess, result.matches):
        text.append(f" {letter.char.upper()} ", style=_STYLES.get(match, "bold white on grey37"))
    return text


def play(args) -> int:
    game = Game.from_source(args.source, args.data_dir, tries=args.tries, solution=args.solution)

    while game.state is State.UNSOLVED:
        guess = console.input(f"Guess {game.attempts + 1}/{game.tries}: ").strip().lower()
        if guess == "exit":
            return 0
        try:
            result = game.submit_guess(guess)
        except InvalidGuess as e:
            console.print(f"[red]{e}[/red]")
            continue
        console.print(format_result(result))

    if game.state is State.SOLVED:
        console.print(f"[green]You win in {game.attempts}![/green]")
    else:
        console.print(f"[red]Out of tries. The word was {game.solution}.[/red]")
    return 0


def receive_result(letter_count: int, wordlist) -> Optional[GuessResult]:
    """
    Prompts for a word that was tried and its feedback. Returns None when the user types DONE.
    """
    while True:
        word = console.input("\nEnter the word you tried (DONE to stop): ").strip()
        if word == "DONE":
            return None
        word = word.lower()
        if len(word) != letter_count or not wordlist.is_valid_guess(word):
            console.print("Please enter a valid word. (Not in word list)")
            continue
        break

    while True:
        pattern = console.input("Enter the colour of each letter (g for green, y for yellow, x for grey): ").strip()
        if len(pattern) != letter_count:
            console.print("Please enter data of the correct length.")
            continue
        try:
            return GuessResult.from_pattern(word, pattern)
        except ValueError as e:
            console.print(str(e))


def assist(args) -> int:
    wordlist = args.source.wordlist(args.data_dir)
    game = Game(wordlist, tries=args.tries)
    solver = Solver(game, strategy=args.strategy, mode=args.mode, time_limit=args.time_limit, workers=args.workers, show_progress=True)

    while True:
        suggestion = solver.select_guess()
        remaining = len(solver.possible_solutions)
        if remaining == 1:
            console.print(f"The word is: [bold green]{suggestion}[/bold green]")
            return 0
        console.print(f"{remaining} possible solutions. Try: [bold]{suggestion}[/bold]")

        result = receive_result(wordlist.letter_count, wordlist)
        if result is None:
            return 0
        if result.is_solved():
            console.print("[green]Solved![/green]")
            return 0
        try:
            solver.update(result)
        except NoCandidatesRemain:
            console.print("[red]No candidates found. Please revise your input data.[/red] Solver has been reset.")
            solver = Solver(Game(wordlist, tries=args.tries), strategy=args.strategy, mode=args.mode, time_limit=args.time_limit, workers=args.workers, show_progress=True)


def benchmark(args) -> int:
    wordlist = args.source.wordlist(args.data_dir)
    solutions = None if args.number is None else wordlist.ordered_solutions[:args.number]
    result = run_benchmark(
        wordlist,
        solutions,
        strategy=args.strategy,
        mode=args.mode,
        tries=args.tries,
        workers=args.workers,
        show_progress=True,
        console=console,
    )
    console.print(generate_stats_table(result))
    if result.failed:
        console.print(f"[red]Failed to solve {len(result.failed)} puzzles:[/red] {', '.join(result.failed)}")
    return 0


def first(args) -> int:
    wordlist = args.source.wordlist(args.data_dir)
    choice = best_opening(wordlist, args.strategy, workers=args.workers, show_progress=True)
    console.print(f"Best for {args.source.kind} ({args.strategy.value}): [bold]{choice.guess}[/bold]: {choice.score:.2f}")
    return 0


COMMANDS = {
    "play": play,
    "assist": assist,
    "benchmark": benchmark,
    "first": first,
}


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        return COMMANDS[args.command](args)
    except WordsmithError as e:
        log.error("%s", e)
        return 1
    except (KeyboardInterrupt, EOFError):
        console.print()
        return 130


if __name__ == "__main__":
    sys.exit(main())
