"""
Wordsmith - a Wordle-like game and an information-theoretic solver for it.
"""

__version__ = "0.1.0"

from wordsmith.candidate_scorers import SolverMode, Strategy, score
from wordsmith.errors import GameFinished, InvalidGuess, InvalidSolution, NoCandidatesRemain, WordListError, WordsmithError
from wordsmith.filter import Filter, filter_candidates
from wordsmith.letters import Letter, Word
from wordsmith.solver import Solver
from wordsmith.wordle import Game, GuessResult, LetterMatch, LetterState, State, evaluate, is_solved
from wordsmith.words import WordList, WordSource
