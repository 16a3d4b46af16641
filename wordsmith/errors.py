class WordsmithError(Exception):
    """Base class for every error raised by the game and the solver."""


class InvalidGuess(WordsmithError):
    """The guess is not in the acceptable-guess vocabulary."""

    def __init__(self, guess: str):
        self.guess = guess
        super().__init__(f"Invalid guess: {guess!r} is not in the word list.")


class InvalidSolution(WordsmithError):
    """The word is not an allowed solution for this word list."""

    def __init__(self, solution: str):
        self.solution = solution
        super().__init__(f"Invalid solution: {solution!r} is not an allowed solution.")


class GameFinished(WordsmithError):
    """A guess was submitted after the round reached a terminal state."""

    def __init__(self, state):
        self.state = state
        super().__init__(f"Game already finished ({state.name.lower()}). Restart first.")


class NoCandidatesRemain(WordsmithError):
    """
    The active candidate set is empty.

    Either the real solution is outside the solution pool, or the feedback
    given to the solver contradicts itself.
    """

    def __init__(self, message: str = "No candidate solutions remain."):
        super().__init__(message)


class WordListError(WordsmithError):
    """A word list or frequency table could not be loaded."""
