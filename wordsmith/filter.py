from typing import Iterable, Optional

from wordsmith.wordle import GuessResult, get_feedback


def is_consistent(result: GuessResult, word: str) -> bool:
    """
    Returns True if `word` could be the solution given this result, i.e. guessing
    result.guess against `word` would produce exactly the same feedback.
    """
    return get_feedback(str(result.guess), str(word)) == result.matches


def filter_candidates(result: GuessResult, candidates: set[str]) -> set[str]:
    """
    Removes, in place, every candidate inconsistent with the result and returns the same set.

    Args:
        result (GuessResult): A guess and the feedback it received.
        candidates (set[str]): The candidate solutions. Modified in place.

    Returns:
        set[str]: `candidates`, narrowed.
    """
    guess = str(result.guess)
    matches = result.matches
    candidates.difference_update([c for c in candidates if get_feedback(guess, c) != matches])
    return candidates


class Filter:

    def __init__(self, results: Optional[Iterable[GuessResult]] = None, length: Optional[int] = None):
        """
        Initializes the Filter with optional prior results and word length.

        Args:
            results (Optional[Iterable[GuessResult]], optional): Results to apply. Defaults to None.
            length (Optional[int], optional): Word length. Defaults to the length of the first result.
        """

        self.results: list[GuessResult] = []
        self.length = length
        for result in results or ():
            self.update(result)

    def __str__(self) -> str:
        return "\n".join(str(r) for r in self.results)

    def __len__(self) -> int:
        return len(self.results)

    def update(self, result: GuessResult) -> None:
        if self.length is None:
            self.length = len(result.guess)
        elif len(result.guess) != self.length:
            raise ValueError(f"Expected a {self.length} letter guess, got {result.guess}.")
        self.results.append(result)

    def is_consistent(self, word: str) -> bool:
        return all(is_consistent(result, word) for result in self.results)

    def candidates(self, words: Iterable[str]) -> list[str]:
        """
        Return the words, in their given order, that could be the answer after every result so far.
        """
        if self.length is None:
            return list(words)
        return [word for word in words if len(word) == self.length and self.is_consistent(word)]

    def retain(self, candidates: set[str]) -> set[str]:
        """Narrows `candidates` in place by every result so far."""
        for result in self.results:
            filter_candidates(result, candidates)
        return candidates
