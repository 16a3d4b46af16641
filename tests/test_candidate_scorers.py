import math

from itertools import permutations

import pytest

from wordsmith.candidate_scorers import (
    EntropyScorer,
    ExpectedSizeScorer,
    MinimaxScorer,
    SolverMode,
    Strategy,
    effective_size,
    partition,
    score_partition,
    score,
    scorer_for,
)

FOUR = ["abcde", "abcdf", "abcdg", "vwxyz"]

# Eight candidates differing in the first two letters
EIGHT = [f"{x}{y}klm" for x in "ab" for y in "cdef"]


def test_partition():
    classes = partition("abcde", FOUR)
    assert sorted(classes.values()) == [1, 1, 2]
    assert sum(classes.values()) == len(FOUR)


def test_scores_by_strategy():
    assert score("abcde", Strategy.MIN_EV, FOUR) == 6
    assert score("abcde", Strategy.MINIMAX, FOUR) == 2
    assert score("abcde", Strategy.MIN_LOG_EV, FOUR) == pytest.approx(2.0)

    # Every candidate gets its own feedback
    assert score("fgvqq", Strategy.MIN_EV, FOUR) == 4
    assert score("fgvqq", Strategy.MINIMAX, FOUR) == 1
    assert score("fgvqq", Strategy.MIN_LOG_EV, FOUR) == 0


def test_min_ev_bounds(words):
    n = len(words)
    for guess in words:
        value = score(guess, Strategy.MIN_EV, words)
        assert n <= value <= n * n

    # Shares no letter with any candidate
    assert score("gimpy", Strategy.MIN_EV, ["crane", "slate", "toast"]) == 9


def test_effective_size():
    assert effective_size(6, Strategy.MIN_EV, 4) == 1.5
    assert effective_size(2, Strategy.MINIMAX, 4) == 2
    assert effective_size(4, Strategy.MIN_LOG_EV, 4) == 2
    assert effective_size(0, Strategy.MIN_EV, 0) == 0


def test_entropy():
    scorer = EntropyScorer(FOUR)
    assert scorer.entropy("fgvqq") == pytest.approx(2.0)
    assert scorer.entropy("abcde") == pytest.approx(1.5)
    assert scorer.entropy("hijkl") == pytest.approx(0.0)


def test_best_picks_lowest_score():
    choice = ExpectedSizeScorer(FOUR).best(["abcde", "fgvqq", "abcdf"])
    assert choice.guess == "fgvqq"
    assert choice.score == 4
    assert not choice.timed_out


def test_tie_prefers_a_candidate():
    scorer = ExpectedSizeScorer(["abcde", "vwxyz"])
    assert scorer.best(["abqqq", "abcde"]).guess == "abcde"
    # Both candidates: first found wins
    assert scorer.best(["vwxyz", "abcde"]).guess == "vwxyz"
    # Neither is a candidate: first found wins
    assert scorer.best(["azqqq", "abqqq"]).guess == "azqqq"


def test_modes_stop_early():
    guesses = ["ucdez", "bcdez"]
    scorer = ExpectedSizeScorer(EIGHT)
    assert scorer.score("ucdez") == 16
    assert scorer.score("bcdez") == 8

    assert scorer.best(guesses, mode=SolverMode.BEST).guess == "bcdez"
    assert scorer.best(guesses, mode=SolverMode.GOOD).guess == "bcdez"
    assert scorer.best(guesses, mode=SolverMode.FAST).guess == "ucdez"


def test_minimax_and_entropy_scorers_agree_on_perfect_split():
    for cls in (MinimaxScorer, EntropyScorer):
        assert cls(EIGHT).best(["ucdez", "bcdez"]).guess == "bcdez"


def test_time_limit_falls_back_to_best_so_far():
    choice = ExpectedSizeScorer(FOUR).best(["abcde", "fgvqq"], time_limit=-1)
    assert choice.guess == "abcde"
    assert choice.timed_out


def test_parallel_matches_sequential(words):
    candidates = words[:12]
    sequential = ExpectedSizeScorer(candidates).best(words)
    parallel = ExpectedSizeScorer(candidates).best(words, workers=2)
    assert parallel == sequential


def test_progress_does_not_change_result(words):
    scorer = MinimaxScorer(words)
    assert scorer.best(words, show_progress=True) == scorer.best(words)


def test_best_needs_guesses_and_candidates():
    with pytest.raises(ValueError):
        ExpectedSizeScorer(FOUR).best([])
    with pytest.raises(ValueError):
        ExpectedSizeScorer([]).best(["abcde"])


def test_scorer_for():
    assert isinstance(scorer_for(Strategy.MIN_EV, FOUR), ExpectedSizeScorer)
    assert isinstance(scorer_for(Strategy.MIN_LOG_EV, FOUR), EntropyScorer)
    assert isinstance(scorer_for(Strategy.MINIMAX, FOUR), MinimaxScorer)


def test_parse():
    assert Strategy.parse("minev") is Strategy.MIN_EV
    assert Strategy.parse("MIN_LOG_EV") is Strategy.MIN_LOG_EV
    assert Strategy.parse("minimax") is Strategy.MINIMAX
    assert SolverMode.parse("Fast") is SolverMode.FAST
    assert SolverMode.FAST.threshold == 0.25
    with pytest.raises(ValueError):
        Strategy.parse("maxent")
    with pytest.raises(ValueError):
        SolverMode.parse("slow")


def test_log_score_matches_definition(words):
    classes = partition("roast", words)
    expected = sum(n * math.log2(n) for n in classes.values())
    assert score("roast", Strategy.MIN_LOG_EV, words) == pytest.approx(expected)


def test_log_score_ignores_class_order():
    for sizes in [(3, 3, 10), (1, 1, 1, 1, 1, 2, 2, 2, 3, 4, 5, 6)]:
        values = {score_partition(p, Strategy.MIN_LOG_EV) for p in permutations(sizes)}
        assert len(values) == 1


def test_entropy_tie_prefers_a_candidate():
    # "ab" and "ba" both split these into classes of 1, 3, 3 and 10
    candidates = ["ab", "ac", "ad", "ae", "cb", "db", "eb", "cc", "cd", "ce", "cg", "dc", "dd", "de", "ec", "ed", "ee"]
    scorer = EntropyScorer(candidates)
    assert sorted(scorer.partition("ab").values()) == [1, 3, 3, 10]
    assert sorted(scorer.partition("ba").values()) == [1, 3, 3, 10]
    assert scorer.score("ab") == scorer.score("ba")
    assert scorer.best(["ba", "ab"]).guess == "ab"


def test_parallel_time_limit_falls_back_to_first_guess(words):
    choice = ExpectedSizeScorer(words[:12]).best(words, workers=2, time_limit=-1)
    assert choice.guess == words[0]
    assert choice.timed_out
