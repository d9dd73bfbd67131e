"""Winner resolution for a finished contest."""

from collections.abc import Iterable

from contests.models import Movie

TIE_RESULT = "The result was a tie"


def compute_winner(movies: Iterable[Movie]) -> str:
    """Return the title holding the strictly highest tally.

    Single pass: track the best count seen so far and whether any other
    candidate has matched it. A shared maximum, including every candidate
    on zero votes, resolves to TIE_RESULT. So does an empty candidate list,
    although a started contest always has at least two.
    """
    best_title = None
    best_count = -1
    tied = False

    for movie in movies:
        if movie.vote_count > best_count:
            best_title = movie.title
            best_count = movie.vote_count
            tied = False
        elif movie.vote_count == best_count:
            tied = True

    if best_title is None or tied:
        return TIE_RESULT
    return best_title
