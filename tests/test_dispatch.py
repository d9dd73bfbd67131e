"""Tests for the named-call boundary."""

import pytest
from tests.conftest import CONTEST, OWNER, USER

from contests.dispatch import dispatch, get_operation_names
from contests.errors import NotOwner, PaymentRejected, UnsupportedOperation


class TestDispatch:
    def test_lists_every_operation_in_both_spellings(self):
        names = get_operation_names()
        for camel, snake in [
            ("addContest", "add_contest"),
            ("addMovie", "add_movie"),
            ("getMovies", "get_movies"),
            ("startContest", "start_contest"),
            ("voteMovie", "vote_movie"),
            ("endContest", "end_contest"),
            ("getWinner", "get_winner"),
        ]:
            assert camel in names
            assert snake in names

    def test_routes_full_contest(self, registry, clock):
        dispatch(registry, OWNER, "addContest", CONTEST)
        dispatch(registry, OWNER, "addMovie", OWNER, CONTEST, "Avatar")
        dispatch(registry, OWNER, "add_movie", OWNER, CONTEST, "Up")
        dispatch(registry, OWNER, "startContest", OWNER, CONTEST, 2)
        dispatch(registry, USER, "voteMovie", OWNER, CONTEST, "Avatar")
        movies = dispatch(registry, USER, "getMovies", OWNER, CONTEST)
        assert [(m.title, m.vote_count) for m in movies] == [("Avatar", 1), ("Up", 0)]
        clock.advance(3)
        assert dispatch(registry, OWNER, "endContest", OWNER, CONTEST) == "Avatar"
        assert dispatch(registry, USER, "getWinner", OWNER, CONTEST) == "Avatar"

    def test_keyword_arguments(self, registry):
        dispatch(registry, OWNER, "addContest", name=CONTEST)
        assert registry.get_contest(OWNER, CONTEST).exists

    def test_unknown_operation(self, registry):
        with pytest.raises(UnsupportedOperation) as exc_info:
            dispatch(registry, OWNER, "0x12345678")
        assert exc_info.value.operation == "0x12345678"

    def test_wrong_arguments(self, registry):
        with pytest.raises(UnsupportedOperation):
            dispatch(registry, OWNER, "addContest", CONTEST, "extra")
        with pytest.raises(UnsupportedOperation):
            dispatch(registry, OWNER, "startContest", OWNER, CONTEST)
        assert registry.get_contest(OWNER, CONTEST).exists is False

    def test_payment_rejected(self, registry):
        with pytest.raises(PaymentRejected) as exc_info:
            dispatch(registry, OWNER, "addContest", CONTEST, value=10**18)
        assert exc_info.value.value == 10**18
        assert str(exc_info.value) == "This registry does not accept payments."
        assert registry.get_contest(OWNER, CONTEST).exists is False

    def test_payment_rejected_before_name_lookup(self, registry):
        with pytest.raises(PaymentRejected):
            dispatch(registry, OWNER, "", value=1)

    def test_registry_errors_propagate(self, registry):
        dispatch(registry, OWNER, "addContest", CONTEST)
        with pytest.raises(NotOwner):
            dispatch(registry, USER, "addMovie", OWNER, CONTEST, "Avatar")
