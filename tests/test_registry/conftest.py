"""Shared fixtures for registry operation tests."""

import pytest
from tests.conftest import CONTEST, OWNER, setup_contest


@pytest.fixture
def open_contest(registry):
    """Contest with Avatar and Up, not started yet."""
    setup_contest(registry, ["Avatar", "Up"])
    return registry


@pytest.fixture
def started_contest(open_contest):
    """Contest with Avatar and Up, voting open for an hour."""
    open_contest.start_contest(OWNER, OWNER, CONTEST, 3600)
    return open_contest
