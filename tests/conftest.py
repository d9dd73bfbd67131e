"""Shared test helpers."""

import pytest

from contests.registry import ContestRegistry

OWNER = "0xOwner"
USER = "0xUser"
NOT_OWNER = "0xNotOwner"
CONTEST = "Best Movie 2009"

START_TIME = 1_000_000


class FakeClock:
    """Manually advanced clock injected into the registry."""

    def __init__(self, now: float = START_TIME):
        self.now = now
        self.reads = 0

    def __call__(self) -> float:
        self.reads += 1
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def setup_contest(
    registry: ContestRegistry,
    titles: list[str],
    creator: str = OWNER,
    name: str = CONTEST,
) -> None:
    """Create a contest and add the given movies, leaving it NotStarted."""
    registry.add_contest(creator, name)
    for title in titles:
        registry.add_movie(creator, creator, name, title)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return ContestRegistry(owner=OWNER, clock=clock)


@pytest.fixture
def events(registry):
    """List that collects every event the registry emits."""
    received = []
    registry.subscribe(received.append)
    return received
