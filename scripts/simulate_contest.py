"""Run a complete movie contest with fake voters.

Creates a contest, adds the given movies, opens voting, has a crowd of
faker-generated voters each cast one ballot, then closes the contest and
prints the tallies and the winner. Voter names and ballots come from a
fixed seed, so a run is reproducible.

Usage:
    python scripts/simulate_contest.py "Best Movie 2009" Avatar Up "District 9"
    python scripts/simulate_contest.py "Best Movie 2009" Avatar Up --voters 50 --seed 7
"""

import argparse
import sys
from pathlib import Path

from faker import Faker

# Add the project root to the path so we can import the contests package
sys.path.insert(0, str(Path(__file__).parent.parent))

from contests.config import load_settings, setup_logging  # noqa: E402
from contests.dispatch import dispatch  # noqa: E402
from contests.registry import ContestRegistry  # noqa: E402

SEED = 20090101
DURATION = 3600


class SteppingClock:
    """Clock that only moves when told to, so the deadline can be crossed."""

    def __init__(self, start: float = 0):
        self.now = start

    def __call__(self) -> float:
        return self.now


def simulate(name: str, titles: list[str], num_voters: int, seed: int,
             state_path: Path | None = None) -> tuple[ContestRegistry, str, str]:
    """Run one contest end to end.

    Returns (registry, creator identity, winner).
    """
    fake = Faker()
    fake.seed_instance(seed)

    clock = SteppingClock()
    registry = ContestRegistry(owner="deployer", clock=clock, state_path=state_path)
    creator = fake.unique.user_name()

    dispatch(registry, creator, "addContest", name)
    for title in titles:
        dispatch(registry, creator, "addMovie", creator, name, title)
    dispatch(registry, creator, "startContest", creator, name, DURATION)

    for _ in range(num_voters):
        voter = fake.unique.user_name()
        choice = fake.random_element(titles)
        dispatch(registry, voter, "voteMovie", creator, name, choice)

    clock.now += DURATION + 1
    winner = dispatch(registry, creator, "endContest", creator, name)
    return registry, creator, winner


def main():
    parser = argparse.ArgumentParser(description="Simulate a movie contest with fake voters")
    parser.add_argument("name", help="Contest name")
    parser.add_argument("titles", nargs="+", help="Movie titles (at least two)")
    parser.add_argument("--voters", type=int, default=25, help="Number of fake voters")
    parser.add_argument("--seed", type=int, default=SEED, help="Faker seed")
    args = parser.parse_args()

    settings = load_settings()
    setup_logging(settings)

    registry, creator, winner = simulate(
        args.name, args.titles, args.voters, args.seed, settings.state_path
    )

    view = registry.get_contest(creator, args.name)
    print(f"Contest {view.name!r} by {view.creator}")
    for movie in view.movies:
        print(f"  {movie.title}: {movie.vote_count}")
    print(f"Winner: {winner}")


if __name__ == "__main__":
    main()
