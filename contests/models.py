"""Core data models for contests, candidates and emitted events."""

from dataclasses import dataclass, field, replace
from typing import Any, Hashable, Self

from contests.status import ContestStatus


@dataclass
class Movie:
    """A candidate within a contest.

    Attributes:
        title: Candidate title, unique within its contest (exact match)
        vote_count: Number of ballots cast for this candidate
    """
    title: str
    vote_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "vote_count": self.vote_count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(title=data["title"], vote_count=int(data["vote_count"]))


@dataclass
class Contest:
    """Mutable record for one contest, owned by the ContestStore.

    The creator is not stored here: it is part of the store key, so
    ownership can never change once the contest exists.

    Attributes:
        status: Current lifecycle state
        deadline: Absolute time after which voting closes (0 until started)
        winner: Winning title or the tie sentinel ("" until finished)
        movies: Candidates in insertion order
        titles: Side index of candidate titles, used for existence checks
        voters: Identities that have already voted in this contest
    """
    status: ContestStatus = ContestStatus.NOT_STARTED
    deadline: float = 0
    winner: str = ""
    movies: list[Movie] = field(default_factory=list)
    titles: dict[str, int] = field(default_factory=dict)  # title -> index into movies
    voters: set[Hashable] = field(default_factory=set)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.name,
            "deadline": self.deadline,
            "winner": self.winner,
            "movies": [m.to_dict() for m in self.movies],
            "voters": sorted(self.voters),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        movies = [Movie.from_dict(m) for m in data.get("movies", [])]
        return cls(
            status=ContestStatus[data["status"]],
            deadline=data.get("deadline", 0),
            winner=data.get("winner", ""),
            movies=movies,
            titles={m.title: i for i, m in enumerate(movies)},
            voters=set(data.get("voters", [])),
        )


@dataclass(frozen=True)
class ContestView:
    """Read-only snapshot of a contest, safe to hand to any caller.

    A view for a key that was never created has ``exists=False`` and
    default values everywhere else.
    """
    creator: Hashable
    name: str
    exists: bool
    status: ContestStatus = ContestStatus.NOT_STARTED
    deadline: float = 0
    winner: str = ""
    movies: tuple[Movie, ...] = ()

    @classmethod
    def of(cls, creator: Hashable, name: str, contest: Contest | None) -> Self:
        if contest is None:
            return cls(creator=creator, name=name, exists=False)
        return cls(
            creator=creator,
            name=name,
            exists=True,
            status=contest.status,
            deadline=contest.deadline,
            winner=contest.winner,
            movies=tuple(replace(m) for m in contest.movies),
        )


@dataclass(frozen=True)
class ContestStarted:
    creator: Hashable
    name: str


@dataclass(frozen=True)
class MovieVoted:
    creator: Hashable
    name: str
    voter: Hashable
    title: str


@dataclass(frozen=True)
class ContestEnded:
    creator: Hashable
    name: str
    winner: str


ContestEvent = ContestStarted | MovieVoted | ContestEnded
