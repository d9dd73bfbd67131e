"""Keyed storage for contests, their candidate ledgers and vote ledgers."""

from collections.abc import Iterator
from typing import Any, Hashable, Self

from contests.errors import AlreadyExists, ContestNotFound
from contests.models import Contest

ContestKey = tuple[Hashable, str]


class ContestStore:
    """In-memory map of (creator, name) -> Contest.

    The creator is part of the key, so two creators can reuse a contest name
    independently. Entries are never removed. The store does no locking; the
    registry serializes access to it.
    """

    def __init__(self):
        self._contests: dict[ContestKey, Contest] = {}

    def __len__(self) -> int:
        return len(self._contests)

    def __contains__(self, key: ContestKey) -> bool:
        return key in self._contests

    def __iter__(self) -> Iterator[ContestKey]:
        return iter(self._contests)

    def get(self, creator: Hashable, name: str) -> Contest | None:
        return self._contests.get((creator, name))

    def require(self, creator: Hashable, name: str) -> Contest:
        """Return the contest, or raise ContestNotFound."""
        contest = self._contests.get((creator, name))
        if contest is None:
            raise ContestNotFound(creator, name)
        return contest

    def insert(self, creator: Hashable, name: str) -> Contest:
        """Create a fresh NotStarted contest under (creator, name)."""
        key = (creator, name)
        if key in self._contests:
            raise AlreadyExists(creator, name)
        contest = Contest()
        self._contests[key] = contest
        return contest

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary.

        Identities are written as they are, so only text identities
        survive a reload unchanged. ContestRegistry enforces this when it
        persists.
        """
        return {
            "contests": [
                {"creator": creator, "name": name, **contest.to_dict()}
                for (creator, name), contest in self._contests.items()
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        store = cls()
        for entry in data.get("contests", []):
            key = (entry["creator"], entry["name"])
            if key in store._contests:
                raise ValueError(f"Duplicate contest entry for {key!r}")
            store._contests[key] = Contest.from_dict(entry)
        return store

    def restore(self, data: dict[str, Any]) -> None:
        """Replace every contest with the contents of a to_dict() snapshot."""
        self._contests = type(self).from_dict(data)._contests
