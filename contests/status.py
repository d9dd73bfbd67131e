"""Contest lifecycle states and the forward-only transition table."""

from enum import Enum

from contests.errors import InvalidStatus


class ContestStatus(Enum):
    """Lifecycle state of a contest.

    The only legal path is NOT_STARTED -> ONGOING -> FINISHED. FINISHED is
    terminal.
    """
    NOT_STARTED = 0
    ONGOING = 1
    FINISHED = 2

    @staticmethod
    def require(required: "ContestStatus", actual: "ContestStatus") -> None:
        """Raise InvalidStatus unless the contest is in the required state."""
        if actual is not required:
            raise InvalidStatus(required, actual)

    def advance(self) -> "ContestStatus":
        """Return the next state, or raise InvalidStatus from a terminal state."""
        try:
            return _TRANSITIONS[self]
        except KeyError:
            raise InvalidStatus(None, self) from None


_TRANSITIONS = {
    ContestStatus.NOT_STARTED: ContestStatus.ONGOING,
    ContestStatus.ONGOING: ContestStatus.FINISHED,
}
