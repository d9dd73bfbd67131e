"""Typed rejections raised by the contest registry.

Every precondition failure is a subclass of ContestError carrying the
offending values as attributes, so callers can branch on structure rather
than parse messages.
"""

from typing import Any, Hashable


class ContestError(Exception):
    """Base class for every rejection raised by the registry."""
    pass


class ContestNotFound(ContestError):
    def __init__(self, creator: Hashable, name: str):
        self.creator = creator
        self.name = name
        super().__init__("This contest does not exist.")


class AlreadyExists(ContestError):
    def __init__(self, creator: Hashable, name: str):
        self.creator = creator
        self.name = name
        super().__init__(
            "This address have already added a contest with the same name."
        )


class InvalidContestName(ContestError):
    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Contest name must be non-empty text, got {name!r}.")


class NotOwner(ContestError):
    """The caller is not the creator of the contest it tried to mutate."""

    def __init__(self, caller: Hashable):
        self.caller = caller
        super().__init__(f"{caller!r} is not the creator of this contest.")


class InvalidStatus(ContestError):
    """The contest is not in the state the operation needs.

    ``required`` is None when the contest has no further state to move to.
    """

    def __init__(self, required, actual):
        self.required = required
        self.actual = actual
        super().__init__(
            "Invalid contest status, this action cannot be performed."
        )


class InsufficientCandidates(ContestError):
    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__("This contest needs at least two movies to start.")


class DuplicateCandidate(ContestError):
    def __init__(self, title: str):
        self.title = title
        super().__init__(f"The movie {title!r} is already in this contest.")


class InvalidDuration(ContestError):
    def __init__(self, duration: Any):
        self.duration = duration
        super().__init__(
            f"Duration must be a non-negative whole number of seconds, got {duration!r}."
        )


class CandidateNotFound(ContestError):
    def __init__(self, title: str):
        self.title = title
        super().__init__("This movie title does not exist in this contest.")


class VotingClosed(ContestError):
    def __init__(self, deadline: float, now: float):
        self.deadline = deadline
        self.now = now
        super().__init__("Voting period has ended.")


class AlreadyVoted(ContestError):
    def __init__(self, voter: Hashable):
        self.voter = voter
        super().__init__(f"{voter!r} has already voted in this contest.")


class DeadlineNotReached(ContestError):
    def __init__(self, deadline: float, now: float):
        self.deadline = deadline
        self.now = now
        super().__init__("The deadline for this contest have not passed yet.")


class UnsupportedOperation(ContestError):
    def __init__(self, operation: Any):
        self.operation = operation
        super().__init__(f"Unrecognized call {operation!r}. Call an operation that exists.")


class PaymentRejected(ContestError):
    def __init__(self, value: Any):
        self.value = value
        super().__init__("This registry does not accept payments.")


class InvalidTitle(ContestError):
    def __init__(self, title: Any):
        self.title = title
        super().__init__(f"Movie title must be non-empty text, got {title!r}.")


class InvalidIdentity(ContestError):
    """A persisted registry only accepts text identities.

    The JSON state file stores identities as strings; any other type would
    no longer match itself after a reload.
    """

    def __init__(self, identity: Any):
        self.identity = identity
        super().__init__(
            f"Identity {identity!r} cannot be persisted, identities must be text."
        )


class EventDeliveryFailed(ContestError):
    """A listener raised while handling an event.

    The operation that produced ``event`` has already been committed;
    ``committed`` is always True and the listener's exception is chained as
    ``__cause__``.
    """

    committed = True

    def __init__(self, event: Any):
        self.event = event
        super().__init__(
            f"The operation was committed but a listener failed on {event!r}."
        )
