"""The contest registry: lifecycle, candidate and vote operations.

Every public operation takes the caller's identity as its first argument.
Identities and time both come from outside; the registry never derives an
identity and reads its clock exactly once per operation.
"""

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Hashable

from contests.errors import (
    AlreadyVoted,
    CandidateNotFound,
    DeadlineNotReached,
    DuplicateCandidate,
    EventDeliveryFailed,
    InsufficientCandidates,
    InvalidContestName,
    InvalidDuration,
    InvalidIdentity,
    InvalidTitle,
    NotOwner,
    VotingClosed,
)
from contests.models import (
    Contest,
    ContestEnded,
    ContestEvent,
    ContestStarted,
    ContestView,
    Movie,
    MovieVoted,
)
from contests.persistence import load_store, save_store
from contests.status import ContestStatus
from contests.store import ContestStore
from contests.tally import compute_winner

logger = logging.getLogger(__name__)

MIN_CANDIDATES = 2

Listener = Callable[[ContestEvent], None]


class ContestRegistry:
    """Per-creator registry of movie voting contests.

    All operations are serialized by one re-entrant lock around the whole
    store. Each operation validates every precondition before touching
    state, so a rejected call leaves the store exactly as it found it. When
    persisting, a failed save rolls the in-memory store back as well.

    Args:
        owner: Identity that deployed the registry (informational only)
        store: Backing store; loaded from ``state_path`` or empty if omitted
        clock: Zero-argument callable returning the current time in seconds
        state_path: If given, the store is loaded from and saved to this
            JSON file after every successful write. Identities must then be
            text, so they still match themselves after a reload.
    """

    def __init__(
        self,
        owner: Hashable = None,
        store: ContestStore | None = None,
        clock: Callable[[], float] = time.time,
        state_path: Path | None = None,
    ):
        self.owner = owner
        self._clock = clock
        self._state_path = Path(state_path) if state_path is not None else None
        if store is None:
            store = load_store(self._state_path) if self._state_path else ContestStore()
        self._store = store
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Listener:
        """Register a callable to receive events after each committed write."""
        self._listeners.append(listener)
        return listener

    def add_contest(self, caller: Hashable, name: str) -> None:
        """Create a contest owned by ``caller``."""
        with self._lock:
            self._check_persistable(caller)
            if not isinstance(name, str) or not name:
                raise InvalidContestName(name)
            with self._transaction():
                self._store.insert(caller, name)
            logger.info("Contest %r created by %r", name, caller)

    def get_contest(self, creator: Hashable, name: str) -> ContestView:
        """Return a snapshot of the contest; ``exists`` is False if absent."""
        with self._lock:
            return ContestView.of(creator, name, self._store.get(creator, name))

    def add_movie(self, caller: Hashable, creator: Hashable, name: str, title: str) -> None:
        with self._lock:
            contest = self._owned(caller, creator, name)
            ContestStatus.require(ContestStatus.NOT_STARTED, contest.status)
            if not isinstance(title, str) or not title:
                raise InvalidTitle(title)
            if title in contest.titles:
                raise DuplicateCandidate(title)

            with self._transaction():
                contest.titles[title] = len(contest.movies)
                contest.movies.append(Movie(title=title))
            logger.info("Movie %r added to contest %r of %r", title, name, creator)

    def get_movies(self, caller: Hashable, creator: Hashable, name: str) -> list[Movie]:
        """Return copies of the candidates in insertion order.

        Any caller may read; ownership is not checked.
        """
        with self._lock:
            contest = self._store.require(creator, name)
            return [Movie(m.title, m.vote_count) for m in contest.movies]

    def has_movie(self, creator: Hashable, name: str, title: str) -> bool:
        with self._lock:
            contest = self._store.get(creator, name)
            return contest is not None and title in contest.titles

    def start_contest(
        self, caller: Hashable, creator: Hashable, name: str, duration: int
    ) -> float:
        """Open voting for ``duration`` seconds and return the deadline."""
        with self._lock:
            now = self._clock()
            contest = self._owned(caller, creator, name)
            ContestStatus.require(ContestStatus.NOT_STARTED, contest.status)
            if len(contest.movies) < MIN_CANDIDATES:
                raise InsufficientCandidates(MIN_CANDIDATES, len(contest.movies))
            if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
                raise InvalidDuration(duration)

            with self._transaction():
                contest.deadline = now + duration
                contest.status = contest.status.advance()
            logger.info(
                "Contest %r of %r started, voting closes at %s", name, creator, contest.deadline
            )
            self._emit(ContestStarted(creator=creator, name=name))
            return contest.deadline

    def vote_movie(self, caller: Hashable, creator: Hashable, name: str, title: str) -> None:
        """Cast ``caller``'s single ballot in the contest for ``title``.

        Any caller may vote. Checks run in a fixed order: contest, candidate,
        status, deadline, then whether the caller has already voted.
        """
        with self._lock:
            now = self._clock()
            self._check_persistable(caller)
            contest = self._store.require(creator, name)
            index = contest.titles.get(title)
            if index is None:
                raise CandidateNotFound(title)
            ContestStatus.require(ContestStatus.ONGOING, contest.status)
            if now > contest.deadline:
                raise VotingClosed(contest.deadline, now)
            if caller in contest.voters:
                raise AlreadyVoted(caller)

            with self._transaction():
                contest.movies[index].vote_count += 1
                contest.voters.add(caller)
            logger.info("%r voted for %r in contest %r of %r", caller, title, name, creator)
            self._emit(MovieVoted(creator=creator, name=name, voter=caller, title=title))

    def has_voted(self, creator: Hashable, name: str, voter: Hashable) -> bool:
        with self._lock:
            contest = self._store.get(creator, name)
            return contest is not None and voter in contest.voters

    def end_contest(self, caller: Hashable, creator: Hashable, name: str) -> str:
        """Close the contest after its deadline and return the winner."""
        with self._lock:
            now = self._clock()
            contest = self._owned(caller, creator, name)
            ContestStatus.require(ContestStatus.ONGOING, contest.status)
            if now <= contest.deadline:
                raise DeadlineNotReached(contest.deadline, now)

            with self._transaction():
                contest.winner = compute_winner(contest.movies)
                contest.status = contest.status.advance()
            logger.info("Contest %r of %r ended, winner: %r", name, creator, contest.winner)
            self._emit(ContestEnded(creator=creator, name=name, winner=contest.winner))
            return contest.winner

    def get_winner(self, caller: Hashable, creator: Hashable, name: str) -> str:
        with self._lock:
            contest = self._store.require(creator, name)
            ContestStatus.require(ContestStatus.FINISHED, contest.status)
            return contest.winner

    def _owned(self, caller: Hashable, creator: Hashable, name: str) -> Contest:
        """Resolve a contest the caller intends to mutate.

        Ownership is a key-equality test: the caller must be the creator
        half of the key. It is checked before existence.
        """
        if caller != creator:
            logger.debug("Rejected %r acting on contest %r of %r", caller, name, creator)
            raise NotOwner(caller)
        return self._store.require(creator, name)

    def _check_persistable(self, identity: Hashable) -> None:
        if self._state_path is not None and not isinstance(identity, str):
            logger.debug("Rejected non-text identity %r", identity)
            raise InvalidIdentity(identity)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Apply the mutations in the block and save them.

        If saving fails, the store is restored to the snapshot taken on
        entry before the error propagates.
        """
        if self._state_path is None:
            yield
            return

        snapshot = self._store.to_dict()
        try:
            yield
            save_store(self._store, self._state_path)
        except BaseException:
            self._store.restore(snapshot)
            logger.error("Rolled back a write that could not be saved to %s", self._state_path)
            raise

    def _emit(self, event: ContestEvent) -> None:
        """Deliver an event to every listener.

        Runs after the commit. Every listener is called even if an earlier
        one fails; the first failure is then raised as EventDeliveryFailed.
        """
        logger.info("Event: %s", event)
        failure = None
        for listener in self._listeners:
            try:
                listener(event)
            except Exception as exc:
                logger.exception("Listener %r failed on %s", listener, event)
                if failure is None:
                    failure = exc
        if failure is not None:
            raise EventDeliveryFailed(event) from failure
