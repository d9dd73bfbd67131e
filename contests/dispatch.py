"""Generic call boundary for the contest registry.

Collaborators that receive calls by name (scripts, transport adapters) go
through dispatch() rather than calling registry methods directly. It is the
only place that sees an incoming value transfer, and it rejects every one.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any, Hashable

from contests.errors import PaymentRejected, UnsupportedOperation
from contests.registry import ContestRegistry

logger = logging.getLogger(__name__)

# Operation registry - operations register themselves by name below
_operations: dict[str, Callable[..., Any]] = {}


def register_operation(*names: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to register an operation under one or more call names."""
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        for name in names:
            _operations[name] = func
        return func
    return decorator


def get_operation_names() -> list[str]:
    """Return every call name dispatch() accepts."""
    return sorted(_operations)


def dispatch(
    registry: ContestRegistry,
    caller: Hashable,
    operation: str,
    *args: Any,
    value: int = 0,
    **kwargs: Any,
) -> Any:
    """Route a named call from ``caller`` to the registry.

    Raises:
        PaymentRejected: If ``value`` is non-zero, whatever the operation
        UnsupportedOperation: If the name is unknown or the arguments do
            not fit the operation's signature
    """
    if value:
        logger.debug("Rejected payment of %r from %r", value, caller)
        raise PaymentRejected(value)

    func = _operations.get(operation)
    if func is None:
        logger.debug("Rejected unrecognized call %r from %r", operation, caller)
        raise UnsupportedOperation(operation)

    try:
        inspect.signature(func).bind(registry, caller, *args, **kwargs)
    except TypeError:
        logger.debug("Rejected call %r with arguments %r %r", operation, args, kwargs)
        raise UnsupportedOperation(operation) from None

    return func(registry, caller, *args, **kwargs)


@register_operation("addContest", "add_contest")
def _add_contest(registry: ContestRegistry, caller: Hashable, name: str) -> None:
    return registry.add_contest(caller, name)


@register_operation("addMovie", "add_movie")
def _add_movie(registry: ContestRegistry, caller: Hashable, creator: Hashable,
               name: str, title: str) -> None:
    return registry.add_movie(caller, creator, name, title)


@register_operation("getMovies", "get_movies")
def _get_movies(registry: ContestRegistry, caller: Hashable, creator: Hashable, name: str):
    return registry.get_movies(caller, creator, name)


@register_operation("startContest", "start_contest")
def _start_contest(registry: ContestRegistry, caller: Hashable, creator: Hashable,
                   name: str, duration: int) -> float:
    return registry.start_contest(caller, creator, name, duration)


@register_operation("voteMovie", "vote_movie")
def _vote_movie(registry: ContestRegistry, caller: Hashable, creator: Hashable,
                name: str, title: str) -> None:
    return registry.vote_movie(caller, creator, name, title)


@register_operation("endContest", "end_contest")
def _end_contest(registry: ContestRegistry, caller: Hashable, creator: Hashable,
                 name: str) -> str:
    return registry.end_contest(caller, creator, name)


@register_operation("getWinner", "get_winner")
def _get_winner(registry: ContestRegistry, caller: Hashable, creator: Hashable,
                name: str) -> str:
    return registry.get_winner(caller, creator, name)
