"""
Centralized error types and validation helpers.

Engine validation failures (not enough AP, dead actor, ...) are reported as
values and never raised. The exceptions below are reserved for data errors:
broken catalogs, unknown ids and inconsistent fight construction input.
"""

from typing import Any, Iterable, Optional

from typing_extensions import TypeVar

from .logging import log_error

T = TypeVar("T")


class EngineError(Exception):
    """Base class for every error raised by the combat engine."""


class FightDataError(EngineError, ValueError):
    """Raised when fight or catalog data is not referentially consistent."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = context or {}


def require_found(
    value: Optional[T],
    what: str,
    identifier: str,
    context: Optional[dict[str, Any]] = None,
) -> T:
    """
    Validates that a lookup returned something.

    Args:
        value: The looked-up value (None when missing).
        what: Human-readable name of the kind of object (e.g. "boss").
        identifier: The id that was looked up.
        context: Additional context for logging.

    Returns:
        The validated value.

    Raises:
        FightDataError: If the value is None.

    """
    if value is None:
        context = {**(context or {}), "what": what, "id": identifier}
        log_error(f"Unknown {what} '{identifier}'", context)
        raise FightDataError(f"Unknown {what}: {identifier}", context)
    return value


def require_unique_ids(ids: Iterable[str], what: str) -> None:
    """
    Validates that a collection of ids has no duplicates.

    Args:
        ids: The ids to check.
        what: Human-readable name of the kind of object the ids belong to.

    Raises:
        FightDataError: If an id appears more than once.

    """
    seen: set[str] = set()
    for identifier in ids:
        if identifier in seen:
            log_error(f"Duplicate {what} id '{identifier}'", {"what": what})
            raise FightDataError(f"Duplicate {what} id: {identifier}", {"id": identifier})
        seen.add(identifier)


def require_non_empty(values: list[T], what: str) -> list[T]:
    """
    Validates that a list is not empty.

    Args:
        values: The list to check.
        what: Human-readable name of the list contents.

    Returns:
        The validated list.

    Raises:
        FightDataError: If the list is empty.

    """
    if not values:
        log_error(f"Expected at least one {what}", {"what": what})
        raise FightDataError(f"Expected at least one {what}")
    return values
