"""Result type for calls to external collaborators."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A collaborator call that produced a value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """A collaborator call that failed with a recoverable reason."""

    reason: str
    error: Exception | None = None


Result = Success[T] | Failure
