"""Mutation outcomes returned by the decision cache.

A mutation either succeeds with the confirmed value or fails with the error
and the snapshot the cache was restored to. ``unwrap()`` turns a failure back
into an exception for callers that prefer raising.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from decision_memory.core.exceptions import DecisionMemoryError

T = TypeVar("T")


@dataclass(frozen=True)
class MutationOk(Generic[T]):
    value: T
    ok = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class MutationFailed:
    error: DecisionMemoryError
    snapshot: Any = None
    ok = False

    @property
    def message(self) -> str:
        return str(self.error)

    def unwrap(self):
        raise self.error


MutationResult = MutationOk[T] | MutationFailed
