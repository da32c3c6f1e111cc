# src/core/result.py - v1
"""Tagged success/failure values returned across pipeline boundaries.

Expected failures (cache miss, render failure, unreadable document) travel
as ``Err`` values instead of exceptions. Exceptions stay reserved for
programmer errors and the two fatal run-level conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying an error value."""

    error: E

    @property
    def ok(self) -> bool:
        return False

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, fn: Callable[[object], U]) -> Err[E]:
        return self


Result = Union[Ok[T], Err[E]]
