"""
Result type for jsoncodec.

Provides a minimal Result algebra (Ok/Err). Every operation returns a new
instance; neither variant is ever mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, fn: Callable[[T], Any]) -> Ok[Any]:
        return Ok(fn(self.value))

    def map_error(self, fn: Callable[[Any], Any]) -> Ok[T]:
        return self

    def map_both(
        self, on_error: Callable[[Any], Any], on_value: Callable[[T], Any]
    ) -> Ok[Any]:
        return self.map(on_value)

    def and_then(self, fn: Callable[[T], Result[Any, Any]]) -> Result[Any, Any]:
        return fn(self.value)

    def fail_unless(self, pred: Callable[[T], bool], error: Any) -> Result[Any, T]:
        """Downgrade to ``Err(error)`` when ``pred`` rejects the value."""
        return self if pred(self.value) else Err(error)

    def with_default(self, fallback: Any) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_error(self, fn: Callable[[E], Any]) -> Err[Any]:
        return Err(fn(self.error))

    def map_both(
        self, on_error: Callable[[E], Any], on_value: Callable[[Any], Any]
    ) -> Err[Any]:
        return self.map_error(on_error)

    def and_then(self, fn: Callable[[Any], Result[Any, Any]]) -> Err[E]:
        return self

    def fail_unless(self, pred: Callable[[Any], bool], error: Any) -> Err[E]:
        return self

    def with_default(self, fallback: T) -> T:
        return fallback


Result = Union[Ok[T], Err[E]]
"""``Result[V, E]``: either ``Ok[V]`` or ``Err[E]``."""
