"""
Result values for fallible form operations.

Parsing and submission never raise for bad user input. They return either
``Ok(value)`` or ``Err(error)`` so a form can stay interactive while invalid.
Both are immutable and compare structurally, so tests can write::

    assert form.submit() == Ok(LoginData(username="hello", password="adm1n"))
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar, Union

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class UnwrapError(Exception):
    """Raised by ``Err.unwrap()``. Carries the wrapped error."""

    def __init__(self, error: Any):
        super().__init__(f"Called unwrap() on Err: {error}")
        self.error = error


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def ok(self) -> Optional[T]:
        return self.value

    def err(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> 'Ok[U]':
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], 'Result']) -> 'Result':
        return fn(self.value)


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result. ``error`` is normally a ``ParseError``."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def ok(self) -> None:
        return None

    def err(self) -> Optional[E]:
        return self.error

    def unwrap(self):
        raise UnwrapError(self.error)

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable) -> 'Err[E]':
        return self

    def and_then(self, fn: Callable) -> 'Err[E]':
        return self


Result = Union[Ok, Err]


def collect_results(results: Iterable[Result]) -> Result:
    """Collapse results into ``Ok(list_of_values)`` or the first ``Err``.

    The whole iterable is consumed before deciding, so every producer runs
    even when an early one fails.
    """
    materialized: List[Result] = list(results)
    for result in materialized:
        if result.is_err():
            return result
    return Ok([result.value for result in materialized])
