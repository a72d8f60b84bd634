"""Tagged results for callers that branch on failures instead of catching them.

    result = attempt(allocate, total, ratios)
    if result.is_ok:
        shares = result.value
    else:
        log.warning(f"{result.kind.value}: {result.message}")
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeAlias, TypeVar, Union

from money_allocator.domain.monetary.errors import ErrorKind, MonetaryError, error_class_for

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, error: MonetaryError) -> Err:
        return cls(error.kind, error.message)

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        """Raise the error this result stands for."""
        raise error_class_for(self.kind)(self.message)

    def unwrap_or(self, default: T) -> T:
        return default


Result: TypeAlias = Union[Ok[T], Err]


def attempt(func: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Call $func and wrap its outcome.

    Only `MonetaryError` is turned into `Err`; any other exception is a bug in the
    caller and propagates unchanged.
    """
    try:
        return Ok(func(*args, **kwargs))
    except MonetaryError as e:
        return Err.from_exception(e)


def combine(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Return the first `Err` in $results, or `Ok` holding all values in order."""
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
