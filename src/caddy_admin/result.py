"""Result type returned by every admin API operation.

A Result is either Ok, carrying the decoded response value, or Err, carrying
a human-readable failure message. Client operations never raise; callers
branch on the variant instead.

Usage:
    result = await client.get_config("apps/http")
    if result.is_ok():
        http_app = result.unwrap()
    else:
        logger.warning("lookup failed: %s", result.unwrap_err())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar, cast, final

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")
U = TypeVar("U")


class UnwrapError(Exception):
    """Raised when unwrap() is called on an Err or unwrap_err() on an Ok."""


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Represents a successful result containing a value."""

    _value: T

    def is_ok(self) -> bool:
        """Returns True if this is an Ok result."""
        return True

    def is_err(self) -> bool:
        """Returns False for Ok results."""
        return False

    def unwrap(self) -> T:
        """Returns the contained value."""
        return self._value

    def unwrap_or(self, default: T) -> T:
        """Returns the contained value, ignoring the default."""
        return self._value

    def unwrap_err(self) -> str:
        """Raises UnwrapError since this is not an Err."""
        raise UnwrapError("Called unwrap_err on Ok value")

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        """Applies fn to the contained value, returning Ok(fn(value))."""
        return Ok(fn(self._value))

    def and_then(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        """Applies fn to the contained value, returning its result."""
        return fn(self._value)


@final
@dataclass(frozen=True, slots=True)
class Err:
    """Represents a failed result carrying a message."""

    _message: str

    def is_ok(self) -> bool:
        """Returns False for Err results."""
        return False

    def is_err(self) -> bool:
        """Returns True if this is an Err result."""
        return True

    def unwrap[_T](self) -> _T:  # noqa: UP049 # pyright: ignore[reportInvalidTypeVarUse]
        """Raises UnwrapError with the contained message."""
        raise UnwrapError(f"Called unwrap on Err value: {self._message}")

    def unwrap_or[_T](self, default: _T) -> _T:  # noqa: UP049
        """Returns the default value."""
        return default

    def unwrap_err(self) -> str:
        """Returns the contained message."""
        return self._message

    def map[_T, _U](  # noqa: UP049
        self, fn: Callable[[_T], _U]  # pyright: ignore[reportInvalidTypeVarUse]
    ) -> Result[_U]:
        """Returns self unchanged since this is Err."""
        return cast("Result[_U]", self)

    def and_then[_T, _U](  # noqa: UP049
        self, fn: Callable[[_T], Result[_U]]  # pyright: ignore[reportInvalidTypeVarUse]
    ) -> Result[_U]:
        """Returns self unchanged since this is Err."""
        return cast("Result[_U]", self)


# Type alias for Result
Result = Ok[T] | Err
