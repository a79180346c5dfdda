"""Result type for explicit error handling.

Every fallible release operation returns ``Result[T, E]`` instead of raising.
Stages hand their errors upward as values, and only the CLI layer turns an
``Err`` into an exit code.

Usage:
    def parse_patch(text: str) -> Result[int, str]:
        if not text.isdigit():
            return Err(f"not a patch number: {text}")
        return Ok(int(text))

    match parse_patch("428"):
        case Ok(patch):
            print(f"patch {patch}")
        case Err(error):
            print(f"invalid: {error}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeGuard, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result.

    Attributes:
        value: What the operation produced (a parsed version, a finished run...).
    """

    value: T

    def is_ok(self) -> bool:
        """Always True."""
        return True

    def is_err(self) -> bool:
        """Always False."""
        return False

    def unwrap(self) -> T:
        """Get the value.

        Returns:
            The success value.
        """
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get the value; ``default`` only matters for Err.

        Args:
            default: Unused here.

        Returns:
            The success value.
        """
        return self.value

    def unwrap_err(self) -> None:
        """Fail loudly: an Ok carries no error.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"called unwrap_err on Ok: {self.value}")

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the value, keeping it wrapped.

        Args:
            f: Applied to the value.

        Returns:
            Ok holding ``f(value)``.
        """
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        """No error to transform.

        Args:
            f: Unused here.

        Returns:
            This Ok, unchanged.
        """
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result.

    Attributes:
        error: The error payload, usually a frozen error dataclass with a
            ``message`` and an optional ``hint``.
    """

    error: E

    def is_ok(self) -> bool:
        """Always False."""
        return False

    def is_err(self) -> bool:
        """Always True."""
        return True

    def unwrap(self) -> None:
        """Fail loudly: an Err carries no value.

        Raises:
            ValueError: Always, mentioning the error.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        """Fall back to ``default``.

        Args:
            default: Returned in place of the missing value.

        Returns:
            ``default``.
        """
        return default

    def unwrap_err(self) -> E:
        """Get the error.

        Returns:
            The error payload.
        """
        return self.error

    def map(self, f: Callable[[T], U]) -> Err[E]:
        """No value to transform.

        Args:
            f: Unused here.

        Returns:
            This Err, unchanged.
        """
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the error, keeping it wrapped.

        Args:
            f: Applied to the error.

        Returns:
            Err holding ``f(error)``.
        """
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Type guard narrowing a Result to Ok.

    Args:
        result: The Result to check.

    Returns:
        True if ``result`` is Ok.

    Example:
        parsed = parse_release_version("4.0.428", major=4, minor=0)
        if is_ok(parsed):
            print(parsed.value.patch)
    """
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Type guard narrowing a Result to Err.

    Args:
        result: The Result to check.

    Returns:
        True if ``result`` is Err.
    """
    return isinstance(result, Err)
