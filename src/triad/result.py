"""Result type: Ok[T] | Err[E] for explicit error handling.

Example:
    ```python
    import json

    from triad.result import Err, Ok, try_from

    parsed = try_from(lambda: json.loads('42'), 'bad json')
    print(parsed)  # Ok(42)

    match parsed.map(lambda x: x + 1):
        case Ok(value):
            print(value)  # 43
        case Err(error):
            print(error)
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn, TypedDict, TypeIs

import msgspec

from triad._panic import panic

__all__ = [
    'Err',
    'Ok',
    'Result',
    'ResultPattern',
    'err',
    'from_nullable',
    'ok',
    'try_from',
    'try_from_nullable',
]


class ResultPattern[T, E, U](TypedDict):
    """Branches for ``Result.match(**pattern)``."""

    ok: Callable[[T], U]
    err: Callable[[E], U]


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
        >>> str(ok)
        'Ok(42)'
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok.

        This method provides type narrowing - after checking is_ok(),
        the type checker knows the result is Ok[T].
        """
        return True

    def is_ok_and(self, predicate: Callable[[T], bool]) -> bool:
        """Return the predicate applied to the contained value."""
        return predicate(self.value)

    def is_err(self) -> TypeIs[Err[object]]:
        """Return False since this is Ok."""
        return False

    def is_err_and(self, _predicate: Callable[[object], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def expect(self, _msg: str) -> T:
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def unwrap(self) -> T:
        """Return the contained Ok value."""
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        """Panic with ``msg`` since there is no error to return.

        Raises:
            Panic: Always.
        """
        panic(msg)

    def unwrap_err(self) -> NoReturn:
        """Panic since there is no error to return.

        Raises:
            Panic: Always, with the default unwrap_err message.
        """
        panic('called Result.unwrapErr() on an Ok value')

    def unwrap_or(self, _default: T) -> T:
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, _f: Callable[[], T]) -> T:
        """Return the contained Ok value without calling the fallback."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_or[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Return f applied to the value."""
        return f(self.value)

    def map_or_else[U](self, _default: Callable[[], U], f: Callable[[T], U]) -> U:
        """Return f applied to the value without computing the default."""
        return f(self.value)

    def map_err[F](self, _f: Callable[[object], F]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def and_[U, E](self, other: Ok[U] | Err[E]) -> Ok[U] | Err[E]:
        """Return other since self is Ok."""
        return other

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    flat_map = and_then

    def or_[F](self, _other: Ok[T] | Err[F]) -> Ok[T]:
        """Return self since this is Ok."""
        return self

    def or_else[F](self, _f: Callable[[object], Ok[T] | Err[F]]) -> Ok[T]:
        """Return self without calling the recovery function."""
        return self

    def flatten(self) -> Ok[object] | Err[object]:
        """Flatten nested Results.

        Recurses while the payload is itself a Result, so Ok(Ok(Ok(1)))
        becomes Ok(1) and Ok(Err(e)) becomes Err(e). A non-Result payload
        returns self.
        """
        if isinstance(self.value, Ok | Err):
            return self.value.flatten()
        return self

    def match[U](self, *, ok: Callable[[T], U], err: Callable[[object], U]) -> U:
        """Call the ``ok`` branch with the value and return its result.

        Both branches are required keyword arguments; omitting one raises
        TypeError before either branch runs.
        """
        return ok(self.value)

    def __str__(self) -> str:
        return f'Ok({self.value})'


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[object]]:
        """Return False since this is Err."""
        return False

    def is_ok_and(self, _predicate: Callable[[object], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err.

        This method provides type narrowing - after checking is_err(),
        the type checker knows the result is Err[E].
        """
        return True

    def is_err_and(self, predicate: Callable[[E], bool]) -> bool:
        """Return the predicate applied to the contained error."""
        return predicate(self.error)

    def expect(self, msg: str) -> NoReturn:
        """Panic with ``msg``.

        Args:
            msg: Message embedded in the panic.

        Raises:
            Panic: Always.
        """
        panic(msg)

    def unwrap(self) -> NoReturn:
        """Panic since Err has no Ok value to unwrap.

        Raises:
            Panic: Always, with the default unwrap message.
        """
        panic('called Result.unwrap() on an Err value')

    def expect_err(self, _msg: str) -> E:
        """Return the contained error, ignoring the message."""
        return self.error

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Err."""
        return f()

    def map[T, U](self, _f: Callable[[T], U]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_or[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        """Return the default since this is Err."""
        return default

    def map_or_else[T, U](self, default: Callable[[], U], _f: Callable[[T], U]) -> U:
        """Compute the default since this is Err."""
        return default()

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def and_[U](self, _other: Ok[U] | Err[E]) -> Err[E]:
        """Return self since this is Err."""
        return self

    def and_then[T, U](self, _f: Callable[[T], Ok[U] | Err[E]]) -> Err[E]:
        """Return self without calling f."""
        return self

    flat_map = and_then

    def or_[T, F](self, other: Ok[T] | Err[F]) -> Ok[T] | Err[F]:
        """Return other since this is Err."""
        return other

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def flatten(self) -> Ok[object] | Err[object]:
        """Flatten a Result nested in the error.

        Err(Err(e)) becomes Err(e) and Err(Ok(v)) becomes Ok(v). A non-Result
        error returns self.
        """
        if isinstance(self.error, Ok | Err):
            return self.error.flatten()
        return self

    def match[U](self, *, ok: Callable[[object], U], err: Callable[[E], U]) -> U:
        """Call the ``err`` branch with the error and return its result."""
        return err(self.error)

    def __str__(self) -> str:
        return f'Err({self.error})'


type Result[T, E = Exception] = Ok[T] | Err[E]


def ok[T](value: T) -> Ok[T]:
    """Create a successful Result."""
    return Ok(value)


def err[E](error: E) -> Err[E]:
    """Create a failed Result."""
    return Err(error)


def try_from[T, E](fn: Callable[[], T], error: E) -> Result[T, E]:
    """Call ``fn`` and wrap its return value in Ok.

    The error is a fixed value supplied up front rather than a factory, so it
    exists whether or not ``fn`` raises.

    Args:
        fn: Zero-argument callable that may raise.
        error: Value wrapped in Err if fn raises an Exception.

    Returns:
        Ok(fn()) on success, Err(error) if fn raised.

    Examples:
        >>> import json
        >>> try_from(lambda: json.loads('42'), 'bad').unwrap()
        42
        >>> try_from(lambda: json.loads('invalid'), 'bad').unwrap_err()
        'bad'
    """
    try:
        return Ok(fn())
    except Exception:
        return Err(error)


def from_nullable[T, E](value: T | None, error: E) -> Result[T, E]:
    """Return Err(error) if value is None, else Ok(value)."""
    if value is None:
        return Err(error)
    return Ok(value)


def try_from_nullable[T, E](fn: Callable[[], T | None], error: E) -> Result[T, E]:
    """Call ``fn``; a raised Exception or a None return becomes Err(error)."""
    try:
        return from_nullable(fn(), error)
    except Exception:
        return Err(error)
