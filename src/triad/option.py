"""Option type: Some[T] | Nothing for optional values.

Example:
    ```python
    from triad.option import Nothing, Some, from_nullable

    user = from_nullable(lookup.get('alice'))
    greeting = user.map(lambda name: f'hi {name}').unwrap_or('who?')

    match Some(42).filter(lambda x: x > 40):
        case Some(value):
            print(value)  # 42
        case _:
            print('nothing')
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn, TypedDict, TypeIs

import msgspec

from triad._panic import panic
from triad.result import Err, Ok

__all__ = [
    'Nothing',
    'NothingType',
    'Option',
    'OptionPattern',
    'Some',
    'from_nullable',
    'none',
    'some',
    'try_from',
    'try_from_nullable',
]


class OptionPattern[T, U](TypedDict):
    """Branches for ``Option.match(**pattern)``."""

    some: Callable[[T], U]
    none: Callable[[], U]


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Some represents the presence of a value. ``Some(None)`` is a present
    value and is never equal to Nothing.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
        >>> str(some)
        'Some(42)'
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True if the option is Some.

        This method provides type narrowing - after checking is_some(),
        the type checker knows the option is Some[T].
        """
        return True

    def is_some_and(self, predicate: Callable[[T], bool]) -> bool:
        """Return the predicate applied to the contained value."""
        return predicate(self.value)

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def expect(self, _msg: str) -> T:
        """Return the contained Some value, ignoring the message."""
        return self.value

    def unwrap(self) -> T:
        """Return the contained Some value."""
        return self.value

    def unwrap_or(self, _default: T) -> T:
        """Return the contained Some value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, _f: Callable[[], T]) -> T:
        """Return the contained Some value without calling the fallback."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def map_or[U](self, _default: U, f: Callable[[T], U]) -> U:
        """Return f applied to the value."""
        return f(self.value)

    def map_or_else[U](self, _default: Callable[[], U], f: Callable[[T], U]) -> U:
        """Return f applied to the value without computing the default."""
        return f(self.value)

    def and_then[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Apply a function that returns an Option to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    flat_map = and_then

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Return self if the predicate holds for the value, else Nothing."""
        if predicate(self.value):
            return self
        return Nothing

    def flatten(self) -> Some[object] | NothingType:
        """Flatten nested Options.

        Recurses while the payload is itself an Option, so Some(Some(Some(1)))
        becomes Some(1) and Some(Nothing) becomes Nothing. A non-Option
        payload returns self.
        """
        if isinstance(self.value, Some | NothingType):
            return self.value.flatten()
        return self

    def and_[U](self, other: Some[U] | NothingType) -> Some[U] | NothingType:
        """Return other since self is Some."""
        return other

    def or_(self, _other: Some[T] | NothingType) -> Some[T]:
        """Return self since this is Some."""
        return self

    def or_else(self, _f: Callable[[], Some[T] | NothingType]) -> Some[T]:
        """Return self without calling the fallback."""
        return self

    def ok_or[E](self, _err: E) -> Ok[T]:
        """Convert to Result, returning Ok(value)."""
        return Ok(self.value)

    def ok_or_else[E](self, _f: Callable[[], E]) -> Ok[T]:
        """Convert to Result without calling the error factory."""
        return Ok(self.value)

    def match[U](self, *, some: Callable[[T], U], none: Callable[[], U]) -> U:
        """Call the ``some`` branch with the value and return its result.

        Both branches are required keyword arguments; omitting one raises
        TypeError before either branch runs.
        """
        return some(self.value)

    def __str__(self) -> str:
        return f'Some({self.value})'


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    This is a singleton - use the `Nothing` constant instead of
    instantiating directly.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.unwrap_or(0)
        0
        >>> str(Nothing)
        'None'
    """

    def is_some(self) -> TypeIs[Some[object]]:
        """Return False since this is Nothing."""
        return False

    def is_some_and(self, _predicate: Callable[[object], bool]) -> bool:
        """Return False without calling the predicate."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True if the option is Nothing."""
        return True

    def expect(self, msg: str) -> NoReturn:
        """Panic with ``msg``.

        Raises:
            Panic: Always.
        """
        panic(msg)

    def unwrap(self) -> NoReturn:
        """Panic since Nothing has no value to unwrap.

        Raises:
            Panic: Always, with the default unwrap message.
        """
        panic('called Option.unwrap() on a None value')

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Nothing."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Nothing."""
        return f()

    def map[T, U](self, _f: Callable[[T], U]) -> NothingType:
        """Return Nothing since there's no value to map."""
        return self

    def map_or[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        """Return the default since this is Nothing."""
        return default

    def map_or_else[T, U](self, default: Callable[[], U], _f: Callable[[T], U]) -> U:
        """Compute the default since this is Nothing."""
        return default()

    def and_then[T, U](self, _f: Callable[[T], Some[U] | NothingType]) -> NothingType:
        """Return Nothing since there's no value to bind."""
        return self

    flat_map = and_then

    def filter[T](self, _predicate: Callable[[T], bool]) -> NothingType:
        """Return Nothing since there's no value to filter."""
        return self

    def flatten(self) -> NothingType:
        """Return Nothing since there's nothing to flatten."""
        return self

    def and_[U](self, _other: Some[U] | NothingType) -> NothingType:
        """Return Nothing since self is Nothing."""
        return self

    def or_[T](self, other: Some[T] | NothingType) -> Some[T] | NothingType:
        """Return other since self is Nothing."""
        return other

    def or_else[T](self, f: Callable[[], Some[T] | NothingType]) -> Some[T] | NothingType:
        """Apply a recovery function since this is Nothing.

        Args:
            f: Function that returns a new Option.

        Returns:
            The Option returned by f.
        """
        return f()

    def ok_or[E](self, err: E) -> Err[E]:
        """Convert to Result, returning Err(err)."""
        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Err[E]:
        """Convert to Result, computing the error.

        Args:
            f: Function that produces the error value.

        Returns:
            Err containing the computed error.
        """
        return Err(f())

    def match[U](self, *, some: Callable[[object], U], none: Callable[[], U]) -> U:
        """Call the ``none`` branch and return its result."""
        return none()

    def __str__(self) -> str:
        return 'None'


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Option[T] = Some[T] | NothingType


def some[T](value: T) -> Some[T]:
    """Create an Option holding ``value``."""
    return Some(value)


def none() -> NothingType:
    """Return the shared Nothing instance."""
    return Nothing


def from_nullable[T](value: T | None) -> Option[T]:
    """Return Nothing if value is None, else Some(value).

    Examples:
        >>> from_nullable(None)
        NothingType()
        >>> from_nullable(0)
        Some(value=0)
    """
    if value is None:
        return Nothing
    return Some(value)


def try_from[T](fn: Callable[[], T]) -> Option[T]:
    """Call ``fn``; Some(result) on success, Nothing if it raised an Exception."""
    try:
        return Some(fn())
    except Exception:
        return Nothing


def try_from_nullable[T](fn: Callable[[], T | None]) -> Option[T]:
    """Call ``fn``; a raised Exception or a None return becomes Nothing."""
    try:
        return from_nullable(fn())
    except Exception:
        return Nothing
