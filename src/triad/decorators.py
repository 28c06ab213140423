"""@optional and @fallible decorators lifting raising functions into containers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import wrapt

from triad import option, result
from triad.option import Option
from triad.result import Result

__all__ = ['fallible', 'optional']


def optional[**P, T](func: Callable[P, T | None]) -> Callable[P, Option[T]]:
    """Decorator that returns Some(value), or Nothing on None or an Exception.

    Example:
        ```python
        @optional
        def first_line(path: str) -> str | None:
            with open(path) as f:
                return f.readline() or None

        first_line('missing.txt')
        # NothingType()
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T | None],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Option[T]:
        return option.try_from_nullable(lambda: wrapped(*args, **kwargs))

    return wrapper(func)


def fallible[E](error: E) -> Callable[[Callable[..., Any]], Callable[..., Result[Any, E]]]:
    """Decorator factory that returns Ok(value), or Err(error) on an Exception.

    The error is fixed when the function is decorated, matching
    ``result.try_from``.

    Args:
        error: Value wrapped in Err whenever the function raises.

    Example:
        ```python
        @fallible('not a number')
        def parse(text: str) -> int:
            return int(text)

        parse('12')
        # Ok(value=12)
        parse('x')
        # Err(error='not a number')
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[Any, E]:
        return result.try_from(lambda: wrapped(*args, **kwargs), error)

    return wrapper
