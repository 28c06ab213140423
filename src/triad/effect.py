"""Effect type for deferred asynchronous computations.

An Effect holds a zero-argument producer returning an awaitable. Nothing
runs until ``run()`` is called, and every call runs the producer again:
results are never cached, so a shared Effect that must execute exactly once
has to be run once by its owner.

Example:
    ```python
    from triad.effect import Effect

    pipeline = (
        Effect.from_(4)
        .chain(lambda x: Effect.from_(x + 2))
        .chain(lambda x: Effect.from_(x * 3))
        .catch(lambda error: Effect.from_(0))
    )

    async def main():
        assert await pipeline.run() == 18
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Generator
from typing import Any, ClassVar

import anyio

from triad._config import get_config
from triad._logging import emit

__all__ = ['Effect', 'effect']


class Effect[T]:
    """Deferred, re-runnable asynchronous computation producing a T.

    Attributes:
        unit: Shared Effect resolving to None, a neutral start for chains.
    """

    __slots__ = ('_producer',)

    unit: ClassVar[Effect[None]]

    def __init__(self, producer: Callable[[], Awaitable[T]]) -> None:
        """Store the producer without calling it.

        Args:
            producer: Zero-argument callable returning an awaitable of T.
        """
        self._producer = producer

    @classmethod
    def from_(cls, value: T | Effect[T]) -> Effect[T]:
        """Create an Effect from a constant value or another Effect.

        An Effect argument shares its producer instead of being wrapped, so
        ``Effect.from_(Effect.from_(1))`` runs to 1, not to an Effect.

        Args:
            value: The constant to resolve with, or an Effect to copy.

        Returns:
            A new Effect.
        """
        if isinstance(value, Effect):
            return cls(value._producer)

        async def _constant() -> T:
            return value  # type: ignore[return-value]

        return cls(_constant)

    @classmethod
    def from_async(cls, producer: Callable[[], Awaitable[T]]) -> Effect[T]:
        """Wrap an awaitable-returning producer.

        Example:
            ```python
            async def fetch() -> bytes:
                ...

            body = Effect.from_async(fetch)
            ```
        """
        return cls(producer)

    def chain[U](self, mapper: Callable[[T], Effect[U]]) -> Effect[U]:
        """Sequence another Effect after this one.

        When run, awaits this Effect, passes the value to ``mapper`` and
        awaits the Effect it returns. ``mapper`` is not called until this
        Effect has produced a value, and an exception from either stage
        propagates out of ``run()``.

        Args:
            mapper: Function from this Effect's value to the next Effect.

        Returns:
            Effect resolving to the second stage's value.

        Raises:
            TypeError: When run, if ``mapper`` returns something other than
                an Effect.
        """

        async def _chained() -> U:
            value = await self._producer()
            if get_config().trace_effects:
                emit('effect', 'effect.chain', value=repr(value))
            return await _expect_effect(mapper(value), 'chain mapper')._producer()

        return Effect(_chained)

    def catch(self, handler: Callable[[Exception], Effect[T]]) -> Effect[T]:
        """Recover from an exception raised while running this Effect.

        ``handler`` is called only if running this Effect raises an
        Exception; the Effect it returns runs in its place. Failures of the
        recovery Effect are not handled. BaseExceptions such as Panic and
        cancellation are never passed to the handler.

        Args:
            handler: Function from the raised exception to a recovery Effect.

        Returns:
            Effect with one layer of recovery.
        """

        async def _caught() -> T:
            try:
                return await self._producer()
            except Exception as e:
                if get_config().trace_effects:
                    emit('effect', 'effect.recovered', error=repr(e))
                recovery = _expect_effect(handler(e), 'catch handler')
            return await recovery._producer()

        return Effect(_caught)

    def run(self) -> Awaitable[T]:
        """Invoke the producer and return its awaitable.

        Each call is an independent execution.
        """
        if get_config().trace_effects:
            emit('effect', 'effect.run', producer=getattr(self._producer, '__qualname__', repr(self._producer)))
        return self._producer()

    def run_sync(self, *, backend: str = 'asyncio') -> T:
        """Run to completion from synchronous code.

        Must not be called from inside a running event loop.

        Args:
            backend: anyio backend name ("asyncio" or "trio").

        Returns:
            The produced value.
        """

        async def _main() -> T:
            return await self.run()

        return anyio.run(_main, backend=backend)

    def __await__(self) -> Generator[Any, Any, T]:
        """Support ``await effect`` as shorthand for ``await effect.run()``."""

        async def _main() -> T:
            return await self.run()

        return _main().__await__()

    def __repr__(self) -> str:
        name = getattr(self._producer, '__qualname__', None) or repr(self._producer)
        return f'Effect({name})'


Effect.unit = Effect.from_(None)


def _expect_effect[T](value: Effect[T], role: str) -> Effect[T]:
    if not isinstance(value, Effect):
        raise TypeError(f'{role} must return an Effect, got {type(value).__name__}')
    return value


def effect[T](producer: Callable[[], Awaitable[T]]) -> Effect[T]:
    """Shorthand for ``Effect.from_async(producer)``."""
    return Effect.from_async(producer)
