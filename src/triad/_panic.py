"""Unrecoverable abort: panic, todo, unimplemented."""

from __future__ import annotations

from typing import NoReturn

from triad._config import get_config
from triad._logging import emit

__all__ = ['Panic', 'panic', 'todo', 'unimplemented']


class Panic(BaseException):  # noqa: N818
    """Fatal signal raised on a contract violation.

    Derives from BaseException so that ``except Exception`` handlers,
    including the ``try_from`` family and ``Effect.catch``, never swallow it.
    """

    __slots__ = ('_message',)

    def __init__(self, message: str) -> None:
        """Initialize Panic with the raw message.

        Args:
            message: Text describing the violated contract.
        """
        self._message = message
        super().__init__(f"panicked at '{message}'")

    @property
    def message(self) -> str:
        """The message passed to panic()."""
        return self._message


def panic(message: str = 'explicit panic') -> NoReturn:
    """Abort the current execution path.

    Args:
        message: Embedded in the raised signal as ``panicked at '<message>'``.

    Raises:
        Panic: Always.
    """
    if get_config().log_level is not None:
        emit('panic', 'panic', level='error', message=message)
    raise Panic(message)


def unimplemented(message: str | None = None) -> NoReturn:
    """Panic marking code that is deliberately not implemented."""
    return panic(f'not implemented: {message}' if message else 'not implemented')


def todo(message: str | None = None) -> NoReturn:
    """Panic marking code that is not implemented yet."""
    return panic(f'not yet implemented: {message}' if message else 'not yet implemented')
