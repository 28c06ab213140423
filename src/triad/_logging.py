"""Structured logging for triad events.

Every event triad emits goes through ``emit`` on the ``triad`` logger and is
tagged with ``namespace='triad'`` and the emitting ``component`` ("panic",
"effect"). Event hooks see only those tagged events, so application logs
routed through the same handler never reach them.

Handlers are installed by ``configure_logging`` (called from
``triad.init(log_level=...)``), using structlog's ProcessorFormatter so
stdlib records from other libraries render the same way.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog

__all__ = [
    'NAMESPACE',
    'EventHook',
    'add_event_hook',
    'clear_event_hooks',
    'configure_logging',
    'emit',
    'get_logger',
    'remove_event_hook',
]

NAMESPACE = 'triad'

type EventHook = Callable[[dict[str, Any]], None]

_event_hooks: list[EventHook] = []


def _tag_namespace(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    name = event_dict.get('logger', '')
    if name == NAMESPACE or name.startswith(f'{NAMESPACE}.'):
        event_dict['namespace'] = NAMESPACE
    return event_dict


def _dispatch_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    if event_dict.get('namespace') != NAMESPACE:
        return event_dict
    for hook in tuple(_event_hooks):
        try:
            hook(dict(event_dict))
        except Exception:  # noqa: S110
            pass  # a failing hook must not break logging
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _tag_namespace,
        structlog.processors.TimeStamper(fmt='iso'),
        _dispatch_hooks,
    ]


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: Render JSON lines instead of colored console output.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger; None gives the ``triad`` logger."""
    return structlog.get_logger(name or NAMESPACE)


def emit(component: str, event: str, *, level: str = 'debug', **fields: Any) -> None:
    """Log a triad event.

    Args:
        component: Emitting part of triad, e.g. "panic" or "effect".
        event: Event name, e.g. "effect.run".
        level: structlog method name used to log the event.
        **fields: Extra key/value pairs for the event.
    """
    getattr(get_logger(), level)(event, component=component, **fields)


def add_event_hook(hook: EventHook) -> None:
    """Call ``hook`` with a copy of every triad event dict.

    Example:
        ```python
        panics = []
        triad.add_event_hook(lambda e: e['event'] == 'panic' and panics.append(e))
        ```
    """
    _event_hooks.append(hook)


def remove_event_hook(hook: EventHook) -> None:
    """Unregister a hook; unknown hooks are ignored."""
    if hook in _event_hooks:
        _event_hooks.remove(hook)


def clear_event_hooks() -> None:
    _event_hooks.clear()
