"""Process configuration: Config, init, get_config."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from triad._logging import configure_logging

__all__ = [
    'Config',
    'get_config',
    'init',
    'reset_config',
]

_TRUE = frozenset({'1', 'true', 'yes', 'on'})
_FALSE = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class Config:
    """Configuration for triad's ambient behaviour.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_output: Render log lines as JSON instead of console output.
        trace_effects: Emit debug events while effects run.
    """

    log_level: str | None = None
    json_output: bool = True
    trace_effects: bool = False


_config: Config | None = None


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, '').strip().lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    logging.warning("Unknown %s value '%s', defaulting to %s", name, raw, default)
    return default


def _env_log_level() -> str | None:
    raw = os.environ.get('TRIAD_LOG_LEVEL', '').strip()
    return raw.upper() or None


def init(
    log_level: str | None = None,
    *,
    json_output: bool | None = None,
    trace_effects: bool | None = None,
) -> Config:
    """Initialize triad with the given configuration.

    Arguments left as None fall back to ``TRIAD_LOG_LEVEL``,
    ``TRIAD_LOG_JSON`` and ``TRIAD_TRACE_EFFECTS``, then to the defaults.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_output: Emit JSON log lines.
        trace_effects: Log effect execution at debug level.

    Returns:
        The Config that was set.

    Example:
        ```python
        import triad

        triad.init(log_level='DEBUG', trace_effects=True)
        ```
    """
    global _config  # noqa: PLW0603

    _config = Config(
        log_level=log_level.upper() if log_level is not None else _env_log_level(),
        json_output=json_output if json_output is not None else _env_flag('TRIAD_LOG_JSON', True),
        trace_effects=trace_effects if trace_effects is not None else _env_flag('TRIAD_TRACE_EFFECTS', False),
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_output)

    return _config


def get_config() -> Config:
    """Get the current configuration.

    When init() has not been called, a Config is built from the environment
    without touching logging handlers.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = Config(
            log_level=_env_log_level(),
            json_output=_env_flag('TRIAD_LOG_JSON', True),
            trace_effects=_env_flag('TRIAD_TRACE_EFFECTS', False),
        )
    return _config


def reset_config() -> None:
    """Forget the current configuration."""
    global _config  # noqa: PLW0603

    _config = None
