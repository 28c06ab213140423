"""triad: Option, Result and Effect containers for Python 3.13+.

Flat imports (preferred):
    from triad import Option, Some, Nothing, Result, Ok, Err, Effect
    from triad import some, none, ok, err, effect, panic

Submodule imports (for the constructors whose names overlap):
    from triad import option, result
    option.try_from(lambda: int('x'))          # NothingType()
    result.try_from(lambda: int('x'), 'nan')   # Err(error='nan')
"""

from triad import option, result
from triad._config import Config, get_config, init, reset_config
from triad._logging import add_event_hook, clear_event_hooks, configure_logging, remove_event_hook
from triad._panic import Panic, panic, todo, unimplemented
from triad.decorators import fallible, optional
from triad.effect import Effect, effect
from triad.option import (
    Nothing,
    NothingType,
    Option,
    OptionPattern,
    Some,
    none,
    some,
)
from triad.result import (
    Err,
    Ok,
    Result,
    ResultPattern,
    err,
    ok,
)

__all__ = [
    # Configuration
    'Config',
    # Effect
    'Effect',
    # Result types
    'Err',
    # Option types
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'OptionPattern',
    # Panics
    'Panic',
    'Result',
    'ResultPattern',
    'Some',
    # Logging
    'add_event_hook',
    'clear_event_hooks',
    'configure_logging',
    'effect',
    'err',
    # Decorators
    'fallible',
    'get_config',
    'init',
    'none',
    'ok',
    'option',
    'optional',
    'panic',
    'remove_event_hook',
    'reset_config',
    'result',
    'some',
    'todo',
    'unimplemented',
]
