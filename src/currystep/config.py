from __future__ import annotations
import logging
import os

# Defaults
_DEFAULT_MAX_STEPS = 10000
_DEFAULT_LOG_LEVEL = 'WARNING'

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f'{var} must be an integer, got {raw!r}') from None
    if value < 0:
        raise ValueError(f'{var} must not be negative, got {value}')
    return value


def bool_from_env(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f'{var} must be one of {sorted(_TRUE | _FALSE)}, got {raw!r}')


def get_max_steps() -> int:
    """ Bound on the number of reductions in the command line driver. 0 means no bound. """
    return int_from_env('CURRYSTEP_MAX_STEPS', _DEFAULT_MAX_STEPS)


def get_origins() -> bool:
    return bool_from_env('CURRYSTEP_ORIGINS', True)


def get_log_level() -> int:
    raw = os.environ.get('CURRYSTEP_LOG_LEVEL') or _DEFAULT_LOG_LEVEL
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f'CURRYSTEP_LOG_LEVEL is not a log level: {raw!r}')
    return level
