'''
Settings for md5kit.

Resolution order, later wins:
    1. packaged defaults (util/defaults.yaml)
    2. an optional user YAML file
    3. MD5KIT_* environment variables
'''

import logging
import os
from pathlib import Path

from md5kit.util.fileio import FileIO

DEFAULTS_FILE = 'util/defaults.yaml'
ENV_PREFIX = 'MD5KIT_'

_cached: dict | None = None


def _coerce(key: str, value, default):
    if isinstance(default, bool):
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ('1', 'true', 'yes', 'on'):
                return True
            if lowered in ('0', 'false', 'no', 'off'):
                return False
            raise ValueError(f'{key}: expected a boolean, got {value!r}')
        return bool(value)

    if isinstance(default, int):
        try:
            value = int(value)
        except (TypeError, ValueError):
            raise ValueError(f'{key}: expected an integer, got {value!r}') from None
        if value <= 0:
            raise ValueError(f'{key}: must be positive, got {value}')
        return value

    if key == 'log_level':
        name = str(value).strip().upper()
        # known names map to their numeric level
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f'{key}: unknown logging level {value!r}')
        return name

    return str(value)


def load_config(path: str | Path | None = None, env: dict | None = None) -> dict:
    '''
    Build the settings dictionary.

    Parameters:
    -----------
    path : str | Path | None
        Optional YAML file whose top-level mapping overrides the defaults.

    env : dict | None
        Environment to read MD5KIT_* overrides from. Defaults to os.environ.

    Returns:
    --------
    dict
        Settings with keys `chunk_size`, `log_level`, `log_color`.
    '''
    defaults = FileIO.load_yaml(DEFAULTS_FILE)
    config = dict(defaults)

    if path is not None:
        user = FileIO.load_yaml(Path(path).resolve()) or {}
        if not isinstance(user, dict):
            raise ValueError(f'{path}: expected a mapping, got {type(user).__name__}')

        unknown = set(user) - set(defaults)
        if unknown:
            raise ValueError(f'{path}: unknown setting(s) {", ".join(sorted(unknown))}')

        for key, value in user.items():
            config[key] = _coerce(key, value, defaults[key])

    env = os.environ if env is None else env
    for key in defaults:
        value = env.get(ENV_PREFIX + key.upper())
        if value is not None:
            config[key] = _coerce(key, value, defaults[key])

    return config


def get_config() -> dict:
    '''Cached settings from the defaults and the environment.'''
    global _cached
    if _cached is None:
        _cached = load_config()
    return _cached


def reset_config() -> None:
    global _cached
    _cached = None
