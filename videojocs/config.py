"""Runtime configuration and logging setup."""
import logging
import os
from typing import Any, Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

DEFAULTS: Dict[str, Any] = {
    'db_path': 'Videojocs_DB.txt',
    'base_path': '/videojocs',
    'host': '127.0.0.1',
    'port': 8000,
    'log_level': 'INFO',
    'atomic_writes': False,
    'serialize_writes': False,
}

ENV_VARS = {
    'db_path': 'VIDEOJOCS_DB_PATH',
    'base_path': 'VIDEOJOCS_BASE_PATH',
    'host': 'VIDEOJOCS_HOST',
    'port': 'VIDEOJOCS_PORT',
    'log_level': 'VIDEOJOCS_LOG_LEVEL',
    'atomic_writes': 'VIDEOJOCS_ATOMIC_WRITES',
    'serialize_writes': 'VIDEOJOCS_SERIALIZE_WRITES',
}

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def setup_logging(level: str = 'INFO') -> logging.Logger:
    """Attach one stderr handler to the ``videojocs`` logger and set its level.

    Called once by ``videojocs_server.main`` with the configured
    ``VIDEOJOCS_LOG_LEVEL``; calling it again only changes the level.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL.  Unknown names fall
               back to INFO.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger('videojocs')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


def load_config(environ: Optional[Mapping[str, str]] = None,
                dotenv: bool = True) -> Dict[str, Any]:
    """Build the configuration dict from defaults and environment variables.

    When *environ* is omitted the process environment is used, after loading
    a ``.env`` file from the working directory if one exists (variables that
    are already set win over the file).

    Raises:
        ValueError: if ``VIDEOJOCS_PORT`` is not an integer.
    """
    if environ is None:
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ
    config = dict(DEFAULTS)
    for key, var in ENV_VARS.items():
        value = environ.get(var)
        if not value:
            continue
        if key == 'port':
            try:
                config[key] = int(value)
            except ValueError:
                raise ValueError(f'{var} must be an integer, got {value!r}') from None
        elif isinstance(DEFAULTS[key], bool):
            config[key] = value.strip().lower() in _TRUE_VALUES
        else:
            config[key] = value
    config['base_path'] = normalize_base_path(config['base_path'])
    return config


def normalize_base_path(base_path: str) -> str:
    """Return *base_path* with one leading slash and no trailing slash.

    ``'/'`` and ``''`` both normalise to ``''`` (routes mounted at the root).
    """
    stripped = base_path.strip().strip('/')
    return f'/{stripped}' if stripped else ''
