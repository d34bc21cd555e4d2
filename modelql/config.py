"""Runtime settings read from the environment (and a ``.env`` file, if present).

Environment variables:
  MODELQL_SCHEMA_PATH  annotated schema file, defaults to ./schema.graphql
  MODELQL_HOST         bind address, defaults to 127.0.0.1
  MODELQL_PORT         port, defaults to 4000
  MODELQL_LOG_LEVEL    logging level name, defaults to INFO
  MODELQL_GRAPHIQL     '1' (default) serves GraphiQL on GET /graphql, '0' disables it
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

__all__ = ['Settings', 'load_settings', 'configure_logging']

DEFAULT_SCHEMA_PATH = './schema.graphql'
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 4000


@dataclass
class Settings:
    schema_path: str = DEFAULT_SCHEMA_PATH
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = 'INFO'
    graphiql: bool = True


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off')


def load_settings(environ: Optional[Mapping[str, str]] = None, *, dotenv: bool = True) -> Settings:
    """Build :class:`Settings` from ``environ`` (defaults to ``os.environ``).

    Raises:
        ValueError: when MODELQL_PORT is not an integer.
    """
    if environ is None:
        if dotenv:
            load_dotenv()
        environ = os.environ
    port_raw = environ.get('MODELQL_PORT')
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError:
        raise ValueError(f"MODELQL_PORT must be an integer, got {port_raw!r}")
    return Settings(
        schema_path=environ.get('MODELQL_SCHEMA_PATH') or DEFAULT_SCHEMA_PATH,
        host=environ.get('MODELQL_HOST') or DEFAULT_HOST,
        port=port,
        log_level=(environ.get('MODELQL_LOG_LEVEL') or 'INFO').upper(),
        graphiql=_flag(environ.get('MODELQL_GRAPHIQL'), True),
    )


def configure_logging(level: str = 'INFO') -> None:
    """Install a basic handler on the root logger; meant for the CLI only."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
