"""Environment-driven settings.

Environment variables:
  ROSTERQL_DATABASE_URL   SQLAlchemy async URL (default sqlite+aiosqlite:///:memory:)
  ROSTERQL_API_ROOT_URL   prefix for member image paths (default empty)
  ROSTERQL_STORE_TIMEOUT  seconds to wait for the member store (default: no limit)
  SQL_ECHO                set to '1' to log SQL
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

DEFAULT_DATABASE_URL = 'sqlite+aiosqlite:///:memory:'


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    api_root_url: str = ''
    store_timeout: Optional[float] = None
    sql_echo: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        env = os.environ if environ is None else environ
        raw_timeout = (env.get('ROSTERQL_STORE_TIMEOUT') or '').strip()
        timeout = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"ROSTERQL_STORE_TIMEOUT must be a number, got {raw_timeout!r}")
            if timeout <= 0:
                raise ValueError("ROSTERQL_STORE_TIMEOUT must be positive")
        return cls(
            database_url=env.get('ROSTERQL_DATABASE_URL') or DEFAULT_DATABASE_URL,
            api_root_url=env.get('ROSTERQL_API_ROOT_URL', ''),
            store_timeout=timeout,
            sql_echo=env.get('SQL_ECHO', '0') == '1',
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
