"""Application settings read from the environment.

Settings are built once at startup (after load_dotenv) and passed explicitly
to whatever assembles the adapters. Nothing reads os.environ afterwards.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping

STORAGE_BACKENDS = ('memory', 'mongodb')

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Invalid boolean setting: {raw!r}")


@dataclass(frozen=True)
class Settings:
    storage_backend: str = 'memory'
    mongo_url: str | None = None
    mongo_database: str = 'users'
    mongo_timeout_ms: int = 5000
    use_transactions: bool = True
    cors_origins: str = '*'
    log_level: str = 'INFO'
    host: str = '0.0.0.0'
    port: int = 8000

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {STORAGE_BACKENDS}, got {self.storage_backend!r}"
            )
        if self.storage_backend == 'mongodb' and not self.mongo_url:
            raise ValueError("MONGO_URL is required when STORAGE_BACKEND=mongodb")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {self.log_level!r}")

    @property
    def cors_origin_list(self) -> list[str]:
        """Explicit origins, stripped. Empty when CORS_ORIGINS is the wildcard."""
        if self.cors_origins.strip() == '*':
            return []
        return [origin.strip() for origin in self.cors_origins.split(',') if origin.strip()]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'Settings':
        """Build settings from environment variables.

        Raises:
            ValueError: a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        try:
            timeout_ms = int(env.get('MONGO_TIMEOUT_MS', 5000))
            port = int(env.get('PORT', 8000))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}") from e

        return cls(
            storage_backend=env.get('STORAGE_BACKEND', 'memory').strip().lower(),
            mongo_url=env.get('MONGO_URL') or None,
            mongo_database=env.get('MONGODB_DATABASE', 'users'),
            mongo_timeout_ms=timeout_ms,
            use_transactions=_parse_bool(env.get('USE_TRANSACTIONS', 'true')),
            cors_origins=env.get('CORS_ORIGINS', '*'),
            log_level=env.get('LOG_LEVEL', 'INFO').upper(),
            host=env.get('HOST', '0.0.0.0'),
            port=port,
        )
