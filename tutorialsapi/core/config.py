"""Runtime settings read from ``TUTORIALS_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_DATABASE_URL = "postgresql+asyncpg://localhost/tutorials"


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Application settings. Build with :meth:`from_env`."""

    database_url: str = DEFAULT_DATABASE_URL
    create_tables: bool = True
    log_level: str = "INFO"
    log_format: str = "console"
    cors_origins: tuple[str, ...] = ("http://localhost:8081",)
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> Settings:
        origins = os.environ.get("TUTORIALS_CORS_ORIGINS", "http://localhost:8081")
        return cls(
            database_url=os.environ.get("TUTORIALS_DATABASE_URL", DEFAULT_DATABASE_URL),
            create_tables=_env_flag("TUTORIALS_CREATE_TABLES", "1"),
            log_level=os.environ.get("TUTORIALS_LOG_LEVEL", "INFO").upper(),
            log_format=os.environ.get("TUTORIALS_LOG_FORMAT", "console").lower(),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            host=os.environ.get("TUTORIALS_HOST", "0.0.0.0"),
            port=int(os.environ.get("TUTORIALS_PORT", "8080")),
        )
