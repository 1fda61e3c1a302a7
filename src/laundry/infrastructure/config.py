"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from laundry.domain.exceptions import ValidationError

# The project root when installed in editable mode.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_DATABASE_URL = f"sqlite:///{_DATA_DIR / 'laundry.db'}"
DEFAULT_LOCK_TIMEOUT_MS = 5000

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    lock_timeout_ms: int = DEFAULT_LOCK_TIMEOUT_MS
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def sqlite_path(self) -> Path | None:
        """Filesystem path of a file-backed SQLite database, else None."""
        prefix = "sqlite:///"
        if not self.database_url.startswith(prefix):
            return None
        path = self.database_url[len(prefix):]
        if not path or path == ":memory:":
            return None
        return Path(path)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        raw_timeout = env.get("LAUNDRY_LOCK_TIMEOUT_MS", str(DEFAULT_LOCK_TIMEOUT_MS))
        try:
            lock_timeout_ms = int(raw_timeout)
        except ValueError as exc:
            raise ValidationError(
                f"LAUNDRY_LOCK_TIMEOUT_MS must be an integer, got {raw_timeout!r}"
            ) from exc
        if lock_timeout_ms <= 0:
            raise ValidationError("LAUNDRY_LOCK_TIMEOUT_MS must be positive")

        return cls(
            database_url=env.get("LAUNDRY_DATABASE_URL", DEFAULT_DATABASE_URL),
            lock_timeout_ms=lock_timeout_ms,
            log_level=env.get("LAUNDRY_LOG_LEVEL", "INFO").upper(),
            sql_echo=env.get("LAUNDRY_SQL_ECHO", "").strip().lower() in _TRUTHY,
        )
