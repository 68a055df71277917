"""Runtime settings read from the environment (or a ``.env`` file).

Every setting has a default so the CLI works out of the box against a
SQLite file under ``<project>/data``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from decouple import Choices, config

from stockflow.application.atomic import DEFAULT_MAX_ATTEMPTS

BINDING_ORM = "orm"
BINDING_SQL = "sql"
BINDINGS = (BINDING_ORM, BINDING_SQL)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_DATABASE_URL = f"sqlite:///{_DATA_DIR / 'stockflow.db'}"


@dataclass(frozen=True)
class Settings:

    database_url: str = DEFAULT_DATABASE_URL
    binding: str = BINDING_ORM
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    log_level: str = "INFO"
    log_json: bool = False
    sql_echo: bool = False

    def __post_init__(self) -> None:
        if self.binding not in BINDINGS:
            raise ValueError(
                f"Unknown persistence binding {self.binding!r}, "
                f"expected one of {', '.join(BINDINGS)}"
            )
        if self.max_attempts < 1:
            raise ValueError("STOCKFLOW_MAX_ATTEMPTS must be at least 1")

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            database_url=config("STOCKFLOW_DATABASE_URL", default=DEFAULT_DATABASE_URL),
            binding=config(
                "STOCKFLOW_BINDING", default=BINDING_ORM, cast=Choices(BINDINGS)
            ),
            max_attempts=config(
                "STOCKFLOW_MAX_ATTEMPTS", default=DEFAULT_MAX_ATTEMPTS, cast=int
            ),
            log_level=config("STOCKFLOW_LOG_LEVEL", default="INFO").upper(),
            log_json=config("STOCKFLOW_LOG_JSON", default=False, cast=bool),
            sql_echo=config("STOCKFLOW_SQL_ECHO", default=False, cast=bool),
        )
