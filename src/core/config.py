"""Settings, read from the environment once."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Self

ENV_PREFIX = "CHESS3D_"


def _env(name: str, default: str) -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./chess3d.db"
    log_level: str = "INFO"
    echo_sql: bool = False
    # Seed for the automated opponent's tie-breaking. None: a different game every time.
    ai_seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> Self:
        return cls(
            database_url=_env("DATABASE_URL", cls.database_url),
            log_level=_env("LOG_LEVEL", cls.log_level).upper(),
            echo_sql=_env("ECHO_SQL", "").lower() in ("1", "true", "yes"),
            ai_seed=_optional_int("AI_SEED"),
        )


def _optional_int(name: str) -> Optional[int]:
    value = _env(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(
            f"{ENV_PREFIX}{name} must be an integer, got {value!r}"
        ) from exc


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
