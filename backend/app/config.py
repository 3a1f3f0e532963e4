from pathlib import Path
from typing import Annotated, Any, List, Tuple
import json
import logging
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_log = logging.getLogger(__name__)

DEFAULT_SEED_PATH = str(Path(__file__).parent / "data" / "seed.json")

DEFAULT_VALIDATION_RULES = [
    ("/items", "POST"),
    ("/items/*", "PUT"),
    ("/serial-numbers", "POST"),
    ("/serial-numbers/*", "PUT"),
    ("/rooms", "POST"),
    ("/rooms/*", "PUT"),
]


def _split_csv(value: str) -> List[str]:
    return [p.strip() for p in value.split(",") if p.strip()]


def _parse_validation_rules(raw: Any) -> List[Tuple[str, str]]:
    """Normalize validation rules to a list of ``(path_pattern, METHOD)`` tuples.

    Accepts a semicolon-separated string (``"/items:POST;/rooms/*:PUT"``), a list of
    ``"path:method"`` strings, or a list of 2-item tuples. A pattern ending in ``*``
    matches by prefix.
    """
    if not raw:
        return []

    entries = [p.strip() for p in raw.split(";")] if isinstance(raw, str) else list(raw)
    rules = []
    for entry in entries:
        if isinstance(entry, (list, tuple)) and len(entry) >= 2:
            rules.append((str(entry[0]).strip(), str(entry[1]).strip().upper()))
            continue
        s = str(entry).strip()
        if ":" in s:
            path, method = s.split(":", 1)
            rules.append((path.strip(), method.strip().upper()))
    return rules


class Settings(BaseSettings):
    PROJECT_NAME: str = "lab-inventory"
    DEBUG: bool = False
    DATABASE_URL: str = "sqlite:///./inventory.db"
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:3000"]
    FORCE_HTTPS: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Empty string disables seeding on startup
    SEED_DATA_PATH: str = DEFAULT_SEED_PATH

    VALIDATION_RULES: Annotated[List[Tuple[str, str]], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_VALIDATION_RULES)
    )

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def _parse_origins(cls, v):
        # Accept JSON list or comma-separated string from env
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                try:
                    return json.loads(s)
                except ValueError:
                    _log.warning("ALLOWED_ORIGINS is not valid JSON; splitting on commas")
            return _split_csv(s.strip("[]"))
        return v

    @field_validator("VALIDATION_RULES", mode="before")
    def _parse_rules(cls, v):
        return _parse_validation_rules(v)


settings = Settings()
