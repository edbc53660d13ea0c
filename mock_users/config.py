"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Defaults: users.json in the working directory, port 4010

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Duplicate-id rejection and persist rollback are opt-in switches, off by default
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    users_file: Path = Path("users.json")
    rollback_on_persist_failure: bool = False
    reject_duplicate_ids: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 4010

    # Problem payloads
    problem_type_uri: str = "https://example.com/problemdetails"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
