"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: the service starts with the built-in GEDCOM X contract
    - get_settings() is cached (lru_cache): one instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - RS_CONTRACTS_ prefix keeps the variables from colliding with the probed server's
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RS_CONTRACTS_", env_file=".env", case_sensitive=False,
    )

    # Contract source; None means the built-in GEDCOM X definitions
    contract_document: Path | None = None

    # Validation at startup
    closed_world_validation: bool = False
    strict_startup: bool = False

    # Live contract checking
    check_base_url: str = "http://localhost:8080"
    check_timeout_seconds: float = 30.0
    check_concurrency: int = 8

    @field_validator("check_concurrency")
    @classmethod
    def positive_concurrency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("check_concurrency must be >= 1")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
