"""Configuration loading for the casefile test runner.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv. Every variable carries the
    ``CASEFILE_`` prefix, e.g. ``CASEFILE_LOG_LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CASEFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Discovery configuration
    test_root: str = Field(
        default=".",
        description="Directory searched for document sources",
    )
    suffixes: list[str] = Field(
        default_factory=lambda: [".test.yaml", ".test.yml", ".spec.yaml", ".spec.yml"],
        description="Filename suffixes recognized as document sources",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of document sources",
    )

    # Execution configuration
    fail_fast: bool = Field(
        default=False,
        description="Stop after the first failed source or case",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Output
    verbose: bool = Field(
        default=False,
        description="Report passing cases as well as failures",
    )

    @field_validator("suffixes")
    @classmethod
    def validate_suffixes(cls, v: list[str]) -> list[str]:
        """Ensure at least one suffix is configured and each looks like one."""
        if not v:
            raise ValueError("suffixes must not be empty")
        for suffix in v:
            if not suffix.startswith("."):
                raise ValueError(f"suffix {suffix!r} must start with '.'")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept lower-case level names from the environment."""
        if isinstance(v, str):
            return v.upper()
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
