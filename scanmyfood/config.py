"""Configuration loaded from environment variables (and an optional .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from scanmyfood.domain.shared.errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    """
    Application settings.

    Environment Variables:
        OPENAI_API_KEY: Key for the generative model (required for analysis)
        OPENAI_MODEL: Model name (default: gpt-4o)
        OPENAI_TIMEOUT_S: Per-request timeout in seconds (default: 30)
        OPENAI_MAX_ATTEMPTS: Total attempts per call, 2 = one retry
        OPENAI_JSON_MODE: Ask the model for JSON-only output (default: true)
        OPENAI_TEMPERATURE: Sampling temperature (default: 0.2)
        USER_REPOSITORY: "inmemory" | "mongodb" (default: inmemory)
        MONGODB_URI: MongoDB connection string (required for mongodb)
        MONGODB_DATABASE: Database name (default: scanmyfood)
        LOG_LEVEL: Logging level (default: INFO)
        LOG_FORMAT: "console" | "json" (default: console)
    """

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    openai_timeout_s: float = 30.0
    openai_max_attempts: int = 2
    openai_json_mode: bool = True
    openai_temperature: float = 0.2
    user_repository: str = "inmemory"
    mongodb_uri: Optional[str] = None
    mongodb_database: str = "scanmyfood"
    log_level: str = "INFO"
    log_format: str = "console"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from the process environment.

        Args:
            load_env_file: Load a ``.env`` file first (existing variables win)

        Raises:
            ConfigurationError: If a numeric value cannot be parsed
        """
        if load_env_file:
            load_dotenv(override=False)

        max_attempts = _get_int("OPENAI_MAX_ATTEMPTS", 2)
        if max_attempts < 1:
            raise ConfigurationError("OPENAI_MAX_ATTEMPTS must be at least 1")

        timeout = _get_float("OPENAI_TIMEOUT_S", 30.0)
        if timeout <= 0:
            raise ConfigurationError("OPENAI_TIMEOUT_S must be positive")

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o"),
            openai_timeout_s=timeout,
            openai_max_attempts=max_attempts,
            openai_json_mode=_get_bool("OPENAI_JSON_MODE", True),
            openai_temperature=_get_float("OPENAI_TEMPERATURE", 0.2),
            user_repository=os.getenv("USER_REPOSITORY", "inmemory").lower(),
            mongodb_uri=os.getenv("MONGODB_URI") or None,
            mongodb_database=os.getenv("MONGODB_DATABASE", "scanmyfood"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("LOG_FORMAT", "console").lower(),
        )


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get process-wide settings, loading them on first use."""
    global _settings

    if _settings is None:
        _settings = Settings.from_env()

    return _settings


def reset_settings() -> None:
    """Reset the singleton (for testing purposes)."""
    global _settings
    _settings = None
