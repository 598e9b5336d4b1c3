"""Configuration management for the fact board and its store service.

Provides:
- Config: base class with dict / JSON round-tripping
- AppConfig: settings of the FastAPI store service, read from the environment
- BoardConfig: settings of the board's HTTP store client, read from the environment

All env vars have defaults so both sides work without any configuration.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

# Hard cap on rows per retrieval; mirrors board.models.MAX_FETCH_LIMIT.
_MAX_FETCH_LIMIT = 1000


def _env_int(name: str, default: int) -> int:
    """Read an integer env var, raising ValueError with the variable name on junk."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_csv(name: str, default: str = "") -> list[str]:
    raw = os.getenv(name, default)
    return [p.strip() for p in raw.split(",") if p.strip()]


class Config:
    """Base configuration class for organizing application settings."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all public config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance with defaults overridden by the dictionary values
        """
        config = cls()
        for key, value in data.items():
            setattr(config, key, value)
        return config

    def save_json(self, path: Path) -> None:
        """Save configuration to JSON file.

        Args:
            path: Path to save configuration file
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load_json(cls, path: Path) -> "Config":
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)


class AppConfig(Config):
    """Store service configuration loaded from environment variables.

    Environment variables:
        APP_DB_PATH: Path to the SQLite database file (default: facts.sqlite)
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
        RATE_LIMIT_VOTE: Max vote requests per minute per IP (default: 60)
        RATE_LIMIT_SUBMIT: Max fact submissions per minute per IP (default: 10)
        RATE_LIMIT_DEFAULT: Max requests per minute for other endpoints (default: 120)
        TRUSTED_PROXIES: Comma-separated proxy IP addresses to trust for forwarded IPs
    """

    def __init__(self) -> None:
        super().__init__()
        self.db_path = Path(os.getenv("APP_DB_PATH", "facts.sqlite"))
        self.api_port = _env_int("APP_PORT", 8000)
        self.api_host = os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = os.getenv("APP_LOG_FORMAT", "text")
        raw_origins = os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*" else _env_csv("APP_CORS_ORIGINS")
        )
        self.rate_limit_vote = _env_int("RATE_LIMIT_VOTE", 60)
        self.rate_limit_submit = _env_int("RATE_LIMIT_SUBMIT", 10)
        self.rate_limit_default = _env_int("RATE_LIMIT_DEFAULT", 120)
        self.trusted_proxies: set[str] = set(_env_csv("TRUSTED_PROXIES"))

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()


class BoardConfig(Config):
    """Board client configuration loaded from environment variables.

    Environment variables:
        FACTS_API_URL: API root including version prefix
            (default: http://127.0.0.1:8000/api/v1)
        FACTS_FETCH_LIMIT: Row cap per retrieval, clamped to 1..1000 (default: 1000)
        FACTS_REQUEST_TIMEOUT: Per-request timeout in seconds; unset or empty
            means wait indefinitely
    """

    def __init__(self) -> None:
        super().__init__()
        self.api_url = os.getenv("FACTS_API_URL", "http://127.0.0.1:8000/api/v1")
        limit = _env_int("FACTS_FETCH_LIMIT", _MAX_FETCH_LIMIT)
        self.fetch_limit = min(max(limit, 1), _MAX_FETCH_LIMIT)
        raw_timeout = os.getenv("FACTS_REQUEST_TIMEOUT", "").strip()
        self.request_timeout: float | None = float(raw_timeout) if raw_timeout else None

    @classmethod
    def from_env(cls) -> "BoardConfig":
        """Create a BoardConfig instance populated from environment variables."""
        return cls()
