"""Application configuration classes."""

from __future__ import annotations

import os


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_bool(name: str, default: str) -> bool:
    return _get_env(name, default).strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "corslab"
    SECRET_KEY = _get_env("SECRET_KEY", "change-me")
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_bool("LOG_JSON_ENABLED", "false")
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")
    EVALUATION_LOGS_ENABLED = _get_bool("EVALUATION_LOGS_ENABLED", "true")

    # CORS policy the service applies to its own API.
    CORS_ALLOWED_ORIGINS = _get_env("CORS_ALLOWED_ORIGINS", "http://localhost:5173")
    CORS_ALLOWED_HEADERS = _get_env("CORS_ALLOWED_HEADERS", "Content-Type,Authorization")
    CORS_ALLOWED_METHODS = _get_env("CORS_ALLOWED_METHODS", "GET,POST,OPTIONS")
    CORS_ALLOW_CREDENTIALS = _get_bool("CORS_ALLOW_CREDENTIALS", "false")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test suite."""

    DEBUG = False
    TESTING = True
    LOG_LEVEL = "DEBUG"
    CORS_ALLOWED_ORIGINS = "http://localhost:5173"
    CORS_ALLOW_CREDENTIALS = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        return CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc
