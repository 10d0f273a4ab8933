"""
Configuration.

Two sources, both resolved from the directory holding ``.project_root``:

    config/.env              secrets only: DB_PASSWORD, JWT_SECRET
    config/settings/*.yaml   everything else, one file per concern

Each YAML file is validated by its schema in config_schema.py when
AppConfig is built, so a typo fails at startup rather than mid-request.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notekeeper.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
)

PROJECT_MARKER = ".project_root"
SETTINGS_DIR = Path("config") / "settings"


def find_project_root() -> Path:
    """Walk up from the working directory to the first one containing the marker."""
    current = Path.cwd()
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_MARKER).exists():
            return candidate
    raise RuntimeError(f"Project root not found. Ensure {PROJECT_MARKER} file exists.")


def validate_project_root() -> Path:
    """Like find_project_root(), but exits the process when the marker is missing."""
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read one settings file; an empty file yields an empty dict."""
    config_path = find_project_root() / SETTINGS_DIR / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets read from config/.env or the environment."""

    db_password: str
    jwt_secret: str

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type[BaseModel], filename: str) -> Any:
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """Typed, validated view of config/settings/*.yaml."""

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")
        self._security = _load_validated(SecuritySchema, "security.yaml")

    @property
    def application(self) -> ApplicationSchema:
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        return self._logging

    @property
    def features(self) -> FeaturesSchema:
        return self._features

    @property
    def security(self) -> SecuritySchema:
        return self._security


@lru_cache
def get_settings() -> Settings:
    """Secrets, loaded once."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """YAML settings, loaded and validated once."""
    return AppConfig()


def get_database_url(async_driver: bool = True) -> str:
    """
    Build the PostgreSQL URL from database.yaml and DB_PASSWORD.

    Args:
        async_driver: Use the asyncpg driver (application) rather than the
            default sync driver (tooling)
    """
    db = get_app_config().database
    password = get_settings().db_password
    scheme = "postgresql+asyncpg" if async_driver else "postgresql"
    return f"{scheme}://{db.user}:{password}@{db.host}:{db.port}/{db.name}"
