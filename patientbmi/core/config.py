"""
Configuration management for PatientBMI.

Loads settings from environment variables and YAML config files.
Uses Pydantic for validation.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from patientbmi.core.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ENDPOINTS,
    NAVIGATION_DELAY_MS,
)
from patientbmi.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field can be set as ``PATIENTBMI_<FIELD>`` in the environment
    or in a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PATIENTBMI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote service
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the patient/assessment REST service",
    )
    connect_timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Seconds to wait for a connection",
    )
    read_timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Seconds to wait for a response",
    )

    # Paths
    config_dir: Path = Field(
        default=Path("config"),
        description="Directory containing YAML config files",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_http_bodies: bool = Field(
        default=False,
        description="Log request and response bodies at DEBUG level",
    )

    # UI
    navigation_delay_ms: int = Field(
        default=NAVIGATION_DELAY_MS,
        ge=0,
        description="Pause after a successful vitals submission before navigating",
    )

    @field_validator("api_base_url", mode="before")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are relative, so the base must end with a slash."""
        v = str(v).strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"api_base_url must be an http(s) URL, got {v!r}")
        return v if v.endswith("/") else v + "/"

    @field_validator("config_dir", mode="before")
    @classmethod
    def resolve_path(cls, v: str | Path) -> Path:
        """Convert string to Path and resolve."""
        return Path(v).resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Ensure log level is uppercase."""
        return v.upper()

    @property
    def timeout(self) -> tuple[float, float]:
        """(connect, read) tuple in the form requests expects."""
        return (self.connect_timeout, self.read_timeout)


class ApiConfig:
    """
    Endpoint and header configuration loaded from api.yaml.

    Built-in endpoint paths are used for anything the file does not
    override. ``config_path=None`` gives the built-in defaults.
    """

    def __init__(self, config_path: Path | None = None):
        self._config = self._load_yaml(config_path) if config_path else {}

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any]:
        """Load and parse YAML file."""
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at top level of {path}")
        return data

    def _section(self, key: str) -> dict[str, Any]:
        """Mapping under api.<key>, empty when absent."""
        api = self._config.get("api") or {}
        if not isinstance(api, dict):
            raise ConfigurationError("Expected a mapping under 'api'", config_key="api")
        value = api.get(key) or {}
        if not isinstance(value, dict):
            raise ConfigurationError(
                f"Expected a mapping under 'api.{key}'",
                config_key=f"api.{key}",
            )
        return value

    @property
    def endpoints(self) -> dict[str, str]:
        """Endpoint name -> path relative to the base URL."""
        overrides = self._section("endpoints")
        unknown = set(overrides) - set(ENDPOINTS)
        if unknown:
            raise ConfigurationError(
                f"Unknown endpoint names: {sorted(unknown)}. "
                f"Valid names: {sorted(ENDPOINTS)}",
                config_key="api.endpoints",
            )
        return {**ENDPOINTS, **overrides}

    @property
    def headers(self) -> dict[str, str]:
        """Extra headers sent with every request."""
        headers = self._section("headers")
        return {str(k): str(v) for k, v in headers.items()}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def load_config(config_type: str, required: bool = True) -> ApiConfig:
    """
    Load a specific configuration file.

    Args:
        config_type: Currently only "api"
        required: Raise if the file is missing instead of using defaults

    Returns:
        Appropriate config object
    """
    settings = get_settings()
    config_map: dict[str, tuple[Path, type[ApiConfig]]] = {
        "api": (settings.config_dir / "api.yaml", ApiConfig),
    }

    if config_type not in config_map:
        raise ConfigurationError(
            f"Unknown config type: {config_type}. "
            f"Valid types: {list(config_map.keys())}"
        )

    path, config_class = config_map[config_type]
    if not required and not path.exists():
        return config_class(None)
    return config_class(path)
