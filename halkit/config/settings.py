"""Configuration settings and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "production")


class HalKitConfig(BaseSettings):
    """Configuration for the halkit client."""

    model_config = SettingsConfigDict(
        env_prefix="HALKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    api_url: str = "http://localhost:3000"
    prod_api_url: str | None = None
    origin: str | None = None
    timeout: float = 30.0
    default_headers: dict[str, str] = Field(default_factory=dict)
    verbose: bool = False

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        v = str(v).lower()
        if v not in ENVIRONMENTS:
            raise ValueError(f"Invalid environment: {v}. Valid: {ENVIRONMENTS}")
        return v

    @field_validator("api_url", "prod_api_url", "origin", mode="before")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not str(v).startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return str(v).rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def api_base_url(config: HalKitConfig) -> str:
    """Base URL for hand-built API paths.

    An explicit production URL wins; deployed builds use same-origin ``/api``;
    development talks to ``api_url``.
    """
    if config.prod_api_url:
        return config.prod_api_url
    if config.is_production:
        return "/api"
    return f"{config.api_url}/api"


def load_config(config_path: str | Path | None = None) -> HalKitConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}

    env_overrides = _get_env_overrides()
    config_data.update(env_overrides)

    return HalKitConfig(**config_data)


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_mappings = {
        "HALKIT_ENVIRONMENT": "environment",
        "HALKIT_API_URL": "api_url",
        "HALKIT_PROD_API_URL": "prod_api_url",
        "HALKIT_ORIGIN": "origin",
        "HALKIT_TIMEOUT": ("timeout", float),
        "HALKIT_VERBOSE": ("verbose", lambda x: x.lower() in ("true", "1", "yes")),
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            if isinstance(config_key, tuple):
                key, converter = config_key
                overrides[key] = converter(value)
            else:
                overrides[config_key] = value

    return overrides
