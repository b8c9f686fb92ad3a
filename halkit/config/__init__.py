"""Configuration management for halkit."""

from halkit.config.settings import HalKitConfig, api_base_url, load_config

__all__ = [
    "HalKitConfig",
    "api_base_url",
    "load_config",
]
