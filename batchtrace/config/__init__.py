"""Configuration for batchtrace.

Usage:
    from batchtrace.config import get_settings

    settings = get_settings()
    admin = settings.registry.admin_identity
"""

from functools import lru_cache
from typing import Any

from batchtrace.config.loader import load_config
from batchtrace.config.settings import Settings, set_toml_config


def build_settings(config: dict[str, Any]) -> Settings:
    """Validate merged TOML tables (plus environment overrides) into Settings.

    Raises:
        pydantic.ValidationError: If a value is invalid, e.g. a blank admin_identity
    """
    set_toml_config(config)
    return Settings()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process; see batchtrace.config.loader for file lookup."""
    return build_settings(load_config())


def reload_settings() -> Settings:
    """Drop the cached settings and load them again."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["Settings", "build_settings", "get_settings", "reload_settings"]
