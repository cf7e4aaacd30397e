"""Locate and merge the registry's TOML configuration files.

A deployment points BATCHTRACE_CONFIG_DIR at its config directory. Without
it, ./config is used when it holds a default.toml (a source checkout). An
installed package with neither runs on code defaults plus BATCHTRACE_*
environment variables.
"""

import os
import tomllib
from functools import reduce
from pathlib import Path
from typing import Any

from batchtrace.observability.logging import get_logger

logger = get_logger(__name__)

CONFIG_DIR_ENV = "BATCHTRACE_CONFIG_DIR"
ENVIRONMENT_ENV = "BATCHTRACE_ENV"
DEFAULT_ENVIRONMENT = "development"


def get_config_dir() -> Path | None:
    """Return the directory holding default.toml, or None when there is none.

    Raises:
        FileNotFoundError: If BATCHTRACE_CONFIG_DIR names a missing directory
    """
    configured = os.environ.get(CONFIG_DIR_ENV)
    if configured:
        path = Path(configured)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {configured}")
        return path

    local = Path.cwd() / "config"
    if (local / "default.toml").is_file():
        return local
    return None


def get_environment() -> str:
    """Return the deployment environment name (BATCHTRACE_ENV, default 'development')."""
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def config_files(config_dir: Path, env: str) -> list[Path]:
    """Return the files to merge, lowest precedence first.

    default.toml is required; {env}.toml is optional.

    Raises:
        FileNotFoundError: If default.toml is missing
    """
    default_path = config_dir / "default.toml"
    if not default_path.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create it or point {CONFIG_DIR_ENV} elsewhere."
        )

    files = [default_path]
    env_path = config_dir / f"{env}.toml"
    if env_path.is_file():
        files.append(env_path)
    return files


def load_config(
    config_dir: Path | None = None,
    env: str | None = None,
) -> dict[str, Any]:
    """Load and merge configuration for the current deployment.

    Returns an empty dict when no config directory can be found, leaving
    model defaults and environment variables in charge.
    """
    config_dir = config_dir or get_config_dir()
    if config_dir is None:
        logger.debug("config_dir_not_found", source="defaults_and_env")
        return {}

    files = config_files(config_dir, env or get_environment())
    logger.debug("config_files_loaded", files=[str(path) for path in files])
    return reduce(deep_merge, (load_toml(path) for path in files), {})
