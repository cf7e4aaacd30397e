"""Shared test fixtures for the batchtrace test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from batchtrace.access import AccessControlManager
from batchtrace.audit import InMemoryAuditLog
from batchtrace.products import ProductRegistry


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "app_name = 'dev'",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            if self.original_env[key] is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = self.original_env[key]


@pytest.fixture
def env_override() -> Generator[Callable[[dict[str, str]], EnvOverrideContext], None, None]:
    """Context manager for temporarily setting environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"BATCHTRACE_DEBUG": "true"}):
                # test code here
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    yield _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test.

    This ensures test isolation for configuration tests.
    """
    from batchtrace.config import get_settings
    from batchtrace.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


# Identities


@pytest.fixture
def admin() -> str:
    return "0x00000000000000000000000000000000000000ad"


@pytest.fixture
def manufacturer() -> str:
    return "0x1111111111111111111111111111111111111111"


@pytest.fixture
def other_manufacturer() -> str:
    return "0x2222222222222222222222222222222222222222"


@pytest.fixture
def outsider() -> str:
    return "0x3333333333333333333333333333333333333333"


# Components


@pytest.fixture
def created_at() -> int:
    """Fixed registration time in UNIX seconds."""
    return 1_700_000_000


@pytest.fixture
def audit_log() -> InMemoryAuditLog:
    """Create a fresh audit log for each test."""
    return InMemoryAuditLog()


@pytest_asyncio.fixture
async def access(
    audit_log: InMemoryAuditLog,
    admin: str,
    manufacturer: str,
    other_manufacturer: str,
) -> AccessControlManager:
    """Access control with admin set up and two manufacturers granted."""
    manager = AccessControlManager(audit_log)
    await manager.setup(admin)
    await manager.grant_manufacturer(admin, manufacturer)
    await manager.grant_manufacturer(admin, other_manufacturer)
    return manager


@pytest.fixture
def registry(
    access: AccessControlManager, audit_log: InMemoryAuditLog, created_at: int
) -> ProductRegistry:
    """Product registry on a fixed clock."""
    return ProductRegistry(access, audit_log, clock=lambda: created_at)
