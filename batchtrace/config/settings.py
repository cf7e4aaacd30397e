"""Root settings model for batchtrace.

Precedence, highest first: constructor arguments, BATCHTRACE_* environment
variables (``__`` separates nested sections, e.g.
BATCHTRACE_REGISTRY__ADMIN_IDENTITY), merged TOML files, model defaults.
"""

from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from batchtrace.config.models.observability import ObservabilityConfig
from batchtrace.config.models.registry import RegistryConfig
from batchtrace.config.models.storage import StorageConfig

# Merged TOML tables for the next Settings() construction
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Install the merged TOML tables read by RegistryTomlSource."""
    global _toml_config
    _toml_config = config


class RegistryTomlSource(PydanticBaseSettingsSource):
    """Feeds the merged TOML tables to pydantic-settings as one source."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {
            name: _toml_config[name]
            for name in self.settings_cls.model_fields
            if name in _toml_config
        }


class Settings(BaseSettings):
    """Registry, storage and observability configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BATCHTRACE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="batchtrace", description="Name bound into startup logs")
    registry: RegistryConfig = Field(
        default_factory=RegistryConfig,
        description="Admin identity and verification auditing",
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Backend for role, product and audit stores",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Logging and metrics",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            RegistryTomlSource(settings_cls),
        )
