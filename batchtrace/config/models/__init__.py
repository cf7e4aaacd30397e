"""Configuration section models."""

from batchtrace.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from batchtrace.config.models.registry import RegistryConfig
from batchtrace.config.models.storage import StorageConfig

__all__ = [
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "RegistryConfig",
    "StorageConfig",
]
