"""Configuration loading and validation module."""

from mongo_admin.config.errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigValidationError,
    PlaceholderResolutionError,
)
from mongo_admin.config.loader import deep_merge, load_config
from mongo_admin.config.models import (
    AppSettings,
    LoggingSettings,
    MetricsSettings,
    MongoDbSettings,
    ServiceSettings,
)

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigValidationError",
    "LoggingSettings",
    "MetricsSettings",
    "MongoDbSettings",
    "PlaceholderResolutionError",
    "ServiceSettings",
    "deep_merge",
    "load_config",
]
