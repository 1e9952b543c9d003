"""Typed configuration models with Pydantic validation."""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ServiceSettings(BaseModel):
    """Service identification."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="mongo-admin", min_length=1, description="Service name")
    version: str = Field(default="0.1.0", min_length=1, description="Service version")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    format: Literal["json", "text"] = Field(default="json", description="Log output format")


class MetricsSettings(BaseModel):
    """Prometheus metrics configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Record Prometheus metrics")
    prefix: str = Field(default="mongo_admin", min_length=1, description="Metric name prefix")


class MongoDbSettings(BaseModel):
    """Connection settings used to open one client per session."""

    model_config = ConfigDict(frozen=True)

    uri: SecretStr = Field(..., min_length=1, description="MongoDB connection URI")
    server_selection_timeout_ms: int = Field(
        default=2000, ge=1, description="Server selection timeout in milliseconds"
    )
    connect_timeout_ms: int = Field(
        default=2000, ge=1, description="Connection timeout in milliseconds"
    )
    app_name: str | None = Field(default=None, min_length=1, description="Optional app name")

    def to_client_kwargs(self) -> dict[str, int | str]:
        """Return keyword arguments for ``AsyncIOMotorClient``."""
        kwargs: dict[str, int | str] = {
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
            "connectTimeoutMS": self.connect_timeout_ms,
        }
        if self.app_name is not None:
            kwargs["appname"] = self.app_name
        return kwargs

    @classmethod
    def from_env(cls, prefix: str = "MONGO_ADMIN_") -> MongoDbSettings | None:
        """Build settings from ``<prefix>MONGODB_*`` variables.

        Returns ``None`` when ``<prefix>MONGODB_URI`` is unset.
        """

        def env(name: str) -> str | None:
            return os.getenv(f"{prefix}{name}")

        def env_int(name: str, default: int) -> int:
            value = env(name)
            if value is None:
                return default
            try:
                return int(value)
            except ValueError as int_error:
                raise ValueError(
                    f"Invalid {prefix}{name}={value!r}: expected integer"
                ) from int_error

        uri = env("MONGODB_URI")
        if not uri:
            return None
        return cls(
            uri=SecretStr(uri),
            server_selection_timeout_ms=env_int("MONGODB_SERVER_SELECTION_TIMEOUT_MS", 2000),
            connect_timeout_ms=env_int("MONGODB_CONNECT_TIMEOUT_MS", 2000),
            app_name=env("MONGODB_APP_NAME"),
        )


class AppSettings(BaseModel):
    """Root application settings."""

    model_config = ConfigDict(frozen=True)

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
    mongodb: MongoDbSettings | None = Field(default=None)
