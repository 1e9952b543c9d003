"""Session-keyed Motor client provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from mongo_admin.config.models import AppSettings, MongoDbSettings
from mongo_admin.errors import MissingDependencyError, SessionNotFoundError, ShutdownError
from mongo_admin.observability.metrics import MetricsRecorder
from mongo_admin.registry import CollectionRegistry

logger = logging.getLogger(__name__)


def _import_motor_asyncio() -> Any:
    try:
        from motor import motor_asyncio
    except ImportError as exc:  # pragma: no cover - exercised when motor is absent
        raise MissingDependencyError(
            "Connection provider requires dependency 'motor'. Install with: pip install motor"
        ) from exc
    return motor_asyncio


def session_key(username: str, host: str, port: int) -> str:
    """Build the key a user's connection is stored under."""
    return f"{username}_{host}_{port}"


@runtime_checkable
class ConnectionProvider(Protocol):
    """Resolves a session key to a live client handle."""

    def get_client(self, session_key: str) -> Any:
        """Return the client bound to ``session_key``."""
        ...


@dataclass(slots=True)
class MongoConnectionProvider:
    """Keeps one Motor client per session.

    Clients are opened lazily from ``settings`` on first use, or explicitly
    with ``connect``. Without default settings an unknown key raises
    ``SessionNotFoundError``.
    """

    settings: MongoDbSettings | None = None
    _clients: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_app_settings(cls, app_settings: AppSettings) -> MongoConnectionProvider:
        """Build a provider whose default connection comes from ``app_settings.mongodb``.

        Without a ``mongodb`` section every session must be opened with
        explicit settings or registered up front.
        """
        return cls(settings=app_settings.mongodb)

    def has(self, session_key: str) -> bool:
        return session_key in self._clients

    def register(self, session_key: str, client: Any) -> None:
        """Bind an already built client to ``session_key``."""
        self._clients[session_key] = client

    def connect(self, session_key: str, settings: MongoDbSettings | None = None) -> Any:
        """Return the client of ``session_key``, opening one if needed."""
        existing = self._clients.get(session_key)
        if existing is not None:
            return existing

        resolved = self.settings if settings is None else settings
        if resolved is None:
            raise SessionNotFoundError(session_key)

        motor_asyncio = _import_motor_asyncio()
        client = motor_asyncio.AsyncIOMotorClient(
            resolved.uri.get_secret_value(),
            **resolved.to_client_kwargs(),
        )
        self._clients[session_key] = client
        logger.info("Opened MongoDB client", extra={"session_key": session_key})
        return client

    def get_client(self, session_key: str) -> Any:
        return self.connect(session_key)

    def release(self, session_key: str) -> None:
        """Close and forget the client of one session."""
        client = self._clients.pop(session_key, None)
        if client is None:
            return
        client.close()
        logger.info("Closed MongoDB client", extra={"session_key": session_key})

    def close(self) -> None:
        """Close every client, raising ``ShutdownError`` if any close failed."""
        errors: dict[str, Exception] = {}
        for key, client in self._clients.items():
            try:
                client.close()
            except Exception as exc:
                errors[key] = exc
        self._clients.clear()

        if errors:
            raise ShutdownError(errors)


def registry_for(
    provider: ConnectionProvider,
    session_key: str,
    *,
    metrics: MetricsRecorder | None = None,
) -> CollectionRegistry:
    """Return a registry bound to the client of ``session_key``."""
    return CollectionRegistry(_client=provider.get_client(session_key), _metrics=metrics)
