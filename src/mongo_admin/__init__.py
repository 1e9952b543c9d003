"""Administrative operations on MongoDB collections."""

from mongo_admin.errors import (
    AdminOperationError,
    CollectionAlreadyExistsError,
    CollectionCreationError,
    CollectionDeletionError,
    CollectionDoesNotExistError,
    CollectionError,
    CollectionListError,
    CollectionNameEmptyError,
    CollectionStatsError,
    DatabaseDoesNotExistError,
    DatabaseError,
    DatabaseNameEmptyError,
    ErrorCode,
    MissingDependencyError,
    MongoAdminError,
    SessionNotFoundError,
    ShutdownError,
    ValidationError,
)
from mongo_admin.provider import (
    ConnectionProvider,
    MongoConnectionProvider,
    registry_for,
    session_key,
)
from mongo_admin.registry import CollectionCreationSpec, CollectionRegistry
from mongo_admin.stats import StatEntry, StatType, project_stats

__all__ = [
    "AdminOperationError",
    "CollectionAlreadyExistsError",
    "CollectionCreationError",
    "CollectionCreationSpec",
    "CollectionDeletionError",
    "CollectionDoesNotExistError",
    "CollectionError",
    "CollectionListError",
    "CollectionNameEmptyError",
    "CollectionRegistry",
    "CollectionStatsError",
    "ConnectionProvider",
    "DatabaseDoesNotExistError",
    "DatabaseError",
    "DatabaseNameEmptyError",
    "ErrorCode",
    "MissingDependencyError",
    "MongoAdminError",
    "MongoConnectionProvider",
    "SessionNotFoundError",
    "ShutdownError",
    "StatEntry",
    "StatType",
    "ValidationError",
    "project_stats",
    "registry_for",
    "session_key",
]
