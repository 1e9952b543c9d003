"""Error taxonomy for collection administration."""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ErrorCode(StrEnum):
    """Stable codes surfaced to callers alongside the error message."""

    DB_NAME_EMPTY = "DB_NAME_EMPTY"
    DB_DOES_NOT_EXISTS = "DB_DOES_NOT_EXISTS"
    COLLECTION_NAME_EMPTY = "COLLECTION_NAME_EMPTY"
    COLLECTION_ALREADY_EXISTS = "COLLECTION_ALREADY_EXISTS"
    COLLECTION_DOES_NOT_EXIST = "COLLECTION_DOES_NOT_EXIST"
    GET_COLLECTION_LIST_EXCEPTION = "GET_COLLECTION_LIST_EXCEPTION"
    COLLECTION_CREATION_EXCEPTION = "COLLECTION_CREATION_EXCEPTION"
    COLLECTION_DELETION_EXCEPTION = "COLLECTION_DELETION_EXCEPTION"
    GET_COLL_STATS_EXCEPTION = "GET_COLL_STATS_EXCEPTION"


class MongoAdminError(Exception):
    """Base exception for this package."""


class MissingDependencyError(MongoAdminError):
    """Raised when an optional dependency is required but not installed."""


class SessionNotFoundError(MongoAdminError):
    """Raised when no connection is registered for a session key."""

    def __init__(self, session_key: str) -> None:
        self.session_key = session_key
        super().__init__(f"No connection registered for session [{session_key}]")


class ShutdownError(MongoAdminError):
    """Raised when one or more session clients fail to close."""

    def __init__(self, errors: dict[str, Exception]) -> None:
        self.errors = errors
        names = ", ".join(errors.keys())
        super().__init__(f"Failed to close sessions: {names}")


class AdminOperationError(MongoAdminError):
    """Base for every error kind a collection operation may raise.

    Subclasses pin ``code``; callers render ``(code, message)`` as is.
    """

    code: ClassVar[ErrorCode]

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-serializable representation."""
        return {"code": self.code.value, "message": self.message}


class ValidationError(AdminOperationError):
    """Raised when an argument fails a precondition check."""


class DatabaseError(AdminOperationError):
    """Raised for database-level failures."""


class CollectionError(AdminOperationError):
    """Raised for collection-level failures."""


class DatabaseNameEmptyError(ValidationError):
    code = ErrorCode.DB_NAME_EMPTY


class CollectionNameEmptyError(ValidationError):
    code = ErrorCode.COLLECTION_NAME_EMPTY


class DatabaseDoesNotExistError(DatabaseError):
    code = ErrorCode.DB_DOES_NOT_EXISTS


class CollectionAlreadyExistsError(CollectionError):
    code = ErrorCode.COLLECTION_ALREADY_EXISTS


class CollectionDoesNotExistError(CollectionError):
    code = ErrorCode.COLLECTION_DOES_NOT_EXIST


class CollectionListError(CollectionError):
    """Server failure while enumerating collections."""

    code = ErrorCode.GET_COLLECTION_LIST_EXCEPTION


class CollectionCreationError(CollectionError):
    """Server failure while creating a collection."""

    code = ErrorCode.COLLECTION_CREATION_EXCEPTION


class CollectionDeletionError(CollectionError):
    """Server failure while dropping a collection."""

    code = ErrorCode.COLLECTION_DELETION_EXCEPTION


class CollectionStatsError(CollectionError):
    """Server failure while fetching collection statistics."""

    code = ErrorCode.GET_COLL_STATS_EXCEPTION
