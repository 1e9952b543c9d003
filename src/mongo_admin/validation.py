"""Precondition checks applied before any call reaches the server."""

from __future__ import annotations

from mongo_admin.errors import CollectionNameEmptyError, DatabaseNameEmptyError


def validate_database_name(name: str | None) -> str:
    """Return ``name`` unchanged or raise ``DatabaseNameEmptyError``."""
    if name is None:
        raise DatabaseNameEmptyError("Database name is null")
    if name == "":
        raise DatabaseNameEmptyError("Database name is empty")
    return name


def validate_collection_name(name: str | None) -> str:
    """Return ``name`` unchanged or raise ``CollectionNameEmptyError``."""
    if name is None:
        raise CollectionNameEmptyError("Collection name is null")
    if name == "":
        raise CollectionNameEmptyError("Collection name is empty")
    return name


def validate_names(
    database: str | None,
    collection: str | None = None,
    *,
    require_collection: bool = True,
) -> None:
    """Run the database then collection checks, stopping at the first failure.

    Only null and empty values are rejected. Length and character-set rules
    are left to the server.
    """
    validate_database_name(database)
    if require_collection:
        validate_collection_name(collection)
