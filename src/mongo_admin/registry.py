"""Collection administration operations: list, create, drop and stats."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from typing import Any, ClassVar

from pymongo.errors import CollectionInvalid, OperationFailure, PyMongoError

from mongo_admin.errors import (
    CollectionAlreadyExistsError,
    CollectionCreationError,
    CollectionDeletionError,
    CollectionDoesNotExistError,
    CollectionError,
    CollectionListError,
    CollectionStatsError,
    DatabaseDoesNotExistError,
)
from mongo_admin.existence import collection_exists, database_exists
from mongo_admin.observability._observable import ObservableMixin, error_label
from mongo_admin.observability.metrics import MetricsRecorder
from mongo_admin.stats import StatEntry, project_stats
from mongo_admin.validation import validate_names

logger = logging.getLogger(__name__)

SYSTEM_COLLECTION_MARKER = "system."

# Server error codes that report a namespace state the pre-checks missed.
NAMESPACE_NOT_FOUND = 26
NAMESPACE_EXISTS = 48


@dataclass(frozen=True, slots=True)
class CollectionCreationSpec:
    """Options for a new collection. Size and max only apply when capped."""

    capped: bool = False
    size: int = 0
    max_documents: int = 0

    def to_options(self) -> dict[str, Any]:
        """Return the options sent with the create command."""
        options: dict[str, Any] = {"capped": self.capped}
        if self.capped:
            options["size"] = self.size
            options["max"] = self.max_documents
        return options


@contextmanager
def _server_errors(failure: type[CollectionError]) -> Iterator[None]:
    """Re-raise driver errors as ``failure`` carrying the driver message."""
    try:
        yield
    except PyMongoError as exc:
        raise failure(str(exc)) from exc


def _missing_collection(database: str, collection: str) -> CollectionDoesNotExistError:
    return CollectionDoesNotExistError(
        f"Collection [{collection}] does not exist in Database [{database}]"
    )


def _duplicate_collection(database: str, collection: str) -> CollectionAlreadyExistsError:
    return CollectionAlreadyExistsError(
        f"Collection [{collection}] already exists in Database [{database}]"
    )


@dataclass(slots=True)
class CollectionRegistry(ObservableMixin):
    """Collection operations bound to one session's client handle.

    The client is not owned: it is never closed here and no locking is
    applied around it. Existence checks are point-in-time, so a concurrent
    change between check and action is reported by the server call itself
    and mapped onto the same error kinds.
    """

    _resource_name: ClassVar[str] = "collections"

    _client: Any
    _metrics: MetricsRecorder | None = None

    @property
    def client(self) -> Any:
        """Expose the underlying Motor client."""
        return self._client

    async def list_collections(self, database: str | None) -> set[str]:
        """Return the user collection names of ``database``.

        Names containing ``system.`` are left out.
        """
        with self._observed("list_collections", database):
            validate_names(database, require_collection=False)
            with _server_errors(CollectionListError):
                await self._require_database(database)
                names = await self._client[database].list_collection_names()

        return {name for name in names if SYSTEM_COLLECTION_MARKER not in name}

    async def create_collection(
        self,
        database: str | None,
        collection: str | None,
        spec: CollectionCreationSpec | None = None,
        *,
        capped: bool | None = None,
        size: int | None = None,
        max_documents: int | None = None,
    ) -> str:
        """Create ``collection`` in ``database`` and return a confirmation message.

        Options come either from ``spec`` or from the keyword arguments, never both.

        Raises:
            TypeError: If ``spec`` is combined with ``capped``, ``size`` or
                ``max_documents``.
        """
        keywords = {"capped": capped, "size": size, "max_documents": max_documents}
        given = {name: value for name, value in keywords.items() if value is not None}
        if spec is None:
            spec = CollectionCreationSpec(**given)
        elif given:
            conflicting = ", ".join(sorted(given))
            raise TypeError(f"create_collection() got both spec and {conflicting}")

        with self._observed("create_collection", database, collection):
            validate_names(database, collection)
            with _server_errors(CollectionCreationError):
                await self._require_database(database)
                if await collection_exists(self._client, database, collection):
                    raise _duplicate_collection(database, collection)
                try:
                    await self._client[database].create_collection(
                        collection, **spec.to_options()
                    )
                except CollectionInvalid as exc:
                    raise _duplicate_collection(database, collection) from exc
                except OperationFailure as exc:
                    if exc.code == NAMESPACE_EXISTS:
                        raise _duplicate_collection(database, collection) from exc
                    raise

        return f"Collection [{collection}] added to Database [{database}]."

    async def drop_collection(self, database: str | None, collection: str | None) -> str:
        """Drop ``collection`` from ``database`` and return a confirmation message."""
        with self._observed("drop_collection", database, collection):
            validate_names(database, collection)
            with _server_errors(CollectionDeletionError):
                await self._require_database(database)
                if not await collection_exists(self._client, database, collection):
                    raise _missing_collection(database, collection)
                try:
                    # Collection.drop() lets the driver swallow "ns not found".
                    await self._client[database].command("drop", collection)
                except OperationFailure as exc:
                    if exc.code == NAMESPACE_NOT_FOUND:
                        raise _missing_collection(database, collection) from exc
                    raise

        return f"Collection [{collection}] has been deleted from Database [{database}]."

    async def get_collection_stats(
        self,
        database: str | None,
        collection: str | None,
    ) -> list[StatEntry]:
        """Return ``collStats`` output for ``collection`` as ordered entries."""
        with self._observed("get_collection_stats", database, collection):
            validate_names(database, collection)
            with _server_errors(CollectionStatsError):
                await self._require_database(database)
                if not await collection_exists(self._client, database, collection):
                    raise _missing_collection(database, collection)
                try:
                    raw = await self._client[database].command("collStats", collection)
                except OperationFailure as exc:
                    if exc.code == NAMESPACE_NOT_FOUND:
                        raise _missing_collection(database, collection) from exc
                    raise

            return project_stats(raw)

    async def _require_database(self, database: str) -> None:
        if not await database_exists(self._client, database):
            raise DatabaseDoesNotExistError(f"Database [{database}] does not exist")

    @contextmanager
    def _observed(
        self,
        operation: str,
        database: str | None,
        collection: str | None = None,
    ) -> Iterator[None]:
        context = {"operation": operation, "database": database, "collection": collection}
        started = perf_counter()
        try:
            yield
        except Exception as exc:
            self._observe_error(operation, started, exc)
            logger.warning(
                "Collection operation failed: %s",
                exc,
                extra={**context, "error_code": error_label(exc)},
            )
            raise

        self._observe_operation(operation, started, success=True)
        logger.info("Collection operation succeeded", extra=context)
