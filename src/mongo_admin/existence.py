"""Point-in-time membership checks against live server state."""

from __future__ import annotations

from typing import Any


async def database_exists(client: Any, name: str) -> bool:
    """Return whether ``name`` is among the server's current databases."""
    names = await client.list_database_names()
    return name in names


async def collection_exists(client: Any, database: str, name: str) -> bool:
    """Return whether ``name`` is among the collections of ``database``."""
    names = await client[database].list_collection_names()
    return name in names
