"""Fixtures for tests against a live MongoDB server."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import suppress

import pytest

from mongo_admin.config import MongoDbSettings


def _require_docker() -> None:
    docker = pytest.importorskip("docker")
    try:
        client = docker.from_env()
        client.ping()
    except Exception as exc:  # pragma: no cover - environment dependent
        pytest.skip(f"Docker is not available for integration tests: {exc}")


@pytest.fixture(scope="session")
def mongodb_settings() -> Iterator[MongoDbSettings]:
    external_uri = os.getenv("MONGO_ADMIN_TEST_MONGODB_URI")
    if external_uri:
        yield MongoDbSettings(uri=external_uri)
        return

    _require_docker()
    DockerContainer = pytest.importorskip("testcontainers.core.container").DockerContainer
    container = DockerContainer(os.getenv("MONGO_ADMIN_TEST_MONGODB_IMAGE", "mongo:7"))
    container = container.with_exposed_ports(27017)

    try:
        container.start()
    except Exception as exc:  # pragma: no cover - environment dependent
        pytest.skip(f"Could not start MongoDB container: {exc}")

    try:
        host = container.get_container_host_ip()
        port = container.get_exposed_port(27017)
        yield MongoDbSettings(uri=f"mongodb://{host}:{port}", server_selection_timeout_ms=10000)
    finally:
        with suppress(Exception):
            container.stop()
