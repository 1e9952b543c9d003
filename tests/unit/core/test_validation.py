"""Tests for name precondition checks."""

from __future__ import annotations

import pytest

from mongo_admin.errors import CollectionNameEmptyError, DatabaseNameEmptyError
from mongo_admin.validation import (
    validate_collection_name,
    validate_database_name,
    validate_names,
)


@pytest.mark.parametrize("name", [None, ""])
def test_database_name_rejected(name: str | None) -> None:
    with pytest.raises(DatabaseNameEmptyError):
        validate_database_name(name)


@pytest.mark.parametrize("name", [None, ""])
def test_collection_name_rejected(name: str | None) -> None:
    with pytest.raises(CollectionNameEmptyError):
        validate_collection_name(name)


def test_no_other_syntactic_rules() -> None:
    assert validate_database_name(" ") == " "
    assert validate_collection_name("system.profile") == "system.profile"
    assert validate_collection_name("$weird name" * 20) == "$weird name" * 20


def test_database_checked_first() -> None:
    with pytest.raises(DatabaseNameEmptyError):
        validate_names(None, None)


def test_collection_optional_for_database_only_checks() -> None:
    validate_names("db1", require_collection=False)

    with pytest.raises(CollectionNameEmptyError):
        validate_names("db1", "")
