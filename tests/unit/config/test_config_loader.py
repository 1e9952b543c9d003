"""Tests for configuration loader module."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mongo_admin.config import (
    ConfigFileNotFoundError,
    ConfigValidationError,
    MongoDbSettings,
    PlaceholderResolutionError,
    deep_merge,
    load_config,
)

FIXTURES_DIR = Path(__file__).resolve().parents[2] / "fixtures" / "config"


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_simple_merge(self) -> None:
        result = deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        override = {"a": {"y": 10, "z": 20}}
        assert deep_merge(base, override) == {"a": {"x": 1, "y": 10, "z": 20}, "b": 3}

    def test_override_dict_with_scalar(self) -> None:
        assert deep_merge({"a": {"x": 1}}, {"a": "replaced"}) == {"a": "replaced"}

    def test_does_not_mutate_original(self) -> None:
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"y": 2}})
        assert base == {"a": {"x": 1}}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_base_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MONGO_ADMIN_MONGODB_URI", raising=False)

        settings = load_config(config_dir=FIXTURES_DIR, env="nonexistent")

        assert settings.service.name == "test-service"
        assert settings.service.version == "1.0.0"
        assert settings.logging.level == "INFO"
        assert settings.metrics.enabled is False
        assert settings.mongodb is None

    def test_load_development_env(self) -> None:
        settings = load_config(config_dir=FIXTURES_DIR, env="development")

        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "text"
        assert settings.mongodb is not None
        assert settings.mongodb.uri.get_secret_value() == "mongodb://localhost:27017"
        assert settings.mongodb.app_name == "mongo-admin-dev"

    def test_load_production_with_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONGO_ADMIN_TEST_URI", "mongodb://db.internal:27017")

        settings = load_config(config_dir=FIXTURES_DIR, env="production")

        assert settings.metrics.enabled is True
        assert settings.metrics.prefix == "admin"
        assert settings.mongodb is not None
        assert settings.mongodb.uri.get_secret_value() == "mongodb://db.internal:27017"
        assert settings.mongodb.server_selection_timeout_ms == 5000

    def test_missing_base_config_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileNotFoundError) as exc_info:
            load_config(config_dir=tmp_path)
        assert "appsettings.json" in str(exc_info.value)

    def test_unresolved_placeholder_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MONGO_ADMIN_TEST_URI", raising=False)

        with pytest.raises(PlaceholderResolutionError) as exc_info:
            load_config(config_dir=FIXTURES_DIR, env="production")
        assert "MONGO_ADMIN_TEST_URI" in str(exc_info.value)
        assert exc_info.value.key_path == "mongodb.uri"

    def test_env_from_environment_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONGO_ADMIN_ENV", "development")

        settings = load_config(config_dir=FIXTURES_DIR)

        assert settings.logging.level == "DEBUG"

    def test_config_is_frozen(self) -> None:
        settings = load_config(config_dir=FIXTURES_DIR, env="development")
        with pytest.raises(ValidationError):
            settings.logging.level = "ERROR"  # type: ignore[misc]

    def test_invalid_value_raises_validation_error(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(config_dir=FIXTURES_DIR, env="invalid")

        assert "logging -> level" in str(exc_info.value)

    def test_mongodb_falls_back_to_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_URI", "mongodb://env-host:27017")
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_APP_NAME", "from-env")

        settings = load_config(config_dir=FIXTURES_DIR, env="nonexistent")

        assert settings.mongodb is not None
        assert settings.mongodb.uri.get_secret_value() == "mongodb://env-host:27017"
        assert settings.mongodb.app_name == "from-env"

    def test_file_section_wins_over_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_URI", "mongodb://env-host:27017")

        settings = load_config(config_dir=FIXTURES_DIR, env="development")

        assert settings.mongodb is not None
        assert settings.mongodb.uri.get_secret_value() == "mongodb://localhost:27017"

    def test_bad_environment_timeout_is_a_validation_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_URI", "mongodb://env-host:27017")
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_SERVER_SELECTION_TIMEOUT_MS", "fast")

        with pytest.raises(ConfigValidationError, match="expected integer"):
            load_config(config_dir=FIXTURES_DIR, env="nonexistent")

    def test_malformed_json_is_a_validation_error(self, tmp_path: Path) -> None:
        (tmp_path / "appsettings.json").write_text("{\"service\": ", encoding="utf-8")

        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(config_dir=tmp_path)

        assert exc_info.value.errors[0]["loc"] == "appsettings.json"

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        (tmp_path / "appsettings.json").write_text("[]", encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="top level must be an object"):
            load_config(config_dir=tmp_path)


class TestMongoDbSettings:
    def test_client_kwargs_omit_unset_app_name(self) -> None:
        settings = MongoDbSettings(uri="mongodb://localhost:27017")

        assert settings.to_client_kwargs() == {
            "serverSelectionTimeoutMS": 2000,
            "connectTimeoutMS": 2000,
        }

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_URI", "mongodb://env-host:27017")
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_CONNECT_TIMEOUT_MS", "750")
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_APP_NAME", "from-env")

        settings = MongoDbSettings.from_env()

        assert settings is not None
        assert settings.uri.get_secret_value() == "mongodb://env-host:27017"
        assert settings.connect_timeout_ms == 750
        assert settings.app_name == "from-env"

    def test_from_env_without_uri(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MONGO_ADMIN_MONGODB_URI", raising=False)

        assert MongoDbSettings.from_env() is None

    def test_from_env_rejects_non_integer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_URI", "mongodb://env-host:27017")
        monkeypatch.setenv("MONGO_ADMIN_MONGODB_CONNECT_TIMEOUT_MS", "soon")

        with pytest.raises(ValueError, match="expected integer"):
            MongoDbSettings.from_env()
