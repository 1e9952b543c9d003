"""Layered ``appsettings`` loading.

The base ``appsettings.json`` is overlaid with ``appsettings.<env>.json``,
``${VAR}`` placeholders are filled from the environment and the result is
validated into ``AppSettings``. When no file declares a ``mongodb`` section,
``MONGO_ADMIN_MONGODB_*`` variables supply one.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mongo_admin.config.errors import ConfigFileNotFoundError, ConfigValidationError
from mongo_admin.config.models import AppSettings, MongoDbSettings
from mongo_admin.config.placeholders import resolve_placeholders

DEFAULT_CONFIG_DIR = Path("config")
SETTINGS_FILE = "appsettings.json"
ENV_VAR_NAME = "MONGO_ADMIN_ENV"
DEFAULT_ENV = "development"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` overlaid with ``override``; nested dicts merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def read_settings_file(path: Path) -> dict[str, Any]:
    """Parse one settings file, which must hold a JSON object."""
    try:
        with path.open(encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise ConfigFileNotFoundError(path) from exc
    except json.JSONDecodeError as exc:
        raise ConfigValidationError(
            [{"loc": path.name, "msg": f"invalid JSON at line {exc.lineno}: {exc.msg}"}]
        ) from exc

    if not isinstance(data, dict):
        raise ConfigValidationError([{"loc": path.name, "msg": "top level must be an object"}])
    return data


def load_config(
    *,
    config_dir: Path | str | None = None,
    env: str | None = None,
    strict_placeholders: bool = True,
) -> AppSettings:
    """Load, merge and validate settings for ``env``.

    Args:
        config_dir: Directory holding the ``appsettings`` files. Defaults to
            ``./config``.
        env: Overlay to apply. Defaults to ``$MONGO_ADMIN_ENV``, then
            ``development``. A missing overlay file is not an error.
        strict_placeholders: Fail on placeholders naming unset variables
            instead of leaving them verbatim.

    Raises:
        ConfigFileNotFoundError: ``appsettings.json`` is missing.
        ConfigValidationError: A file is malformed or the merged values are invalid.
        PlaceholderResolutionError: A placeholder is unresolved in strict mode.
    """
    directory = DEFAULT_CONFIG_DIR if config_dir is None else Path(config_dir)
    env_name = env if env is not None else os.environ.get(ENV_VAR_NAME, DEFAULT_ENV)

    merged = read_settings_file(directory / SETTINGS_FILE)
    overlay = directory / f"appsettings.{env_name}.json"
    if overlay.is_file():
        merged = deep_merge(merged, read_settings_file(overlay))

    resolved = resolve_placeholders(merged, strict=strict_placeholders)
    try:
        settings = AppSettings.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(_describe(exc)) from exc

    if settings.mongodb is None:
        settings = _with_env_mongodb(settings)
    return settings


def _with_env_mongodb(settings: AppSettings) -> AppSettings:
    try:
        mongodb = MongoDbSettings.from_env()
    except ValueError as exc:
        raise ConfigValidationError([{"loc": "mongodb", "msg": str(exc)}]) from exc
    if mongodb is None:
        return settings
    return settings.model_copy(update={"mongodb": mongodb})


def _describe(exc: ValidationError) -> list[dict[str, str]]:
    return [
        {"loc": " -> ".join(str(part) for part in err["loc"]), "msg": err["msg"]}
        for err in exc.errors()
    ]
