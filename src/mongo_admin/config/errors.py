"""Errors raised while reading and validating settings files."""

from __future__ import annotations

from pathlib import Path

from mongo_admin.errors import MongoAdminError


class ConfigError(MongoAdminError):
    """Base for every settings failure."""


class ConfigFileNotFoundError(ConfigError):
    """A required ``appsettings`` file is missing."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Settings file not found: {self.path}")


class ConfigValidationError(ConfigError):
    """Merged settings were unreadable or rejected by the models.

    ``errors`` holds one ``{"loc", "msg"}`` dict per problem, ``loc`` being
    an arrow-joined path such as ``mongodb -> uri``.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        lines = [f"  {err.get('loc') or '<root>'}: {err.get('msg', 'invalid')}" for err in errors]
        super().__init__("\n".join(["Invalid settings:", *lines]))


class PlaceholderResolutionError(ConfigError):
    """A ``${VAR}`` placeholder names an unset environment variable."""

    def __init__(self, placeholder: str, key_path: str) -> None:
        self.placeholder = placeholder
        self.key_path = key_path
        super().__init__(f"Unset environment variable for {placeholder} at {key_path}")
