"""``${ENV_VAR}`` placeholder resolution for settings files."""

from __future__ import annotations

import os
import re
from typing import Any

from mongo_admin.config.errors import PlaceholderResolutionError

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")


def resolve_placeholders(
    data: dict[str, Any],
    *,
    strict: bool = True,
    _path: str = "",
) -> dict[str, Any]:
    """Return a copy of ``data`` with placeholders replaced from the environment.

    Dicts and lists are walked recursively; error paths look like
    ``mongodb.hosts[0].uri``.

    Raises:
        PlaceholderResolutionError: If strict=True and a variable is unset.
    """
    return {
        key: _resolve_any(value, f"{_path}.{key}" if _path else key, strict)
        for key, value in data.items()
    }


def _resolve_any(value: Any, path: str, strict: bool) -> Any:
    if isinstance(value, dict):
        return resolve_placeholders(value, strict=strict, _path=path)
    if isinstance(value, list):
        return [_resolve_any(item, f"{path}[{i}]", strict) for i, item in enumerate(value)]
    if isinstance(value, str):
        return _resolve_string(value, path, strict)
    return value


def _resolve_string(value: str, path: str, strict: bool) -> str:
    def replace_match(match: re.Match[str]) -> str:
        env_var = match.group(1)
        env_value = os.environ.get(env_var)
        if env_value is not None:
            return env_value
        if strict:
            raise PlaceholderResolutionError(f"${{{env_var}}}", path)
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace_match, value)
