"""Project configuration for speckit-docs.

Settings are read from an optional ``speckit.yaml`` in the project root and
merged over ``DEFAULT_CONFIG``. Missing files simply yield the defaults.

Key functions:
- load_config: Loads project configuration from speckit.yaml.
- parse_mode: Normalizes a permission mode given as int or octal string.
"""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "speckit.yaml"

_OWNER_RX = stat.S_IRUSR | stat.S_IXUSR

DEFAULT_CONFIG: dict[str, Any] = {
    "docs_dir": "docs",
    "hooks_dir": ".git/hooks",
    "hook_name": "pre-commit",
    "hook_mode": 0o755,
    "build_command": "npm run docs:build",
    "site": {},
}


class ConfigError(ValueError):
    """Raised when speckit.yaml cannot be interpreted."""


def load_config(project_root: Path) -> dict[str, Any]:
    """Load project configuration from speckit.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigError: If the file is not a YAML mapping or holds bad values.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"{config_path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"{config_path}: expected a mapping at the top level")
        config.update(loaded)
    config["hook_mode"] = parse_mode(config["hook_mode"])
    if not isinstance(config.get("site") or {}, dict):
        raise ConfigError(f"{config_path}: 'site' must be a mapping")
    return config


def parse_mode(value: Any) -> int:
    """Convert a permission mode to an integer.

    Integers are taken as-is; strings are read as octal, with or without
    a ``0o`` prefix. The result must fit in ``0o777`` and leave the hook
    readable and executable by its owner.

    Examples:
        >>> parse_mode(0o755)
        493
        >>> parse_mode("0o750")
        488
        >>> parse_mode("700")
        448
    """
    if isinstance(value, bool):
        raise ConfigError(f"Invalid hook_mode: {value!r}")
    if isinstance(value, int):
        mode = value
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            mode = int(text, 8)
        except ValueError:
            raise ConfigError(f"Invalid hook_mode: {value!r}") from None
    else:
        raise ConfigError(f"Invalid hook_mode: {value!r}")
    if not 0 <= mode <= 0o777:
        raise ConfigError(
            f"hook_mode out of range: {value!r} "
            "(an unquoted 755 in YAML is decimal; write '755' or 0o755)"
        )
    if mode & _OWNER_RX != _OWNER_RX:
        raise ConfigError(
            f"hook_mode {oct(mode)} must let the owner read and execute the hook"
        )
    return mode
