"""Helpers for resolving the optional site2pdf JSON configuration file."""

import json
import os
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_CONFIG_NAME = "site2pdf.json"
CONFIG_ENV_VAR = "SITE2PDF_CONFIG"
PATH_KEYS = ("output", "image_output")


class ConfigError(Exception):
    """Raised when runtime configuration cannot be loaded."""


def _resolve_config_path(path: Optional[str]) -> Optional[str]:
    """Return the absolute config path, or None when no default exists.

    Explicit paths (argument or environment override) must exist; the
    default ``site2pdf.json`` is optional.
    """
    env_override = os.environ.get(CONFIG_ENV_VAR)
    candidate = path or env_override
    explicit = candidate is not None
    expanded = os.path.expanduser(candidate or DEFAULT_CONFIG_NAME)

    resolved = os.path.abspath(expanded)
    if os.path.isfile(resolved):
        return resolved
    if explicit:
        raise ConfigError(f"Configuration file not found: {candidate}")
    return None


def _resolve_path(value: str, base_dir: str) -> str:
    """Resolve ``value`` into an absolute path relative to ``base_dir``."""
    expanded = os.path.expanduser(value)
    if os.path.isabs(expanded):
        return expanded
    return os.path.abspath(os.path.join(base_dir, expanded))


def _check_value_types(
    config_path: str,
    data: Dict[str, Any],
    key_types: Mapping[str, Tuple[type, ...]],
) -> None:
    """Reject unknown keys and values whose JSON type does not fit the key."""
    unknown = sorted(set(data) - set(key_types))
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys in {config_path}: "
            + ", ".join(unknown)
        )

    for key, value in data.items():
        expected = key_types[key]
        # bool is an int subclass; only accept it where bool is listed.
        if (isinstance(value, bool) and bool not in expected) or not isinstance(
            value, expected
        ):
            names = " or ".join(
                "null" if kind is type(None) else kind.__name__
                for kind in expected
            )
            raise ConfigError(
                f"Invalid value for {key!r} in {config_path}: expected "
                f"{names}, got {json.dumps(value)}"
            )


def load_config(
    path: Optional[str] = None,
    *,
    key_types: Optional[Mapping[str, Tuple[type, ...]]] = None,
) -> Dict[str, Any]:
    """Load a JSON config file and normalize any filesystem paths.

    Returns an empty mapping when no config file is present. When
    ``key_types`` is given, keys outside it and values of the wrong type
    are rejected.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration root must be an object: {config_path}"
        )

    if key_types is not None:
        _check_value_types(config_path, data, key_types)

    base_dir = os.path.dirname(config_path)
    resolved: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str) and key in PATH_KEYS:
            resolved[key] = _resolve_path(value, base_dir)
        else:
            resolved[key] = value

    return resolved
