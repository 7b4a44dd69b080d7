from __future__ import annotations

from collections.abc import Iterator, Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS = ("http", "logging", "search", "endpoints")
_TOP_LEVEL = ("app_name", "environment")

# Flat keys (env vars, CLI flags) -> (section, key) in the YAML shape.
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_follow_redirects": ("http", "follow_redirects"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "debounce_ms": ("search", "debounce_ms"),
    "open_with": ("search", "open_with"),
    "session_ttl_seconds": ("search", "session_ttl_seconds"),
}


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Bring one layer into the YAML shape; flat keys land in their section."""
    out: dict[str, Any] = {
        key: deepcopy(dict(layer[key]))
        for key in _SECTIONS
        if isinstance(layer.get(key), Mapping)
    }
    out.update({key: layer[key] for key in _TOP_LEVEL if key in layer})
    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]
    return out


def _merge_into(base: dict[str, Any], layer: Mapping[str, Any]) -> None:
    """Nested mappings merge key by key; anything else replaces."""
    for key, value in layer.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            base[key] = deepcopy(value)


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def _layers(
    config_path: Path | None, cli_overrides: Mapping[str, Any]
) -> Iterator[Mapping[str, Any]]:
    yield DEFAULT_CONFIG
    if config_path is not None:
        yield _read_yaml(config_path)
    yield EnvOverrides().to_update_dict()
    yield cli_overrides


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration with strict precedence:
    defaults < YAML file < env vars (incl. .env) < cli overrides

    Reads the given files only; never creates files or directories.
    """
    # The .env file feeds the env-var layer, so it must load first.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    merged: dict[str, Any] = {}
    for layer in _layers(config_path, cli_overrides or {}):
        _merge_into(merged, _sectioned(layer))

    return AppConfig.model_validate(merged)
