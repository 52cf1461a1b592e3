"""Configuration helpers for entity-lookup-flow."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from . import settings
from .lookup import ENTITY_KINDS, default_configuration

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).parent.parent.parent
LOCAL_CONFIG_PATH = PACKAGE_ROOT / "config.local.yaml"

DEFAULT_CONFIG = {
    "data_dir": str(settings.data_dir),
    "store": {
        "records_path": str(settings.records_path),
    },
    "server": {
        "host": settings.server_host,
        "port": settings.server_port,
    },
    "lookup": default_configuration(),
}

_ALLOWED_KEYS = {
    "data_dir": None,
    "store": {"records_path"},
    "server": {"host", "port"},
    "lookup": set(default_configuration()),
}


def config_defaults() -> dict:
    """Return default configuration values."""
    return copy.deepcopy(DEFAULT_CONFIG)


def _deep_merge(base: dict, update: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load resolved configuration (defaults merged with config file)."""
    path = config_path or LOCAL_CONFIG_PATH
    base = config_defaults()
    file_config = _load_config_file(path)
    return _deep_merge(base, file_config)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config_dict(data: Any) -> list[str]:
    """Validate a config dict. Returns list of errors (empty = valid)."""
    errors: list[str] = []
    if not isinstance(data, dict):
        return ["Config must be a mapping/object"]

    for key in data:
        if key not in _ALLOWED_KEYS:
            errors.append(f"Unknown config key: {key}")

    for section, allowed in _ALLOWED_KEYS.items():
        if allowed is None or section not in data:
            continue
        if not isinstance(data[section], dict):
            errors.append(f"{section} must be an object")
            continue
        for key in data[section]:
            if key not in allowed:
                errors.append(f"Unknown {section} key: {key}")

    server = data.get("server")
    if isinstance(server, dict):
        port = server.get("port")
        if port is not None and not (_is_int(port) and 1 <= port <= 65535):
            errors.append("server.port must be an integer between 1 and 65535")

    lookup = data.get("lookup")
    if isinstance(lookup, dict):
        entity_type = lookup.get("entity_type")
        if entity_type and entity_type not in ENTITY_KINDS:
            errors.append(
                f"lookup.entity_type must be one of {sorted(ENTITY_KINDS)}, got {entity_type!r}"
            )

    return errors


def validate_config_file(config_path: Optional[Path] = None) -> list[str]:
    """Validate the config file. Returns list of errors (empty = valid)."""
    path = config_path or LOCAL_CONFIG_PATH
    if not path.exists():
        return []
    data = _load_config_file(path)
    return validate_config_dict(data)
