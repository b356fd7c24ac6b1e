"""Configuration loader for the command catalog."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/catalog.defaults.yml"
DEFAULT_CACHE_TTL_SEC = 600


@dataclass(frozen=True)
class CatalogConfig:
    source_config_path: Path
    local_override_path: Path
    cache_path: Path
    cache_ttl_sec: int
    fetch_timeout_sec: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogConfig":
        return cls(
            source_config_path=Path(data.get("source_config_path", "DemoFromTableBot/bot.json")),
            local_override_path=Path(
                data.get("local_override_path", "DemoFromTableBot/commands-with-start.csv")
            ),
            cache_path=Path(data.get("cache_path", ".cache/demo_commands.json")),
            cache_ttl_sec=int(data.get("cache_ttl_sec", DEFAULT_CACHE_TTL_SEC)),
            fetch_timeout_sec=float(data.get("fetch_timeout_sec", 30)),
        )


ENV_MAP = {
    "source_config_path": "CATALOG_SOURCE_CONFIG",
    "local_override_path": "CATALOG_LOCAL_OVERRIDE",
    "cache_path": "CATALOG_CACHE_PATH",
    "cache_ttl_sec": "DEMO_CSV_TTL",
    "fetch_timeout_sec": "CATALOG_FETCH_TIMEOUT_SEC",
}


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(config_data)

    for key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        value: Any = os.environ[env_name]
        if key == "cache_ttl_sec":
            value = int(value)
        elif key == "fetch_timeout_sec":
            value = float(value)
        merged[key] = value

    return merged


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> CatalogConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = load_yaml(path)
    data = merge_env_overrides(data)
    return CatalogConfig.from_dict(data)


def default_config() -> CatalogConfig:
    """Built-in defaults plus environment overrides, for running without a YAML file."""
    return CatalogConfig.from_dict(merge_env_overrides({}))


SOURCE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "csv_url": {"type": "string"},
    },
}

_source_validator = Draft7Validator(SOURCE_SCHEMA)


@dataclass(frozen=True)
class SourceConfig:
    csv_url: str


def load_source_config(path: Path) -> Optional[SourceConfig]:
    """
    Read the JSON file naming the CSV source.

    Returns None when the file is absent, unreadable, fails the schema or has
    no csv_url: all of these mean "no command table defined".
    """
    if not path.exists():
        logger.info(f"Source config not found at {path}")
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error(f"Source config unreadable at {path}: {e}")
        return None

    errors = sorted(_source_validator.iter_errors(data), key=lambda e: e.path)
    if errors:
        messages = ", ".join(error.message for error in errors)
        logger.error(f"Source config validation failed: {messages}")
        return None

    csv_url = (data.get("csv_url") or "").strip()
    if not csv_url:
        logger.info(f"Source config at {path} has no csv_url")
        return None
    return SourceConfig(csv_url=csv_url)
