"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Config")


@dataclass
class Config:
    """Dispatch configuration."""

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    # Unmatched requests
    not_found_status: int = 404
    not_found_body: str = "Not Found"

    # Route table
    freeze_on_first_request: bool = False
    routes_file: str = ""
    routes: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls: Type[T], data: Optional[Dict[str, Any]]) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in (data or {}).items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls: Type[T], prefix: str = "REGEXROUTE_") -> T:
        """Load config from environment variables."""
        return cls.from_dict(_read_env(prefix, cls))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {}
        for field_name in self.__dataclass_fields__:
            result[field_name] = getattr(self, field_name)
        return result

    def merge(self, overrides: Dict[str, Any]) -> "Config":
        """Return a copy with overrides applied."""
        data = self.to_dict()
        data.update(overrides)
        return type(self).from_dict(data)


def _coerce(name: str, type_name: str, value: str) -> Any:
    """Convert an environment string to the field's declared type."""
    if type_name == "bool":
        return value.strip().lower() in ("true", "1", "yes", "on")
    if type_name == "int":
        try:
            return int(value)
        except ValueError as e:
            raise ValueError(f"Config {name!r} expects an integer, got {value!r}") from e
    if type_name == "str":
        return value
    # Structured fields (routes) are given as YAML/JSON text
    return yaml.safe_load(value)


def _read_env(prefix: str, config_cls: Type[Config] = Config) -> Dict[str, Any]:
    """Collect prefixed environment variables with type conversion."""
    fields = config_cls.__dataclass_fields__
    data: Dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        config_key = key[len(prefix):].lower()
        if config_key not in fields:
            continue

        # Annotations are strings under postponed evaluation
        type_name = fields[config_key].type
        if not isinstance(type_name, str):
            type_name = getattr(type_name, "__name__", "")
        data[config_key] = _coerce(config_key, type_name, value)

    return data


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "REGEXROUTE_",
) -> Config:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = Config()

    if path:
        if not Path(path).exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        if path.endswith(".json"):
            config = Config.from_json(path)
        elif path.endswith((".yaml", ".yml")):
            config = Config.from_yaml(path)
        else:
            logger.warning(f"Unknown config format: {path}")

    # Override with environment variables
    return config.merge(_read_env(env_prefix))


__all__ = [
    "Config",
    "load_config",
]
