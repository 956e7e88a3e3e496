"""Application configuration with YAML + env vars + CLI override support."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ParserConfig:
    delimiters: list[str] = field(default_factory=lambda: ["{}"])
    strict: bool = False
    max_depth: int | None = None


@dataclass
class SourceConfig:
    encoding: str = "utf-8"


@dataclass
class OutputConfig:
    format: str = "debug"  # debug | tree | json


@dataclass
class ServerConfig:
    mode: str = "stdio"
    port: int = 8080
    verbose: bool = False


@dataclass
class AppConfig:
    parser: ParserConfig = field(default_factory=ParserConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


# Env var name -> "section.field"
_ENV_MAPPING: dict[str, str] = {
    "BLOCKSEP_DELIMITERS": "parser.delimiters",
    "BLOCKSEP_STRICT": "parser.strict",
    "BLOCKSEP_MAX_DEPTH": "parser.max_depth",
    "BLOCKSEP_ENCODING": "source.encoding",
    "BLOCKSEP_FORMAT": "output.format",
    "BLOCKSEP_MODE": "server.mode",
    "BLOCKSEP_PORT": "server.port",
    "BLOCKSEP_VERBOSE": "server.verbose",
}

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})


def load_config(
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load configuration with priority: YAML < env vars < CLI overrides.

    Every source is flattened to ``{"section.field": value}`` and applied in
    priority order, so later layers win.

    Args:
        config_path: Path to YAML config file. None to skip.
        cli_overrides: CLI values keyed by "section.field". None values are
            skipped (the option was not given).
    """
    layers: list[dict[str, Any]] = []
    if config_path:
        layers.append(_read_yaml_layer(config_path))
    layers.append(_read_env_layer())
    if cli_overrides:
        layers.append(cli_overrides)

    config = AppConfig()
    for layer in layers:
        for key, value in layer.items():
            _apply_value(config, key, value)
    return config


def _read_yaml_layer(config_path: str) -> dict[str, Any]:
    path = Path(config_path)
    if not path.is_file():
        logger.warning("Config file not found: %s, using defaults", config_path)
        return {}

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        logger.warning("Config file is not a valid YAML mapping: %s", config_path)
        return {}

    layer: dict[str, Any] = {}
    for section_name, section_data in data.items():
        if not isinstance(section_data, dict):
            continue
        for key, value in section_data.items():
            layer[f"{section_name}.{key}"] = value

    logger.info("Loaded config from %s", config_path)
    return layer


def _read_env_layer() -> dict[str, Any]:
    return {
        key: os.environ[env_name]
        for env_name, key in _ENV_MAPPING.items()
        if env_name in os.environ
    }


def _apply_value(config: AppConfig, key: str, value: Any) -> None:
    if value is None:
        return
    section_name, _, field_name = key.partition(".")
    section = getattr(config, section_name, None) if field_name else None
    if section is None or not is_dataclass(section) or isinstance(section, type):
        logger.debug("Ignoring unknown config key: %s", key)
        return

    field_types = {f.name: f.type for f in fields(section)}
    if field_name not in field_types:
        logger.debug("Ignoring unknown config key: %s", key)
        return
    setattr(section, field_name, _coerce_value(value, str(field_types[field_name])))


def _coerce_value(value: Any, type_name: str) -> Any:
    """Coerce a raw YAML/env/CLI value to a field's annotated type.

    ``type_name`` is the string annotation, e.g. ``"int | None"``.
    """
    optional = "None" in type_name
    base = type_name.replace("| None", "").strip()

    if base.startswith("list"):
        # "{} ()" from env or CLI, or a YAML sequence
        if isinstance(value, str):
            return value.split()
        return [str(v) for v in value]

    if base == "bool":
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)

    if base == "int":
        try:
            return int(value)
        except (TypeError, ValueError):
            if optional:
                return None
            raise

    return value
