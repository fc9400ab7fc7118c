"""Loading and validation of the optional YAML configuration file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from airsensors.core.calibration import DEFAULT_INTERVAL_S
from airsensors.core.errors import ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_BUS = 1


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class Settings:
    bus: int = DEFAULT_BUS
    baseline_file: Path | None = None
    baseline_interval_s: float = DEFAULT_INTERVAL_S


def default_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "airsensors" / "config.yaml"


def _load_schema_validator() -> Any:
    schema_text = resources.files("airsensors.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at root")
    return loaded


def _build_settings(doc: dict[str, Any], source: Path) -> Settings:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    sgp30 = doc.get("sgp30", {})
    baseline_file = sgp30.get("baseline_file")
    if baseline_file is not None:
        baseline_file = Path(baseline_file).expanduser()
        if not baseline_file.is_absolute():
            baseline_file = source.parent / baseline_file

    return Settings(
        bus=int(doc.get("bus", DEFAULT_BUS)),
        baseline_file=baseline_file,
        baseline_interval_s=float(sgp30.get("baseline_interval_s", DEFAULT_INTERVAL_S)),
    )


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from ``path`` or the default location.

    An explicit path must exist; a missing default file gives default settings.
    """
    explicit = path is not None
    config_path = path if path is not None else default_config_path()
    if not explicit and not config_path.exists():
        LOGGER.debug("No config file at %s, using defaults", config_path)
        return Settings()

    doc = _read_yaml(config_path)
    settings = _build_settings(doc, config_path)
    LOGGER.debug("Loaded settings from %s: %s", config_path, settings)
    return settings
