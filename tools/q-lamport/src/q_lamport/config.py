"""Configuration management for q-lamport."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, field_validator

from .hashing import HashAlgorithm
from .signer import IndexingMode

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LamportConfig(BaseModel):
    """Signing configuration."""

    hash_algorithm: str = "sha256"
    indexing: str = "global"
    single_use: bool = False
    log_level: str = "WARNING"

    @field_validator("hash_algorithm")
    @classmethod
    def _check_hash(cls, value: str) -> str:
        return HashAlgorithm.from_string(value).value

    @field_validator("indexing")
    @classmethod
    def _check_indexing(cls, value: str) -> str:
        return IndexingMode.from_string(value).value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {value}")
        return level

    def hash_function(self) -> HashAlgorithm:
        return HashAlgorithm.from_string(self.hash_algorithm)

    def indexing_mode(self) -> IndexingMode:
        return IndexingMode.from_string(self.indexing)


# Config file suffix to serialization format
CONFIG_FORMATS = {
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


def _format_for(config_path: Path) -> str:
    try:
        return CONFIG_FORMATS[config_path.suffix.lower()]
    except KeyError:
        raise ValueError(f"Unsupported config format: {config_path.suffix}") from None


def _dump(data: dict, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    else:
        raise ValueError(f"Unsupported format: {fmt}")


def _parse(text: str, fmt: str) -> Any:
    """Parse config text; syntax errors surface as ValueError."""
    if fmt == "json":
        return json.loads(text)
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML: {e}") from e


def load_config(config_path: Path) -> LamportConfig:
    """Load a signing configuration from a YAML or JSON file.

    An empty file yields the defaults. Missing keys take their defaults.

    Raises:
        ValueError: If the file cannot be parsed, is not a mapping, or
            holds invalid settings
    """
    config_path = Path(config_path)
    data = _parse(config_path.read_text(), _format_for(config_path))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )

    return LamportConfig.model_validate(data)


def save_config(config: LamportConfig, config_path: Path) -> None:
    """Write ``config`` as YAML or JSON, chosen by file suffix."""
    config_path = Path(config_path)
    config_path.write_text(_dump(config.model_dump(), _format_for(config_path)))


def generate_default_config(format: str = "yaml") -> str:
    """Default configuration rendered as ``yaml`` or ``json``."""
    return _dump(LamportConfig().model_dump(), format)


DEFAULT_CONFIG = LamportConfig()

# Bit-compatible with signatures from the per-byte indexing scheme
LEGACY_CONFIG = LamportConfig(indexing="legacy")

HARDENED_CONFIG = LamportConfig(
    hash_algorithm="sha3-256",
    indexing="global",
    single_use=True,
)
