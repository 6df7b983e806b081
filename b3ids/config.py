"""Propagation configuration with file, environment and explicit overrides.

Priority, highest first:
- explicit overrides passed to load_config()
- environment variables (B3IDS_USE_COMBINED_HEADER, B3IDS_ID_WIDTH,
  B3IDS_INITIATE_TRACE_PATH_PREFIXES as a comma separated list)
- the [propagation] table of a TOML file (./b3ids.toml, then ~/.b3ids.toml)
- defaults
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from b3ids.errors import ConfigError
from b3ids.tracer.id_generator import IdWidth

CONFIG_FILE_NAME = "b3ids.toml"
HOME_CONFIG_FILE_NAME = ".b3ids.toml"

ENV_PREFIX = "B3IDS_"


class PropagationConfig(BaseModel):
    """
    How inbound calls without trace headers are handled.

    - use_combined_header: originate contexts that encode as a single `b3` header
    - id_width: width of originated trace ids (span ids are always 64 bits)
    - initiate_trace_path_prefixes: originate only for paths starting with one
      of these; the default [""] matches every path
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    use_combined_header: bool = False
    id_width: IdWidth = IdWidth.BITS_64
    initiate_trace_path_prefixes: List[str] = Field(default_factory=lambda: [""])


def find_config_file() -> Optional[str]:
    """Return the first config file found in the current then home directory."""
    candidates = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / HOME_CONFIG_FILE_NAME,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Load a TOML config file.

    Returns an empty dict if the file does not exist.

    Raises:
        ConfigError: if the file is not valid TOML
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError("Invalid TOML config file", details={"path": path, "error": str(exc)}) from exc


def load_env_config() -> Dict[str, Any]:
    """Read B3IDS_* environment variables into config field values."""
    values: Dict[str, Any] = {}

    combined = os.getenv(f"{ENV_PREFIX}USE_COMBINED_HEADER")
    if combined is not None:
        values["use_combined_header"] = combined.strip().lower() in ("1", "true", "yes", "on")

    width = os.getenv(f"{ENV_PREFIX}ID_WIDTH")
    if width is not None:
        try:
            values["id_width"] = int(width)
        except ValueError as exc:
            raise ConfigError("Invalid id width", details={f"{ENV_PREFIX}ID_WIDTH": width}) from exc

    prefixes = os.getenv(f"{ENV_PREFIX}INITIATE_TRACE_PATH_PREFIXES")
    if prefixes is not None:
        values["initiate_trace_path_prefixes"] = [p.strip() for p in prefixes.split(",")]

    return values


def load_config_with_priority(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge file, environment and explicit values; later sources win."""
    path = config_file or find_config_file()
    merged: Dict[str, Any] = {}
    if path:
        merged.update(load_toml_config(path).get("propagation", {}))
    merged.update(load_env_config())
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> PropagationConfig:
    """
    Build a validated PropagationConfig.

    Raises:
        ConfigError: if a source cannot be read or a value is invalid
    """
    merged = load_config_with_priority(config_file, overrides)
    try:
        return PropagationConfig(**merged)
    except ValidationError as exc:
        raise ConfigError("Invalid propagation config", details={"errors": exc.error_count()}) from exc
