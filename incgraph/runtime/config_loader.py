"""Helpers for loading scan configuration from TOML/JSON sources.

This module provides a single entry point `load_scan_config` that accepts
various configuration sources:

* None -> command-line overrides only
* dict -> already-parsed mapping
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

Command-line overrides are merged on top before validation, so every value
goes through the same `ScanConfig` checks regardless of where it came from.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from incgraph.config.schema import ScanConfig
from incgraph.errors import ConfigurationError

logger = logging.getLogger("incgraph.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _read_source(source: ConfigSource) -> Dict[str, Any]:
    if source is None:
        logger.debug("No config source provided; using command-line values only")
        return {}

    # Already parsed mapping
    if isinstance(source, dict):
        logger.debug("Loading ScanConfig from provided dict")
        return dict(source)

    if not isinstance(source, (str, Path)):
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    # Path or string (file path or inline text)
    path = Path(source)
    text: Optional[str] = None
    fmt: Optional[str] = None

    try:
        is_file = path.is_file()
    except OSError:
        # Inline strings can exceed the platform path length limit.
        is_file = False

    if is_file:
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        else:
            # Fallback: guess from content
            stripped = text.lstrip()
            fmt = "json" if stripped.startswith(("{", "[")) else "toml"
        logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
    elif path.suffix.lower() in {".toml", ".tml", ".json"} and "\n" not in str(source):
        raise FileNotFoundError(f"Configuration file not found: {path}")
    else:
        # Inline string; auto-detect format
        text = str(source)
        stripped = text.lstrip()
        fmt = "json" if stripped.startswith(("{", "[")) else "toml"
        logger.info("Loading configuration from inline %s string", fmt)

    if fmt == "json":
        data = json.loads(text)
    else:
        data = tomllib.loads(text)

    if not isinstance(data, dict):
        raise ValueError("Top-level configuration must be a mapping/dict")

    # Tables like [scan] are accepted as a wrapper around the fields.
    if set(data) == {"scan"} and isinstance(data["scan"], dict):
        data = data["scan"]
    return data


def load_scan_config(source: ConfigSource = None, **overrides: Any) -> ScanConfig:
    """Load and validate a ScanConfig.

    Args:
        source: One of:
            * None: only ``overrides`` are used
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)
        **overrides: Field values taking precedence over ``source``;
            None values are ignored.

    Returns:
        ScanConfig instance.

    Raises:
        ConfigurationError: If the source cannot be read or parsed, or the
            merged values fail validation.
    """
    try:
        data = _read_source(source)
    except (OSError, ValueError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Invalid configuration source: {exc}") from exc

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ScanConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


__all__ = ["load_scan_config"]
