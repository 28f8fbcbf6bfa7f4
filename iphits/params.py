# iphits/params.py

from __future__ import annotations
import json
from pathlib import Path
from typing import Mapping, Optional, Union

from iphits.errors import ConfigError
from iphits.models import CONFIG_FILE, REQUIRED_KEYS, ParameterSet
from iphits.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]


def load_config_file(path: PathLike) -> dict[str, str]:
    """
    Load a flat JSON object of string keys to string values.

    Raises:
        ConfigError: the file cannot be read, is not valid JSON, or is not
            a flat string-to-string object.
    """
    config_path = Path(path).expanduser()
    log.info("Loading config file %s", config_path)
    try:
        raw = config_path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigError(f"Error reading config file: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error reading config file: {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Error reading config file: {config_path}: expected a JSON object, "
            f"got {type(data).__name__}"
        )

    for key, value in data.items():
        if not isinstance(value, str):
            raise ConfigError(
                f"Error reading config file: {config_path}: value for {key!r} "
                f"must be a string, got {type(value).__name__}"
            )

    log.debug("Config file provided %d parameter(s)", len(data))
    return data


def merge_parameters(
        config: Optional[Mapping[str, str]],
        cli: Mapping[str, str],
) -> ParameterSet:
    """Config values first, then every CLI value on top."""
    merged = dict(config or {})
    for key, value in cli.items():
        if key in merged and merged[key] != value:
            log.debug("Command line overrides config for %s", key)
        merged[key] = value
    return ParameterSet(merged)


def resolve_parameters(cli: Mapping[str, str]) -> ParameterSet:
    """
    Build the effective parameter set from command-line values, loading
    the config file named by ``config-file`` if one was given.
    """
    config = None
    if CONFIG_FILE in cli:
        config = load_config_file(cli[CONFIG_FILE])
    return merge_parameters(config, cli)


def require_parameters(params: ParameterSet, keys=REQUIRED_KEYS) -> None:
    params.require(*keys)
