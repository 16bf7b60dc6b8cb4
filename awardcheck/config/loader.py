"""Configuration loading with YAML parsing and environment variable expansion."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from awardcheck.config.schema import AwardCheckConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = [
    Path("awardcheck.yaml"),
    Path("~/.awardcheck/config.yaml"),
]

_ENV_PATTERN = re.compile(r"\$\{(\w+)\}")


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand ${ENV_VAR} references in config values."""
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), ""), value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


def _find_config_file(explicit_path: str | Path | None = None) -> Path | None:
    """First existing config file, or None.

    An explicit path that does not exist is reported and skipped; the
    default locations are only searched when no path was given.
    """
    if explicit_path is not None:
        candidates = [Path(explicit_path)]
    else:
        candidates = DEFAULT_CONFIG_PATHS

    for candidate in candidates:
        resolved = candidate.expanduser()
        if resolved.is_file():
            return resolved
        if explicit_path is not None:
            logger.warning("Config file not found: %s", resolved)
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        raw = yaml.safe_load(f)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top level of the config must be a mapping")
    return _expand_env_vars(raw)


def load_config(path: str | Path | None = None) -> AwardCheckConfig:
    """Load and validate configuration.

    Resolution order:
    1. Explicit path argument (or $AWARDCHECK_CONFIG via the CLI)
    2. awardcheck.yaml in current directory
    3. ~/.awardcheck/config.yaml
    4. Built-in program rules (no file needed)

    ``${VAR_NAME}`` references in string values are expanded from the
    environment before validation.
    """
    config_path = _find_config_file(path)
    if config_path is None:
        logger.info("No config file found, using built-in program rules")
        raw: dict[str, Any] = {}
    else:
        logger.info("Loading config from %s", config_path)
        raw = _read_yaml(config_path)

    config = AwardCheckConfig.model_validate(raw)
    logger.debug(
        "Config loaded: version=%d, programs=%s",
        config.version,
        ", ".join(sorted(config.programs)),
    )
    return config
