"""Runtime configuration: YAML config file, environment and CLI overrides.

Precedence is CLI flags > environment variables > config file > Constants
defaults. Resolved values are written onto ``Constants`` so the HTTP helpers
and the registry client pick them up.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

# config file key -> (Constants attribute, type)
_TUNABLES = {
    "registry_url": ("REGISTRY_URL_PACKAGIST", str),
    "request_timeout": ("REQUEST_TIMEOUT", int),
    "retry_max": ("HTTP_RETRY_MAX", int),
    "cache_ttl": ("HTTP_CACHE_TTL_SEC", int),
    "store": ("UPDATE_STORE_FILE", str),
}


class ConfigError(Exception):
    """The configuration file exists but cannot be used."""


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML (or JSON) file.

    Args:
        config_path: Path to YAML/JSON config file.

    Returns:
        Configuration dict; empty when no path is given or the file is missing.

    Raises:
        ConfigError: if the file cannot be read or is not a mapping.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")
    return data


def _apply(key: str, value: Any, source: str) -> None:
    attr, cast = _TUNABLES[key]
    try:
        setattr(Constants, attr, cast(value))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {key} from {source}: {value!r}") from e
    logger.debug("Config %s=%r applied from %s", key, value, source)


def apply_config(config: Dict[str, Any]) -> None:
    """Apply known tunables from a loaded config file; unknown keys are logged."""
    for key, value in config.items():
        if key in _TUNABLES:
            _apply(key, value, "config")
        elif key != "log_level":
            logger.warning("Ignoring unknown config key: %s", key)


def apply_env_overrides(environ: Optional[Dict[str, str]] = None) -> None:
    """Apply COMPOSER_UPDATES_* environment overrides."""
    env = os.environ if environ is None else environ
    registry_url = env.get(Constants.ENV_REGISTRY_URL)
    if registry_url and registry_url.strip():
        _apply("registry_url", registry_url.strip(), "environment")
    timeout = env.get(Constants.ENV_REQUEST_TIMEOUT)
    if timeout and timeout.strip():
        _apply("request_timeout", timeout.strip(), "environment")


def apply_cli_overrides(args) -> None:
    """Apply CLI flags, which take precedence over everything else."""
    if getattr(args, "REGISTRY_URL", None):
        _apply("registry_url", args.REGISTRY_URL, "cli")
    if getattr(args, "STORE", None):
        _apply("store", args.STORE, "cli")


def configure(args) -> Dict[str, Any]:
    """Load the config file named by ``args`` and apply every override layer.

    Returns:
        The raw config mapping (used for settings such as ``log_level``).
    """
    config = load_config(getattr(args, "CONFIG", None))
    apply_config(config)
    apply_env_overrides()
    apply_cli_overrides(args)
    return config
