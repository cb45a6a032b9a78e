"""Configuration loader module.

This module provides functions for loading configuration from a YAML file
and the environment and transforming it into a validated ObserverConfig.
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from scm_observer._internal.exceptions import ConfigError

from .schema import ObserverConfig

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "SCM_OBSERVER"
DEFAULT_CONFIG_FILE = "scm-observer.yaml"

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with values that override the base

    Returns:
        Merged dictionary where override values take precedence
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def resolve_env_vars(value: Any) -> Any:
    """Replace ${VAR} patterns in strings with environment variables.

    Dictionaries and lists are walked recursively; unset variables resolve to
    an empty string.
    """
    if isinstance(value, dict):
        return {key: resolve_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [resolve_env_vars(item) for item in value]
    if isinstance(value, str) and "${" in value:
        return _ENV_PATTERN.sub(lambda match: os.environ.get(match.group(1), ""), value)
    return value


def load_yaml_file(path: str) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Dictionary containing configuration from YAML

    Raises:
        ConfigError: If file cannot be read or parsed
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def _env_key_to_path(env_key: str) -> List[str]:
    """Map ``LOGGING_LEVEL`` to ``["logging", "level"]``.

    The first segment names the section; the rest is the field name.
    """
    section, _, field = env_key.lower().partition("_")
    return [section, field] if field else [section]


def load_from_env(prefix: str = DEFAULT_ENV_PREFIX) -> Dict[str, Any]:
    """Load configuration from environment variables with given prefix.

    Args:
        prefix: Prefix for environment variables to consider

    Returns:
        Dictionary containing configuration from environment
    """
    result: Dict[str, Any] = {}
    prefix_upper = f"{prefix.upper()}_"

    for key, value in os.environ.items():
        if not key.startswith(prefix_upper):
            continue
        env_key = key[len(prefix_upper):]
        if env_key == "CONFIG" or not env_key:
            continue

        path = _env_key_to_path(env_key)
        current = result
        for part in path[:-1]:
            current = current.setdefault(part, {})
        current[path[-1]] = value

    return result


def load_config(
    file_path: Optional[str] = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> ObserverConfig:
    """Load ObserverConfig from file and environment.

    Args:
        file_path: Path to config file (defaults to ``<PREFIX>_CONFIG`` from
            the environment or ``scm-observer.yaml``)
        env_prefix: Prefix for environment variables

    Returns:
        Validated ObserverConfig instance

    Raises:
        ConfigError: On loading or validation failure, or when an explicitly
            requested file does not exist
    """
    explicit = file_path is not None or f"{env_prefix}_CONFIG" in os.environ
    path = str(file_path or os.environ.get(f"{env_prefix}_CONFIG", DEFAULT_CONFIG_FILE))

    config_data: Dict[str, Any] = {}
    if os.path.exists(path):
        logger.debug("Loading configuration from %s", path)
        config_data = merge_dicts(config_data, load_yaml_file(path))
    elif explicit:
        raise ConfigError(f"Configuration file not found: {path}")

    env_config = load_from_env(env_prefix)
    if env_config:
        config_data = merge_dicts(config_data, env_config)

    config_data = resolve_env_vars(config_data)

    try:
        return ObserverConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigError(f"Failed to load configuration: {e}") from e
