"""Configuration loading and auto-discovery."""
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import os
import tomllib

from gemedit.exceptions import ConfigError
from gemedit.logging_config import logger


DEFAULTS = {
    "quotes": {
        "gemfile": "single",
        "gemspec": "double",
    },
    "manifest": {
        "default_gemfile": "Gemfile",
        "indent": "  ",  # Ruby convention: two spaces per block level
    },
    "projects": {},  # name -> path
    "logging": {
        "level": "INFO",
    },
}


def config_paths() -> list:
    """Candidate config files in priority order."""
    paths = []

    env_config = os.environ.get("GEMEDIT_CONFIG")
    if env_config:
        paths.append(Path(env_config))

    paths.append(Path("gemedit.toml"))
    paths.append(Path.home() / ".config" / "gemedit" / "config.toml")
    return paths


def load_config() -> Optional[Dict[str, Any]]:
    """
    Load configuration from file.

    Priority:
    1. GEMEDIT_CONFIG environment variable
    2. ./gemedit.toml (project config)
    3. ~/.config/gemedit/config.toml (user config)

    Returns:
        Configuration dict or None if no config found

    Raises:
        ConfigError: If the first config file found is not valid TOML
    """
    for path in config_paths():
        if path.exists():
            try:
                with open(path, "rb") as f:
                    config = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"Invalid config file {path}: {e}") from e
            logger.debug(f"Loaded config from {path}")
            return config

    return None


def get_config_value(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Falls back to DEFAULTS, then to ``default``.

    Example:
        get_config_value("quotes.gemfile", "single")
        get_config_value("manifest.indent")
    """
    sentinel = object()
    config = load_config()
    for source in (config, DEFAULTS):
        if source is None:
            continue
        value = _lookup(source, key, sentinel)
        if value is not sentinel:
            return value
    return default


def get_section(name: str) -> Dict[str, Any]:
    """Get a config section merged over its defaults."""
    config = load_config() or {}
    result = copy.deepcopy(DEFAULTS.get(name, {}))
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a table")
    result.update(section)
    return result


def _lookup(source: Dict[str, Any], key: str, sentinel: Any) -> Any:
    value: Any = source
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return sentinel
    return value
