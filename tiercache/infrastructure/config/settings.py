"""Provides functions for loading and accessing tiercache settings.

Supports loading from a YAML file, a .env file and environment variables.
Nothing is loaded on import; call load_configuration() first.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from tiercache.domain.models.cache_entry import CacheOptions
from tiercache.infrastructure.cache.disk_adapter import DEFAULT_DISK_CACHE_DIR

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".tiercache"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"

TTL_MS_KEY = "tiercache.ttl_ms"
EXPIRATION_THRESHOLD_MS_KEY = "tiercache.expiration_threshold_ms"
DISK_CACHE_DIR_KEY = "tiercache.disk_cache_dir"

_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from a YAML file and a .env file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("No .env file found at or above current directory.")

    _loaded = True


def reset_configuration() -> None:
    """Forgets loaded YAML values so load_configuration() reads again."""
    global _config, _loaded
    _config = {}
    _loaded = False


def _flatten(tree: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Turns nested YAML sections into dotted keys ('tiercache.ttl_ms')."""
    flat: Dict[str, Any] = {}
    for key, value in tree.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration
    2. Environment variable (upper-cased, dots replaced by underscores)
    3. YAML config
    4. Default value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = key.upper().replace('.', '_')
    if env_key in os.environ:
        value = os.environ[env_key]
        if value.lower() == 'true':
            return True
        elif value.lower() == 'false':
            return False
        try:
            if '.' in value:
                return float(value)
            else:
                return int(value)
        except (ValueError, TypeError):
            return value

    if key in _config:
        return _config[key]

    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def _get_int(key: str, default: int) -> int:
    value = get_config(key, default)
    if isinstance(value, bool):
        logger.warning(f"Invalid value for {key}: {value!r}. Using default {default}.")
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        logger.warning(f"Invalid value for {key}: {value!r}. Using default {default}.")
        return default


# --- Convenience Functions ---

def get_cache_options() -> CacheOptions:
    """Builds instance defaults for TieredCacheService from configuration."""
    defaults = CacheOptions()
    return CacheOptions(
        ttl_ms=_get_int(TTL_MS_KEY, defaults.ttl_ms),
        expiration_threshold_ms=_get_int(EXPIRATION_THRESHOLD_MS_KEY, defaults.expiration_threshold_ms),
    )


def get_disk_cache_dir() -> Path:
    """Directory used by DiskCacheAdapter."""
    return Path(str(get_config(DISK_CACHE_DIR_KEY, DEFAULT_DISK_CACHE_DIR))).expanduser()


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """Overrides configuration values; takes precedence over everything else."""
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
