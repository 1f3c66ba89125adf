"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
configuration file (~/.mockdrills/config.yaml).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

import yaml
from dotenv import load_dotenv

from mockdrills.domain.exceptions import ConfigurationError
from mockdrills.domain.models.delivery import SigningCredential

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".mockdrills"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "MOCKDRILLS_"

DEFAULT_KEY_ID = "default"
DEFAULT_ACCEPTED_FORMATS = ("4.0", "3.1")
DEFAULT_OUTBOX_DIR = "outbox"

# --- Module Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}  # For testing purposes
_loaded = False


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Test overrides
    2. Environment Variables
    3. .env file
    4. YAML configuration file
    5. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config file {config_file}: {e}") from e
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: ENV VARS take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("Skipping .env file loading (no .env found).")

    # 3. Environment Variables (Highest priority) are handled in get_config

    _loaded = True
    logger.debug("Configuration loading process completed.")


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Turns nested YAML sections into dotted keys ('signing': {'key_id'} -> 'signing.key_id')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def env_var_name(key: str) -> str:
    """Returns the environment variable consulted for a dotted config key."""
    return ENV_PREFIX + key.upper().replace('.', '_')


def get_config(key: str, default: Any = None, coerce: bool = True) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable (MOCKDRILLS_<KEY>)
    3. YAML config
    4. Default value

    Args:
        key: The dotted configuration key
        default: Default value if the key is not found
        coerce: Convert environment strings to bool, int or float

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        value = os.environ[env_key]
        if not coerce:
            return value
        # Try to convert common types
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

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default


def get_config_text(key: str, default: Optional[str] = None) -> Optional[str]:
    """Gets a value that must keep its exact text, such as a secret or a format.

    Environment values are returned uncoerced. YAML scalars that were parsed
    as numbers or booleans are rejected, since their original text is lost.

    Raises:
        ConfigurationError: If the configured value is not a string.
    """
    value = get_config(key, default, coerce=False)
    if value is not None and not isinstance(value, str):
        raise ConfigurationError(f"{key} must be text; quote it in {DEFAULT_CONFIG_FILE}.")
    return value


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

# --- Convenience Functions ---

def get_signing_credential(key_id: Optional[str] = None) -> SigningCredential:
    """Builds the signing credential from configuration.

    Args:
        key_id: Overrides the configured key id.

    Raises:
        ConfigurationError: If no signing secret is configured.
    """
    secret = get_config_text('signing.secret')
    if not secret:
        raise ConfigurationError(
            f"No signing secret configured. Set {env_var_name('signing.secret')} or signing.secret in {DEFAULT_CONFIG_FILE}."
        )
    selected_key_id = key_id or get_config_text('signing.key_id', DEFAULT_KEY_ID)
    return SigningCredential(key_id=selected_key_id, secret=secret.encode('utf-8'))


def get_accepted_formats() -> FrozenSet[str]:
    """Gets the format whitelist; accepts a YAML list or a comma-separated string."""
    formats = get_config('sender.accepted_formats', DEFAULT_ACCEPTED_FORMATS, coerce=False)
    if isinstance(formats, str):
        formats = formats.split(',')
    elif not isinstance(formats, (list, tuple, set, frozenset)):
        raise ConfigurationError("sender.accepted_formats must be a list or a comma-separated string.")
    if not all(isinstance(f, str) for f in formats):
        raise ConfigurationError(f"sender.accepted_formats entries must be text; quote them in {DEFAULT_CONFIG_FILE}.")
    accepted = frozenset(f.strip() for f in formats if f.strip())
    if not accepted:
        raise ConfigurationError("sender.accepted_formats must name at least one format.")
    return accepted


def get_outbox_dir() -> Path:
    """Gets the directory the outbox sender delivers into."""
    return Path(str(get_config('sender.outbox_dir', DEFAULT_OUTBOX_DIR)))


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {sorted(config_dict)}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
