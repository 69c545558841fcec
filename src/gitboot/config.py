"""Settings for gitboot itself.

Loads config.toml from the XDG config directory and merges it over the
built-in defaults. The wizard still asks every question; these values only
change the literals it writes (hosting service, branch name, key type).
"""

from __future__ import annotations

import copy
import tomllib
from typing import Any

from .core import CONFIG_DIR

CONFIG_FILE = CONFIG_DIR / "config.toml"

# Default configuration values
DEFAULTS: dict[str, Any] = {
    "hosting": {
        "host": "github.com",
        "https_prefix": "https://github.com/",
        "ssh_prefix": "git@github.com:",
        "keys_url": "https://github.com/settings/keys",
        "test_repo": "https://github.com/octocat/Hello-World.git",
    },
    "git": {
        "default_branch": "main",
        "credential_cache_timeout": 3600,  # seconds
    },
    "ssh": {
        "key_type": "ed25519",
        "rsa_bits": 4096,  # only used when key_type = "rsa"
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path=None) -> dict[str, Any]:
    """Load configuration from config.toml, merged with defaults."""
    config_path = path or CONFIG_FILE
    config = copy.deepcopy(DEFAULTS)

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                user_config = tomllib.load(f)
            config = _deep_merge(config, user_config)
        except (OSError, tomllib.TOMLDecodeError):
            # If config file is malformed, use defaults
            pass

    return config


def get_config_value(config: dict[str, Any], key_path: str, default: Any = None) -> Any:
    """Get a specific config value by dot-separated path.

    Example: get_config_value(config, "git.default_branch", "main")
    """
    keys = key_path.split(".")

    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
