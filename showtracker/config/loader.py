"""YAML configuration loader.

``config/config.yaml`` carries the fixed parts of the upstream search request
(page number, adult-content flag) that have no environment variable of their
own.  Everything deploy-specific (credential, base URL, locale, cache
directory, log level) lives in :class:`~showtracker.config.settings.Settings`
and is never read from YAML.

The file is layered over built-in defaults, so a partial or missing file
still yields a complete ``tmdb.search`` section.
"""

import copy
from pathlib import Path

import yaml

from showtracker.utils.errors import ConfigurationError

DEFAULTS: dict = {
    "tmdb": {
        "search": {
            "include_adult": False,
            "page": 1,
        },
    },
}


def load_config(path: str = "config/config.yaml") -> dict:
    """Load YAML config and merge it over :data:`DEFAULTS`.

    Args:
        path: Path to the YAML configuration file.  A missing file is
              treated as empty.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: The file is not valid YAML or its top level is
            not a mapping.
    """
    config_path = Path(path)
    yaml_config: object = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                message=f"{config_path} is not valid YAML: {exc}",
                provider_name="config",
            ) from exc

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(
            message=f"{config_path} must hold a mapping, got {type(yaml_config).__name__}",
            provider_name="config",
        )

    config = copy.deepcopy(DEFAULTS)
    _deep_merge(config, yaml_config)
    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
