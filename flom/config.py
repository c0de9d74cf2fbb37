"""Configuration management for flom."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError

DEFAULT_USER_COUNTRY = "US"

EXAMPLE_CONFIG = """\
# flom configuration
api:
  # Odesli API key (optional, raises rate limits)
  odesli_key: null

default:
  # Target used when --to is not given: a platform, "all" or "songlink"
  target: null
  # Country code for platform availability
  user_country: US

output:
  # Print only target URLs
  simple: false
"""


def default_config_path() -> Path:
    """Get config file path, honouring FLOM_CONFIG."""
    override = os.getenv("FLOM_CONFIG", "")
    if override.strip():
        return Path(os.path.expanduser(override))
    return Path.home() / ".flom" / "config.yaml"


class Config:
    """flom configuration backed by a YAML file."""

    _instance = None

    def __new__(cls, config_path: Optional[Path] = None):
        """Singleton pattern for config."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton for testing."""
        cls._instance = None

    def __init__(self, config_path: Optional[Path] = None):
        """Load configuration from YAML file.

        A missing file is treated as an empty configuration.
        """
        if self._initialized:
            return

        self.config_path = Path(config_path) if config_path else default_config_path()
        self.config = self._load_config()
        self._initialized = True

    def _load_config(self) -> dict:
        """Load and parse config file."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"failed to read config: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"failed to parse config: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(f"failed to parse config: expected a mapping in {self.config_path}")
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-separated key."""
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set config value by dot-separated key."""
        keys = key.split(".")
        section = self.config

        for k in keys[:-1]:
            if not isinstance(section.get(k), dict):
                section[k] = {}
            section = section[k]

        section[keys[-1]] = value

    def save(self):
        """Write configuration back to the YAML file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                yaml.safe_dump(self.config, f, default_flow_style=False, sort_keys=True)
        except OSError as e:
            raise ConfigError(f"failed to write config: {e}") from e

    def get_str(self, key: str) -> Optional[str]:
        """Get a scalar config value as a string.

        YAML turns unquoted values such as 5 or yes into numbers and
        booleans; they are converted back to text.

        Raises:
            ConfigError: If the value is a mapping or a list
        """
        value = self.get(key)
        if value is None:
            return None
        if isinstance(value, (dict, list)):
            raise ConfigError(f"invalid value for {key}: expected a single value, got {value!r}")
        return str(value)

    @property
    def odesli_key(self) -> Optional[str]:
        """Get Odesli API key."""
        return self.get_str("api.odesli_key")

    @property
    def default_target(self) -> Optional[str]:
        """Get default conversion target."""
        return self.get_str("default.target")

    @property
    def user_country(self) -> Optional[str]:
        """Get country code for lookups."""
        value = self.get("default.user_country")
        # YAML 1.1 reads an unquoted NO (Norway) as false
        if value is False:
            return "NO"
        if value is True:
            raise ConfigError("invalid value for default.user_country: expected a country code")
        return self.get_str("default.user_country")

    @property
    def simple_output(self) -> Optional[bool]:
        """Get simple output mode."""
        value = self.get("output.simple")
        if value is None or isinstance(value, bool):
            return value
        return parse_bool(self.get_str("output.simple"))


def parse_bool(value: str) -> bool:
    """Interpret 1/true/yes (any case) as true, anything else as false."""
    return value.strip().lower() in ("1", "true", "yes")


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is not None and value.strip():
        return value
    return None


def resolve_odesli_key(config: Config) -> Optional[str]:
    """Odesli API key: FLOM_ODESLI_KEY, then config file."""
    return _env("FLOM_ODESLI_KEY") or config.odesli_key


def resolve_default_target(config: Config) -> Optional[str]:
    """Default target: FLOM_DEFAULT_TARGET, then config file."""
    return _env("FLOM_DEFAULT_TARGET") or config.default_target


def resolve_user_country(config: Config) -> str:
    """User country: FLOM_USER_COUNTRY, then config file, then US."""
    return _env("FLOM_USER_COUNTRY") or config.user_country or DEFAULT_USER_COUNTRY


def resolve_simple_output(config: Config) -> Optional[bool]:
    """Simple output mode: FLOM_OUTPUT_SIMPLE, then config file."""
    value = os.getenv("FLOM_OUTPUT_SIMPLE")
    if value is not None:
        return parse_bool(value)
    return config.simple_output
