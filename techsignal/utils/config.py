"""Configuration file loading and access."""
import os
from typing import Any, Optional
import yaml


class ConfigError(Exception):
    """Configuration related error."""
    pass


class Config:
    """YAML configuration manager.

    Nested keys are addressed with dots.

    Example:
        config = Config("config/config.yaml")
        rsi_period = config.get("indicators.rsi_period", 14)
        level = config.get("logging.level", "INFO")
    """

    def __init__(self, config_path: str):
        """Load configuration.

        Args:
            config_path: Path to the YAML file

        Raises:
            ConfigError: File missing or not valid YAML
        """
        self._config_path = config_path

        if not os.path.exists(config_path):
            raise ConfigError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid config file format: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping: {config_path}")
        self._data = data

    @classmethod
    def from_dict(cls, data: dict, config_path: str = "") -> "Config":
        """Build a config from an in-memory mapping (no file access)."""
        config = cls.__new__(cls)
        config._config_path = config_path
        config._data = dict(data)
        return config

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Get a config value.

        Args:
            key: Dotted key, e.g. "indicators.macd.fast"
            default: Returned when the key is missing

        Returns:
            Config value or default
        """
        keys = key.split(".")
        value = self._data

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set a config value, creating intermediate sections as needed."""
        keys = key.split(".")
        data = self._data

        for k in keys[:-1]:
            if k not in data:
                data[k] = {}
            data = data[k]

        data[keys[-1]] = value

    def save(self) -> None:
        """Write the config back to its file.

        Raises:
            ConfigError: Save failed
        """
        if not self._config_path:
            raise ConfigError("Config has no file path to save to")
        try:
            with open(self._config_path, "w", encoding="utf-8") as f:
                yaml.dump(
                    self._data,
                    f,
                    allow_unicode=True,
                    default_flow_style=False,
                    sort_keys=False
                )
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to save config: {e}")
