"""
TOON Configuration Management Module

Runtime settings for the converter's outer surfaces (CLI and MCP tools):
default key field, opt-in validation, size statistics and logging. The TOON
syntax itself (``|`` delimiter, ``#Entity[...]`` tag) is fixed and not part of
the configuration.

Settings are loaded from a YAML or JSON file, then environment variables,
then defaults.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, Optional

import yaml

from entitoon.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "ENTITOON_"
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ToonConverterConfig:
    """Complete converter configuration."""

    default_key_field: str = "id"
    validate_input: bool = False
    include_stats: bool = False

    # Environment settings
    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"

    # Runtime settings
    config_id: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not self.config_id:
            self.config_id = f"toon_config_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data


_SETTABLE_FIELDS = {
    f.name: f for f in fields(ToonConverterConfig) if f.name not in ("created_at", "updated_at")
}


def _coerce(name: str, value: Any) -> Any:
    """Coerce file or environment values to the field's declared type."""
    if _SETTABLE_FIELDS[name].type in ("bool", bool):
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_VALUES
        return bool(value)
    return str(value)


class ToonConfigManager:
    """Manages converter configuration loading, saving, and updates."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.config: Optional[ToonConverterConfig] = None
        self._config_lock = threading.Lock()

    def load_config(self) -> ToonConverterConfig:
        """Load configuration from file or environment."""
        if self.config_path and os.path.exists(self.config_path):
            try:
                return self._load_from_file(self.config_path)
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")

        if self._has_env_overrides():
            return self._load_from_environment()

        return ToonConverterConfig()

    def save_config(
        self, config: ToonConverterConfig, config_path: Optional[str] = None
    ) -> None:
        """Save configuration to file."""
        save_path = config_path or self.config_path
        if not save_path:
            raise ConfigurationError("No configuration path provided")

        config.updated_at = datetime.now()

        try:
            directory = os.path.dirname(save_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(save_path, "w") as f:
                if save_path.endswith(".yaml") or save_path.endswith(".yml"):
                    yaml.safe_dump(config.to_dict(), f, default_flow_style=False, indent=2)
                else:
                    json.dump(config.to_dict(), f, indent=2)
            logger.info(f"Configuration saved to {save_path}")
        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            raise ConfigurationError(f"Failed to save configuration to {save_path}: {e}") from e

    def update_config(self, updates: Dict[str, Any]) -> ToonConverterConfig:
        """Update configuration with new values."""
        with self._config_lock:
            if not self.config:
                self.config = self.load_config()
            self._apply_updates(self.config, updates)
            self.config.updated_at = datetime.now()
            return self.config

    def reset_to_defaults(self) -> ToonConverterConfig:
        """Reset configuration to default values."""
        self.config = ToonConverterConfig()
        return self.config

    def _load_from_file(self, config_path: str) -> ToonConverterConfig:
        """Load configuration from file."""
        with open(config_path, "r") as f:
            if config_path.endswith(".yaml") or config_path.endswith(".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("configuration root must be a mapping")

        config = ToonConverterConfig()
        self._apply_updates(config, data)
        logger.debug(f"Loaded configuration from {config_path}")
        return config

    def _load_from_environment(self) -> ToonConverterConfig:
        """Load configuration from environment variables."""
        config = ToonConverterConfig()
        for name in _SETTABLE_FIELDS:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw:
                setattr(config, name, _coerce(name, raw))
        return config

    def _has_env_overrides(self) -> bool:
        """Check if there are environment variable overrides."""
        return any(os.getenv(ENV_PREFIX + name.upper()) for name in _SETTABLE_FIELDS)

    def _apply_updates(self, config: ToonConverterConfig, updates: Dict[str, Any]) -> None:
        """Apply updates to configuration object."""
        for key, value in updates.items():
            if key in _SETTABLE_FIELDS:
                setattr(config, key, _coerce(key, value))
            elif key not in ("created_at", "updated_at"):
                logger.warning(f"Ignoring unknown configuration key: {key}")


# Global Configuration Manager
_config_manager = ToonConfigManager()


def get_toon_config() -> ToonConverterConfig:
    """Get current converter configuration."""
    if _config_manager.config is None:
        _config_manager.config = _config_manager.load_config()
    return _config_manager.config


def load_toon_config(config_path: str) -> ToonConverterConfig:
    """Load configuration from ``config_path`` and make it current."""
    _config_manager.config_path = config_path
    _config_manager.config = _config_manager.load_config()
    return _config_manager.config


def update_toon_config(updates: Dict[str, Any]) -> ToonConverterConfig:
    """Update converter configuration."""
    return _config_manager.update_config(updates)


def reset_toon_config() -> ToonConverterConfig:
    """Reset converter configuration to defaults."""
    return _config_manager.reset_to_defaults()


def save_toon_config(config_path: Optional[str] = None) -> None:
    """Save current configuration to file."""
    _config_manager.save_config(get_toon_config(), config_path)


# Configuration presets for different environments
ENVIRONMENT_PRESETS = {
    "development": {
        "environment": "development",
        "log_level": "DEBUG",
        "validate_input": True,
        "include_stats": True,
    },
    "staging": {
        "environment": "staging",
        "log_level": "INFO",
        "validate_input": True,
    },
    "production": {
        "environment": "production",
        "log_level": "WARNING",
        "validate_input": False,
        "include_stats": False,
    },
}


def apply_environment_preset(environment: str) -> Optional[ToonConverterConfig]:
    """Apply configuration preset for specific environment."""
    if environment not in ENVIRONMENT_PRESETS:
        logger.warning(f"Unknown environment preset: {environment}")
        return None

    config = update_toon_config(ENVIRONMENT_PRESETS[environment])
    logger.info(f"Applied {environment} environment preset")
    return config
