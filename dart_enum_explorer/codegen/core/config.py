"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Any, Optional, Union

from ...logging_config import get_logger
from .naming import is_identifier_fragment

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Configuration for the enum code generator and its document edits."""

    # Suffix of the aggregate extension block (Status -> StatusX)
    extension_suffix: str = "X"

    # Per-operation container suffix overrides, keyed by operation name
    operation_suffixes: Dict[str, str] = field(default_factory=dict)

    # Parse policy for enums that repeat a value
    allow_duplicate_values: bool = False

    # Inserted blocks end with a newline
    add_trailing_newline: bool = True

    # Unknown keys from files or overrides
    custom: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a JSON-compatible dictionary; custom keys are inlined."""
        data = {
            "extension_suffix": self.extension_suffix,
            "operation_suffixes": dict(self.operation_suffixes),
            "allow_duplicate_values": self.allow_duplicate_values,
            "add_trailing_newline": self.add_trailing_newline,
        }
        data.update(self.custom)
        return data


DEFAULT_CONFIG: Dict[str, Any] = {
    "extension_suffix": "X",
    "operation_suffixes": {},
    "allow_duplicate_values": False,
    "add_trailing_newline": True,
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = json.loads(json.dumps(DEFAULT_CONFIG))

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration: defaults, then file, then overrides
        """
        base_config = json.loads(json.dumps(self._defaults))

        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(target: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into target; operation_suffixes merge key by key."""
        for key, value in overrides.items():
            if key == "operation_suffixes" and isinstance(value, dict):
                target.setdefault(key, {}).update(value)
            else:
                target[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        if not isinstance(config_args.get("operation_suffixes", {}), dict):
            raise ConfigError("operation_suffixes must be a JSON object")

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.extension_suffix:
            warnings.append("extension_suffix is empty; the extension would shadow the enum name")
        elif not is_identifier_fragment(config.extension_suffix):
            warnings.append(f"Invalid extension_suffix: {config.extension_suffix}")

        for operation, suffix in config.operation_suffixes.items():
            if not suffix or not is_identifier_fragment(suffix):
                warnings.append(f"Invalid suffix for {operation}: {suffix!r}")

        for key in config.custom:
            warnings.append(f"Unknown configuration key: {key}")

        return warnings


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
