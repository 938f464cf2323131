"""
Configuration loading and saving utilities.

This module loads configuration from YAML or JSON files and environment
variables, and provides the recursive merge used for module configuration.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .models import ApplicationConfig


def merge_configs(base: Dict[str, Any], override: Dict[str, Any],
                  append_lists: bool = False) -> Dict[str, Any]:
    """
    Recursively merge two configuration dictionaries.

    Nested dictionaries are merged key by key; any other value in override
    replaces the value in base. With append_lists, two lists under the same
    key are concatenated instead.

    Args:
        base: Base configuration (not modified)
        override: Configuration taking precedence
        append_lists: Concatenate list values instead of replacing them

    Returns:
        New merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = merge_configs(current, value, append_lists)
        elif append_lists and isinstance(current, list) and isinstance(value, list):
            result[key] = current + value
        else:
            result[key] = value

    return result


class ConfigLoader:
    """Reads and writes ApplicationConfig files, applying environment overrides."""

    def __init__(self, env_prefix: str = "MODMAN_") -> None:
        self._env_prefix = env_prefix

    def load_config(self, config_file: Optional[str] = None) -> ApplicationConfig:
        """
        Load configuration from file and environment variables.

        Args:
            config_file: Path to configuration file (optional)

        Returns:
            Loaded and validated configuration
        """
        config_data: Dict[str, Any] = {}

        if config_file:
            config_data = self.load_file(config_file)

        # Environment variables win over file values
        env_overrides = self._load_from_environment()
        config_data = merge_configs(config_data, env_overrides)

        config = ApplicationConfig.from_dict(config_data)
        config.config_file_path = config_file

        return config

    def save_config(self, config: ApplicationConfig, file_path: str, format: str = "yaml") -> None:
        """
        Save configuration to file.

        Args:
            config: Configuration to save
            file_path: Output file path
            format: File format (yaml or json)
        """
        self.save_file(config.to_dict(), file_path, format)

    def load_file(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a configuration dictionary from a YAML or JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file cannot be parsed or is not a mapping
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {file_path}")

        if path.suffix.lower() in ['.yaml', '.yml']:
            data = self._load_yaml(path)
        elif path.suffix.lower() == '.json':
            data = self._load_json(path)
        else:
            raise ValueError(
                f"Unsupported configuration file format: {path.suffix}")

        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {file_path} must be a mapping")
        return data

    def save_file(self, data: Dict[str, Any], file_path: Union[str, Path],
                  format: str = "yaml") -> None:
        """Save a configuration dictionary as YAML or JSON."""
        if format.lower() == "yaml":
            self._save_yaml(data, Path(file_path))
        elif format.lower() == "json":
            self._save_json(data, Path(file_path))
        else:
            raise ValueError(f"Unsupported format: {format}")

    def _load_yaml(self, path: Path) -> Any:
        """Parse a YAML file; an empty file yields an empty mapping."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Error reading {path}: {e}") from e

    def _load_json(self, path: Path) -> Any:
        """Parse a JSON file."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Error reading {path}: {e}") from e

    def _save_yaml(self, data: Dict[str, Any], path: Path) -> None:
        """Write data as block-style YAML, keeping key order."""
        try:
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False, indent=2, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Error writing YAML to {path}: {e}") from e

    def _save_json(self, data: Dict[str, Any], path: Path) -> None:
        """Write data as indented JSON."""
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError) as e:
            raise ValueError(f"Error writing JSON to {path}: {e}") from e

    def _load_from_environment(self) -> Dict[str, Any]:
        """Collect MODMAN_* style overrides as a nested dictionary."""
        config: Dict[str, Any] = {}

        env_mappings = {
            f"{self._env_prefix}DEBUG": ("debug", self._parse_bool),
            f"{self._env_prefix}ENVIRONMENT": ("environment", str),
            f"{self._env_prefix}LOG_LEVEL": ("logging.level", str),
            f"{self._env_prefix}LOG_DIR": ("logging.log_directory", str),
            f"{self._env_prefix}LOG_BACKEND": ("logging.backend", str),
            f"{self._env_prefix}MODULES": ("modules", self._parse_list),
            f"{self._env_prefix}MODULE_PATHS": ("module_listener_options.module_paths", self._parse_list),
            f"{self._env_prefix}CHECK_DEPENDENCIES": ("module_listener_options.check_dependencies", self._parse_bool),
            f"{self._env_prefix}CONFIG_CACHE_ENABLED": ("module_listener_options.config_cache_enabled", self._parse_bool),
            f"{self._env_prefix}CACHE_DIR": ("module_listener_options.cache_dir", str),
        }

        for env_var, (config_path, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                try:
                    converted_value = converter(value)  # type: ignore[operator]
                    self._set_nested_value(config, config_path, converted_value)
                except (ValueError, TypeError) as e:
                    raise ValueError(
                        f"Invalid value for {env_var}: {value} ({e})")

        return config

    def _parse_bool(self, value: str) -> bool:
        """Interpret common truthy strings."""
        return value.lower() in ('true', '1', 'yes', 'on', 'enabled')

    def _parse_list(self, value: str) -> list:
        """Parse a comma separated list."""
        return [item.strip() for item in value.split(',') if item.strip()]

    def _set_nested_value(self, config: Dict[str, Any], path: str, value: Any) -> None:
        """Set a value at a dotted path, creating intermediate mappings."""
        keys = path.split('.')
        current = config

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value
