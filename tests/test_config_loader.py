"""
Tests for configuration loader.

This module tests the ConfigLoader class including file loading,
environment variable processing, and configuration merging.
"""

import pytest
import json
import os
from pathlib import Path
from typing import Any, Dict
from unittest.mock import patch

from modman.infrastructure.config.loader import ConfigLoader, merge_configs
from modman.infrastructure.config.models import ApplicationConfig


class TestMergeConfigs:
    """Test cases for the recursive configuration merge."""

    def test_nested_merge(self) -> None:
        base = {'db': {'host': 'a', 'port': 1}, 'name': 'base'}
        override = {'db': {'host': 'b'}, 'extra': True}

        merged = merge_configs(base, override)

        assert merged == {'db': {'host': 'b', 'port': 1}, 'name': 'base', 'extra': True}
        assert base == {'db': {'host': 'a', 'port': 1}, 'name': 'base'}

    def test_lists_are_replaced_by_default(self) -> None:
        assert merge_configs({'items': [1]}, {'items': [2]}) == {'items': [2]}

    def test_lists_can_be_appended(self) -> None:
        merged = merge_configs({'items': [1], 'nested': {'items': ['a']}},
                               {'items': [2], 'nested': {'items': ['b']}},
                               append_lists=True)

        assert merged == {'items': [1, 2], 'nested': {'items': ['a', 'b']}}

    def test_scalar_replaces_mapping(self) -> None:
        assert merge_configs({'db': {'host': 'a'}}, {'db': None}) == {'db': None}


class TestConfigLoader:
    """Test cases for ConfigLoader class."""

    @pytest.fixture
    def config_loader(self) -> ConfigLoader:
        """Create a ConfigLoader instance."""
        return ConfigLoader()

    @pytest.fixture
    def sample_config_dict(self) -> Dict[str, Any]:
        """Sample configuration dictionary."""
        return {
            "name": "Test Application",
            "version": "1.0.0",
            "debug": True,
            "environment": "testing",
            "modules": ["Application", "Blog"],
            "module_listener_options": {
                "module_paths": ["./module"],
                "config_glob_paths": ["config/autoload/*.yaml"],
                "check_dependencies": False
            },
            "logging": {
                "level": "DEBUG",
                "console_enabled": True,
                "file_enabled": False
            }
        }

    @pytest.fixture
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Remove MODMAN_ variables inherited from the environment."""
        for name in list(os.environ):
            if name.startswith("MODMAN_"):
                monkeypatch.delenv(name)

    def test_load_yaml_file(self, config_loader: ConfigLoader, tmp_path: Path,
                            sample_config_dict: Dict[str, Any], clean_env: None) -> None:
        """Test loading configuration from a YAML file."""
        config_file = tmp_path / "config.yaml"
        config_loader.save_file(sample_config_dict, config_file, "yaml")

        config = config_loader.load_config(str(config_file))

        assert isinstance(config, ApplicationConfig)
        assert config.name == "Test Application"
        assert config.debug is True
        assert config.modules == ["Application", "Blog"]
        assert config.module_listener_options.module_paths == ["./module"]
        assert config.module_listener_options.check_dependencies is False
        assert config.logging.level == "DEBUG"
        assert config.config_file_path == str(config_file)

    def test_load_json_file(self, config_loader: ConfigLoader, tmp_path: Path,
                            sample_config_dict: Dict[str, Any], clean_env: None) -> None:
        """Test loading configuration from a JSON file."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(sample_config_dict))

        config = config_loader.load_config(str(config_file))

        assert config.environment == "testing"
        assert config.module_listener_options.config_glob_paths == ["config/autoload/*.yaml"]

    def test_load_without_file(self, config_loader: ConfigLoader, clean_env: None) -> None:
        config = config_loader.load_config()

        assert config.name == "modman"
        assert config.modules == []
        assert config.config_file_path is None

    def test_empty_yaml_file(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert config_loader.load_file(config_file) == {}

    def test_file_not_found(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            config_loader.load_config(str(tmp_path / "missing.yaml"))

    def test_unsupported_format(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        config_file = tmp_path / "config.txt"
        config_file.write_text("name: x")

        with pytest.raises(ValueError, match="Unsupported configuration file format"):
            config_loader.load_file(config_file)

    def test_invalid_yaml(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("name: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            config_loader.load_file(config_file)

    def test_invalid_json(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            config_loader.load_file(config_file)

    def test_top_level_must_be_mapping(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            config_loader.load_file(config_file)

    def test_save_config_round_trip(self, config_loader: ConfigLoader, tmp_path: Path,
                                    clean_env: None) -> None:
        config = ApplicationConfig(name="saved", modules=["A"])
        output = tmp_path / "saved.json"

        config_loader.save_config(config, str(output), "json")
        loaded = config_loader.load_config(str(output))

        assert loaded.name == "saved"
        assert loaded.modules == ["A"]

    def test_save_unsupported_format(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unsupported format"):
            config_loader.save_file({}, tmp_path / "out.ini", "ini")

    def test_environment_overrides(self, config_loader: ConfigLoader, tmp_path: Path,
                                   sample_config_dict: Dict[str, Any], clean_env: None) -> None:
        """Test that environment variables override file values."""
        config_file = tmp_path / "config.yaml"
        config_loader.save_file(sample_config_dict, config_file)

        env = {
            "MODMAN_DEBUG": "false",
            "MODMAN_LOG_LEVEL": "warning",
            "MODMAN_MODULES": "One, Two ,,Three",
            "MODMAN_MODULE_PATHS": "/srv/modules",
            "MODMAN_CHECK_DEPENDENCIES": "yes",
        }
        with patch.dict("os.environ", env):
            config = config_loader.load_config(str(config_file))

        assert config.debug is False
        assert config.logging.level == "WARNING"
        assert config.modules == ["One", "Two", "Three"]
        assert config.module_listener_options.module_paths == ["/srv/modules"]
        assert config.module_listener_options.check_dependencies is True
        # Untouched nested values are kept
        assert config.module_listener_options.config_glob_paths == ["config/autoload/*.yaml"]

    def test_environment_cache_settings(self, config_loader: ConfigLoader, tmp_path: Path,
                                        clean_env: None) -> None:
        env = {
            "MODMAN_CONFIG_CACHE_ENABLED": "1",
            "MODMAN_CACHE_DIR": str(tmp_path),
        }
        with patch.dict("os.environ", env):
            config = config_loader.load_config()

        assert config.module_listener_options.config_cache_enabled is True
        assert config.module_listener_options.config_cache_file.parent == tmp_path

    def test_custom_env_prefix(self, clean_env: None) -> None:
        with patch.dict("os.environ", {"APP_ENVIRONMENT": "staging"}):
            config = ConfigLoader(env_prefix="APP_").load_config()

        assert config.environment == "staging"
