"""
Tests for the main entry point and CLI commands.
"""

import os
import pytest
import yaml
from pathlib import Path
from unittest.mock import Mock, patch
from typer.testing import CliRunner

from modman.main import cli
from modman.infrastructure.config.models import ApplicationConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("MODMAN_"):
            monkeypatch.delenv(name)


class TestMainCLI:
    """Test the command line interface."""

    def setup_method(self) -> None:
        self.runner = CliRunner()

    def test_cli_help_command(self) -> None:
        result = self.runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Staged module loading" in result.output

    @patch('modman.infrastructure.logging.setup.setup_logging')
    def test_load_command(self, mock_setup_logging: Mock, assets_dir: Path) -> None:
        result = self.runner.invoke(cli, [
            "load",
            "--module-path", str(assets_dir),
            "-m", "SomeModule",
            "-m", "DependentModule",
        ])

        assert result.exit_code == 0, result.output
        assert "SomeModule: SomeModule.Module" in result.output
        assert "DependentModule: DependentModule.Module" in result.output
        mock_setup_logging.assert_called_once()

    @patch('modman.infrastructure.logging.setup.setup_logging')
    def test_load_command_with_config_file(self, mock_setup_logging: Mock, assets_dir: Path,
                                           tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({
            'modules': ['ListenerTestModule'],
            'module_listener_options': {
                'module_paths': [str(assets_dir)],
                'config_static_paths': [str(assets_dir / "config" / "local.json")],
            },
        }))

        result = self.runner.invoke(cli, ["load", "-c", str(config_file), "--dump-config"])

        assert result.exit_code == 0, result.output
        assert "ListenerTestModule: ListenerTestModule.Module" in result.output
        assert "listener: test" in result.output
        assert "host: db.local" in result.output

    @patch('modman.infrastructure.logging.setup.setup_logging')
    def test_load_command_log_options(self, mock_setup_logging: Mock) -> None:
        result = self.runner.invoke(cli, ["load", "--debug"])

        assert result.exit_code == 0, result.output
        logging_config = mock_setup_logging.call_args[0][0]
        assert logging_config.level == "DEBUG"

    @patch('modman.infrastructure.logging.setup.setup_logging')
    def test_load_command_missing_dependency(self, mock_setup_logging: Mock, assets_dir: Path) -> None:
        args = ["load", "--module-path", str(assets_dir), "-m", "DependentModule", "-m", "SomeModule"]

        result = self.runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "Module loading failed" in result.output

        result = self.runner.invoke(cli, [*args, "--no-check-dependencies"])
        assert result.exit_code == 0, result.output

    @patch('modman.infrastructure.logging.setup.setup_logging')
    def test_load_command_unknown_module(self, mock_setup_logging: Mock) -> None:
        result = self.runner.invoke(cli, ["load", "-m", "NoSuchModuleAnywhere"])

        assert result.exit_code == 1
        assert "Module (NoSuchModuleAnywhere) could not be initialized." in result.output

    @patch('modman.main.LoggingManager.log_error')
    @patch('modman.infrastructure.logging.setup.setup_logging')
    def test_load_failure_reported_through_logging_manager(self, mock_setup_logging: Mock,
                                                          mock_log_error: Mock) -> None:
        result = self.runner.invoke(cli, ["load", "-m", "NoSuchModuleAnywhere"])

        assert result.exit_code == 1
        mock_log_error.assert_called_once()
        message, error = mock_log_error.call_args[0]
        assert message == "Module loading failed"
        assert error.module_name == "NoSuchModuleAnywhere"

    def test_load_command_missing_config(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["load", "-c", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "Error loading configuration" in result.output

    def test_init_config_command(self, tmp_path: Path) -> None:
        output = tmp_path / "config.yaml"

        result = self.runner.invoke(cli, ["init-config", "--output", str(output)])

        assert result.exit_code == 0
        assert output.is_file()
        assert yaml.safe_load(output.read_text())['name'] == ApplicationConfig().name

    def test_init_config_unsupported_format(self, tmp_path: Path) -> None:
        result = self.runner.invoke(
            cli, ["init-config", "--output", str(tmp_path / "c.ini"), "--format", "ini"])

        assert result.exit_code == 1
        assert "Error saving configuration" in result.output

    def test_validate_config_command_success(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({'name': 'blog', 'modules': ['A', 'B']}))

        result = self.runner.invoke(cli, ["validate-config", str(config_file)])

        assert result.exit_code == 0
        assert "is valid" in result.output
        assert "Application: blog" in result.output
        assert "Modules: 2" in result.output

    def test_validate_config_command_failure(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({'modules': 'not-a-list'}))

        result = self.runner.invoke(cli, ["validate-config", str(config_file)])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output
