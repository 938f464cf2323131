"""
Main entry point for the modman command line application.

This module provides the command-line interface used to load and inspect
an application's modules.
"""

import logging
import sys
from typing import List, Optional

import typer
import yaml

from .application.bootstrap import ApplicationBootstrap
from .core.exceptions import ModuleManagerException
from .infrastructure.config.loader import ConfigLoader
from .infrastructure.config.models import ApplicationConfig
from .infrastructure.logging.setup import LoggingManager

# Create CLI application
cli = typer.Typer(
    name="modman",
    help="Staged module loading for application bootstrap"
)

logger = logging.getLogger(__name__)


@cli.command()
def load(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    modules: Optional[List[str]] = typer.Option(
        None, "--module", "-m", help="Module to load (repeatable, appended to configured modules)"
    ),
    module_paths: Optional[List[str]] = typer.Option(
        None, "--module-path", help="Directory to search for modules (repeatable)"
    ),
    check_dependencies: bool = typer.Option(
        True, "--check-dependencies/--no-check-dependencies", help="Check module dependencies"
    ),
    dump_config: bool = typer.Option(
        False, "--dump-config", help="Print the merged module configuration"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level"
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug mode"
    )
) -> None:
    """Load the configured modules and bootstrap the application."""

    try:
        config = ConfigLoader().load_config(config_file)
    except (OSError, ValueError) as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    # Override with command line arguments
    if modules:
        if isinstance(config.modules, dict):
            config.modules.update({name: name for name in modules})
        else:
            config.modules.extend(modules)
    if module_paths:
        config.module_listener_options.module_paths.extend(module_paths)
    if not check_dependencies:
        config.module_listener_options.check_dependencies = False
    if log_level:
        config.logging.level = log_level.upper()
    if debug:
        config.debug = True
        config.logging.level = "DEBUG"

    logging_manager = LoggingManager(config.logging)
    logging_manager.configure()
    logger.info(f"Starting {config.name} v{config.version} ({config.environment})")

    application = ApplicationBootstrap(config, logging_manager=logging_manager)
    try:
        application.run()
    except ModuleManagerException as e:
        logging_manager.log_error("Module loading failed", e)
        typer.echo(f"Module loading failed: {e}", err=True)
        sys.exit(1)

    for module_name, module in application.module_manager.get_loaded_modules().items():
        typer.echo(f"{module_name}: {type(module).__module__}.{type(module).__qualname__}")

    if dump_config:
        typer.echo(yaml.safe_dump(application.merged_config, default_flow_style=False,
                                  sort_keys=False))


@cli.command()
def init_config(
    output: str = typer.Option(
        "config.yaml", "--output", "-o", help="Output configuration file"
    ),
    format: str = typer.Option(
        "yaml", "--format", "-f", help="Configuration format (yaml/json)"
    )
) -> None:
    """Generate a default configuration file."""

    config = ApplicationConfig()
    config_loader = ConfigLoader()

    try:
        config_loader.save_config(config, output, format)
        typer.echo(f"Default configuration saved to {output}")
    except ValueError as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
def validate_config(
    config_file: str = typer.Argument(...,
                                      help="Configuration file to validate")
) -> None:
    """Validate a configuration file."""

    config_loader = ConfigLoader()

    try:
        config = config_loader.load_config(config_file)
        typer.echo(f"Configuration file {config_file} is valid")
        typer.echo(f"Application: {config.name} v{config.version}")
        typer.echo(f"Modules: {len(config.modules)}")
    except (OSError, ValueError) as e:
        typer.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
