"""
Configuration models and data structures.

This module defines the configuration models used by the module manager,
its default listeners and the command line application.
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
_LOG_BACKENDS = ("loguru", "standard")


def _known_fields(cls: type, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        logging.getLogger(__name__).warning(
            f"Ignoring unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")
    return {k: v for k, v in data.items() if k in names}


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_directory: str = "logs"
    max_file_size: str = "10MB"
    backup_count: int = 5
    console_enabled: bool = True
    file_enabled: bool = False
    backend: str = "loguru"

    def __post_init__(self) -> None:
        self.level = self.level.upper()
        if self.level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.level}")
        if self.backend not in _LOG_BACKENDS:
            raise ValueError(
                f"Logging backend must be one of {', '.join(_LOG_BACKENDS)}, got {self.backend}")


@dataclass
class ListenerOptions:
    """Options consumed by the default module listeners."""
    module_paths: List[str] = field(default_factory=list)
    config_glob_paths: List[str] = field(default_factory=list)
    config_static_paths: List[str] = field(default_factory=list)
    extra_config: Dict[str, Any] = field(default_factory=dict)
    config_cache_enabled: bool = False
    config_cache_key: Optional[str] = None
    cache_dir: Optional[str] = None
    check_dependencies: bool = True

    def __post_init__(self) -> None:
        for name in ("module_paths", "config_glob_paths", "config_static_paths"):
            value = getattr(self, name)
            if isinstance(value, str):
                setattr(self, name, [value])
            elif not isinstance(value, list):
                setattr(self, name, list(value))

        if not isinstance(self.extra_config, dict):
            raise ValueError("extra_config must be a dictionary")

        if self.config_cache_enabled and not self.cache_dir:
            raise ValueError("cache_dir is required when config_cache_enabled is set")

    @property
    def config_cache_file(self) -> Path:
        """Path of the merged configuration cache file."""
        if not self.cache_dir:
            raise ValueError("No cache_dir configured")
        suffix = f".{self.config_cache_key}" if self.config_cache_key else ""
        return Path(self.cache_dir) / f"module-config-cache{suffix}.yaml"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ListenerOptions':
        """Create options from a dictionary, ignoring unknown keys."""
        return cls(**_known_fields(cls, data or {}))


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    name: str = "modman"
    version: str = "0.1.0"
    debug: bool = False
    environment: str = "production"

    # Ordered module names, or a mapping of module name to module
    modules: Union[List[Any], Dict[str, Any]] = field(default_factory=list)
    module_listener_options: ListenerOptions = field(default_factory=ListenerOptions)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_file_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.modules, (list, dict)):
            raise ValueError(
                f"modules must be a list or a mapping, got {type(self.modules).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'name': self.name,
            'version': self.version,
            'debug': self.debug,
            'environment': self.environment,
            'modules': self.modules,
            'module_listener_options': self.module_listener_options.to_dict(),
            'logging': asdict(self.logging),
            'config_file_path': self.config_file_path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApplicationConfig':
        """Create configuration from dictionary."""
        return cls(
            name=data.get('name', 'modman'),
            version=data.get('version', '0.1.0'),
            debug=data.get('debug', False),
            environment=data.get('environment', 'production'),
            modules=data.get('modules') or [],
            module_listener_options=ListenerOptions.from_dict(
                data.get('module_listener_options')),
            logging=LoggingConfig(**_known_fields(LoggingConfig, data.get('logging') or {})),
            config_file_path=data.get('config_file_path'),
        )
