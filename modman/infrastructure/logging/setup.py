"""
Logging setup and configuration utilities.

This module provides centralized logging configuration using loguru
with support for file rotation, and forwards records emitted through the
standard logging module into loguru sinks.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger as loguru_logger

from ..config.models import LoggingConfig


class LoguruForwardHandler(logging.Handler):
    """Standard logging handler that re-emits records through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        loguru_logger.opt(depth=6, exception=record.exc_info).bind(
            name=record.name).log(level, record.getMessage())


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure process-wide logging for the selected backend.

    Args:
        config: Logging configuration
    """
    if config.backend == "loguru":
        _setup_loguru_logging(config)
    else:
        _setup_standard_logging(config)


def _setup_loguru_logging(config: LoggingConfig) -> None:
    """Configure loguru sinks and route stdlib logging into them."""
    # Remove default handler
    loguru_logger.remove()

    if config.console_enabled:
        loguru_logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                   "<level>{level: <8}</level> | "
                   "<cyan>{extra[name]}</cyan> - "
                   "<level>{message}</level>",
            level=config.level,
            colorize=True,
            backtrace=True,
            diagnose=config.level == "DEBUG"
        )

    if config.file_enabled:
        log_dir = Path(config.log_directory)
        log_dir.mkdir(parents=True, exist_ok=True)

        loguru_logger.add(
            log_dir / "modman.log",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
                   "{extra[name]} - {message}",
            level=config.level,
            rotation=config.max_file_size,
            retention=config.backup_count,
            compression="zip",
            backtrace=True,
            diagnose=False
        )

    loguru_logger.configure(extra={"name": "modman"})

    # Route stdlib loggers into loguru
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(LoguruForwardHandler())
    root_logger.setLevel(_standard_level(config.level))


def _setup_standard_logging(config: LoggingConfig) -> None:
    """Configure plain logging handlers on the root logger."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(_standard_level(config.level))

    formatter = logging.Formatter(config.format)

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if config.file_enabled:
        log_dir = Path(config.log_directory)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "modman.log")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def _standard_level(level: str) -> int:
    # loguru-only levels map onto their nearest stdlib level
    return {
        "TRACE": logging.DEBUG,
        "SUCCESS": logging.INFO,
    }.get(level, getattr(logging, level, logging.INFO))


def _as_logging_config(config: Union[LoggingConfig, Dict[str, Any], None]) -> LoggingConfig:
    if isinstance(config, LoggingConfig):
        return config
    return LoggingConfig(**(config or {}))


class LoggingManager:
    """
    Runtime access to the configured logging backend.

    Provides utilities for structured logging on top of the configured
    backend.
    """

    def __init__(self, config: Union[LoggingConfig, Dict[str, Any], None] = None) -> None:
        self._config = _as_logging_config(config)
        self._configured = False
        self._logger = logging.getLogger(__name__)

    @property
    def config(self) -> LoggingConfig:
        return self._config

    @property
    def configured(self) -> bool:
        """True once configure() has applied the configuration."""
        return self._configured

    def configure(self, config: Union[LoggingConfig, Dict[str, Any], None] = None) -> None:
        """Apply (and optionally replace) the logging configuration."""
        if config is not None:
            self._config = _as_logging_config(config)

        setup_logging(self._config)
        self._configured = True
        self._logger.debug(
            f"Logging configured: level={self._config.level}, backend={self._config.backend}")

    def get_logger(self, name: str) -> Any:
        """
        Get a logger instance for the given name.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        if self._config.backend == "loguru":
            return loguru_logger.bind(name=name)
        return logging.getLogger(name)

    def log_error(self, message: str, error: Optional[Exception] = None, **kwargs: Any) -> None:
        """
        Log an error message with optional exception.

        Args:
            message: Error message
            error: Exception instance
            **kwargs: Additional context
        """
        if self._config.backend == "loguru":
            bound = loguru_logger.bind(**kwargs)
            if error:
                bound.opt(exception=error).error(f"{message}: {error}")
            else:
                bound.error(message)
        elif error:
            self._logger.error(f"{message}: {error}", exc_info=error)
        else:
            self._logger.error(message)

    def log_structured(self, level: str, message: str, **kwargs: Any) -> None:
        """
        Log a structured message with additional context.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            message: Log message
            **kwargs: Additional structured data
        """
        if self._config.backend == "loguru":
            loguru_logger.bind(**kwargs).log(level.upper(), message)
        else:
            log_func = getattr(self._logger, level.lower(), self._logger.info)
            log_func(f"{message} - {kwargs}")
