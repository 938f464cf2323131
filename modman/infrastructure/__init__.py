"""
Infrastructure layer containing configuration loading and logging.

This layer handles external concerns like configuration files, environment
variables and log output.
"""

from .config.loader import ConfigLoader
from .logging.setup import LoggingManager

__all__ = [
    "ConfigLoader",
    "LoggingManager",
]
