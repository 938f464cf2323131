"""
Configuration management infrastructure.

This module provides configuration models, loading and merging.
"""

from .models import ApplicationConfig, ListenerOptions, LoggingConfig
from .loader import ConfigLoader, merge_configs

__all__ = [
    "ApplicationConfig",
    "ListenerOptions",
    "LoggingConfig",
    "ConfigLoader",
    "merge_configs",
]
