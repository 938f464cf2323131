"""
Core interfaces defining the contracts for the module loading components.

These interfaces provide the foundation for dependency inversion and let
listeners and module managers be replaced independently.
"""

from .events import IEventManager, IListenerAggregate, DEFAULT_PRIORITY
from .modules import IModuleManager
from .config import IConfigMerger
from .features import (
    InitProvider, ConfigProvider, BootstrapListener,
    LocatorRegistered, DependencyIndicator
)

__all__ = [
    "IEventManager",
    "IListenerAggregate",
    "DEFAULT_PRIORITY",
    "IModuleManager",
    "IConfigMerger",
    "InitProvider",
    "ConfigProvider",
    "BootstrapListener",
    "LocatorRegistered",
    "DependencyIndicator",
]
