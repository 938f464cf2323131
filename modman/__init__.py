"""
modman - staged module loading for application bootstrap.

This package sequences the resolve, init and load phases of a set of named
modules through a priority-ordered event manager, and provides the default
listeners that resolve modules, check dependencies, merge configuration and
register services.
"""

__version__ = "0.1.0"

# Public API exports
from .core.domain.events import Event, ModuleEvent, ModuleEvents
from .core.exceptions import (
    ModuleManagerException, InvalidModulesException, ModuleStateException,
    ModuleResolutionException, ModuleIdentityException, MissingDependencyModuleException
)
from .core.services.event_bus import EventManager
from .core.services.module_manager import ModuleManager, ModuleManagerState
from .listeners.aggregate import DefaultListenerAggregate
from .infrastructure.config.models import ListenerOptions
from .application.container import Container, IContainer
from .application.bootstrap import ApplicationBootstrap

__all__ = [
    "Event",
    "ModuleEvent",
    "ModuleEvents",
    "ModuleManagerException",
    "InvalidModulesException",
    "ModuleStateException",
    "ModuleResolutionException",
    "ModuleIdentityException",
    "MissingDependencyModuleException",
    "EventManager",
    "ModuleManager",
    "ModuleManagerState",
    "DefaultListenerAggregate",
    "ListenerOptions",
    "Container",
    "IContainer",
    "ApplicationBootstrap",
]
