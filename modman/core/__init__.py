"""
Core module containing the module lifecycle, event manager and interfaces.

This module defines the module loading state machine and the abstractions
it depends on, independent of configuration and infrastructure concerns.
"""

from .domain.events import Event, ModuleEvent, ModuleEvents
from .domain.results import ResponseCollection
from .interfaces.events import IEventManager, IListenerAggregate
from .interfaces.modules import IModuleManager
from .services.event_bus import EventManager
from .services.module_manager import ModuleManager, ModuleManagerState

__all__ = [
    "Event",
    "ModuleEvent",
    "ModuleEvents",
    "ResponseCollection",
    "IEventManager",
    "IListenerAggregate",
    "IModuleManager",
    "EventManager",
    "ModuleManager",
    "ModuleManagerState",
]
