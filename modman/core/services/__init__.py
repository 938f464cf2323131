"""
Core services implementing the event manager and the module manager.
"""

from .event_bus import EventManager, EventSubscription
from .module_manager import ModuleManager, ModuleManagerState, is_module_object

__all__ = [
    "EventManager",
    "EventSubscription",
    "ModuleManager",
    "ModuleManagerState",
    "is_module_object",
]
