"""
Event domain models for staged module loading.

This module defines the generic event carried through the event manager, the
module lifecycle event used by the module manager, and the fixed set of
lifecycle event names.
"""

import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class Event:
    """
    Mutable event passed to every listener of a named event.

    Unlike a message, an event is a shared context: listeners may read and
    write params and may stop propagation to the remaining listeners.
    """

    name: str = ""
    """Event name used to look up listeners."""

    target: Any = None
    """Object that triggered the event."""

    params: Dict[str, Any] = field(default_factory=dict)
    """Free-form parameters shared between listeners."""

    timestamp: float = field(default_factory=time.time)
    """Unix timestamp when the event was created."""

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    """Unique event identifier."""

    propagation_stopped: bool = False
    """True once a listener asked to stop propagation."""

    def __post_init__(self) -> None:
        if not isinstance(self.params, dict):
            raise ValueError("Event params must be a dictionary")

    def get_param(self, name: str, default: Any = None) -> Any:
        """Get a single parameter, or default when missing."""
        return self.params.get(name, default)

    def set_param(self, name: str, value: Any) -> None:
        """Set a single parameter."""
        self.params[name] = value

    def stop_propagation(self, flag: bool = True) -> None:
        """Stop (or resume) propagation to the remaining listeners."""
        self.propagation_stopped = flag

    def clone(self) -> 'Event':
        """
        Create an independent copy of this event.

        The params dictionary is copied; the target and any object
        references held in fields are shared with the original.
        """
        return replace(self, params=dict(self.params), event_id=str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary representation.

        Returns:
            Dictionary representation of the event
        """
        return {
            'name': self.name,
            'target': type(self.target).__name__ if self.target is not None else None,
            'params': self.params,
            'timestamp': self.timestamp,
            'event_id': self.event_id,
            'propagation_stopped': self.propagation_stopped,
        }


@dataclass
class ModuleEvent(Event):
    """
    Lifecycle event fired by the module manager.

    Carries the name and instance of the module currently being processed.
    The module manager owns one canonical instance and works on a clone when
    a module load is nested inside another one.
    """

    module_name: Optional[str] = None
    """Name of the module being processed."""

    module: Any = None
    """Module instance, once resolved."""

    config_listener: Any = None
    """Config merger taking part in the current load, if any."""

    def set_module_name(self, module_name: str) -> None:
        if not isinstance(module_name, str):
            raise TypeError(
                f"Module name must be a string, got {type(module_name).__name__}")
        self.module_name = module_name

    def set_module(self, module: Any) -> None:
        if module is None:
            raise TypeError("Module instance cannot be None")
        self.module = module

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['module_name'] = self.module_name
        data['module'] = type(self.module).__name__ if self.module is not None else None
        return data


class ModuleEvents:
    """Constants for the module lifecycle events."""

    LOAD_MODULES_INIT = "modules-init"
    LOAD_MODULES = "modules-load"
    LOAD_MODULES_POST = "modules-load-post"
    LOAD_MODULE_RESOLVE = "module-resolve"
    LOAD_MODULE_INIT = "module-init"
    LOAD_MODULE = "module-load"
    MERGE_CONFIG = "merge-config"

    # Reserved for application layers; never fired by the module manager.
    BOOTSTRAP = "bootstrap"
