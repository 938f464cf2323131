"""
Module manager implementation driving the staged module lifecycle.

The module manager resolves, initializes and loads a configured set of
modules by firing lifecycle events on an event manager. All real work is
done by listeners; the manager sequences the phases, keeps the registry of
loaded modules and protects the shared lifecycle event from nested loads.
"""

import logging
import numbers
import re
from collections.abc import Mapping
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from ..domain.events import ModuleEvent, ModuleEvents
from ..exceptions import (
    InvalidModulesException,
    ModuleIdentityException,
    ModuleResolutionException,
    ModuleStateException,
)
from ..interfaces.events import IEventManager
from ..interfaces.modules import IModuleManager
from .event_bus import EventManager

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')

_NOT_MODULES = (str, bytes, bytearray, numbers.Number, list, tuple, dict, set, frozenset)


def is_module_object(value: Any) -> bool:
    """True for values that can stand as a module instance."""
    return value is not None and not isinstance(value, _NOT_MODULES)


def _is_numeric(value: str) -> bool:
    return bool(_NUMERIC.match(value))


class ModuleManagerState(IntEnum):
    """Lifecycle states; transitions only move forward."""
    CREATED = 0
    INITIALIZING = 1
    INITIALIZED = 2
    LOADING = 3
    LOADED = 4


class ModuleManager(IModuleManager):
    """
    Lifecycle orchestrator for application modules.

    Loading all modules fires three phase events:

    * ``modules-init``: every configured module is resolved and initialized,
      giving modules a chance to attach listeners for the later phases.
    * ``modules-load``: ``module-load`` is fired once per loaded module.
    * ``modules-load-post``: listeners here can rely on everything above,
      including configuration merging, having completed.
    """

    def __init__(self, modules: Any, event_manager: Optional[IEventManager] = None) -> None:
        self._loaded_modules: Dict[str, Any] = {}
        self._modules: Union[List[Any], Mapping] = []
        self._events: Optional[IEventManager] = None
        self._event: Optional[ModuleEvent] = None
        self._state = ModuleManagerState.CREATED
        self._load_depth = 0

        self.set_modules(modules)
        if event_manager is not None:
            self.set_event_manager(event_manager)

    @property
    def state(self) -> ModuleManagerState:
        """Get the current lifecycle state."""
        return self._state

    @property
    def modules_are_initialized(self) -> bool:
        return self._state >= ModuleManagerState.INITIALIZED

    @property
    def modules_are_loaded(self) -> bool:
        return self._state == ModuleManagerState.LOADED

    def load_modules(self) -> 'ModuleManager':
        """Load all configured modules."""
        if self.modules_are_loaded:
            return self

        events = self.event_manager
        event = self.event

        logger.info(f"Loading {len(self._modules)} configured modules")

        # Separate init phase so modules can register listeners for later stages
        event.name = ModuleEvents.LOAD_MODULES_INIT
        events.trigger_event(event)

        event.name = ModuleEvents.LOAD_MODULES
        events.trigger_event(event)

        # The post event lets listeners rely on config merging being complete
        # without having to pick a low enough priority.
        event.name = ModuleEvents.LOAD_MODULES_POST
        events.trigger_event(event)

        self._state = ModuleManagerState.LOADED
        logger.info(f"Modules loaded: {', '.join(self._loaded_modules) or '(none)'}")
        return self

    def load_module(self, module: Any, instance: Any = None) -> Any:
        """Load a single module by name."""
        module_name = module
        if isinstance(module, Mapping):
            if len(module) != 1:
                raise InvalidModulesException(
                    "A module mapping passed to load_module() must have exactly one entry")
            module_name, instance = next(iter(module.items()))

        if module_name in self._loaded_modules:
            return self._loaded_modules[module_name]

        if self.modules_are_initialized:
            raise ModuleStateException(
                f"Cannot load module {module_name}, all modules are already initialized")

        return self.init_module(module_name, instance)

    def get_loaded_modules(self, load_modules: bool = False) -> Dict[str, Any]:
        """Get the loaded modules keyed by name."""
        if load_modules:
            self.load_modules()
        return dict(self._loaded_modules)

    def get_module(self, module_name: str) -> Optional[Any]:
        """Get a loaded module by name."""
        return self._loaded_modules.get(module_name)

    def get_modules(self) -> Union[List[Any], Mapping]:
        """Get the configured module list."""
        return self._modules

    def set_modules(self, modules: Any) -> 'ModuleManager':
        """Replace the configured module list."""
        if isinstance(modules, Mapping):
            self._modules = modules
        elif isinstance(modules, (str, bytes, bytearray)) or not _is_iterable(modules):
            raise InvalidModulesException(
                f"Modules passed to {type(self).__name__}.set_modules() must be a "
                f"sequence or a mapping, got {type(modules).__name__}")
        else:
            self._modules = list(modules)
        return self

    @property
    def event(self) -> ModuleEvent:
        """Get the canonical module event."""
        if self._event is None:
            self.set_event(ModuleEvent())
        return self._event  # type: ignore[return-value]

    def set_event(self, event: ModuleEvent) -> 'ModuleManager':
        """Set the canonical module event and bind its target to this manager."""
        if not isinstance(event, ModuleEvent):
            raise TypeError(f"Expected a ModuleEvent, got {type(event).__name__}")
        event.target = self
        self._event = event
        return self

    @property
    def event_manager(self) -> IEventManager:
        """Get the event manager, creating a default one if none is set."""
        if self._events is None:
            self.set_event_manager(EventManager())
        return self._events  # type: ignore[return-value]

    def set_event_manager(self, events: IEventManager) -> 'ModuleManager':
        """Set the event manager and attach the default phase listeners."""
        events.set_identifiers([
            ModuleManager.__name__,
            type(self).__name__,
            'module_manager',
        ])
        self._events = events
        self._attach_default_listeners(events)
        return self

    def init_module(self, module_name: str, module: Any = None) -> Any:
        """
        Resolve and initialize a single module.

        A nested call (made by a listener while another module is being
        initialized) works on a clone of the canonical event, so the outer
        call keeps its own module name and instance.

        Args:
            module_name: Name to register the module under
            module: Pre-resolved instance; a name or None triggers resolution

        Returns:
            The module instance

        Raises:
            ModuleResolutionException: If no listener resolved the module
        """
        if module_name in self._loaded_modules:
            return self._loaded_modules[module_name]

        event = self.event.clone() if self._load_depth > 0 else self.event
        event.set_module_name(module_name)

        self._load_depth += 1
        try:
            if not is_module_object(module):
                module = self._load_module_by_name(event)

            event.set_module(module)
            event.name = ModuleEvents.LOAD_MODULE_INIT

            self._loaded_modules[module_name] = module
            logger.debug(f"Initializing module {module_name} (depth {self._load_depth})")
            self.event_manager.trigger_event(event)
        finally:
            self._load_depth -= 1

        return module

    def _load_module_by_name(self, event: ModuleEvent) -> Any:
        """Fire module-resolve until a listener returns a module instance."""
        event.name = ModuleEvents.LOAD_MODULE_RESOLVE
        result = self.event_manager.trigger_event_until(is_module_object, event)

        module = result.last()
        if not is_module_object(module):
            raise ModuleResolutionException(event.module_name or '')

        return module

    def _do_load_module(self, module_name: str, module: Any) -> None:
        """Fire module-load for a single module."""
        event = self.event
        event.set_module_name(module_name)
        event.set_module(module)
        event.name = ModuleEvents.LOAD_MODULE

        self.event_manager.trigger_event(event)

    def _on_modules_init(self, event: ModuleEvent) -> None:
        """Handle the modules-init event."""
        if self.modules_are_loaded or self.modules_are_initialized:
            return

        self._state = ModuleManagerState.INITIALIZING

        if isinstance(self._modules, Mapping):
            entries = list(self._modules.items())
        else:
            entries = list(enumerate(self._modules))

        for key, module in entries:
            module_name = key
            if not isinstance(module_name, str) or _is_numeric(module_name):
                module_name = module
            if not isinstance(module_name, str):
                raise ModuleIdentityException(
                    f"Module ({type(module).__name__}) must have a key identifier.")

            self.init_module(module_name, module)

        self._state = ModuleManagerState.INITIALIZED

    def _on_load_modules(self, event: ModuleEvent) -> None:
        """Handle the modules-load event."""
        if self.modules_are_loaded:
            return

        self._state = ModuleManagerState.LOADING

        for module_name, module in list(self._loaded_modules.items()):
            self._do_load_module(module_name, module)

        self._state = ModuleManagerState.LOADED

    def _attach_default_listeners(self, events: IEventManager) -> None:
        events.attach(ModuleEvents.LOAD_MODULES_INIT, self._on_modules_init)
        events.attach(ModuleEvents.LOAD_MODULES, self._on_load_modules)


def _is_iterable(value: Any) -> bool:
    try:
        iter(value)
    except TypeError:
        return False
    return True
