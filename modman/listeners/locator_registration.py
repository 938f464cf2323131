"""
Service locator registration listener.
"""

import logging
from typing import Any, List, Optional, Tuple

from ..application.container import Container, IContainer
from ..core.domain.events import ModuleEvent, ModuleEvents
from ..core.interfaces.events import IEventManager, IListenerAggregate, DEFAULT_PRIORITY
from ..core.interfaces.features import LocatorRegistered
from ..infrastructure.config.models import ListenerOptions
from .base import AbstractListener

logger = logging.getLogger(__name__)

MODULE_MANAGER_SERVICE = "ModuleManager"


class LocatorRegistrationListener(AbstractListener, IListenerAggregate):
    """
    Register LocatorRegistered modules with the service container.

    Modules are collected as they load; once every module has loaded they
    are registered under their class and under ``module:<name>``. The
    module manager itself is registered as ``ModuleManager``.
    """

    def __init__(self, options: Optional[ListenerOptions] = None,
                 container: Optional[IContainer] = None) -> None:
        super().__init__(options)
        self._container = container if container is not None else Container()
        self._modules: List[Tuple[str, Any]] = []
        self._handles: List[Any] = []

    @property
    def container(self) -> IContainer:
        return self._container

    def attach(self, events: IEventManager, priority: int = DEFAULT_PRIORITY) -> None:
        self._handles.append(events.attach(ModuleEvents.LOAD_MODULE, self.on_load_module))
        self._handles.append(events.attach(ModuleEvents.LOAD_MODULES, self.on_load_modules, -500))

    def detach(self, events: IEventManager) -> None:
        while self._handles:
            events.detach(self._handles.pop())

    def on_load_module(self, event: ModuleEvent) -> None:
        if isinstance(event.module, LocatorRegistered):
            self._modules.append((event.module_name or '', event.module))

    def on_load_modules(self, event: ModuleEvent) -> None:
        self._container.register_instance(MODULE_MANAGER_SERVICE, event.target)

        for module_name, module in self._modules:
            self._container.register_instance(type(module), module)
            self._container.register_instance(f"module:{module_name}", module)
            logger.debug(f"Registered module {module_name} with the service container")
        self._modules.clear()
