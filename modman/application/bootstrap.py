"""
Application bootstrap built on top of the module manager.

This module wires configuration, the service container and the default
module listeners together, loads the configured modules and fires the
bootstrap event that module managers reserve for application layers.
"""

import logging
from typing import Any, Dict, Optional

from .container import Container, IContainer
from ..core.domain.events import ModuleEvents
from ..core.interfaces.events import IEventManager
from ..core.interfaces.modules import IModuleManager
from ..core.services.event_bus import EventManager
from ..core.services.module_manager import ModuleManager
from ..infrastructure.config.models import ApplicationConfig
from ..infrastructure.logging.setup import LoggingManager

logger = logging.getLogger(__name__)

MERGED_CONFIG_SERVICE = "config"
APPLICATION_CONFIG_SERVICE = "application_config"


class ApplicationBootstrap:
    """
    Loads an application's modules and bootstraps it.

    The sequence is: build the module manager and attach the default
    listeners, load every configured module, publish the manager and the
    merged configuration in the container, then trigger ``bootstrap`` on
    the module manager's event manager, reusing its lifecycle event.
    """

    def __init__(self, config: ApplicationConfig,
                 container: Optional[IContainer] = None,
                 event_manager: Optional[IEventManager] = None,
                 logging_manager: Optional[LoggingManager] = None) -> None:
        self._config = config
        self._container = container if container is not None else Container()
        self._logging_manager = logging_manager if logging_manager is not None \
            else LoggingManager(config.logging)
        self._container.register_instance(LoggingManager, self._logging_manager)
        self._event_manager = event_manager
        self._module_manager: Optional[ModuleManager] = None
        self._listeners: Any = None
        self._bootstrapped = False

    @property
    def container(self) -> IContainer:
        return self._container

    @property
    def logging_manager(self) -> LoggingManager:
        """Logging manager published in the container as LoggingManager."""
        return self._logging_manager

    @property
    def module_manager(self) -> ModuleManager:
        """Get the module manager, building it on first access."""
        if self._module_manager is None:
            self._module_manager = self._build_module_manager()
        return self._module_manager

    @property
    def merged_config(self) -> Dict[str, Any]:
        """Configuration merged from every loaded module."""
        if self._listeners is None:
            return {}
        return self._listeners.config_listener.get_merged_config()

    def run(self) -> 'ApplicationBootstrap':
        """Load the configured modules and fire the bootstrap event once."""
        if self._bootstrapped:
            return self

        manager = self.module_manager
        manager.load_modules()

        self._container.register_instance(IModuleManager, manager)
        self._container.register_instance(MERGED_CONFIG_SERVICE, self.merged_config)
        self._container.register_instance(APPLICATION_CONFIG_SERVICE, self._config)

        event = manager.event
        event.name = ModuleEvents.BOOTSTRAP
        event.set_param("application", self)
        event.set_param("container", self._container)
        manager.event_manager.trigger_event(event)

        self._bootstrapped = True
        logger.info(f"{self._config.name} bootstrapped with "
                    f"{len(manager.get_loaded_modules())} modules")
        return self

    def shutdown(self) -> None:
        """Detach the default listeners from the event manager."""
        if self._listeners is not None and self._module_manager is not None:
            self._listeners.detach(self._module_manager.event_manager)
            self._listeners = None
            logger.debug("Default module listeners detached")

    def _build_module_manager(self) -> ModuleManager:
        from ..listeners.aggregate import DefaultListenerAggregate

        events = self._event_manager if self._event_manager is not None else EventManager()
        manager = ModuleManager(self._config.modules, events)
        if isinstance(events, EventManager):
            events.add_identifiers(["application"])

        self._listeners = DefaultListenerAggregate(
            self._config.module_listener_options, self._container)
        self._listeners.attach(manager.event_manager)

        logger.debug(f"Module manager built for {len(self._config.modules)} modules")
        return manager
