"""
Default listener aggregate.

Attaches the listeners a typical application needs to load modules, in the
priority arrangement the module lifecycle depends on, and detaches exactly
that set again.
"""

import logging
from typing import Any, List, Optional

from ..application.container import IContainer
from ..core.domain.events import ModuleEvents
from ..core.interfaces.config import IConfigMerger
from ..core.interfaces.events import IEventManager, IListenerAggregate, DEFAULT_PRIORITY
from ..infrastructure.config.models import ListenerOptions
from .base import AbstractListener
from .config_listener import ConfigListener
from .dependency_checker import ModuleDependencyCheckerListener
from .init_trigger import InitTrigger
from .locator_registration import LocatorRegistrationListener
from .on_bootstrap import OnBootstrapListener
from .resolver import ModuleResolverListener

logger = logging.getLogger(__name__)

# Runs before every other module-load listener so it can abort a load
DEPENDENCY_CHECK_PRIORITY = 8000


class DefaultListenerAggregate(AbstractListener, IListenerAggregate):
    """Default set of module lifecycle listeners."""

    def __init__(self, options: Optional[ListenerOptions] = None,
                 container: Optional[IContainer] = None) -> None:
        super().__init__(options)
        self._container = container
        self._listeners: List[Any] = []
        self._config_listener: Optional[IConfigMerger] = None
        self._locator_listener: Optional[LocatorRegistrationListener] = None

    def attach(self, events: IEventManager, priority: int = DEFAULT_PRIORITY) -> 'DefaultListenerAggregate':
        """Attach the default listeners to the event manager."""
        options = self.options
        config_listener = self.config_listener
        locator_listener = LocatorRegistrationListener(options, self._container)
        self._locator_listener = locator_listener

        self._listeners.append(events.attach(
            ModuleEvents.LOAD_MODULE_RESOLVE, ModuleResolverListener(options)))

        if options.check_dependencies:
            self._listeners.append(events.attach(
                ModuleEvents.LOAD_MODULE,
                ModuleDependencyCheckerListener(),
                DEPENDENCY_CHECK_PRIORITY
            ))

        self._listeners.append(events.attach(ModuleEvents.LOAD_MODULE_INIT, InitTrigger(options)))
        self._listeners.append(events.attach(ModuleEvents.LOAD_MODULE, OnBootstrapListener(options)))

        locator_listener.attach(events)
        config_listener.attach(events)
        self._listeners.append(locator_listener)
        self._listeners.append(config_listener)

        logger.debug(f"Attached {len(self._listeners)} default module listeners")
        return self

    def detach(self, events: IEventManager) -> None:
        """Detach every listener attached by attach()."""
        while self._listeners:
            listener = self._listeners.pop()
            if isinstance(listener, IListenerAggregate):
                listener.detach(events)
                continue

            events.detach(listener)

    @property
    def locator_listener(self) -> Optional[LocatorRegistrationListener]:
        """Locator registration listener created by the last attach()."""
        return self._locator_listener

    @property
    def config_listener(self) -> IConfigMerger:
        """Get the config merger, creating the default one if needed."""
        if self._config_listener is None:
            self.set_config_listener(ConfigListener(self.options))
        return self._config_listener  # type: ignore[return-value]

    def set_config_listener(self, config_listener: IConfigMerger) -> 'DefaultListenerAggregate':
        """Set the config merger to use."""
        if not isinstance(config_listener, IConfigMerger):
            raise TypeError(
                f"Config listener must implement IConfigMerger, got {type(config_listener).__name__}")
        self._config_listener = config_listener
        return self
