"""
Optional module capabilities.

A module instance may implement any subset of these interfaces. Listeners
check for a capability with isinstance() and only invoke the capabilities a
module actually declares.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable

from ..domain.events import Event


class InitProvider(ABC):
    """Module that wants a callback while the module set is initializing."""

    @abstractmethod
    def init(self, module_manager: Any) -> None:
        """
        Called once the module has been resolved.

        The module may attach listeners to module_manager.event_manager or
        request other modules through module_manager.load_module().
        """
        pass


class ConfigProvider(ABC):
    """Module that contributes a configuration fragment."""

    @abstractmethod
    def get_config(self) -> Dict[str, Any]:
        """Return a configuration fragment to merge."""
        pass


class BootstrapListener(ABC):
    """Module that wants to run when the application bootstraps."""

    @abstractmethod
    def on_bootstrap(self, event: Event) -> Any:
        """Called with the bootstrap event."""
        pass


class LocatorRegistered(ABC):
    """Marker for modules that register themselves with the service locator."""
    pass


class DependencyIndicator(ABC):
    """Module that must be loaded after other modules."""

    @abstractmethod
    def get_module_dependencies(self) -> Iterable[str]:
        """Return the names of modules this module depends on."""
        pass
