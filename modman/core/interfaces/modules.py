"""
Module manager interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..domain.events import ModuleEvent
from .events import IEventManager


class IModuleManager(ABC):
    """Interface for module manager implementations."""

    @abstractmethod
    def load_modules(self) -> 'IModuleManager':
        """
        Load every configured module.

        Fires the modules-init, modules-load and modules-load-post events.
        Calling it again once loading completed does nothing.
        """
        pass

    @abstractmethod
    def load_module(self, module: Any, instance: Any = None) -> Any:
        """
        Load a single module by name.

        Args:
            module: Module name, or a single-entry mapping of name to instance
            instance: Pre-resolved module instance (optional)

        Returns:
            The module instance

        Raises:
            ModuleStateException: If the initialization phase has completed
            ModuleResolutionException: If the module cannot be resolved
        """
        pass

    @abstractmethod
    def get_loaded_modules(self, load_modules: bool = False) -> Dict[str, Any]:
        """
        Get the loaded modules keyed by name.

        Args:
            load_modules: Load all configured modules first
        """
        pass

    @abstractmethod
    def get_module(self, module_name: str) -> Optional[Any]:
        """Get a loaded module by name, or None."""
        pass

    @abstractmethod
    def get_modules(self) -> Any:
        """Get the configured module list."""
        pass

    @abstractmethod
    def set_modules(self, modules: Any) -> 'IModuleManager':
        """
        Replace the configured module list.

        Raises:
            InvalidModulesException: If modules is not a sequence or mapping
        """
        pass

    @property
    @abstractmethod
    def event_manager(self) -> IEventManager:
        """Get the event manager, creating a default one if needed."""
        pass

    @property
    @abstractmethod
    def event(self) -> ModuleEvent:
        """Get the canonical module event, creating one if needed."""
        pass
