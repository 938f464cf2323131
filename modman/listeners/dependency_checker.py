"""
Module dependency checking listener.
"""

from typing import Dict

from ..core.domain.events import ModuleEvent
from ..core.exceptions import MissingDependencyModuleException
from ..core.interfaces.features import DependencyIndicator


class ModuleDependencyCheckerListener:
    """
    Abort loading when a module's dependencies have not been loaded first.

    Attached to module-load with a high priority, so it records modules in
    load order and checks each module before any other module-load listener
    sees it.
    """

    def __init__(self) -> None:
        self._loaded: Dict[str, bool] = {}

    def __call__(self, event: ModuleEvent) -> None:
        module = event.module
        module_name = event.module_name or ''

        if isinstance(module, DependencyIndicator):
            for dependency in module.get_module_dependencies():
                if dependency not in self._loaded:
                    raise MissingDependencyModuleException(module_name, dependency)

        self._loaded[module_name] = True
