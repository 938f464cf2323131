"""
Module init listener.
"""

from ..core.domain.events import ModuleEvent
from ..core.interfaces.features import InitProvider
from .base import AbstractListener


class InitTrigger(AbstractListener):
    """Call ``init(module_manager)`` on modules that provide it."""

    def __call__(self, event: ModuleEvent) -> None:
        module = event.module
        if isinstance(module, InitProvider):
            module.init(event.target)
