"""
Bootstrap wiring listener.
"""

import logging

from ..core.domain.events import ModuleEvent, ModuleEvents
from ..core.interfaces.features import BootstrapListener
from .base import AbstractListener

logger = logging.getLogger(__name__)


class OnBootstrapListener(AbstractListener):
    """
    Attach ``on_bootstrap`` of capable modules to the bootstrap event.

    The module manager never fires the bootstrap event itself; the
    application layer does, on the same event manager.
    """

    def __call__(self, event: ModuleEvent) -> None:
        module = event.module
        if not isinstance(module, BootstrapListener):
            return

        event.target.event_manager.attach(ModuleEvents.BOOTSTRAP, module.on_bootstrap)
        logger.debug(f"Module {event.module_name} will run on bootstrap")
