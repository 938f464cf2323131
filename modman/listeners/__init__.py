"""
Default module listeners.

Each listener handles one concern of the module lifecycle; the
DefaultListenerAggregate attaches them all in the expected priority order.
"""

from .base import AbstractListener
from .aggregate import DefaultListenerAggregate
from .config_listener import ConfigListener
from .dependency_checker import ModuleDependencyCheckerListener
from .init_trigger import InitTrigger
from .locator_registration import LocatorRegistrationListener
from .on_bootstrap import OnBootstrapListener
from .resolver import ModuleResolverListener

__all__ = [
    "AbstractListener",
    "DefaultListenerAggregate",
    "ConfigListener",
    "ModuleDependencyCheckerListener",
    "InitTrigger",
    "LocatorRegistrationListener",
    "OnBootstrapListener",
    "ModuleResolverListener",
]
