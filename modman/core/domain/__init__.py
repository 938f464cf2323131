"""
Domain models for the module loading lifecycle.
"""

from .events import Event, ModuleEvent, ModuleEvents
from .results import ResponseCollection

__all__ = [
    "Event",
    "ModuleEvent",
    "ModuleEvents",
    "ResponseCollection",
]
