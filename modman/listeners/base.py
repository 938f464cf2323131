"""
Base class for the default module listeners.
"""

from typing import Optional

from ..infrastructure.config.models import ListenerOptions


class AbstractListener:
    """Listener configured by ListenerOptions."""

    def __init__(self, options: Optional[ListenerOptions] = None) -> None:
        self._options = options if options is not None else ListenerOptions()

    @property
    def options(self) -> ListenerOptions:
        """Get the listener options."""
        return self._options

    def set_options(self, options: ListenerOptions) -> 'AbstractListener':
        """Replace the listener options."""
        if not isinstance(options, ListenerOptions):
            raise TypeError(
                f"Expected ListenerOptions, got {type(options).__name__}")
        self._options = options
        return self
