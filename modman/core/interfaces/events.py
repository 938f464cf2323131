"""
Event manager interfaces.

These interfaces define the contracts for the synchronous, priority-ordered
publish-subscribe mechanism that drives the module lifecycle.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List

from ..domain.events import Event
from ..domain.results import ResponseCollection

DEFAULT_PRIORITY = 1


class IEventManager(ABC):
    """Interface for event manager implementations."""

    @property
    @abstractmethod
    def identifiers(self) -> List[str]:
        """Get the identifiers this event manager is tagged with."""
        pass

    @abstractmethod
    def set_identifiers(self, identifiers: Iterable[str]) -> None:
        """
        Replace the identifiers of this event manager.

        Args:
            identifiers: Names used to describe the owner of the bus
        """
        pass

    @abstractmethod
    def attach(self, event_name: str, listener: Callable[[Event], Any],
               priority: int = DEFAULT_PRIORITY) -> Any:
        """
        Attach a listener to an event.

        Args:
            event_name: Event name, or '*' to listen to every event
            listener: Callable receiving the event
            priority: Higher priorities run first; ties run in attach order

        Returns:
            Handle to pass to detach()
        """
        pass

    @abstractmethod
    def detach(self, handle: Any) -> bool:
        """
        Detach a listener using the handle returned by attach().

        Args:
            handle: Subscription handle

        Returns:
            True if the listener was attached and has been removed
        """
        pass

    @abstractmethod
    def trigger_event(self, event: Event) -> ResponseCollection:
        """
        Invoke every listener for event.name in priority order.

        Args:
            event: Event to dispatch

        Returns:
            Collection of listener return values
        """
        pass

    @abstractmethod
    def trigger_event_until(self, predicate: Callable[[Any], bool],
                            event: Event) -> ResponseCollection:
        """
        Invoke listeners until one returns a value accepted by predicate.

        Args:
            predicate: Called with each listener return value
            event: Event to dispatch

        Returns:
            Collection of listener return values; stopped is True when the
            predicate short-circuited dispatch
        """
        pass

    @abstractmethod
    def get_events(self) -> List[str]:
        """Get the names of all events with at least one listener."""
        pass

    @abstractmethod
    def get_listeners(self, event_name: str) -> List[Callable[[Event], Any]]:
        """Get the listeners attached to an event, in dispatch order."""
        pass


class IListenerAggregate(ABC):
    """Interface for a bundle of listeners attached and detached as one unit."""

    @abstractmethod
    def attach(self, events: IEventManager, priority: int = DEFAULT_PRIORITY) -> Any:
        """
        Attach every listener of the aggregate.

        Args:
            events: Event manager to attach to
            priority: Default priority for the aggregate's listeners
        """
        pass

    @abstractmethod
    def detach(self, events: IEventManager) -> None:
        """
        Detach exactly the listeners previously attached by attach().

        Args:
            events: Event manager to detach from
        """
        pass
