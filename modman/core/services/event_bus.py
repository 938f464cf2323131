"""
Event manager implementation for synchronous publish-subscribe dispatch.

This module provides a priority-ordered event manager with wildcard
subscriptions, short-circuiting dispatch and subscription management.
Every listener runs to completion before the next one is invoked.
"""

import fnmatch
import itertools
import logging
import time
import uuid
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..interfaces.events import IEventManager, DEFAULT_PRIORITY
from ..domain.events import Event
from ..domain.results import ResponseCollection

logger = logging.getLogger(__name__)


class EventSubscription:
    """Represents a listener attached to an event."""

    def __init__(self, subscription_id: str, event_name: str,
                 listener: Callable[[Event], Any], priority: int, sequence: int):
        self.subscription_id = subscription_id
        self.event_name = event_name
        self.listener = listener
        self.priority = priority
        self.sequence = sequence
        self.created_at = time.time()
        self.call_count = 0
        self.last_called: Optional[float] = None
        self.error_count = 0

    @property
    def sort_key(self) -> tuple:
        return (-self.priority, self.sequence)

    def __repr__(self) -> str:
        return (f"EventSubscription({self.event_name!r}, {self.listener!r}, "
                f"priority={self.priority})")


class EventManager(IEventManager):
    """
    Synchronous, priority-ordered event manager.

    Listeners with a higher priority run first. Listeners sharing a
    priority run in the order they were attached. Listener exceptions are
    logged and propagated to the caller of the trigger method.
    """

    def __init__(self, identifiers: Optional[Iterable[str]] = None) -> None:
        self._subscriptions: Dict[str, List[EventSubscription]] = defaultdict(list)
        self._wildcard_subscriptions: List[EventSubscription] = []
        self._identifiers: List[str] = list(identifiers or [])
        self._sequence = itertools.count()

        # Metrics
        self._metrics: Dict[str, Any] = {
            'events_triggered': 0,
            'listeners_invoked': 0,
            'events_failed': 0,
            'subscriptions_count': 0,
        }

    @property
    def identifiers(self) -> List[str]:
        """Get the identifiers this event manager is tagged with."""
        return list(self._identifiers)

    def set_identifiers(self, identifiers: Iterable[str]) -> None:
        """Replace the identifiers, dropping duplicates but keeping order."""
        self._identifiers = list(dict.fromkeys(identifiers))

    def add_identifiers(self, identifiers: Iterable[str]) -> None:
        """Add identifiers to the existing ones."""
        self.set_identifiers([*self._identifiers, *identifiers])

    def attach(self, event_name: str, listener: Callable[[Event], Any],
               priority: int = DEFAULT_PRIORITY) -> EventSubscription:
        """Attach a listener; returns the subscription handle."""
        if not event_name or not isinstance(event_name, str):
            raise ValueError("Event name must be a non-empty string")
        if not callable(listener):
            raise TypeError(f"Listener for '{event_name}' must be callable")

        subscription = EventSubscription(
            subscription_id=str(uuid.uuid4()),
            event_name=event_name,
            listener=listener,
            priority=int(priority),
            sequence=next(self._sequence)
        )

        # Add to appropriate subscription list
        if self._is_pattern(event_name):
            self._wildcard_subscriptions.append(subscription)
            self._wildcard_subscriptions.sort(key=lambda s: s.sort_key)
        else:
            self._subscriptions[event_name].append(subscription)
            self._subscriptions[event_name].sort(key=lambda s: s.sort_key)

        self._metrics['subscriptions_count'] += 1

        logger.debug(f"Attached listener to '{event_name}' with priority {priority} "
                     f"(ID: {subscription.subscription_id})")
        return subscription

    def detach(self, handle: Union[EventSubscription, str]) -> bool:
        """Detach a listener using its subscription or subscription ID."""
        subscription_id = handle.subscription_id if isinstance(
            handle, EventSubscription) else handle

        # Search in regular subscriptions
        for event_name, subscriptions in list(self._subscriptions.items()):
            for i, subscription in enumerate(subscriptions):
                if subscription.subscription_id == subscription_id:
                    subscriptions.pop(i)
                    if not subscriptions:
                        del self._subscriptions[event_name]
                    self._metrics['subscriptions_count'] -= 1
                    logger.debug(f"Detached listener {subscription_id} from '{event_name}'")
                    return True

        # Search in wildcard subscriptions
        for i, subscription in enumerate(self._wildcard_subscriptions):
            if subscription.subscription_id == subscription_id:
                self._wildcard_subscriptions.pop(i)
                self._metrics['subscriptions_count'] -= 1
                logger.debug(f"Detached wildcard listener {subscription_id}")
                return True

        return False

    def trigger_event(self, event: Event) -> ResponseCollection:
        """Invoke all listeners for the event."""
        return self._trigger_listeners(event)

    def trigger_event_until(self, predicate: Callable[[Any], bool],
                            event: Event) -> ResponseCollection:
        """Invoke listeners until predicate accepts a return value."""
        if not callable(predicate):
            raise TypeError("Predicate must be callable")
        return self._trigger_listeners(event, predicate)

    def get_events(self) -> List[str]:
        """Get names of events (and wildcard patterns) that have listeners."""
        names = [name for name, subs in self._subscriptions.items() if subs]
        for subscription in self._wildcard_subscriptions:
            if subscription.event_name not in names:
                names.append(subscription.event_name)
        return names

    def get_listeners(self, event_name: str) -> List[Callable[[Event], Any]]:
        """Get the listeners attached to an event name, in dispatch order."""
        return [s.listener for s in self._subscriptions.get(event_name, [])]

    def get_metrics(self) -> Dict[str, Any]:
        """Get event manager metrics."""
        return {
            **self._metrics,
            'events': len(self.get_events()),
        }

    def _trigger_listeners(self, event: Event,
                           predicate: Optional[Callable[[Any], bool]] = None) -> ResponseCollection:
        """Dispatch an event to matching listeners, honouring short-circuits."""
        if not event.name:
            raise ValueError("Event name cannot be empty when triggering")

        event.stop_propagation(False)
        responses = ResponseCollection()
        self._metrics['events_triggered'] += 1

        for subscription in self._matching_subscriptions(event.name):
            try:
                response = subscription.listener(event)
            except Exception as e:
                subscription.error_count += 1
                self._metrics['events_failed'] += 1
                logger.debug(
                    f"Listener {subscription.listener!r} failed for event {event.name}: {e}")
                raise

            subscription.call_count += 1
            subscription.last_called = time.time()
            self._metrics['listeners_invoked'] += 1
            responses.push(response)

            if event.propagation_stopped:
                responses.stopped = True
                break

            if predicate is not None and predicate(response):
                responses.stopped = True
                break

        return responses

    def _matching_subscriptions(self, event_name: str) -> List[EventSubscription]:
        # Snapshot so listeners may attach or detach while the event runs
        matching = list(self._subscriptions.get(event_name, []))
        for subscription in self._wildcard_subscriptions:
            if fnmatch.fnmatchcase(event_name, subscription.event_name):
                matching.append(subscription)
        matching.sort(key=lambda s: s.sort_key)
        return matching

    @staticmethod
    def _is_pattern(event_name: str) -> bool:
        return '*' in event_name or '?' in event_name
