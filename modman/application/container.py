"""
Service container used as the locator that modules register into.

Services are keyed by type or by string name. A registration is either a
ready instance or a factory; factories are invoked once, on first resolve,
and the result is kept as a singleton.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, List, Optional, Union

logger = logging.getLogger(__name__)

ServiceKey = Union[type, str]


def _key_name(key: Hashable) -> str:
    return key.__name__ if isinstance(key, type) else str(key)


class ServiceRegistration:
    """Registration information for a service."""

    def __init__(self, key: ServiceKey, implementation: Any, is_factory: bool):
        self.key = key
        self.implementation = implementation
        self.is_factory = is_factory
        self.instance: Any = None if is_factory else implementation

    @property
    def resolved(self) -> bool:
        return not self.is_factory or self.instance is not None


class IContainer(ABC):
    """Interface for service containers."""

    @abstractmethod
    def register(self, key: ServiceKey, implementation: Any) -> None:
        """
        Register a service.

        Args:
            key: Type or name the service is looked up by
            implementation: Class or factory (called lazily), or an instance
        """
        pass

    @abstractmethod
    def register_instance(self, key: ServiceKey, instance: Any) -> None:
        """Register a ready instance, even if it is callable."""
        pass

    @abstractmethod
    def resolve(self, key: ServiceKey) -> Any:
        """
        Resolve a service instance.

        Raises:
            ServiceNotRegisteredException: If service not registered
            ServiceResolutionException: If the factory fails
        """
        pass

    @abstractmethod
    def try_resolve(self, key: ServiceKey) -> Optional[Any]:
        """Resolve a service, returning None instead of raising."""
        pass

    @abstractmethod
    def is_registered(self, key: ServiceKey) -> bool:
        """Check if a service key is registered."""
        pass


class ServiceNotRegisteredException(Exception):
    """Raised when trying to resolve an unregistered service."""
    pass


class ServiceResolutionException(Exception):
    """Raised when service resolution fails."""
    pass


class CircularDependencyException(ServiceResolutionException):
    """Raised when a factory ends up resolving its own service."""
    pass


class Container(IContainer):
    """Lightweight service container with lazily built singletons."""

    def __init__(self) -> None:
        self._services: Dict[ServiceKey, ServiceRegistration] = {}
        self._resolution_stack: List[ServiceKey] = []

    def register(self, key: ServiceKey, implementation: Any) -> None:
        """Register a class, factory or instance."""
        is_factory = inspect.isclass(implementation) or inspect.isfunction(
            implementation) or inspect.ismethod(implementation)
        self._add(ServiceRegistration(key, implementation, is_factory))

    def register_instance(self, key: ServiceKey, instance: Any) -> None:
        """Register a specific instance."""
        self._add(ServiceRegistration(key, instance, is_factory=False))

    def register_factory(self, key: ServiceKey, factory: Callable[['Container'], Any]) -> None:
        """Register a factory that receives the container when resolving."""
        self._add(ServiceRegistration(key, lambda: factory(self), is_factory=True))

    def resolve(self, key: ServiceKey) -> Any:
        """Resolve a service instance."""
        if key in self._resolution_stack:
            cycle = " -> ".join([_key_name(k) for k in self._resolution_stack] +
                                [_key_name(key)])
            raise CircularDependencyException(
                f"Circular dependency detected: {cycle}")

        if key not in self._services:
            raise ServiceNotRegisteredException(
                f"Service {_key_name(key)} is not registered")

        registration = self._services[key]
        if registration.resolved:
            return registration.instance

        self._resolution_stack.append(key)
        try:
            registration.instance = registration.implementation()
            return registration.instance
        except CircularDependencyException:
            raise
        except Exception as e:
            raise ServiceResolutionException(
                f"Failed to resolve {_key_name(key)}: {str(e)}") from e
        finally:
            self._resolution_stack.pop()

    def try_resolve(self, key: ServiceKey) -> Optional[Any]:
        """Try to resolve a service instance without raising exceptions."""
        try:
            return self.resolve(key)
        except (ServiceNotRegisteredException, ServiceResolutionException):
            return None

    def is_registered(self, key: ServiceKey) -> bool:
        """Check if a service key is registered."""
        return key in self._services

    def get_registrations(self) -> Dict[ServiceKey, ServiceRegistration]:
        """Get all service registrations (for debugging)."""
        return self._services.copy()

    def _add(self, registration: ServiceRegistration) -> None:
        if registration.key in self._services:
            logger.debug(f"Replacing registration for {_key_name(registration.key)}")
        self._services[registration.key] = registration
        logger.debug(f"Registered service: {_key_name(registration.key)}")
