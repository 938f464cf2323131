"""
Tests for the service container.

This module tests service registration and resolution, including lazily
built singletons, factories receiving the container and cycle detection.
"""

import pytest
from typing import Protocol

from modman.application.container import (
    CircularDependencyException,
    Container,
    ServiceNotRegisteredException,
    ServiceResolutionException,
)


class ISampleService(Protocol):
    """Sample service interface."""
    def get_value(self) -> str: ...


class SampleService:
    """Sample service implementation."""
    created = 0

    def __init__(self) -> None:
        SampleService.created += 1
        self.value = "test"

    def get_value(self) -> str:
        return self.value


class TestContainer:
    """Test cases for the service container."""

    def test_register_class_builds_singleton_lazily(self) -> None:
        container = Container()
        SampleService.created = 0

        container.register(ISampleService, SampleService)
        assert SampleService.created == 0

        service1 = container.resolve(ISampleService)
        service2 = container.resolve(ISampleService)

        assert service1 is service2
        assert service1.get_value() == "test"
        assert SampleService.created == 1

    def test_register_instance(self) -> None:
        container = Container()
        instance = SampleService()

        container.register_instance(SampleService, instance)

        assert container.resolve(SampleService) is instance

    def test_register_callable_instance(self) -> None:
        container = Container()

        container.register_instance("handler", len)

        assert container.resolve("handler") is len

    def test_register_plain_object(self) -> None:
        container = Container()
        config = {'db': {'host': 'localhost'}}

        container.register("config", config)

        assert container.resolve("config") is config

    def test_register_function_factory(self) -> None:
        container = Container()
        calls = []

        def build() -> SampleService:
            calls.append(1)
            return SampleService()

        container.register("sample", build)

        assert container.resolve("sample") is container.resolve("sample")
        assert len(calls) == 1

    def test_register_factory_receives_container(self) -> None:
        container = Container()
        container.register_instance("prefix", "combined")
        container.register_factory(
            "combined", lambda c: f"{c.resolve('prefix')}_{c.resolve(SampleService).get_value()}")
        container.register(SampleService, SampleService)

        assert container.resolve("combined") == "combined_test"

    def test_service_not_registered_exception(self) -> None:
        container = Container()

        with pytest.raises(ServiceNotRegisteredException, match="SampleService is not registered"):
            container.resolve(SampleService)

    def test_try_resolve_returns_none(self) -> None:
        container = Container()

        assert container.try_resolve("missing") is None

    def test_factory_failure(self) -> None:
        container = Container()

        def broken() -> None:
            raise RuntimeError("no database")

        container.register("broken", broken)

        with pytest.raises(ServiceResolutionException, match="no database"):
            container.resolve("broken")
        assert container.try_resolve("broken") is None

    def test_circular_dependency(self) -> None:
        container = Container()
        container.register_factory("a", lambda c: c.resolve("b"))
        container.register_factory("b", lambda c: c.resolve("a"))

        with pytest.raises(CircularDependencyException, match="a -> b -> a"):
            container.resolve("a")

    def test_is_registered(self) -> None:
        container = Container()

        assert not container.is_registered("sample")
        container.register_instance("sample", SampleService())
        assert container.is_registered("sample")

    def test_register_same_key_twice_overwrites(self) -> None:
        container = Container()
        first, second = SampleService(), SampleService()

        container.register_instance("sample", first)
        container.register_instance("sample", second)

        assert container.resolve("sample") is second
        assert len(container.get_registrations()) == 1

    def test_register_instance_with_none_value(self) -> None:
        container = Container()

        container.register_instance("nothing", None)

        assert container.is_registered("nothing")
        assert container.resolve("nothing") is None

    def test_container_state_isolation(self) -> None:
        first, second = Container(), Container()

        first.register_instance("sample", SampleService())

        assert not second.is_registered("sample")
