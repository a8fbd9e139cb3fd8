"""Pytest configuration and fixtures.

This file contains shared fixtures that can be used across all tests.

These fixtures follow the Dependency Inversion Principle:
- Use fake collaborators (FakeClock, FakeCrossFieldFormatter)
- Tests run fast (no sleeping for cache expiry)
- Tests are isolated (each test gets a fresh registry and cache)
"""

import pytest

from constraint_messages.application.services.message_resolver import MessageResolver
from constraint_messages.application.services.violation_formatter import (
    ViolationListFormatter,
)
from constraint_messages.domain.entities.handler_method import HandlerMethodId
from constraint_messages.infrastructure.binding.inspector import AnnotatedBindingInspector
from constraint_messages.infrastructure.cache.ttl_message_cache import TTLMessageCache
from constraint_messages.infrastructure.repositories.handler_registry_impl import (
    InMemoryHandlerRegistry,
)
from tests.fakes.clock_fake import FakeClock
from tests.fakes.cross_field_formatter_fake import FakeCrossFieldFormatter
from tests.fakes.resources import UserResource


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def fake_cross_field_formatter() -> FakeCrossFieldFormatter:
    """Provide a cross-field formatter that records its calls."""
    return FakeCrossFieldFormatter()


@pytest.fixture
def handler_registry() -> InMemoryHandlerRegistry:
    """Provide a fresh, empty handler registry."""
    return InMemoryHandlerRegistry()


@pytest.fixture
def registered_handlers(handler_registry) -> InMemoryHandlerRegistry:
    """
    Provide a registry with every bound UserResource handler.

    UserResource.normalize is an internal helper and stays unregistered.
    """
    resource = UserResource()
    for endpoint in (
        resource.create_user,
        resource.register_user,
        resource.update_user,
        resource.list_users,
    ):
        handler_registry.register(HandlerMethodId.from_callable(endpoint))
    return handler_registry


@pytest.fixture
def message_cache(fake_clock) -> TTLMessageCache:
    """Provide an hour-long message cache driven by the fake clock."""
    return TTLMessageCache(ttl_seconds=3600, clock=fake_clock)


@pytest.fixture
def resolver(fake_cross_field_formatter) -> MessageResolver:
    """Provide a MessageResolver reading real binding markers."""
    return MessageResolver(
        binding_inspector=AnnotatedBindingInspector(),
        cross_field_formatter=fake_cross_field_formatter,
    )


@pytest.fixture
def formatter(resolver, message_cache) -> ViolationListFormatter:
    """Provide a ViolationListFormatter with a fresh cache."""
    return ViolationListFormatter(resolver=resolver, message_cache=message_cache)
