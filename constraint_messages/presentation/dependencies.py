"""Dependency injection setup.

This module is the COMPOSITION ROOT - where we wire up dependencies.

This is where we decide:
- Use InMemoryHandlerRegistry (a lock-guarded set)
- Use TTLMessageCache sized from Settings
- Read binding markers from type hints (AnnotatedBindingInspector)
- Use the default validation-engine collaborators

All these decisions are isolated here. The application layer doesn't know
or care about these choices - it only knows about interfaces.

Exception handlers are not part of FastAPI's dependency injection, so the
getters can also be called directly with explicit arguments.
"""

from fastapi import Depends

from constraint_messages.application.services.message_resolver import MessageResolver
from constraint_messages.application.services.violation_formatter import (
    ViolationListFormatter,
)
from constraint_messages.domain.repositories.handler_registry import IHandlerRegistry
from constraint_messages.domain.repositories.message_cache import IMessageCache
from constraint_messages.domain.services.binding_inspector import IBindingInspector
from constraint_messages.infrastructure.binding.inspector import AnnotatedBindingInspector
from constraint_messages.infrastructure.cache.ttl_message_cache import TTLMessageCache
from constraint_messages.infrastructure.config.settings import Settings, get_settings
from constraint_messages.infrastructure.repositories.handler_registry_impl import (
    InMemoryHandlerRegistry,
)
from constraint_messages.infrastructure.validation.constraint_violations import (
    format_cross_field,
)

# Module-level singletons (created once, reused throughout app lifecycle)
_handler_registry: IHandlerRegistry | None = None
_message_cache: IMessageCache | None = None


def get_handler_registry() -> IHandlerRegistry:
    """
    Dependency that provides the handler registry.

    This is a SINGLETON - the routing layer writes to the same instance
    the violation formatter reads from.

    Returns:
        IHandlerRegistry implementation (InMemoryHandlerRegistry)
    """
    global _handler_registry
    if _handler_registry is None:
        _handler_registry = InMemoryHandlerRegistry()
    return _handler_registry


def get_message_cache(settings: Settings = Depends(get_settings)) -> IMessageCache:
    """
    Dependency that provides the resolved-message cache.

    Args:
        settings: Application settings (injected)

    Returns:
        IMessageCache implementation (TTLMessageCache)
    """
    global _message_cache
    if _message_cache is None:
        _message_cache = TTLMessageCache(
            ttl_seconds=settings.message_cache_ttl_seconds,
            max_entries=settings.message_cache_max_entries,
        )
    return _message_cache


def get_binding_inspector() -> IBindingInspector:
    """
    Dependency that provides the binding inspector.

    Stateless apart from its module-level lookup tables, so a new instance
    per call is safe.
    """
    return AnnotatedBindingInspector()


def get_violation_formatter(
    message_cache: IMessageCache = Depends(get_message_cache),
    binding_inspector: IBindingInspector = Depends(get_binding_inspector),
) -> ViolationListFormatter:
    """
    Dependency that provides the violation-list formatter.

    Dependency Graph:
        get_violation_formatter()
            → get_message_cache() → Settings
            → MessageResolver
                → get_binding_inspector() → AnnotatedBindingInspector
                → format_cross_field

    Args:
        message_cache: Shared message cache (injected)
        binding_inspector: Binding inspector (injected)

    Returns:
        ViolationListFormatter instance with all dependencies injected
    """
    resolver = MessageResolver(
        binding_inspector=binding_inspector,
        cross_field_formatter=format_cross_field,
    )
    return ViolationListFormatter(resolver=resolver, message_cache=message_cache)


def reset_singletons() -> None:
    """Drop the registry and cache singletons (for tests)."""
    global _handler_registry, _message_cache
    _handler_registry = None
    _message_cache = None
