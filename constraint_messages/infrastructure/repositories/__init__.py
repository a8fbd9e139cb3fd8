"""Repository implementations kept in process memory."""

from constraint_messages.infrastructure.repositories.handler_registry_impl import (
    InMemoryHandlerRegistry,
)

__all__ = ["InMemoryHandlerRegistry"]
