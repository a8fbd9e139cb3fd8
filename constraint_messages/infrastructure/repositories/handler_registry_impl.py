"""In-memory handler registry implementation.

This is an INFRASTRUCTURE detail. The domain layer (IHandlerRegistry
interface) defines WHAT we need (membership of bound handler methods),
while this implementation defines HOW we do it (a lock-guarded set).

Dependency flow:
    register_routes (presentation) → IHandlerRegistry (domain) ← InMemoryHandlerRegistry
    ViolationListFormatter (application) → IHandlerRegistry (domain) ← InMemoryHandlerRegistry

Registrations happen from route binding, lookups from request handling,
possibly on different threads at the same time. Both are synchronous, so
a threading lock guards the set.
"""

import logging
import threading

from constraint_messages.domain.entities.handler_method import HandlerMethodId
from constraint_messages.domain.repositories.handler_registry import IHandlerRegistry

logger = logging.getLogger(__name__)


class InMemoryHandlerRegistry(IHandlerRegistry):
    """
    In-memory implementation of the handler registry.

    Lives for the whole process and only grows: handlers are added as
    routes are bound and never removed.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._handlers: set[HandlerMethodId] = set()

        # Lock for thread-safe operations
        self._lock = threading.Lock()

    def register(self, handler: HandlerMethodId) -> None:
        """
        Record a handler method.

        Args:
            handler: Identity of the bound handler method
        """
        with self._lock:
            if handler in self._handlers:
                return
            self._handlers.add(handler)
        logger.debug(f"Registered request handler {handler}")

    def contains(self, handler: HandlerMethodId) -> bool:
        """
        Check whether a method is a known request handler.

        Args:
            handler: Identity of the method

        Returns:
            True if registered, False otherwise
        """
        with self._lock:
            return handler in self._handlers

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)
