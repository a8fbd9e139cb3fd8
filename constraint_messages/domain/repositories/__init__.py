"""Repository interfaces - define contracts for shared state."""

from constraint_messages.domain.repositories.handler_registry import IHandlerRegistry
from constraint_messages.domain.repositories.message_cache import IMessageCache

__all__ = ["IHandlerRegistry", "IMessageCache"]
