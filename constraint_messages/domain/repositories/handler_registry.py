"""Handler registry interface - domain layer abstraction.

The routing layer announces every method it binds as a request handler.
The message resolver asks the registry whether a method seen on a
violation's property path is one of those handlers: an un-annotated
parameter of a reachable handler is, by convention, the request entity.

The domain does NOT care how membership is stored, only that:
1. Registration is idempotent
2. Membership queries are safe while registrations are still happening
3. Nothing is ever removed
"""

from abc import ABC, abstractmethod

from constraint_messages.domain.entities.handler_method import HandlerMethodId


class IHandlerRegistry(ABC):
    """Append-only set of known request-handler methods."""

    @abstractmethod
    def register(self, handler: HandlerMethodId) -> None:
        """
        Record a handler method. Registering the same id twice is a no-op.

        Args:
            handler: Identity of the bound handler method
        """
        pass

    @abstractmethod
    def contains(self, handler: HandlerMethodId) -> bool:
        """
        Check whether a method is a known request handler.

        A handler whose route is still being bound may not be visible yet.

        Args:
            handler: Identity of the method

        Returns:
            True if registered, False otherwise
        """
        pass

    def __contains__(self, handler: object) -> bool:
        return isinstance(handler, HandlerMethodId) and self.contains(handler)
