"""Violation-list formatter - builds the error payload for a failed request."""

from typing import Container, Iterable

from constraint_messages.application.dtos.error_payload import ErrorPayload
from constraint_messages.application.services.message_resolver import MessageResolver
from constraint_messages.domain.entities.handler_method import HandlerMethodId
from constraint_messages.domain.entities.violation import Violation
from constraint_messages.domain.repositories.message_cache import IMessageCache


class ViolationListFormatter:
    """
    Resolves every violation of a failed request through the message cache.

    The formatter never produces an empty payload: when the validation
    engine signals a failure without structured violations, the raw
    failure text (or an empty string) is the only entry.
    """

    def __init__(self, resolver: MessageResolver, message_cache: IMessageCache):
        self._resolver = resolver
        self._cache = message_cache

    def message_for(
        self, violation: Violation, known_handlers: Container[HandlerMethodId]
    ) -> str:
        """Resolve one violation, reusing a cached message for the same shape."""
        return self._cache.get_or_compute(
            violation.cache_key,
            lambda: self._resolver.resolve(violation, known_handlers),
        )

    def format(
        self,
        violations: Iterable[Violation],
        known_handlers: Container[HandlerMethodId],
        fallback_message: str | None = None,
    ) -> ErrorPayload:
        """
        Format violations into an error payload.

        Args:
            violations: Violations in the order the engine reported them
            known_handlers: Methods bound as request handlers
            fallback_message: Raw failure text used when there are no violations

        Returns:
            ErrorPayload with one message per violation, input order preserved
        """
        errors = [self.message_for(v, known_handlers) for v in violations]
        if not errors:
            errors = [fallback_message or ""]
        return ErrorPayload(errors=errors)
