"""Cross-field formatting collaborator supplied by the validation engine."""

from typing import Protocol

from constraint_messages.domain.entities.violation import Violation


class ICrossFieldFormatter(Protocol):
    """Formats a violation of a rule spanning several fields or parameters."""

    def __call__(self, violation: Violation) -> str: ...
