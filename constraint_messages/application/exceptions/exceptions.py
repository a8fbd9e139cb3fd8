"""Application layer exceptions."""

from typing import Iterable

from constraint_messages.domain.entities.violation import Violation


class ApplicationError(Exception):
    """Base application layer exception."""

    def __init__(self, message: str, error_code: str = "APPLICATION_ERROR"):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ConstraintViolationError(ApplicationError):
    """
    Raised by the validation engine when request parameters, headers or
    the returned response body violate declared constraints.

    The violation set may be empty; the message is then the only
    description of the failure.
    """

    def __init__(
        self,
        violations: Iterable[Violation] = (),
        message: str | None = None,
    ):
        self.violations: tuple[Violation, ...] = tuple(violations)
        super().__init__(message or "", error_code="VALIDATION_ERROR")
