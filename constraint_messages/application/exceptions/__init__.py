"""Application layer exceptions."""

from constraint_messages.application.exceptions.exceptions import (
    ApplicationError,
    ConstraintViolationError,
)

__all__ = ["ApplicationError", "ConstraintViolationError"]
