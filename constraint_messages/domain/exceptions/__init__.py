"""Domain exceptions - business rule violations."""

from constraint_messages.domain.exceptions.domain_exceptions import (
    DomainException,
    InternalInconsistencyException,
    InvalidEntityStateException,
)

__all__ = [
    "DomainException",
    "InvalidEntityStateException",
    "InternalInconsistencyException",
]
