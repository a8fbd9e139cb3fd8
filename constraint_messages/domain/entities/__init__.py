"""Domain entities."""

from constraint_messages.domain.entities.handler_method import HandlerMethodId
from constraint_messages.domain.entities.violation import (
    ConstraintDescriptor,
    NodeKind,
    PathNode,
    PropertyPath,
    Violation,
)

__all__ = [
    "ConstraintDescriptor",
    "HandlerMethodId",
    "NodeKind",
    "PathNode",
    "PropertyPath",
    "Violation",
]
