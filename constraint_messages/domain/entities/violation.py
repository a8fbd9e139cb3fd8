"""Violation domain entities - pure data, no framework dependencies.

A validation engine reports each failed constraint as a Violation. The
Violation records WHERE the failure happened (a PropertyPath through the
request/response object graph), WHICH rule failed (a ConstraintDescriptor)
and the engine's default message for it.

All entities are frozen dataclasses so that paths and descriptors compare
and hash structurally. The message cache relies on that: two violations
with the same shape must produce the same cache key.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from constraint_messages.domain.exceptions import InvalidEntityStateException


class NodeKind(str, Enum):
    """Kind of element a path node points at."""

    BEAN = "BEAN"
    PROPERTY = "PROPERTY"
    METHOD = "METHOD"
    PARAMETER = "PARAMETER"
    RETURN_VALUE = "RETURN_VALUE"
    CROSS_PARAMETER = "CROSS_PARAMETER"
    CONTAINER_ELEMENT = "CONTAINER_ELEMENT"
    OTHER = "OTHER"


@dataclass(frozen=True)
class PathNode:
    """
    One named, kinded step of a property path.

    Attributes:
        name: Node name (may be empty for a root bean node)
        kind: Element kind
        parameter_types: Handler signature, only meaningful for METHOD nodes
        parameter_index: Zero-based position, only meaningful for PARAMETER nodes
    """

    name: str
    kind: NodeKind
    parameter_types: tuple[type, ...] = ()
    parameter_index: int | None = None

    def __str__(self) -> str:
        return self.name

    @classmethod
    def method(cls, name: str, *parameter_types: type) -> "PathNode":
        """Build a METHOD node for a handler with the given signature."""
        return cls(name, NodeKind.METHOD, parameter_types=tuple(parameter_types))

    @classmethod
    def parameter(cls, name: str, index: int) -> "PathNode":
        """Build a PARAMETER node at the given signature position."""
        return cls(name, NodeKind.PARAMETER, parameter_index=index)

    @classmethod
    def property(cls, name: str) -> "PathNode":
        return cls(name, NodeKind.PROPERTY)

    @classmethod
    def return_value(cls) -> "PathNode":
        return cls("<return value>", NodeKind.RETURN_VALUE)

    @classmethod
    def cross_parameter(cls) -> "PathNode":
        return cls("<cross-parameter>", NodeKind.CROSS_PARAMETER)


@dataclass(frozen=True)
class PropertyPath:
    """
    Immutable, non-empty sequence of path nodes.

    str(path) joins the node names with dots, e.g. "createUser.arg0".
    """

    nodes: tuple[PathNode, ...]

    def __post_init__(self):
        if not self.nodes:
            raise InvalidEntityStateException(
                "Property path must contain at least one node."
            )
        # Accept any sequence but always store a tuple so hashing works
        object.__setattr__(self, "nodes", tuple(self.nodes))

    @classmethod
    def of(cls, *nodes: PathNode) -> "PropertyPath":
        return cls(tuple(nodes))

    def __iter__(self) -> Iterator[PathNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> PathNode:
        return self.nodes[index]

    def __str__(self) -> str:
        return ".".join(node.name for node in self.nodes if node.name)


@dataclass(frozen=True)
class ConstraintDescriptor:
    """
    Metadata about the rule that failed.

    Attributes:
        rule: Identity of the rule tag (e.g. "NotBlank", "ValidationMethod")
        is_cross_field: True for rules validating a whole method or bean
            rather than one single value
        attributes: Rule attributes as (name, value) pairs
    """

    rule: str
    is_cross_field: bool = False
    attributes: tuple[tuple[str, Any], ...] = field(default=())


@dataclass(frozen=True)
class Violation:
    """
    One failed constraint as reported by the validation engine.

    Attributes:
        path: Where in the object graph the failure was found
        descriptor: The rule that failed
        message: The engine's default (already interpolated) message
        leaf_bean_type: Type of the object on which the failure was found
    """

    path: PropertyPath
    descriptor: ConstraintDescriptor
    message: str
    leaf_bean_type: type

    @property
    def cache_key(self) -> tuple[PropertyPath, ConstraintDescriptor]:
        """Structural identity used to memoize resolved messages."""
        return (self.path, self.descriptor)
