"""Classification of a violation's property path.

A path either reaches into a handler's return value, ends in a member
(a parameter of a method or a field of a parameter bean), or is too short
to say anything about.
"""

from dataclasses import dataclass

from constraint_messages.domain.entities.violation import NodeKind, PathNode, PropertyPath

RETURN_VALUE_LABEL = "server response"


@dataclass(frozen=True)
class ReturnValueShape:
    """The failure lies in (or below) a handler's return value."""

    label: str


@dataclass(frozen=True)
class MemberShape:
    """The failure lies on `member`, owned by `parent`."""

    parent: PathNode
    member: PathNode


@dataclass(frozen=True)
class NoShape:
    """Nothing specific can be derived from the path."""


PathShape = ReturnValueShape | MemberShape | NoShape


def return_value_label(path: PropertyPath) -> str | None:
    """
    Label a path that passes through a RETURN_VALUE node.

    Names after the RETURN_VALUE node are appended to "server response";
    the first separator is a space, later ones are dots:
    [getUser, <return value>, address, zip] -> "server response address.zip".

    Returns:
        The label, or None when the path has no RETURN_VALUE node
    """
    trailing: list[str] | None = None
    for node in path:
        if node.kind is NodeKind.RETURN_VALUE:
            trailing = []
        elif trailing is not None:
            trailing.append(str(node))

    if trailing is None:
        return None
    if not trailing:
        return RETURN_VALUE_LABEL
    return f"{RETURN_VALUE_LABEL} {'.'.join(trailing)}"


def classify(path: PropertyPath) -> PathShape:
    """Classify a property path into one of the known shapes."""
    label = return_value_label(path)
    if label is not None:
        return ReturnValueShape(label)
    if len(path) < 2:
        return NoShape()
    return MemberShape(parent=path[-2], member=path[-1])
