"""Default validation-engine collaborators.

The validation engine owns two decisions the message layer only consumes:
how a cross-field rule is phrased and which HTTP status a failed request
gets. These are the defaults wired in by the composition root; an engine
with its own conventions can be plugged in instead.
"""

from typing import Iterable

from fastapi import status

from constraint_messages.domain.entities.violation import NodeKind, Violation


def format_cross_field(violation: Violation) -> str:
    """
    Phrase a violation of a rule spanning several fields or parameters.

    The last path node names the rule itself, so it is dropped:
    [createUser, <cross-parameter>] + "passwords must match"
    -> "createUser passwords must match".
    A message starting with "." is glued to the path without a space.
    """
    owner = ".".join(node.name for node in violation.path.nodes[:-1] if node.name)
    separator = "" if violation.message.startswith(".") else " "
    return f"{owner}{separator}{violation.message}".strip()


def determine_status(violations: Iterable[Violation]) -> int:
    """
    HTTP status for a failed validation.

    A violation on a return value means the server produced an invalid
    response (500); otherwise the client sent invalid input (422). Every
    violation is inspected since the engine reports them in no fixed order.
    """
    for violation in violations:
        if any(node.kind is NodeKind.RETURN_VALUE for node in violation.path):
            return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_422_UNPROCESSABLE_ENTITY
