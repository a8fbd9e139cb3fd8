"""Message resolver - turns one violation into a human-readable message.

Resolution order:
1. Return value violations are labelled "server response ..."
2. Cross-field rules are formatted by the validation engine's formatter
3. Members of parameter beans and handler parameters are labelled from
   their binding markers ("query param name", "header X-Token", ...)
4. Anything else falls back to the raw property path
"""

import logging
from typing import Container

from constraint_messages.application.services.path_navigator import (
    MemberShape,
    ReturnValueShape,
    classify,
)
from constraint_messages.domain.entities.handler_method import HandlerMethodId
from constraint_messages.domain.entities.violation import NodeKind, Violation
from constraint_messages.domain.services.binding_inspector import IBindingInspector
from constraint_messages.domain.services.cross_field_formatter import ICrossFieldFormatter

logger = logging.getLogger(__name__)

# Un-annotated parameters of a reachable handler carry the request body
REQUEST_ENTITY_LABEL = "The request entity"


class MessageResolver:
    """
    Resolves violation messages.

    Pure given its collaborators: the same violation and the same set of
    known handlers always resolve to the same message.
    """

    def __init__(
        self,
        binding_inspector: IBindingInspector,
        cross_field_formatter: ICrossFieldFormatter,
    ):
        """
        Initialize resolver.

        Args:
            binding_inspector: Reads binding markers of fields and parameters
            cross_field_formatter: Validation engine's formatter for
                cross-field rules
        """
        self._inspector = binding_inspector
        self._format_cross_field = cross_field_formatter

    def resolve(
        self, violation: Violation, known_handlers: Container[HandlerMethodId]
    ) -> str:
        """
        Resolve the message for a single violation.

        Args:
            violation: The failed constraint
            known_handlers: Methods bound as request handlers

        Returns:
            "<label> <message>"

        Raises:
            InternalInconsistencyException: If a parameter bean lacks the
                field named on the violation's path
        """
        shape = classify(violation.path)
        cross_field = violation.descriptor.is_cross_field

        if isinstance(shape, ReturnValueShape):
            label = shape.label
            if cross_field:
                # Cross-field rules attach to the owning object, not a field
                label = label.rpartition(".")[0] or label
            return f"{label} {violation.message}"

        if cross_field:
            return self._format_cross_field(violation)

        name = None
        if isinstance(shape, MemberShape):
            name = self._member_name(violation, shape, known_handlers)
        if name is None:
            name = str(violation.path)
        return f"{name} {violation.message}"

    def _member_name(
        self,
        violation: Violation,
        shape: MemberShape,
        known_handlers: Container[HandlerMethodId],
    ) -> str | None:
        parent, member = shape.parent, shape.member

        if parent.kind is NodeKind.PARAMETER:
            return self._inspector.describe_field(violation.leaf_bean_type, member.name)

        if parent.kind is NodeKind.METHOD:
            handler = HandlerMethodId.resolve(
                violation.leaf_bean_type, parent.name, parent.parameter_types
            )
            if handler not in known_handlers:
                logger.debug(f"{handler} is not a known request handler")
                return None
            if member.kind is not NodeKind.PARAMETER or member.parameter_index is None:
                return None
            label = self._inspector.describe_parameter(handler, member.parameter_index)
            return label or REQUEST_ENTITY_LABEL

        return None
