"""Binding inspector interface - domain layer abstraction.

A binding marker declares how a parameter or field is populated from the
request (query string, path segment, header, cookie, form field, matrix
parameter or injected context). The resolver needs a human label derived
from those markers; this interface hides how the markers are read.

The domain cares that:
1. A field of a parameter bean can be described by its markers
2. A parameter of a handler method can be described by its markers
3. A bean that lacks an expected field is a contract violation, not a guess
"""

from abc import ABC, abstractmethod

from constraint_messages.domain.entities.handler_method import HandlerMethodId


class IBindingInspector(ABC):
    """Derives human labels from declared binding markers."""

    @abstractmethod
    def describe_field(self, bean_type: type, field_name: str) -> str | None:
        """
        Describe a field of a parameter bean, e.g. "query param name".

        Inherited and underscore-prefixed fields are included.

        Args:
            bean_type: Type of the bean holding the field
            field_name: Name of the field

        Returns:
            The label, or None if the field carries no recognized marker

        Raises:
            InternalInconsistencyException: If the bean has no such field
        """
        pass

    @abstractmethod
    def describe_parameter(self, handler: HandlerMethodId, index: int) -> str | None:
        """
        Describe a handler parameter, e.g. "header X-Request-Id".

        Args:
            handler: The handler method
            index: Zero-based parameter position (self/cls excluded)

        Returns:
            The label, or None if the parameter carries no recognized marker
        """
        pass
