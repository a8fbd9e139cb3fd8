"""Handler method identity - the key of the handler registry."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, get_type_hints


@dataclass(frozen=True)
class HandlerMethodId:
    """
    Identity of a request-handler method.

    Two ids are equal when they name the same method on the same declaring
    class with the same parameter-type signature. This is the value stored
    in the handler registry and the value reconstructed from a METHOD node
    of a violation's property path.
    """

    declaring_type: type
    name: str
    parameter_types: tuple[type, ...] = ()

    def __str__(self) -> str:
        params = ", ".join(getattr(t, "__name__", str(t)) for t in self.parameter_types)
        return f"{self.declaring_type.__qualname__}.{self.name}({params})"

    @classmethod
    def resolve(
        cls, bean_type: type, name: str, parameter_types: tuple[type, ...] = ()
    ) -> "HandlerMethodId":
        """
        Build the id of method `name` as seen from `bean_type`.

        The declaring type is the first class in the MRO whose namespace
        defines `name`, so a handler inherited from a base resource resolves
        to the same id the routing layer registered for the base class.
        When nothing defines it, `bean_type` itself is used.

        Args:
            bean_type: Type of the object the violation was found on
            name: Method name
            parameter_types: Parameter types recorded on the path node

        Returns:
            HandlerMethodId
        """
        declaring_type = next(
            (klass for klass in inspect.getmro(bean_type) if name in vars(klass)),
            bean_type,
        )
        return cls(declaring_type, name, tuple(parameter_types))

    @classmethod
    def from_callable(cls, handler: Callable[..., Any]) -> "HandlerMethodId | None":
        """
        Build the id of a bound method or a function defined on a class.

        Returns None for plain module-level functions, which have no
        declaring type.
        """
        owner = getattr(handler, "__self__", None)
        function = getattr(handler, "__func__", handler)
        if owner is not None:
            bean_type = owner if isinstance(owner, type) else type(owner)
        else:
            bean_type = _owner_from_qualname(function)
            if bean_type is None:
                return None

        return cls.resolve(bean_type, function.__name__, signature_types(function))


def signature_types(function: Callable[..., Any]) -> tuple[type, ...]:
    """Parameter types of `function`, excluding self/cls.

    Parameters without an annotation are recorded as `object`.
    """
    try:
        hints = get_type_hints(function)
    except (NameError, TypeError):
        hints = {}

    types = []
    for position, parameter in enumerate(inspect.signature(function).parameters.values()):
        if position == 0 and parameter.name in ("self", "cls"):
            continue
        types.append(hints.get(parameter.name, object))
    return tuple(types)


def _owner_from_qualname(function: Callable[..., Any]) -> type | None:
    qualname = getattr(function, "__qualname__", "")
    if "." not in qualname or "<locals>" in qualname:
        return None

    owner: Any = inspect.getmodule(function)
    for part in qualname.split(".")[:-1]:
        owner = getattr(owner, part, None)
        if owner is None:
            return None
    return owner if isinstance(owner, type) else None
