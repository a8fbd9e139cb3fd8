"""Binding inspector reading markers from type hints.

Markers are declared the way FastAPI declares them:

    class SearchParams:
        term: Annotated[str, Query(alias="q")]
        page: int = Query(1)

    class UserResource:
        async def create_user(
            self,
            user: CreateUserDTO,
            request_id: Annotated[str, Header()],
        ): ...

Markers of a bean type or a handler signature are read once and kept in
a table; later lookups for the same type or handler are dictionary hits.
Parameters typed as Request, Response, BackgroundTasks and the like are
injected by FastAPI from the request context and count as context markers.
"""

import inspect
import logging
from functools import lru_cache
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from fastapi import BackgroundTasks, Request, Response, WebSocket
from fastapi.security import SecurityScopes

from constraint_messages.domain.entities.handler_method import HandlerMethodId
from constraint_messages.domain.exceptions import InternalInconsistencyException
from constraint_messages.domain.services.binding_inspector import IBindingInspector
from constraint_messages.infrastructure.binding.labels import (
    BINDING_MARKER_TYPES,
    label_for_markers,
)
from constraint_messages.infrastructure.binding.markers import Context

logger = logging.getLogger(__name__)

CONTEXT_TYPES: tuple[type, ...] = (Request, WebSocket, Response, BackgroundTasks, SecurityScopes)

Markers = tuple[object, ...]


class AnnotatedBindingInspector(IBindingInspector):
    """Describes fields and parameters from their declared binding markers."""

    def describe_field(self, bean_type: type, field_name: str) -> str | None:
        table = field_markers(bean_type)
        if field_name not in table:
            logger.warning(
                f"{bean_type.__qualname__} has no field '{field_name}' "
                "although a violation was reported on it"
            )
            raise InternalInconsistencyException(
                f"Parameter bean {bean_type.__qualname__} has no field '{field_name}'"
            )
        return label_for_markers(table[field_name], field_name)

    def describe_parameter(self, handler: HandlerMethodId, index: int) -> str | None:
        table = parameter_markers(handler)
        if not 0 <= index < len(table):
            return None
        name, markers = table[index]
        return label_for_markers(markers, name)


@lru_cache(maxsize=1024)
def field_markers(bean_type: type) -> dict[str, Markers]:
    """
    Markers of every field of a bean type, inherited fields included.

    A field is any annotated class attribute or any class attribute whose
    value is a binding marker. Fields without markers map to ().
    """
    table = {name: _hint_markers(hint) for name, hint in _class_hints(bean_type).items()}

    # Base classes first so that subclasses override marker defaults
    defaults: dict[str, object] = {}
    for klass in reversed(inspect.getmro(bean_type)):
        for name, value in vars(klass).items():
            if isinstance(value, BINDING_MARKER_TYPES):
                defaults[name] = value

    for name, marker in defaults.items():
        table[name] = table.get(name, ()) + (marker,)
    return table


@lru_cache(maxsize=1024)
def parameter_markers(handler: HandlerMethodId) -> tuple[tuple[str, Markers], ...]:
    """
    (name, markers) of every parameter of a handler, self/cls excluded.

    Returns () when the declaring type does not define the handler.
    """
    function = vars(handler.declaring_type).get(handler.name)
    if isinstance(function, (staticmethod, classmethod)):
        function = function.__func__
    if not callable(function):
        logger.debug(f"{handler} is not defined on {handler.declaring_type.__qualname__}")
        return ()

    hints = _function_hints(function)
    table = []
    for position, parameter in enumerate(inspect.signature(function).parameters.values()):
        if position == 0 and parameter.name in ("self", "cls"):
            continue
        markers = _hint_markers(hints.get(parameter.name, parameter.annotation))
        if isinstance(parameter.default, BINDING_MARKER_TYPES):
            markers += (parameter.default,)
        table.append((parameter.name, markers))
    return tuple(table)


def _hint_markers(hint: Any) -> Markers:
    if get_origin(hint) is Annotated:
        base, *metadata = get_args(hint)
        return tuple(metadata) + _context_markers(base)
    return _context_markers(hint)


def _context_markers(hint: Any) -> Markers:
    if inspect.isclass(hint) and issubclass(hint, CONTEXT_TYPES):
        return (Context(),)
    return ()


def _class_hints(bean_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(bean_type, include_extras=True)
    except (NameError, TypeError) as exc:
        # Unresolvable forward references: keep the field names, lose the markers
        logger.debug(f"Cannot evaluate type hints of {bean_type.__qualname__}: {exc}")
        names: dict[str, Any] = {}
        for klass in reversed(inspect.getmro(bean_type)):
            names.update(dict.fromkeys(inspect.get_annotations(klass)))
        return names


def _function_hints(function: Any) -> dict[str, Any]:
    try:
        return get_type_hints(function, include_extras=True)
    except (NameError, TypeError) as exc:
        logger.debug(f"Cannot evaluate type hints of {function.__qualname__}: {exc}")
        return {}
