"""Announce bound routes to the handler registry.

FastAPI has no class-based resources of its own; a resource is a plain
object whose bound methods are added as endpoints:

    resource = UserResource(service)
    router.add_api_route("/users", resource.create_user, methods=["POST"])

Every such method is a request handler. register_routes records them so
that the message resolver can tell a handler's parameters from those of
an internal helper method.
"""

import logging
from typing import Iterable, Iterator

from fastapi.routing import APIRoute
from starlette.routing import BaseRoute

from constraint_messages.domain.entities.handler_method import HandlerMethodId
from constraint_messages.domain.repositories.handler_registry import IHandlerRegistry

logger = logging.getLogger(__name__)


def iter_api_routes(routes: Iterable[BaseRoute]) -> Iterator[APIRoute]:
    """
    Yield every API route, descending into included routers and mounts.

    Depending on the FastAPI version, include_router either copies the
    router's routes into the parent or keeps the router as one nested
    route holding original_router.
    """
    for route in routes:
        if isinstance(route, APIRoute):
            yield route
            continue
        nested = getattr(route, "original_router", None)
        children = getattr(nested, "routes", None) or getattr(route, "routes", None)
        if children:
            yield from iter_api_routes(children)


def register_routes(routes: Iterable[BaseRoute], registry: IHandlerRegistry) -> int:
    """
    Register the endpoint of every API route that is a method of a resource.

    Safe to call repeatedly, e.g. after more routers were included:
    registration is idempotent.

    Args:
        routes: Application routes (app.routes or router.routes)
        registry: Registry to record handlers in

    Returns:
        Number of routes whose endpoint was registered
    """
    registered = 0
    for route in iter_api_routes(routes):
        handler = HandlerMethodId.from_callable(route.endpoint)
        if handler is None:
            logger.debug(f"Route {route.path} is served by a plain function, not registered")
            continue
        registry.register(handler)
        registered += 1

    logger.info(f"Registered {registered} request handler route(s)")
    return registered
