"""Binding markers FastAPI does not ship.

FastAPI provides Query, Path, Header, Cookie and Form. Matrix parameters
(";key=value" path segment parameters) and injected context objects have
no FastAPI marker, so they are declared here and used the same way:

    async def list_items(self, color: Annotated[str, Matrix()]): ...
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Matrix:
    """A matrix parameter of the request path."""

    alias: str | None = None


@dataclass(frozen=True)
class Context:
    """An object injected from the request context rather than client input."""
