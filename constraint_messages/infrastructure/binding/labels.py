"""Annotation-to-label table.

Maps the first recognized binding marker of a parameter or field to the
label shown to API callers, e.g. Query(alias="q") -> "query param q".
"""

from typing import Iterable

from fastapi import params

from constraint_messages.infrastructure.binding.markers import Context, Matrix

# Checked in order; the first marker of a recognized kind wins
MARKER_LABELS: tuple[tuple[type, str], ...] = (
    (params.Query, "query param "),
    (params.Path, "path param "),
    (params.Header, "header "),
    (params.Cookie, "cookie "),
    (params.Form, "form field "),
    (Context, "context"),
    (Matrix, "matrix param "),
)

BINDING_MARKER_TYPES: tuple[type, ...] = tuple(kind for kind, _ in MARKER_LABELS)


def declared_name(marker: object, name: str) -> str:
    """
    Name under which a marker binds its value.

    The alias wins when set. Header markers convert underscores of the
    Python name to hyphens unless told otherwise, as FastAPI does.
    """
    alias = getattr(marker, "alias", None)
    if alias:
        return alias
    if isinstance(marker, params.Header) and marker.convert_underscores:
        return name.replace("_", "-")
    return name


def label_for_marker(marker: object, name: str) -> str | None:
    """Label for one marker, or None if it is not a binding marker."""
    for kind, prefix in MARKER_LABELS:
        if isinstance(marker, kind):
            if kind is Context:
                return prefix
            return prefix + declared_name(marker, name)
    return None


def label_for_markers(markers: Iterable[object], name: str) -> str | None:
    """
    Label for the first recognized marker.

    Args:
        markers: Markers declared on a parameter or field, in declaration order
        name: Python name of the parameter or field

    Returns:
        The label, or None if no marker is recognized
    """
    for marker in markers:
        label = label_for_marker(marker, name)
        if label is not None:
            return label
    return None


# Request locations FastAPI reports in RequestValidationError.errors()["loc"]
LOCATION_LABELS: dict[str, str] = {
    "query": "query param ",
    "path": "path param ",
    "header": "header ",
    "cookie": "cookie ",
}


def label_for_location(loc: Iterable[str | int]) -> str:
    """
    Label for a FastAPI error location, e.g. ("query", "page") -> "query param page".

    Body and unknown locations fall back to the dot-joined location.
    """
    parts = [str(part) for part in loc]
    if len(parts) >= 2 and parts[0] in LOCATION_LABELS:
        return LOCATION_LABELS[parts[0]] + ".".join(parts[1:])
    return ".".join(parts)
