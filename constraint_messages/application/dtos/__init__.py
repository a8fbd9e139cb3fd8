"""Data Transfer Objects."""

from constraint_messages.application.dtos.error_payload import ErrorPayload

__all__ = ["ErrorPayload"]
