"""Error payload DTO returned to API callers using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorPayload(BaseModel):
    """
    Validation error payload.

    Contains one human-readable message per failed constraint, in the
    order the validation engine reported them. Never empty.
    """

    errors: list[str] = Field(
        ...,
        description="Human-readable validation error messages",
        min_length=1,
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "errors": [
                    "query param name must not be blank",
                    "The request entity must not be null",
                ]
            }
        },
    )
