"""
Core schemas - shared Pydantic models for API requests and responses.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    """
    Base schema exposing camelCase keys on the wire.

    Python code uses snake_case field names; request bodies and responses
    (rendered with ``by_alias=True``) use camelCase.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    """Response carrying a human-readable message."""

    message: str = Field(..., description="Human-readable status message")


class ErrorResponse(BaseModel):
    """Standard error response format for ninja HttpError."""

    detail: str = Field(..., description="Human-readable error message")

    model_config = {"json_schema_extra": {"example": {"detail": "Not authenticated"}}}
