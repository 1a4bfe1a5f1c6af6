"""Shared response envelopes."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Success acknowledgment without data."""

    success: bool = True
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Failure envelope returned for every error status."""

    success: bool = False
    message: str
    errors: list[FieldError] | None = Field(
        default=None,
        description="Per-field problems, present only for request validation failures",
    )
