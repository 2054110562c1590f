"""Envelope schemas shared by every endpoint."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    success: bool = Field(default=False)
    error: str = Field(..., description="Human-readable error message")


class MessageResponse(BaseModel):
    success: bool = True
    message: str
